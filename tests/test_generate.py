"""
Tests for the generate pipeline — harvest, reset output, invoke generator.
"""

import textwrap
from pathlib import Path

from typegen.adapters.mock import MockAdapter
from typegen.adapters.registry import AdapterRegistry
from typegen.core.models.config import TypegenConfig
from typegen.core.use_cases.generate import generate_from_config, run_generate

from helpers import RecordingGenerator, export_script, make_contract

EXPECTED_OPTIONS = {
    "useShorthandCtor": True,
    "bundle": {"bundleFile": "index.ts", "scope": "contracts"},
    "types": {"enabled": True},
    "client": {"enabled": False},
    "reactQuery": {"enabled": False},
    "recoil": {"enabled": False},
    "messageComposer": {"enabled": False},
    "msgBuilder": {"enabled": True},
    "useContractsHooks": {"enabled": False},
}


class TestRunGenerate:
    def test_one_good_one_failing_contract(
        self,
        config: TypegenConfig,
        contracts_root: Path,
        registry: AdapterRegistry,
        generator: RecordingGenerator,
    ):
        make_contract(contracts_root, "a", export_script("/tmp/out/Schema.json"))
        make_contract(contracts_root, "b", "echo 'error: could not compile' >&2\nexit 101\n")

        result = run_generate(config, registry=registry)

        assert result.error is None
        assert [c.name for c in result.contracts] == ["Schema"]
        assert [f.directory.name for f in result.harvest.failures] == ["b"]
        assert generator.call_count == 1
        payload = generator.payloads[0]
        assert payload["contracts"] == [
            {"name": "Schema", "dir": str(contracts_root / "a")},
        ]
        assert result.generated

    def test_generator_receives_fixed_options(
        self, config: TypegenConfig, contracts_root: Path, registry, generator, out_dir: Path
    ):
        make_contract(contracts_root, "reserve", export_script("schema/reserve.json"))

        run_generate(config, registry=registry)

        payload = generator.payloads[0]
        assert payload["options"] == EXPECTED_OPTIONS
        assert payload["outPath"] == str(out_dir.resolve())

    def test_output_dir_wiped_before_generator(
        self, config: TypegenConfig, contracts_root: Path, registry, generator, out_dir: Path
    ):
        make_contract(contracts_root, "a", export_script("/x/a.json"))
        (out_dir / "old").mkdir(parents=True)
        (out_dir / "old" / "Stale.types.ts").write_text("export {}")
        (out_dir / "index.ts").write_text("export * from './old'")

        result = run_generate(config, registry=registry)

        assert generator.out_dir_entries == [[]]
        assert result.reset_receipt.metadata["removed"] == 2

    def test_harvest_callback_runs_before_reset(
        self, config: TypegenConfig, contracts_root: Path, registry, generator, out_dir: Path
    ):
        make_contract(contracts_root, "a", export_script("/x/a.json"))
        (out_dir / "old").mkdir(parents=True)
        seen = []

        def on_harvested(harvest):
            seen.append(
                ([c.name for c in harvest.contracts], (out_dir / "old").exists(), generator.call_count)
            )

        result = run_generate(config, registry=registry, on_harvested=on_harvested)

        assert result.error is None
        assert seen == [(["a"], True, 0)]

    def test_harvest_callback_skipped_on_fatal_harvest(self, tmp_path: Path, registry):
        config = TypegenConfig(root=tmp_path, contracts_dir="missing")
        seen = []

        result = run_generate(config, registry=registry, on_harvested=seen.append)

        assert result.error
        assert seen == []

    def test_missing_output_dir_is_created(self, config: TypegenConfig, registry, generator, out_dir: Path):
        assert not out_dir.exists()

        result = run_generate(config, registry=registry)

        assert result.error is None
        assert out_dir.is_dir()

    def test_no_contracts_still_invokes_generator(
        self, config: TypegenConfig, registry, generator, out_dir: Path
    ):
        out_dir.mkdir(parents=True)
        (out_dir / "leftover.ts").write_text("")

        result = run_generate(config, registry=registry)

        assert result.error is None
        assert result.contracts == []
        assert generator.call_count == 1
        assert generator.payloads[0]["contracts"] == []
        assert generator.out_dir_entries == [[]]

    def test_two_export_lines_first_wins(self, config: TypegenConfig, contracts_root: Path, registry, generator):
        make_contract(
            contracts_root,
            "controller",
            "echo 'Exported the full API as /s/controller.json'\n"
            "echo 'Exported the full API as /s/other.json'\n",
        )

        run_generate(config, registry=registry)

        assert [c["name"] for c in generator.payloads[0]["contracts"]] == ["controller"]

    def test_contracts_in_directory_order(self, config: TypegenConfig, contracts_root: Path, registry, generator):
        for name in ("reserve", "controller", "delegate"):
            make_contract(contracts_root, name, export_script(f"/s/{name}.json"))

        run_generate(config, registry=registry)

        names = [c["name"] for c in generator.payloads[0]["contracts"]]
        assert names == ["controller", "delegate", "reserve"]

    def test_missing_contracts_root_is_fatal(self, tmp_path: Path, registry, generator):
        config = TypegenConfig(root=tmp_path, contracts_dir="nope", out_path="out")

        result = run_generate(config, registry=registry)

        assert result.error is not None
        assert "Cannot read contracts directory" in result.error
        assert generator.call_count == 0
        assert not (tmp_path / "out").exists()

    def test_generator_failure_is_fatal(self, config: TypegenConfig, contracts_root: Path, registry, generator):
        make_contract(contracts_root, "a", export_script("/x/a.json"))
        generator.set_failure("generate", error="Cannot find module '@cosmwasm/ts-codegen'")

        result = run_generate(config, registry=registry)

        assert "Code generation failed" in result.error
        assert "ts-codegen" in result.error
        assert not result.generated

    def test_reset_failure_is_fatal(self, config: TypegenConfig, contracts_root: Path, generator):
        fs = MockAdapter(adapter_name="filesystem")
        fs.set_failure("reset-output", error="Permission denied")
        registry = AdapterRegistry()
        registry.register(MockAdapter(adapter_name="shell"))
        registry.register(fs)
        registry.register(generator)

        result = run_generate(config, registry=registry)

        assert "Cannot reset output directory" in result.error
        assert generator.call_count == 0

    def test_dry_run_leaves_output_alone(
        self, config: TypegenConfig, contracts_root: Path, registry, generator, out_dir: Path
    ):
        make_contract(contracts_root, "a", export_script("/x/a.json"))
        out_dir.mkdir(parents=True)
        (out_dir / "keep.ts").write_text("")

        result = run_generate(config, registry=registry, dry_run=True)

        assert result.error is None
        assert [c.name for c in result.contracts] == ["a"]
        assert (out_dir / "keep.ts").exists()
        assert generator.call_count == 0
        assert result.reset_receipt.skipped
        assert result.codegen_receipt.skipped
        assert not result.generated

    def test_to_dict(self, config: TypegenConfig, contracts_root: Path, registry):
        make_contract(contracts_root, "a", export_script("/x/a.json"))

        d = run_generate(config, registry=registry).to_dict()

        assert d["generated"] is True
        assert d["harvest"]["contracts"][0]["name"] == "a"
        assert d["codegen"]["status"] == "ok"
        assert "error" not in d


class TestGenerateFromConfig:
    def test_reads_config_file(self, tmp_path: Path, registry, generator):
        make_contract(tmp_path / "contracts", "a", export_script("/x/a.json"))
        config_file = tmp_path / "typegen.yml"
        config_file.write_text(textwrap.dedent("""\
            contracts_dir: contracts
            out_path: build/types
            schema_command: [sh, build.sh]
        """))

        result = generate_from_config(config_path=config_file, registry=registry)

        assert result.error is None
        assert result.out_path == (tmp_path / "build" / "types").resolve()
        assert generator.payloads[0]["contracts"][0]["name"] == "a"

    def test_overrides(self, tmp_path: Path, registry, generator):
        make_contract(tmp_path / "elsewhere", "b", export_script("/x/b.json"))
        config_file = tmp_path / "typegen.yml"
        config_file.write_text("schema_command: [sh, build.sh]\n")

        result = generate_from_config(
            config_path=config_file,
            contracts_dir=tmp_path / "elsewhere",
            out_path=tmp_path / "gen",
            registry=registry,
        )

        assert result.error is None
        assert result.out_path == (tmp_path / "gen").resolve()
        assert [c.name for c in result.contracts] == ["b"]

    def test_config_error(self, tmp_path: Path, registry):
        result = generate_from_config(config_path=tmp_path / "missing.yml", registry=registry)
        assert "Config file not found" in result.error
