"""
contract-typegen — CLI entrypoint.

Usage:
    python -m typegen.main --help
    python -m typegen.main generate
    python -m typegen.main harvest --json
    python -m typegen.main config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from typegen import __version__
from typegen.core.observability.logging_config import resolve_level, setup_logging

_DIR = click.Path(file_okay=False, path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="typegen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to typegen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Contract typegen — build CosmWasm schemas and generate TypeScript bindings."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("TYPEGEN_LOG_LEVEL")),
        log_file=os.environ.get("TYPEGEN_LOG_FILE"),
        log_file_level=os.environ.get("TYPEGEN_LOG_FILE_LEVEL"),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--contracts-dir", type=_DIR, default=None, help="Override the contracts root.")
@click.option("--out", "out_path", type=_DIR, default=None, help="Override the output directory.")
@click.option("--dry-run", is_flag=True, help="Harvest only; don't touch the output or run the generator.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    contracts_dir: Path | None,
    out_path: Path | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Build every contract's schema and generate TypeScript bindings.

    Examples:

        typegen generate

        typegen generate --contracts-dir ./contracts --out ../app/src/types

        typegen generate --dry-run
    """
    from typegen.core.use_cases.generate import generate_from_config

    def show_harvest(harvested) -> None:
        if not as_json:
            _print_schemas("Generated schemas: ", harvested.contracts)

    result = generate_from_config(
        config_path=ctx.obj.get("config_path"),
        contracts_dir=contracts_dir,
        out_path=out_path,
        dry_run=dry_run,
        on_harvested=show_harvest,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    if dry_run:
        click.secho(
            f"[dry-run] {result.out_path} left untouched, generator not invoked",
            fg="yellow",
        )
        return

    if not ctx.obj.get("quiet"):
        click.echo(f"   → {result.out_path}")
    click.echo("✨ all done!")


@cli.command()
@click.option("--contracts-dir", type=_DIR, default=None, help="Override the contracts root.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def harvest(ctx: click.Context, contracts_dir: Path | None, as_json: bool) -> None:
    """Build every contract's schema and list the harvested names."""
    from typegen.core.use_cases.harvest import harvest_from_config

    result = harvest_from_config(
        config_path=ctx.obj.get("config_path"),
        contracts_dir=contracts_dir,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    _print_schemas("Harvested schemas:", result.contracts)

    if ctx.obj.get("verbose"):
        for contract in result.contracts:
            click.echo(f"   {contract.name}  → {contract.directory}")

    if result.failures:
        click.secho(f"⚠️  {len(result.failures)} contract(s) skipped", fg="yellow")


def _print_schemas(heading: str, contracts: list) -> None:
    click.echo(heading)
    for contract in contracts:
        click.echo(f"- {contract.name}")


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate typegen.yml and the paths it points to."""
    from typegen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Contracts: {result.config.contracts_path}")
        click.echo(f"   Output:    {result.config.output_path}")
        click.echo(f"   Command:   {' '.join(result.config.schema_command)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def tools(ctx: click.Context, as_json: bool) -> None:
    """Show whether cargo and node can be found."""
    from typegen.core.config.loader import ConfigError
    from typegen.core.use_cases.tools import tool_status

    try:
        status = tool_status(config_path=ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    for name, info in status.items():
        if info["available"]:
            click.secho(f"   ✓ {name}", fg="green")
        else:
            click.secho(f"   ✗ {name} (not found)", fg="red")


if __name__ == "__main__":
    cli()
