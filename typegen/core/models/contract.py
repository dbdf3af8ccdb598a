"""
Contract models — what gets handed to the code generator.

A ContractDescriptor is one harvested contract. CodegenOptions is the
fixed option set every generator invocation receives; it is serialized
with the generator's own camelCase keys.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ContractDescriptor(BaseModel):
    """A contract whose schema was exported successfully."""

    name: str
    directory: str = Field(serialization_alias="dir")

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("contract name must not be empty")
        return value


class Toggle(BaseModel):
    """A generator plugin switch (``{"enabled": bool}``)."""

    enabled: bool


class BundleOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    bundle_file: str = Field(default="index.ts", alias="bundleFile")
    scope: str = "contracts"


class CodegenOptions(BaseModel):
    """Generator options. Only types and message builders are emitted."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    use_shorthand_ctor: bool = Field(default=True, alias="useShorthandCtor")
    bundle: BundleOptions = Field(default_factory=BundleOptions)
    types: Toggle = Field(default_factory=lambda: Toggle(enabled=True))
    client: Toggle = Field(default_factory=lambda: Toggle(enabled=False))
    react_query: Toggle = Field(
        default_factory=lambda: Toggle(enabled=False), alias="reactQuery"
    )
    recoil: Toggle = Field(default_factory=lambda: Toggle(enabled=False))
    message_composer: Toggle = Field(
        default_factory=lambda: Toggle(enabled=False), alias="messageComposer"
    )
    msg_builder: Toggle = Field(
        default_factory=lambda: Toggle(enabled=True), alias="msgBuilder"
    )
    use_contracts_hooks: Toggle = Field(
        default_factory=lambda: Toggle(enabled=False), alias="useContractsHooks"
    )

    def to_payload(self) -> dict:
        """Options as the generator expects them."""
        return self.model_dump(by_alias=True)


def build_payload(
    contracts: list[ContractDescriptor],
    out_path: str,
    options: CodegenOptions | None = None,
) -> dict:
    """Assemble the single argument passed to the generator."""
    return {
        "contracts": [c.model_dump(by_alias=True) for c in contracts],
        "outPath": out_path,
        "options": (options or CodegenOptions()).to_payload(),
    }
