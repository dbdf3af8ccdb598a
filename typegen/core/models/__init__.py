"""
Domain models — Pydantic types for contract-typegen.

    from typegen.core.models import Action, Receipt, ContractDescriptor, TypegenConfig
"""

from typegen.core.models.action import Action, Receipt
from typegen.core.models.config import GeneratorSettings, TypegenConfig
from typegen.core.models.contract import (
    BundleOptions,
    CodegenOptions,
    ContractDescriptor,
    Toggle,
    build_payload,
)

__all__ = [
    "Action",
    "BundleOptions",
    "CodegenOptions",
    "ContractDescriptor",
    "GeneratorSettings",
    "Receipt",
    "Toggle",
    "TypegenConfig",
    "build_payload",
]
