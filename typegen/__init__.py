"""contract-typegen: harvest contract schemas and generate TypeScript bindings."""

__version__ = "0.1.0"
