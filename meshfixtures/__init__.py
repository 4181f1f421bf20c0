"""Deterministic Zigbee2MQTT-style bridge fixtures."""

from meshfixtures.catalog.registry import Catalog
from meshfixtures.errors import (
    CatalogError,
    DefinitionNotFoundError,
    EmptyInputError,
    FixtureError,
    InvalidDeviceTypeError,
    InvalidRelationshipError,
)
from meshfixtures.faker import BridgeFaker, Snapshot
from meshfixtures.rng import Rng

__all__ = [
    "BridgeFaker",
    "Catalog",
    "CatalogError",
    "DefinitionNotFoundError",
    "EmptyInputError",
    "FixtureError",
    "InvalidDeviceTypeError",
    "InvalidRelationshipError",
    "Rng",
    "Snapshot",
]
