"""Catalog record types: capability descriptors and device definitions.

The catalog is owned outside this package. Records arrive as plain dicts
(or already-built objects) and are validated once into these types when
the catalog is prepared.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CapabilityKind(str, Enum):
    """Descriptor kinds understood by the value synthesizer."""

    BINARY = "binary"
    NUMERIC = "numeric"
    TEXT = "text"
    ENUM = "enum"
    LIST = "list"
    COMPOSITE = "composite"
    CLIMATE = "climate"
    COVER = "cover"
    FAN = "fan"
    LOCK = "lock"
    SWITCH = "switch"
    LIGHT = "light"


class CapabilityDescriptor(BaseModel):
    """One node of an "exposes" (or "options") tree.

    ``kind`` is serialized as ``type`` on the wire. Leaves carry their value
    domain; container kinds carry ``features``; list kinds carry
    ``item_type``. Unknown keys are kept so payloads round-trip.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    kind: str = Field(alias="type")
    name: str | None = None
    label: str | None = None
    prop: str | None = Field(default=None, alias="property")
    access: int | None = None
    description: str | None = None
    category: str | None = None
    unit: str | None = None
    endpoint: str | None = None
    value_on: Any = None
    value_off: Any = None
    value_toggle: Any = None
    value_min: int | float | None = None
    value_max: int | float | None = None
    value_step: int | float | None = None
    values: list[Any] | None = None
    length_min: int | None = None
    length_max: int | None = None
    item_type: "CapabilityDescriptor | None" = None
    features: "list[CapabilityDescriptor] | None" = None

    @property
    def key(self) -> str | None:
        """State key this descriptor's value is published under."""
        return self.prop or self.name


CapabilityDescriptor.model_rebuild()


# Options trees share the descriptor shape
OptionDescriptor = CapabilityDescriptor


@dataclass(frozen=True)
class WhiteLabel:
    vendor: str
    model: str
    description: str | None = None


@dataclass(frozen=True)
class DummyDevice:
    """Stand-in passed to catalog hooks that expect a device object."""

    is_dummy_device: bool = True


ExposesFn = Callable[[Any, dict], list[CapabilityDescriptor]]
EndpointFn = Callable[[Any], dict[str, int]]


@dataclass(frozen=True)
class Definition:
    """A prepared catalog record for one device model.

    ``exposes`` is either a fixed descriptor list or a callable taking a
    device-like object and an options dict. ``endpoint`` optionally resolves
    named endpoint ids from a device-like object.
    """

    vendor: str
    model: str
    description: str = ""
    exposes: list[CapabilityDescriptor] | ExposesFn = field(default_factory=list)
    options: list[OptionDescriptor] = field(default_factory=list)
    white_label: list[WhiteLabel] = field(default_factory=list)
    fingerprint: list[dict] = field(default_factory=list)
    endpoint: EndpointFn | None = None
    ota: bool = False

    def resolve_exposes(self) -> list[CapabilityDescriptor]:
        """Exposes as a plain list, calling the hook with a dummy device if needed."""
        if callable(self.exposes):
            return list(self.exposes(DummyDevice(), {}))
        return list(self.exposes)

    @property
    def is_green_power(self) -> bool:
        return any(str(fp.get("model_id") or "").startswith("GreenPower_") for fp in self.fingerprint)
