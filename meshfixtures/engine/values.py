"""Value synthesis: one concrete state value per capability descriptor."""

from typing import Any

from meshfixtures.catalog.models import CapabilityDescriptor, CapabilityKind
from meshfixtures.rng import Rng
from meshfixtures.shared.generics import sentence

LINKQUALITY_MIN = 30
LINKQUALITY_MAX = 255


def link_quality(r: Rng) -> int:
    """A range-appropriate int to represent link quality."""
    return r.randint(LINKQUALITY_MIN, LINKQUALITY_MAX)


def expose_value(r: Rng, expose: CapabilityDescriptor) -> Any:
    """Pick a value consistent with the descriptor's value domain.

    Container kinds (composite, light, climate...) return ``None``: their
    features carry their own keyed values. Unknown kinds also return ``None``.
    """
    kind = expose.kind

    if kind == CapabilityKind.BINARY:
        return r.pick([expose.value_on, expose.value_off])

    if kind == CapabilityKind.NUMERIC:
        if expose.name == "linkquality":
            return link_quality(r)
        low = expose.value_min if expose.value_min is not None else 0
        high = expose.value_max if expose.value_max is not None else (255 if r.chance(0.75) else 1_000)
        return r.randint(low, high)

    if kind == CapabilityKind.TEXT:
        return sentence(r)

    if kind == CapabilityKind.ENUM:
        return r.pick(expose.values or [])

    if kind == CapabilityKind.LIST:
        length = r.randint(
            expose.length_min if expose.length_min is not None else 0,
            expose.length_max if expose.length_max is not None else 10,
        )
        if expose.name == "gradient":
            return [f"#{r.hex(6)}" for _ in range(length)]
        if expose.item_type is None:
            return [None] * length
        return [expose_value(r, expose.item_type) for _ in range(length)]

    # container kinds carry their values on their features
    return None
