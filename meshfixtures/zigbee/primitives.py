"""Zigbee network primitives: addresses, PAN ids, clusters, relationships."""

from enum import IntEnum

from meshfixtures.rng import Rng
from meshfixtures.zigbee.clusters import PICKABLE_CLUSTERS


class ZigbeeRelationship(IntEnum):
    """Neighbor relationship code as reported in a LQI table entry."""

    NEIGHBOR_IS_PARENT = 0x00
    NEIGHBOR_IS_A_CHILD = 0x01
    NEIGHBOR_IS_A_SIBLING = 0x02
    NONE_OF_THE_ABOVE = 0x03
    NEIGHBOR_IS_PREVIOUS_CHILD = 0x04


# Previous-child is ignored by consumers, never generated
DEFAULT_RELATIONSHIPS = (
    ZigbeeRelationship.NEIGHBOR_IS_PARENT,
    ZigbeeRelationship.NEIGHBOR_IS_A_CHILD,
    ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING,
    ZigbeeRelationship.NONE_OF_THE_ABOVE,
)

ROUTING_TABLE_STATUSES = ("ACTIVE", "DISCOVERY_UNDERWAY", "DISCOVERY_FAILED", "INACTIVE", "VALIDATION_UNDERWAY")


def eui64(r: Rng) -> str:
    """IEEE address in ``0x`` format."""
    return f"0x{r.hex(16)}"


def network_address(r: Rng) -> int:
    """Int in 0x0001..0xfff7."""
    return r.randint(0x0001, 0xFFF7)


def pan_id(r: Rng) -> int:
    """Int in 0x0001..0xfffe."""
    return r.randint(0x0001, 0xFFFE)


def extended_pan_id(r: Rng) -> str:
    """Extended PAN id in ``0x`` format."""
    return f"0x{r.hex(16)}"


def extended_pan_id_to_array(src: str) -> list[int]:
    """Convert an extended PAN id from ``0x`` format to little-endian bytes."""
    return list(reversed(bytes.fromhex(src[2:])))


def extended_pan_id_from_array(src: list[int]) -> str:
    """Convert an extended PAN id from little-endian bytes to ``0x`` format."""
    return f"0x{bytes(reversed(src)).hex()}"


def cluster_name(r: Rng) -> str:
    """Pick a ZCL cluster name (Green Power and manufacturer-specific excluded)."""
    return r.pick(PICKABLE_CLUSTERS)


def relationship(r: Rng, limited_set: tuple[ZigbeeRelationship, ...] | None = None) -> ZigbeeRelationship:
    """Pick a relationship, optionally among ``limited_set`` only."""
    return r.pick(limited_set if limited_set is not None else DEFAULT_RELATIONSHIPS)


def routing_table_entry_status(r: Rng) -> str:
    """Routing table entry status, ACTIVE most of the time."""
    return "ACTIVE" if r.chance(0.85) else r.pick(ROUTING_TABLE_STATUSES)
