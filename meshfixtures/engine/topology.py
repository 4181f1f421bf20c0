"""Mesh topology synthesis for network map nodes and links.

Links respect the structural rules of a Zigbee mesh: one coordinator,
never a link to self, never two links between the same source/target,
and never EndDevice to EndDevice (end devices cannot relay).
"""

import logging
from typing import Any

from meshfixtures.catalog.models import CapabilityDescriptor
from meshfixtures.engine.values import link_quality
from meshfixtures.errors import InvalidRelationshipError
from meshfixtures.rng import Rng
from meshfixtures.zigbee.primitives import ZigbeeRelationship, relationship, routing_table_entry_status

logger = logging.getLogger(__name__)

# Device types that can appear on the mesh (GreenPower devices do not)
MESH_TYPES = ("Coordinator", "Router", "EndDevice", "Unknown")

# Networks with fewer nodes than this are "small"
SMALL_NETWORK_SIZE = 50

LQI_DEVICE_TYPES = {"Coordinator": 0x00, "Router": 0x01, "EndDevice": 0x02}


def relationship_by_type(r: Rng, a: str, b: str) -> ZigbeeRelationship:
    """Relationship of neighbor ``b`` as seen from ``a``.

    "Unknown" is treated as "EndDevice" whenever a choice has to be made.

    Raises:
        InvalidRelationshipError: Coordinator<>Coordinator or EndDevice<>EndDevice.
    """
    if a == "Coordinator":
        if b == "Coordinator":
            raise InvalidRelationshipError(a, b)
        if b == "Router":
            if r.chance(0.75):
                return ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING
            return relationship(
                r, (ZigbeeRelationship.NEIGHBOR_IS_A_CHILD, ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING)
            )
        # EndDevice or Unknown
        return ZigbeeRelationship.NEIGHBOR_IS_A_CHILD

    if b == "Coordinator":
        if a == "Router":
            return relationship(
                r, (ZigbeeRelationship.NEIGHBOR_IS_PARENT, ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING)
            )
        # EndDevice or Unknown
        return ZigbeeRelationship.NEIGHBOR_IS_PARENT

    if a == "Router":
        if b == "Router":
            if r.chance(0.75):
                return ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING
            return relationship(
                r, (ZigbeeRelationship.NEIGHBOR_IS_PARENT, ZigbeeRelationship.NEIGHBOR_IS_A_SIBLING)
            )
        return ZigbeeRelationship.NEIGHBOR_IS_A_CHILD

    if b == "Router":
        return ZigbeeRelationship.NEIGHBOR_IS_PARENT

    if a == "EndDevice":
        if b == "EndDevice":
            raise InvalidRelationshipError(a, b)
        # b is Unknown
        return ZigbeeRelationship.NEIGHBOR_IS_PARENT

    if b == "EndDevice":
        # a is Unknown
        return ZigbeeRelationship.NEIGHBOR_IS_A_CHILD

    return ZigbeeRelationship.NONE_OF_THE_ABOVE


def _supports(exposes: list[CapabilityDescriptor]) -> str:
    names = {}
    for e in exposes:
        label = e.name or f"{e.kind} ({', '.join(f.name or '' for f in e.features or [])})"
        names[label] = None
    return ", ".join(names)


def _node(r: Rng, device: dict[str, Any], now_ms: int) -> dict[str, Any]:
    definition = device.get("definition")
    return {
        "ieeeAddr": device["ieee_address"],
        "friendlyName": device["friendly_name"],
        "type": device["type"],
        "networkAddress": device["network_address"],
        "manufacturerName": device.get("manufacturer"),
        "modelID": device.get("model_id"),
        "lastSeen": now_ms - r.randint(0, 36_000_000),
        "definition": (
            {
                "model": definition["model"],
                "vendor": definition["vendor"],
                "description": definition["description"],
                "supports": _supports(definition["exposes"]),
            }
            if definition
            else None
        ),
    }


def _route(r: Rng, a: dict[str, Any]) -> dict[str, Any]:
    return {
        "destinationAddress": a["networkAddress"],
        "status": routing_table_entry_status(r),
        "memoryConstrained": 0x0,
        "manyToOne": 0x1 if a["type"] == "Coordinator" else 0x0,
        "routeRecordRequired": 0x0,
        "reserved1": 0x0,
        "nextHopAddress": a["networkAddress"],
    }


def _link(r: Rng, a: dict[str, Any], b: dict[str, Any], routes: bool) -> dict[str, Any]:
    lqi = link_quality(r)
    depth = r.randint(1, 3)
    route_entries = [_route(r, a)] if routes else []
    rel = relationship_by_type(r, a["type"], b["type"])

    return {
        "source": {"ieeeAddr": a["ieeeAddr"], "networkAddress": a["networkAddress"]},
        "target": {"ieeeAddr": b["ieeeAddr"], "networkAddress": b["networkAddress"]},
        "linkquality": lqi,
        "depth": depth,
        "routes": route_entries,
        # legacy duplicates
        "sourceIeeeAddr": a["ieeeAddr"],
        "targetIeeeAddr": b["ieeeAddr"],
        "sourceNwkAddr": a["networkAddress"],
        "lqi": lqi,
        "relationship": rel,
        "deviceType": LQI_DEVICE_TYPES.get(a["type"], 0x03),
        "rxOnWhenIdle": 0x02 if r.chance(0.05) else (0x01 if a["type"] in ("Router", "Coordinator") else 0x00),
        "permitJoining": 0x02 if r.chance(0.25) else (0x01 if r.chance(0.05) else 0x00),
    }


def network_map(
    r: Rng,
    coordinator: dict[str, Any],
    devices: list[dict[str, Any]],
    now_ms: int,
    routes: bool = False,
) -> dict[str, list[dict[str, Any]]]:
    """Generate a raw network map for the coordinator and devices.

    Draw order: one ``lastSeen`` per node, then for each node but the last:
    link count, and per link the target index (re-drawn until valid), link
    quality, depth, route status (if ``routes``), relationship,
    rxOnWhenIdle, permitJoining.

    Args:
        r: Random stream.
        coordinator: The coordinator device, placed first.
        devices: Other devices; non-mesh types are left out.
        now_ms: Reference epoch milliseconds for ``lastSeen``.
        routes: Include one routing table entry per link.
    """
    nodes = [_node(r, d, now_ms) for d in [coordinator, *devices] if d["type"] in MESH_TYPES]
    links: list[dict[str, Any]] = []
    small = len(nodes) < SMALL_NETWORK_SIZE
    max_links = 3 if small else 6
    coordinator_bias = 0.75 if small else 0.5

    def pick_node_idx() -> int:
        # favor the coordinator (index 0)
        return 0 if r.chance(coordinator_bias) else r.randint(1, len(nodes) - 1)

    for i, a in enumerate(nodes[:-1]):
        valid_targets = {
            j
            for j, b in enumerate(nodes)
            if j != i and not (a["type"] == "EndDevice" and b["type"] == "EndDevice")
        }
        targeted: set[int] = set()
        link_count = min(r.randint(0, max_links), len(valid_targets))

        for _ in range(link_count):
            # never pick the coordinator from the coordinator
            b_idx = r.randint(1, len(nodes) - 1) if i == 0 else pick_node_idx()
            while b_idx not in valid_targets or b_idx in targeted:
                b_idx = pick_node_idx()

            targeted.add(b_idx)
            links.append(_link(r, a, nodes[b_idx], routes))

    logger.debug("Generated network map with %d nodes and %d links", len(nodes), len(links))
    return {"nodes": nodes, "links": links}


def raw_network_map(
    r: Rng,
    coordinator: dict[str, Any],
    devices: list[dict[str, Any]],
    now_ms: int,
    routes: bool = False,
) -> dict[str, Any]:
    """``bridge/response/networkmap`` payload of type "raw"."""
    return {"type": "raw", "routes": routes, "value": network_map(r, coordinator, devices, now_ms, routes)}
