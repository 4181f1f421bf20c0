"""Entity generators: devices, endpoints, bindings, reportings, groups.

Every generator takes the random stream first and consumes it in a fixed
order, documented where the order is not obvious from the code.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from meshfixtures.catalog.models import Definition
from meshfixtures.catalog.payload import device_definition_payload
from meshfixtures.catalog.registry import Catalog
from meshfixtures.errors import DefinitionNotFoundError, EmptyInputError, InvalidDeviceTypeError
from meshfixtures.rng import Rng
from meshfixtures.shared.generics import sentence, word
from meshfixtures.zigbee.clusters import CLUSTERS, GP_ENDPOINT, HA_ENDPOINT
from meshfixtures.zigbee.primitives import cluster_name, eui64, network_address

logger = logging.getLogger(__name__)

POWER_SOURCES = (
    "Unknown",
    "Mains (single phase)",
    "Mains (3 phase)",
    "Battery",
    "DC Source",
    "Emergency mains constantly powered",
    "Emergency mains and transfer switch",
)

# "Coordinator" is never picked, there is exactly one per network
DEVICE_TYPES = ("Router", "EndDevice", "Unknown", "GreenPower")

DEFAULT_GROUP_NAME = "default_bind_group"


class InterviewState(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    SUCCESSFUL = "SUCCESSFUL"
    FAILED = "FAILED"


def friendly_name(r: Rng) -> str:
    """Two words around a 4-digit number, structured to reduce collisions."""
    sep = "_" if r.chance() else " "
    return f"{word(r)}{sep}{r.randint(1000, 9999)}{sep}{word(r)}"


def power_source(r: Rng) -> str:
    """Pick a power source (including "Unknown")."""
    return r.pick(POWER_SOURCES)


def device_type(r: Rng) -> str:
    """Pick a device type ("Coordinator" excluded)."""
    return r.pick(DEVICE_TYPES)


def bindings(r: Rng, count: int) -> list[dict[str, Any]]:
    """Generate ``count`` bindings, 85% to an endpoint, else to a group."""
    items = []
    for _ in range(max(0, count)):
        if r.chance(0.85):
            items.append(
                {
                    "cluster": cluster_name(r),
                    "target": {"type": "endpoint", "ieee_address": eui64(r), "endpoint": r.randint(1, 4)},
                }
            )
        else:
            items.append({"cluster": cluster_name(r), "target": {"type": "group", "id": r.randint(1, 32)}})
    return items


def reporting(r: Rng, count: int) -> list[dict[str, Any]]:
    """Generate ``count`` configured reportings."""
    items = []
    for _ in range(max(0, count)):
        items.append(
            {
                "cluster": cluster_name(r),
                "attribute": "onOff" if r.chance() else r.randint(0, 65535),
                "minimum_report_interval": r.randint(1, 30),
                "maximum_report_interval": r.randint(60, 3600),
                "reportable_change": r.randint(0, 10),
            }
        )
    return items


def endpoint(
    r: Rng,
    endpoint_id: int,
    name: str | None = None,
    max_bindings_count: int = 3,
    max_reporting_count: int = 5,
) -> dict[str, Any]:
    """Generate one endpoint payload.

    Draw order: name (only when ``name`` is None, 40% named), input cluster
    count then picks, output cluster count then picks, scenes, bindings,
    reportings.
    """
    if name is None:
        name = f"{word(r)}_{r.randint(1, 9)}" if r.chance(0.4) else None

    # dict keys as ordered sets
    inputs: dict[str, None] = {}
    outputs: dict[str, None] = {}

    if endpoint_id == GP_ENDPOINT:
        inputs["greenPower"] = None
        outputs["greenPower"] = None
    else:
        inputs["genBasic"] = None

    for _ in range(r.randint(1, 5)):
        inputs[cluster_name(r)] = None

    for _ in range(r.randint(0, 3)):
        outputs[cluster_name(r)] = None

    scenes = []
    scene_ids: set[int] = set()
    scenes_count = 0 if r.chance(0.75) else r.randint(0, 3)
    for i in range(scenes_count):
        scene_id = r.randint(1, 255)
        while scene_id in scene_ids:
            scene_id = r.randint(1, 255)
        scenes.append({"id": scene_id, "name": f"scene_{i + 1}"})
        scene_ids.add(scene_id)

    return {
        "name": name,
        "bindings": bindings(r, r.randint(0, max_bindings_count)),
        "configured_reportings": reporting(r, r.randint(0, max_reporting_count)),
        "clusters": {"input": list(inputs), "output": list(outputs)},
        "scenes": scenes,
    }


def endpoints(
    r: Rng,
    ensure_present: dict[str, int] | None = None,
    max_bindings_count: int = 3,
    max_reporting_count: int = 5,
) -> dict[int, dict[str, Any]]:
    """Generate endpoints keyed by id, ascending.

    Args:
        r: Random stream.
        ensure_present: Named endpoint ids always generated first. A name
            starting with ``rnd_`` keeps the id but gets a random name.
        max_bindings_count: Upper bound of bindings per endpoint.
        max_reporting_count: Upper bound of reportings per endpoint.

    When at least one endpoint is ensured, 0-1 random extra endpoints are
    added, else 1-3.
    """
    eps: dict[int, dict[str, Any]] = {}
    ep_max_count = 3

    if ensure_present:
        for ep_name, ep_id in ensure_present.items():
            if ep_id is None:
                continue
            eps[ep_id] = endpoint(
                r,
                ep_id,
                None if ep_name.startswith("rnd_") else ep_name,
                max_bindings_count,
                max_reporting_count,
            )
        if eps:
            ep_max_count = 1

    for _ in range(r.randint(0 if ep_max_count == 1 else 1, ep_max_count)):
        ep_id = r.randint(0x01, 0xFE)
        while ep_id in eps:
            ep_id = r.randint(0x01, 0xFE)
        eps[ep_id] = endpoint(r, ep_id, None, max_bindings_count, max_reporting_count)

    return dict(sorted(eps.items()))


@dataclass
class _StubEndpoint:
    ID: int
    input_clusters: list[int] = field(default_factory=list)


class EndpointStubDevice:
    """Minimal device handed to a definition's ``endpoint`` hook.

    Exposes the home-automation endpoint with the on/off input cluster.
    ``get_endpoint`` answers randomly, so hooks that query endpoints
    consume the stream.
    """

    is_dummy_device = True

    def __init__(self, r: Rng):
        self._r = r
        self.endpoints = [_StubEndpoint(HA_ENDPOINT, [CLUSTERS["genOnOff"]])]

    def get_endpoint(self, endpoint_id: int) -> _StubEndpoint | None:
        return _StubEndpoint(endpoint_id) if self._r.chance(0.5) else None


def definition_endpoints(r: Rng, definition: Definition) -> dict[str, int] | None:
    """Named endpoint ids declared by the definition, if it has a resolver."""
    if definition.endpoint is None:
        return None
    return definition.endpoint(EndpointStubDevice(r))


def coordinator(r: Rng) -> dict[str, Any]:
    """Generate the coordinator device, with its HA and Green Power endpoints."""
    return {
        "ieee_address": eui64(r),
        "type": "Coordinator",
        "network_address": 0x0000,
        "supported": True,
        "friendly_name": "Coordinator",
        "disabled": False,
        "description": None,
        "definition": None,
        "power_source": None,
        "software_build_id": None,
        "date_code": None,
        "model_id": None,
        "interviewing": False,
        "interview_completed": True,
        "interview_state": InterviewState.SUCCESSFUL.value,
        "manufacturer": None,
        "endpoints": endpoints(r, {"rnd_1": HA_ENDPOINT, "rnd_2": GP_ENDPOINT}, 0, 0),
    }


def device(
    r: Rng,
    catalog: Catalog,
    type_: str | None = None,
    model: str | None = None,
    used_network_addresses: set[int] | None = None,
) -> dict[str, Any]:
    """Generate a device (never "Coordinator").

    Draw order: type (unless forced), definition (unless model forced),
    interview state, address, network address, friendly name, disabled,
    description, power source, build id, date code, endpoints.

    Args:
        r: Random stream.
        catalog: Device catalog to pick the definition from.
        type_: Optional forced device type.
        model: Optional forced model (definition model or white label).
        used_network_addresses: Addresses already taken in this run. The
            network address is re-drawn until it is not in the set, then
            added to it.

    Raises:
        InvalidDeviceTypeError: ``type_`` is not one of ``DEVICE_TYPES``.
        DefinitionNotFoundError: ``model`` has no catalog match.
        EmptyInputError: the catalog (or its Green Power subset) is empty.
    """
    if type_ is not None and type_ not in DEVICE_TYPES:
        raise InvalidDeviceTypeError(type_)
    dev_type = type_ if type_ is not None else device_type(r)

    if model:
        definition = catalog.find_by_model(model)
        if definition is None:
            raise DefinitionNotFoundError(model)
    else:
        candidates = catalog.green_power_definitions if dev_type == "GreenPower" else catalog.definitions
        if not candidates:
            raise EmptyInputError(f"No catalog definition available for device type {dev_type}")
        definition = r.pick(candidates)

    interview_state = InterviewState.SUCCESSFUL if r.chance(0.9) else r.pick(list(InterviewState))

    ieee_address = eui64(r)
    nwk_address = network_address(r)
    if used_network_addresses is not None:
        while nwk_address in used_network_addresses:
            nwk_address = network_address(r)
        used_network_addresses.add(nwk_address)

    payload = {
        "ieee_address": ieee_address,
        "type": dev_type,
        "network_address": nwk_address,
        "supported": True,
        "friendly_name": friendly_name(r),
        "disabled": r.chance(0.05),
        "description": sentence(r) if r.chance(0.25) else None,
        "definition": device_definition_payload(definition),
        "power_source": "Unknown" if dev_type == "GreenPower" else power_source(r),
        "software_build_id": f"v{r.randint(1, 3)}.{r.randint(0, 9)}.{r.randint(0, 99)}",
        "date_code": f"{r.randint(2019, 2025)}{r.randint(1, 12):02d}{r.randint(1, 28):02d}",
        "model_id": definition.model,
        "interviewing": interview_state == InterviewState.IN_PROGRESS,
        "interview_completed": interview_state == InterviewState.SUCCESSFUL,
        "interview_state": interview_state.value,
        "manufacturer": definition.vendor,
    }

    ensure_present = definition_endpoints(r, definition)
    if ensure_present is None:
        ensure_present = {"rnd_1": HA_ENDPOINT} if r.chance(0.95) else None
    payload["endpoints"] = endpoints(r, ensure_present)

    logger.debug("Generated %s device %s (%s)", dev_type, payload["ieee_address"], definition.model)
    return payload


def devices(r: Rng, catalog: Catalog, count: int = 20) -> list[dict[str, Any]]:
    """Generate ``count`` devices with distinct network addresses."""
    if count > 0xFFF7:
        raise ValueError(f"Cannot generate {count} devices with distinct network addresses (max 65527)")
    used: set[int] = set()
    return [device(r, catalog, used_network_addresses=used) for _ in range(max(0, count))]


def group(r: Rng, members: list[dict[str, Any]]) -> dict[str, Any]:
    """Generate a group whose members are taken from the head of ``members``.

    Each member is paired with one of that device's own endpoint ids.
    """
    group_id = r.randint(1, 0xFFFE)
    name = DEFAULT_GROUP_NAME if r.chance(0.05) else f"{word(r)}_group_{r.randint(1, 99)}"
    description = sentence(r) if r.chance(0.5) else None
    scenes = [{"id": i + 1, "name": f"scene_{i + 1}"} for i in range(r.randint(0, 4))]
    picked = members[: r.randint(0, max(0, len(members) - 1))]

    return {
        "id": group_id,
        "friendly_name": name,
        "description": description,
        "scenes": scenes,
        "members": [{"ieee_address": d["ieee_address"], "endpoint": r.pick(sorted(d["endpoints"]))} for d in picked],
    }


def groups(r: Rng, count: int, member_candidates: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Generate ``count`` groups sharing one random subset of the candidates."""
    drawn = [r.pick(member_candidates) for _ in range(r.randint(0, len(member_candidates) - 1))]
    unique_members = []
    seen: set[str] = set()
    for d in drawn:
        if d["ieee_address"] not in seen:
            seen.add(d["ieee_address"])
            unique_members.append(d)
    return [group(r, unique_members) for _ in range(max(0, count))]
