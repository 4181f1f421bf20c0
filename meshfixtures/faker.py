"""Bridge faker: one random stream, one catalog, consistent payloads.

``BridgeFaker`` owns a single ``Rng`` and hands it to the generators in a
fixed order, so a given seed and call sequence always yields the same
fixtures. Most lower-level generators randomize whatever they are not
given; API-level methods take the coordinator/devices/groups explicitly to
keep every sub-object referring to the same network.

One faker serves one sequential generation session; do not share an
instance across threads.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from meshfixtures.catalog.registry import Catalog
from meshfixtures.config import DEFAULT_CONFIG, resolve_config
from meshfixtures.engine import bridge, entities, state, topology
from meshfixtures.engine.bridge import BridgeVersions
from meshfixtures.rng import Rng
from meshfixtures.shared.generics import epoch_ms
from meshfixtures.shared.serialize import to_jsonable

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    """Static-ish bridge payloads for one network. Coordinator is ``devices[0]``."""

    state: dict[str, Any]
    info: dict[str, Any]
    health: dict[str, Any]
    converters: list[dict[str, str]]
    extensions: list[dict[str, str]]
    devices: list[dict[str, Any]]
    groups: list[dict[str, Any]]
    network_map: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible form, keyed like the MQTT topics."""
        return {
            "bridge/state": to_jsonable(self.state),
            "bridge/info": to_jsonable(self.info),
            "bridge/health": to_jsonable(self.health),
            "bridge/converters": to_jsonable(self.converters),
            "bridge/extensions": to_jsonable(self.extensions),
            "bridge/devices": to_jsonable(self.devices),
            "bridge/groups": to_jsonable(self.groups),
            "bridge/response/networkmap": to_jsonable(self.network_map),
        }


class BridgeFaker:
    """Generates Zigbee2MQTT-style bridge payloads from a seed and a catalog."""

    def __init__(
        self,
        catalog: Catalog,
        seed: int = 1,
        versions: BridgeVersions | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.r = Rng(seed)
        self.catalog = catalog
        self.versions = versions or BridgeVersions()
        self._clock = clock or (lambda: datetime.now(UTC))
        self.device_count: int = DEFAULT_CONFIG["snapshot.device_count"]
        self.group_count: int = DEFAULT_CONFIG["snapshot.group_count"]
        self.routes: bool = DEFAULT_CONFIG["topology.routes"]

    @classmethod
    def from_config(
        cls,
        catalog: Catalog,
        config: dict[str, Any] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> "BridgeFaker":
        """Build a faker from a resolved (or partial) config dict."""
        config = resolve_config(config)
        versions = BridgeVersions(
            version=config["bridge.version"],
            zhc_version=config["bridge.zhc_version"],
            zh_version=config["bridge.zh_version"],
            mqtt_server=config["bridge.mqtt_server"],
            config_schema=config["bridge.config_schema"],
        )
        faker = cls(catalog, seed=config["faker.seed"], versions=versions, clock=clock)
        faker.device_count = config["snapshot.device_count"]
        faker.group_count = config["snapshot.group_count"]
        faker.routes = config["topology.routes"]
        return faker

    def _now(self) -> datetime:
        return self._clock()

    # -- entities --

    def friendly_name(self) -> str:
        return entities.friendly_name(self.r)

    def coordinator(self) -> dict[str, Any]:
        return entities.coordinator(self.r)

    def device(self, type_: str | None = None, model: str | None = None) -> dict[str, Any]:
        """Generate a device (never "Coordinator"), optionally of a given type/model."""
        return entities.device(self.r, self.catalog, type_, model)

    def devices(self, count: int = 20) -> list[dict[str, Any]]:
        return entities.devices(self.r, self.catalog, count)

    def group(self, members: list[dict[str, Any]] | None = None) -> dict[str, Any]:
        """Generate a group; without ``members``, 1-5 candidate devices are generated first."""
        if members is None:
            members = self.devices(self.r.randint(1, 5))
        return entities.group(self.r, members)

    def groups(self, count: int = 4, member_candidates: list[dict[str, Any]] | None = None) -> list[dict[str, Any]]:
        if member_candidates is None:
            member_candidates = self.devices(self.r.randint(1, 5))
        return entities.groups(self.r, count, member_candidates)

    def entity_state(
        self,
        device: dict[str, Any],
        partial: bool = False,
        overrides: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        return state.entity_state(self.r, device, self._now(), partial, overrides)

    def entity_availability(self) -> dict[str, str]:
        return state.entity_availability(self.r)

    # -- bridge --

    def bridge_state(self) -> dict[str, str]:
        return bridge.bridge_state(self.r)

    def bridge_logging(self, include_debug: bool = False) -> dict[str, str]:
        return bridge.bridge_logging(self.r, include_debug)

    def bridge_info(
        self,
        coordinator: dict[str, Any],
        devices: list[dict[str, Any]],
        groups: list[dict[str, Any]],
        **flags: Any,
    ) -> dict[str, Any]:
        """``bridge/info``; ``flags`` are the optional fixed values and options of ``bridge.bridge_info``."""
        return bridge.bridge_info(
            self.r, coordinator, devices, groups, epoch_ms(self._now()), versions=self.versions, **flags
        )

    def bridge_health(self, devices: list[dict[str, Any]]) -> dict[str, Any]:
        return bridge.bridge_health(self.r, devices, epoch_ms(self._now()))

    def bridge_event(self, device: dict[str, Any]) -> dict[str, Any]:
        return bridge.bridge_event(self.r, device)

    def bridge_converters(self, count: int | None = None) -> list[dict[str, str]]:
        return bridge.bridge_converters(self.r, count)

    def bridge_extensions(self, count: int | None = None) -> list[dict[str, str]]:
        return bridge.bridge_extensions(self.r, count)

    def bridge_devices(self, coordinator: dict[str, Any], devices: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """``bridge/devices``, coordinator first."""
        return [coordinator, *devices]

    def bridge_groups(self, groups: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return list(groups)

    def external_definition(
        self,
        device_id: str | None = None,
        zigbee_model: str | None = None,
        vendor: str | None = None,
    ) -> dict[str, str]:
        return bridge.external_definition(self.r, device_id, zigbee_model, vendor)

    # -- topology --

    def network_map(
        self,
        coordinator: dict[str, Any],
        devices: list[dict[str, Any]],
        routes: bool = False,
    ) -> dict[str, list[dict[str, Any]]]:
        return topology.network_map(self.r, coordinator, devices, epoch_ms(self._now()), routes)

    def raw_network_map(
        self,
        coordinator: dict[str, Any],
        devices: list[dict[str, Any]],
        routes: bool = False,
    ) -> dict[str, Any]:
        return topology.raw_network_map(self.r, coordinator, devices, epoch_ms(self._now()), routes)

    # -- snapshot --

    def snapshot(
        self,
        device_count: int | None = None,
        group_count: int | None = None,
        routes: bool | None = None,
    ) -> Snapshot:
        """Generate a consistent set of bridge payloads for one network.

        Draw order: coordinator, devices, groups, state, info, health,
        converters, extensions, network map.
        """
        device_count = self.device_count if device_count is None else device_count
        group_count = self.group_count if group_count is None else group_count
        routes = self.routes if routes is None else routes

        coordinator = self.coordinator()
        devices = self.devices(device_count)
        groups = self.groups(group_count, devices)

        snap = Snapshot(
            state=self.bridge_state(),
            info=self.bridge_info(coordinator, devices, groups),
            health=self.bridge_health(devices),
            converters=self.bridge_converters(),
            extensions=self.bridge_extensions(),
            devices=self.bridge_devices(coordinator, devices),
            groups=self.bridge_groups(groups),
            network_map=self.raw_network_map(coordinator, devices, routes),
        )
        logger.info(
            "Generated snapshot: %d devices, %d groups, %d links",
            len(snap.devices),
            len(snap.groups),
            len(snap.network_map["value"]["links"]),
        )
        return snap
