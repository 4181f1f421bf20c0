"""Tests for the bridge faker and snapshot assembly."""

import json
import logging

import pytest

from meshfixtures import BridgeFaker, Catalog, EmptyInputError, Snapshot
from meshfixtures.engine.bridge import BridgeVersions


class TestSnapshot:
    def test_structure(self, faker):
        snap = faker.snapshot(10, 3)
        assert isinstance(snap, Snapshot)
        assert len(snap.devices) == 11
        assert snap.devices[0]["type"] == "Coordinator"
        assert all(d["type"] != "Coordinator" for d in snap.devices[1:])
        assert len(snap.groups) == 3
        assert snap.network_map["type"] == "raw"
        assert snap.network_map["routes"] is False

    def test_cross_references(self, faker):
        snap = faker.snapshot(15, 4)
        addresses = {d["ieee_address"] for d in snap.devices}
        coordinator = snap.devices[0]

        assert snap.info["coordinator"]["ieee_address"] == coordinator["ieee_address"]
        assert set(snap.info["config"]["devices"]) == addresses
        assert set(snap.health["devices"]) == addresses - {coordinator["ieee_address"]}
        for grp in snap.groups:
            for member in grp["members"]:
                assert member["ieee_address"] in addresses
        for node in snap.network_map["value"]["nodes"]:
            assert node["ieeeAddr"] in addresses
        assert snap.network_map["value"]["nodes"][0]["ieeeAddr"] == coordinator["ieee_address"]

    def test_deterministic(self, catalog, clock):
        a = BridgeFaker(catalog, seed=77, clock=clock).snapshot()
        b = BridgeFaker(catalog, seed=77, clock=clock).snapshot()
        assert a.to_dict() == b.to_dict()

    def test_seeds_differ(self, catalog, clock):
        a = BridgeFaker(catalog, seed=1, clock=clock).snapshot(5, 1)
        b = BridgeFaker(catalog, seed=2, clock=clock).snapshot(5, 1)
        assert a.devices[0]["ieee_address"] != b.devices[0]["ieee_address"]

    def test_defaults_from_attributes(self, faker):
        faker.device_count = 3
        faker.group_count = 2
        faker.routes = True
        snap = faker.snapshot()
        assert len(snap.devices) == 4
        assert len(snap.groups) == 2
        assert snap.network_map["routes"] is True

    def test_network_addresses_unique(self, catalog, clock):
        for seed in (3, 5, 7, 9):
            snap = BridgeFaker(catalog, seed=seed, clock=clock).snapshot(300, 0)
            addresses = [d["network_address"] for d in snap.devices[1:]]
            assert len(addresses) == len(set(addresses))
            nodes = [n["networkAddress"] for n in snap.network_map["value"]["nodes"][1:]]
            assert len(nodes) == len(set(nodes))

    def test_empty_network(self, faker):
        snap = faker.snapshot(0, 0)
        assert len(snap.devices) == 1
        assert snap.groups == []
        assert snap.network_map["value"]["links"] == []

    def test_to_dict_is_json(self, faker):
        data = faker.snapshot(8, 2).to_dict()
        assert set(data) == {
            "bridge/state",
            "bridge/info",
            "bridge/health",
            "bridge/converters",
            "bridge/extensions",
            "bridge/devices",
            "bridge/groups",
            "bridge/response/networkmap",
        }
        decoded = json.loads(json.dumps(data))
        assert decoded == data
        first_device = decoded["bridge/devices"][1]
        assert all(isinstance(k, str) for k in first_device["endpoints"])
        assert first_device["definition"]["exposes"][0]["type"] == "numeric"

    def test_logs_summary(self, faker, caplog):
        with caplog.at_level(logging.INFO, logger="meshfixtures.faker"):
            faker.snapshot(2, 1)
        assert any("Generated snapshot" in rec.message for rec in caplog.records)

    def test_green_power_without_catalog_support(self, adeo_catalog, clock):
        # large enough that a GreenPower draw is practically certain
        faker = BridgeFaker(adeo_catalog, seed=3, clock=clock)
        with pytest.raises(EmptyInputError):
            faker.snapshot(200, 0)


class TestFromConfig:
    def test_overrides(self, catalog, clock, monkeypatch):
        monkeypatch.delenv("MESHFIXTURES_SEED", raising=False)
        faker = BridgeFaker.from_config(
            catalog,
            {"faker.seed": 9, "snapshot.device_count": 2, "snapshot.group_count": 1, "bridge.version": "3.0.0"},
            clock=clock,
        )
        assert faker.device_count == 2
        assert faker.group_count == 1
        assert faker.versions.version == "3.0.0"
        snap = faker.snapshot()
        assert len(snap.devices) == 3
        assert snap.info["version"] == "3.0.0"

    def test_matches_direct_construction(self, catalog, clock, monkeypatch):
        monkeypatch.delenv("MESHFIXTURES_SEED", raising=False)
        configured = BridgeFaker.from_config(catalog, {"faker.seed": 4}, clock=clock)
        direct = BridgeFaker(catalog, seed=4, clock=clock)
        assert configured.device() == direct.device()

    def test_env_seed(self, catalog, clock, monkeypatch):
        monkeypatch.setenv("MESHFIXTURES_SEED", "4")
        configured = BridgeFaker.from_config(catalog, clock=clock)
        direct = BridgeFaker(catalog, seed=4, clock=clock)
        assert configured.device() == direct.device()


class TestFakerMethods:
    def test_group_generates_members(self, faker):
        grp = faker.group()
        assert "id" in grp
        assert len(grp["members"]) <= 4

    def test_groups_generates_candidates(self, faker):
        assert len(faker.groups(3)) == 3

    def test_bridge_devices_coordinator_first(self, faker):
        coord = faker.coordinator()
        devs = faker.devices(2)
        assert faker.bridge_devices(coord, devs) == [coord, *devs]

    def test_bridge_info_options(self, faker):
        coord = faker.coordinator()
        info = faker.bridge_info(
            coord, [], [], device_specific_options={coord["ieee_address"]: {"retain": True}}
        )
        assert info["config"]["devices"][coord["ieee_address"]] == {"retain": True, "friendly_name": "Coordinator"}

    def test_config_schema_not_shared(self, catalog, clock):
        faker = BridgeFaker.from_config(catalog, clock=clock)
        info = faker.bridge_info(faker.coordinator(), [], [])
        info["config_schema"]["mutated"] = True
        assert faker.bridge_info(faker.coordinator(), [], [])["config_schema"] == {}
        assert BridgeFaker.from_config(catalog, clock=clock).versions.config_schema == {}

    def test_bridge_info_flags(self, faker):
        coord = faker.coordinator()
        info = faker.bridge_info(coord, [], [], permit_join=False, log_level="info")
        assert info["permit_join"] is False
        assert info["log_level"] == "info"

    def test_entity_state_uses_clock(self, faker):
        dev = faker.device("Router", "ZBDongle-E")
        payload = faker.entity_state(dev)
        assert payload["last_seen"].startswith("2024-") or payload["last_seen"].startswith("2025-")

    def test_custom_versions(self, catalog, clock):
        faker = BridgeFaker(catalog, versions=BridgeVersions(version="1.2.3"), clock=clock)
        assert faker.bridge_info(faker.coordinator(), [], [])["version"] == "1.2.3"

    def test_empty_catalog_device(self, clock):
        with pytest.raises(EmptyInputError):
            BridgeFaker(Catalog([]), clock=clock).device()
