"""Shared fixtures: an in-memory stub catalog and a frozen clock."""

from datetime import UTC, datetime

import pytest

from meshfixtures.catalog.models import CapabilityDescriptor
from meshfixtures.catalog.registry import Catalog
from meshfixtures.faker import BridgeFaker

FROZEN_NOW = datetime(2025, 1, 1, 0, 0, 1, tzinfo=UTC)
FROZEN_NOW_MS = 1735689601000


def _light_features():
    return [
        {"type": "binary", "name": "state", "property": "state", "value_on": "ON", "value_off": "OFF"},
        {"type": "numeric", "name": "brightness", "property": "brightness", "value_min": 0, "value_max": 254},
        {"type": "numeric", "name": "color_temp", "property": "color_temp", "value_min": 150, "value_max": 500},
        {
            "type": "composite",
            "name": "color_xy",
            "property": "color",
            "features": [
                {"type": "numeric", "name": "x", "property": "x"},
                {"type": "numeric", "name": "y", "property": "y"},
            ],
        },
    ]


ADEO_LIGHT = {
    "vendor": "ADEO",
    "model": "IM-CDZDGAAA0005KA_MAN",
    "description": "ENKI LEXMAN E27 LED white",
    "exposes": [
        {"type": "light", "features": _light_features()},
        {"type": "enum", "name": "effect", "property": "effect", "values": ["blink", "breathe", "okay"]},
        {
            "type": "enum",
            "name": "power_on_behavior",
            "property": "power_on_behavior",
            "values": ["off", "on", "toggle", "previous"],
            "category": "config",
        },
    ],
}

SONOFF_DONGLE = {
    "vendor": "SONOFF",
    "model": "ZBDongle-E",
    "description": "Zigbee 3.0 USB Dongle Plus (EFR32MG21) with router firmware",
    "whiteLabel": [{"vendor": "SONOFF", "model": "ZBDongle-E-Router"}],
    "exposes": [
        {
            "type": "numeric",
            "name": "light_indicator_level",
            "property": "light_indicator_level",
            "value_min": 0,
            "value_max": 255,
            "category": "config",
        }
    ],
}

LEGRAND_GP = {
    "vendor": "Legrand",
    "model": "ZLGP17/ZLGP18",
    "description": "Wireless and batteryless scenario switch",
    "fingerprint": [{"modelID": "GreenPower_254"}],
    "exposes": [{"type": "enum", "name": "action", "property": "action", "values": ["press_1", "press_2"]}],
}


def _sengled_exposes(device, options):
    assert device.is_dummy_device
    return [
        CapabilityDescriptor(
            type="light",
            features=[
                CapabilityDescriptor(type="binary", name="state", property="state", value_on="ON", value_off="OFF"),
                CapabilityDescriptor(
                    type="numeric", name="brightness", property="brightness", value_min=0, value_max=254
                ),
            ],
        ),
        CapabilityDescriptor(type="binary", name="occupancy", property="occupancy", value_on=True, value_off=False),
    ]


SENGLED_BULB = {
    "vendor": "Sengled",
    "model": "E13-N11",
    "description": "Flood light with motion sensor light outdoor",
    "exposes": _sengled_exposes,
    "ota": True,
}

TUYA_SWITCH = {
    "vendor": "Tuya",
    "model": "TS0002",
    "description": "2 gang switch module",
    "exposes": [
        {
            "type": "switch",
            "endpoint": "l1",
            "features": [
                {"type": "binary", "name": "state", "property": "state_l1", "value_on": "ON", "value_off": "OFF"}
            ],
        },
        {
            "type": "switch",
            "endpoint": "l2",
            "features": [
                {"type": "binary", "name": "state", "property": "state_l2", "value_on": "ON", "value_off": "OFF"}
            ],
        },
        {
            "type": "list",
            "name": "schedule",
            "property": "schedule",
            "length_min": 1,
            "length_max": 3,
            "item_type": {"type": "text", "name": "slot"},
        },
    ],
    "options": [
        {"type": "binary", "name": "state_action", "value_on": True, "value_off": False},
        {
            "type": "composite",
            "name": "transition",
            "features": [{"type": "numeric", "name": "duration"}],
        },
    ],
    "endpoint": lambda device: {"l1": 1, "l2": 2},
}

ALL_RECORDS = [ADEO_LIGHT, SONOFF_DONGLE, LEGRAND_GP, SENGLED_BULB, TUYA_SWITCH]


@pytest.fixture
def catalog():
    return Catalog.from_records(ALL_RECORDS)


@pytest.fixture
def adeo_catalog():
    """Single ADEO light, so any non-Green Power pick lands on it."""
    return Catalog.from_records([ADEO_LIGHT])


@pytest.fixture
def clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def now_ms():
    return FROZEN_NOW_MS


@pytest.fixture
def faker(catalog, clock):
    return BridgeFaker(catalog, seed=1, clock=clock)
