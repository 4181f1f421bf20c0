"""Bridge payloads: ``bridge/state``, ``bridge/info``, ``bridge/health`` and friends."""

import copy
from dataclasses import dataclass, field
from typing import Any

from meshfixtures.rng import Rng
from meshfixtures.shared.generics import sentence, word
from meshfixtures.zigbee.primitives import (
    eui64,
    extended_pan_id,
    extended_pan_id_from_array,
    extended_pan_id_to_array,
    pan_id,
)

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class BridgeVersions:
    """Software versions and schema reported in ``bridge/info``."""

    version: str = "2.6.0"
    zhc_version: str = "25.0.0"
    zh_version: str = "4.0.0"
    mqtt_server: str = "mqtt://localhost:1883"
    config_schema: dict[str, Any] = field(default_factory=dict)


def bridge_state(r: Rng) -> dict[str, str]:
    return {"state": "online" if r.chance(0.95) else "offline"}


def bridge_logging(r: Rng, include_debug: bool = False) -> dict[str, str]:
    """A ``bridge/logging`` message; debug level is not sent to frontends by default."""
    levels = LOG_LEVELS if include_debug else LOG_LEVELS[1:]
    return {
        "message": sentence(r),
        "level": r.pick(levels),
        "namespace": f"{r.pick(('z2m', 'zh', 'zhc'))}:{word(r)}",
    }


def bridge_info_config(
    r: Rng,
    devices: list[dict[str, Any]],
    groups: list[dict[str, Any]],
    log_level: str,
    ha_enabled: bool,
    availability_enabled: bool,
    mqtt_server: str = "mqtt://localhost:1883",
    device_specific_options: dict[str, dict] | None = None,
    group_specific_options: dict[str, dict] | None = None,
    device_options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Settings block published under ``bridge/info.config``.

    PAN id, extended PAN id (little-endian bytes) and network key are drawn
    here so ``bridge/info.network`` can mirror them.
    """
    device_specific_options = device_specific_options or {}
    group_specific_options = group_specific_options or {}
    log_syslog = r.chance(0.3)

    devices_obj = {
        d["ieee_address"]: {**device_specific_options.get(d["ieee_address"], {}), "friendly_name": d["friendly_name"]}
        for d in devices
    }
    groups_obj = {
        str(g["id"]): {**group_specific_options.get(str(g["id"]), {}), "friendly_name": g["friendly_name"]}
        for g in groups
    }

    config: dict[str, Any] = {"version": 4}
    config["homeassistant"] = {
        "enabled": ha_enabled,
        "discovery_topic": "homeassistant",
        "status_topic": "hass/status",
        "experimental_event_entities": r.chance(0.2),
        "legacy_action_sensor": r.chance(0.2),
    }
    config["availability"] = {
        "enabled": availability_enabled,
        "active": {
            "timeout": r.randint(5, 120),
            "max_jitter": r.randint(1_000, 30_000),
            "backoff": r.chance(0.9),
            "pause_on_backoff_gt": r.randint(100, 3_000),
        },
        "passive": {"timeout": r.randint(5, 120)},
    }
    config["mqtt"] = {
        "base_topic": "zigbee2mqtt",
        "include_device_information": r.chance(0.1),
        "force_disable_retain": r.chance(0.1),
        "version": r.pick((3, 4, 5)),
        "user": "z2m",
        "password": "secret",
        "server": mqtt_server,
        "ca": None,
        "keepalive": r.randint(10, 120),
        "key": None,
        "cert": None,
        "client_id": f"z2m_{r.hex(6)}",
        "reject_unauthorized": r.chance(0.9),
        "maximum_packet_size": r.randint(20, 268_435_456),
    }
    config["serial"] = {
        "disable_led": r.chance(0.5),
        "port": "/dev/ttyACM0",
        "adapter": r.pick(("deconz", "ember", "zstack")),
        "baudrate": r.pick((115200, 230400, 460800, 1000000)),
        "rtscts": r.chance(0.5),
    }
    config["passlist"] = []
    config["blocklist"] = []
    config["map_options"] = {
        "graphviz": {
            "colors": {
                "fill": {"enddevice": "#fff8ce", "coordinator": "#e04e5d", "router": "#4ea3e0"},
                "font": {"coordinator": "#ffffff", "router": "#ffffff", "enddevice": "#000000"},
                "line": {"active": "#009900", "inactive": "#994444"},
            }
        }
    }
    config["ota"] = {
        "update_check_interval": r.randint(3600, 24 * 3600),
        "disable_automatic_update_check": r.chance(0.2),
        "zigbee_ota_override_index_location": None,
        "image_block_response_delay": r.pick([None, r.randint(10, 200)]),
        "default_maximum_data_size": r.pick((None, 64, 80, 128)),
    }
    config["frontend"] = {
        "enabled": r.chance(0.95),
        "package": "zigbee2mqtt-windfront",
        "auth_token": None,
        "host": None,
        "port": r.randint(8080, 9090),
        "base_url": "/",
        "url": None,
        "ssl_cert": None,
        "ssl_key": None,
        "notification_filter": [],
        "disable_ui_serving": r.chance(0.05),
    }
    config["devices"] = devices_obj
    config["groups"] = groups_obj
    config["device_options"] = device_options or {}

    outputs = ("console", "file", "syslog") if log_syslog else ("console", "file")
    advanced: dict[str, Any] = {
        "log_rotation": r.chance(0.8),
        "log_console_json": r.chance(0.5),
        "log_symlink_current": r.chance(0.6),
    }
    advanced["log_output"] = [
        r.pick(outputs) for _ in range(r.randint(1 if r.chance(0.9) else 0, 3 if log_syslog else 2))
    ]
    advanced.update(
        {
            "log_directory": "data/log/%TIMESTAMP%",
            "log_file": "log.txt",
            "log_level": log_level,
            "log_namespaced_levels": {},
            "log_syslog": {},
            "log_debug_to_mqtt_frontend": r.chance(0.1),
            "log_debug_namespace_ignore": "",
            "log_directories_to_keep": r.randint(2, 1_000),
            "pan_id": pan_id(r),
            "ext_pan_id": extended_pan_id_to_array(extended_pan_id(r)),
            "channel": r.randint(11, 25),
            "adapter_concurrent": r.pick((None, 16, 32, 64)),
            "adapter_delay": r.pick((None, 0, 10, 50)),
            "cache_state": r.chance(0.9),
            "cache_state_persistent": r.chance(0.8),
            "cache_state_send_on_startup": r.chance(0.8),
            "last_seen": r.pick(("disable", "ISO_8601", "ISO_8601_local", "epoch")),
            "elapsed": r.chance(0.5),
            "network_key": [r.randint(0, 254) for _ in range(16)],
            "timestamp_format": "YYYY-MM-DD HH:mm:ss",
            "output": "json" if r.chance(0.95) else r.pick(("json", "attribute", "attribute_and_json")),
            "transmit_power": r.pick((None, 0, 5, 9, 15, 19, 20)),
        }
    )
    config["advanced"] = advanced
    config["health"] = {"interval": r.randint(1, 60), "reset_on_check": r.chance(0.1)}
    return config


def bridge_info(
    r: Rng,
    coordinator: dict[str, Any],
    devices: list[dict[str, Any]],
    groups: list[dict[str, Any]],
    now_ms: int,
    versions: BridgeVersions | None = None,
    log_level: str | None = None,
    ha_enabled: bool | None = None,
    availability_enabled: bool | None = None,
    permit_join: bool | None = None,
    restart_required: bool | None = None,
    device_specific_options: dict[str, dict] | None = None,
    group_specific_options: dict[str, dict] | None = None,
    device_options: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """A ``bridge/info`` payload consistent with the given network.

    Unset flags are drawn first, in argument order, then channel, then the
    config block, then the remaining info fields.

    ``device_specific_options`` (keyed by ieee address) and
    ``group_specific_options`` (keyed by group id string) are merged into
    the matching ``config.devices``/``config.groups`` entries.
    ``device_options`` becomes ``config.device_options``.
    """
    versions = versions or BridgeVersions()
    if log_level is None:
        log_level = r.pick(LOG_LEVELS)
    if ha_enabled is None:
        ha_enabled = r.chance(0.5)
    if availability_enabled is None:
        availability_enabled = r.chance(0.75)
    if permit_join is None:
        permit_join = r.chance(0.5)
    if restart_required is None:
        restart_required = r.chance(0.01)

    channel = r.randint(11, 26)
    config = bridge_info_config(
        r,
        [coordinator, *devices],
        groups,
        log_level,
        ha_enabled,
        availability_enabled,
        mqtt_server=versions.mqtt_server,
        device_specific_options=device_specific_options,
        group_specific_options=group_specific_options,
        device_options=device_options,
    )

    return {
        "os": {
            "version": f"{r.randint(5, 6)}.{r.randint(0, 15)}.{r.randint(0, 20)}",
            "node_version": f"{r.randint(20, 24)}.{r.randint(0, 20)}.{r.randint(0, 99)}",
            "cpus": f"{r.randint(2, 16)}x {r.pick(('ARM', 'x86_64', 'AMD64'))}",
            "memory_mb": r.randint(1024, 65536),
        },
        "mqtt": {"version": config["mqtt"]["version"], "server": config["mqtt"]["server"]},
        "version": versions.version,
        "commit": r.hex(7) if r.chance(0.5) else None,
        "zigbee_herdsman_converters": {"version": versions.zhc_version},
        "zigbee_herdsman": {"version": versions.zh_version},
        "coordinator": {
            "ieee_address": coordinator["ieee_address"],
            "type": r.pick(("ConBee3", "EmberZNet", "ZStack3x0")),
            "meta": {"revision": f"v{r.randint(1, 10)}.{r.randint(0, 20)}.{r.randint(0, 99)}"},
        },
        "network": {
            "pan_id": config["advanced"]["pan_id"],
            "extended_pan_id": extended_pan_id_from_array(config["advanced"]["ext_pan_id"]),
            "channel": channel,
        },
        "log_level": config["advanced"]["log_level"],
        "permit_join": permit_join,
        "permit_join_end": now_ms + r.randint(30_000, 254_000) if permit_join else None,
        "restart_required": restart_required,
        "config": config,
        "config_schema": copy.deepcopy(versions.config_schema),
    }


def bridge_health(r: Rng, devices: list[dict[str, Any]], now_ms: int) -> dict[str, Any]:
    """A ``bridge/health`` payload with per-device counters."""
    dev_map = {
        d["ieee_address"]: {
            "messages": r.randint(0, 10_000),
            "messages_per_sec": r.uniform(0, 10),
            "leave_count": 0 if r.chance(0.75) else r.randint(1, 5),
            "network_address_changes": 0 if r.chance(0.95) else r.randint(0, 3),
        }
        for d in devices
    }

    sys_mem_total_mb = r.randint(1024, 65536)
    sys_mem_free_mb = r.randint(sys_mem_total_mb // 4, sys_mem_total_mb - 1024)
    sys_mem_used_mb = sys_mem_total_mb - sys_mem_free_mb
    proc_mem_used_mb = r.randint(50, 150)

    return {
        "response_time": now_ms,
        "os": {
            "load_average": [round(r.uniform(0, 1.5), 2) for _ in range(3)],
            "memory_used_mb": sys_mem_used_mb,
            "memory_percent": round(sys_mem_used_mb / sys_mem_total_mb * 100, 4),
        },
        "process": {
            "uptime_sec": r.randint(10, 7 * 24 * 3600),
            "memory_used_mb": proc_mem_used_mb,
            "memory_percent": round(proc_mem_used_mb / sys_mem_total_mb * 100, 4),
        },
        "mqtt": {
            "connected": r.chance(0.95),
            "queued": r.randint(0, 1000),
            "received": r.randint(0, 100_000),
            "published": r.randint(0, 100_000),
        },
        "devices": dev_map,
    }


def bridge_event(r: Rng, device: dict[str, Any]) -> dict[str, Any]:
    """A ``bridge/event`` payload about ``device``."""
    base = {"friendly_name": device["friendly_name"], "ieee_address": device["ieee_address"]}
    kind = r.pick(("device_leave", "device_joined", "device_announce", "device_interview"))

    if kind == "device_interview":
        status = r.pick(("started", "failed", "successful"))
        if status == "successful":
            return {
                "type": kind,
                "data": {
                    **base,
                    "status": status,
                    "supported": device["supported"],
                    "definition": device["definition"],
                },
            }
        return {"type": kind, "data": {**base, "status": status}}

    return {"type": kind, "data": base}


def bridge_converters(r: Rng, count: int | None = None) -> list[dict[str, str]]:
    """Custom converters, 1-5 unless ``count`` is given."""
    if count is None:
        count = r.randint(1, 5)
    return [
        {
            "name": f"custom_converter_{i + 1}",
            "code": "export default { fromZigbee: [], toZigbee: [], exposes: [] };",
        }
        for i in range(count)
    ]


def bridge_extensions(r: Rng, count: int | None = None) -> list[dict[str, str]]:
    """Extensions, 1-2 unless ``count`` is given."""
    if count is None:
        count = r.randint(1, 2)
    return [
        {"name": f"extension_{i + 1}", "code": "export default { start: () => {}, stop: () => {} };"}
        for i in range(count)
    ]


def external_definition(
    r: Rng,
    device_id: str | None = None,
    zigbee_model: str | None = None,
    vendor: str | None = None,
) -> dict[str, str]:
    """A ``bridge/response/device/generate_external_definition`` payload."""
    if device_id is None:
        device_id = eui64(r)
    if zigbee_model is None:
        zigbee_model = word(r)
    if vendor is None:
        vendor = word(r)

    source = f"""import * as m from 'zigbee-herdsman-converters/lib/modernExtend';

export default {{
    zigbeeModel: ['{zigbee_model}'],
    model: '{zigbee_model}',
    vendor: '{vendor}',
    description: 'Automatically generated definition',
    extend: [m.temperature(), m.onOff({{"powerOnBehavior":false}})],
    meta: {{}},
}};"""
    return {"id": device_id, "source": source}
