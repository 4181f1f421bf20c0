"""Flat dotted-key configuration with environment overrides.

Keys mirror the generator they feed (``snapshot.*``, ``topology.*``,
``bridge.*``). Environment variables override the defaults; explicit
overrides passed by the caller win over both.
"""

import copy
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "faker.seed": 1,
    "snapshot.device_count": 20,
    "snapshot.group_count": 4,
    "topology.routes": False,
    "bridge.version": "2.6.0",
    "bridge.zhc_version": "25.0.0",
    "bridge.zh_version": "4.0.0",
    "bridge.mqtt_server": "mqtt://localhost:1883",
    "bridge.config_schema": {},
}

# Environment variable → (config key, parser)
ENV_OVERRIDES = {
    "MESHFIXTURES_SEED": ("faker.seed", int),
    "MESHFIXTURES_DEVICE_COUNT": ("snapshot.device_count", int),
    "MESHFIXTURES_GROUP_COUNT": ("snapshot.group_count", int),
    "MESHFIXTURES_ROUTES": ("topology.routes", lambda v: v.strip().lower() in ("1", "true", "yes", "on")),
}


def resolve_config(overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Merge defaults, environment variables, then ``overrides``.

    Raises:
        ValueError: an environment variable cannot be parsed, or an override
            names an unknown key.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    for env_name, (key, parse) in ENV_OVERRIDES.items():
        raw = os.environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            config[key] = parse(raw)
        except ValueError as e:
            raise ValueError(f"Invalid value for {env_name}: {raw!r}") from e
        logger.debug("Config %s set from %s", key, env_name)

    for key, value in (overrides or {}).items():
        if key not in DEFAULT_CONFIG:
            raise ValueError(f"Unknown config key: {key}")
        config[key] = value

    return config
