"""Entity state payloads for ``{friendly_name}`` and ``{friendly_name}/availability``."""

import logging
from datetime import datetime
from typing import Any

from meshfixtures.catalog.models import CapabilityDescriptor
from meshfixtures.catalog.walker import iterate_exposes
from meshfixtures.engine.values import expose_value
from meshfixtures.rng import Rng
from meshfixtures.shared.generics import iso_past_date

logger = logging.getLogger(__name__)

OTA_STATES = ("updating", "idle", "available", "scheduled")
OTA_STATES_AVAILABLE = ("updating", "available", "scheduled")


def ota_state(r: Rng, available: bool = False) -> str:
    """Pick an OTA state; ``available`` excludes "idle"."""
    return r.pick(OTA_STATES_AVAILABLE if available else OTA_STATES)


def _update_block(r: Rng) -> dict[str, Any]:
    installed = r.randint(1, 249_999_999)
    latest = installed if r.chance(0.75) else r.randint(installed, 250_000_000)
    state = "idle" if installed == latest else ota_state(r, latest > installed)
    return {
        "progress": r.randint(0, 100) if state == "updating" else None,
        "remaining": r.randint(1, 1800) if state == "updating" else None,
        "state": state,
        "installed_version": installed,
        "latest_version": latest,
    }


def entity_state(
    r: Rng,
    device: dict[str, Any],
    now: datetime,
    partial: bool = False,
    overrides: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Generate a state payload consistent with the device's exposes.

    Draw order: OTA block (if the definition supports OTA), then per
    top-level expose selection when ``partial``, then one value per visited
    expose in tree order, then ``last_seen``.

    Args:
        r: Random stream.
        device: A device payload (its ``definition`` may be None).
        now: Reference time for ``last_seen``.
        partial: Only include roughly 30% of the top-level exposes.
        overrides: Keys forced into the result, applied last.
    """
    base: dict[str, Any] = {}
    definition = device.get("definition")

    if definition:
        if definition["supports_ota"] and r.chance(0.85):
            base["update"] = _update_block(r)

        def set_value(expose: CapabilityDescriptor) -> None:
            if expose.key:
                base[expose.key] = expose_value(r, expose)

        exposes = definition["exposes"]
        if exposes:
            if partial:
                exposes = [expose for expose in exposes if r.chance(0.3)]
            iterate_exposes(exposes, set_value)

    logger.debug("Generated state for %s with %d keys", device.get("friendly_name"), len(base))
    return {"last_seen": iso_past_date(r, now), **base, **(overrides or {})}


def entity_availability(r: Rng) -> dict[str, str]:
    return {"state": "online" if r.chance(0.9) else "offline"}
