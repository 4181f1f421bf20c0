"""Definition payloads as published on ``bridge/devices``."""

from typing import Any

from meshfixtures.catalog.models import CapabilityDescriptor, Definition

# Access flag for a published state value
ACCESS_STATE = 0b001

LINKQUALITY = CapabilityDescriptor(
    type="numeric",
    name="linkquality",
    label="Linkquality",
    property="linkquality",
    access=ACCESS_STATE,
    unit="lqi",
    description="Link quality (signal strength)",
    value_min=0,
    value_max=255,
    category="diagnostic",
)


def device_exposes(definition: Definition) -> list[CapabilityDescriptor]:
    """Definition exposes as a plain list, link quality first."""
    return [LINKQUALITY, *definition.resolve_exposes()]


def device_definition_payload(definition: Definition) -> dict[str, Any]:
    """Definition payload as sent over MQTT."""
    return {
        "source": "native",
        "model": definition.model,
        "vendor": definition.vendor,
        "description": definition.description,
        "exposes": device_exposes(definition),
        "supports_ota": bool(definition.ota),
        "options": list(definition.options),
        "icon": None,
    }
