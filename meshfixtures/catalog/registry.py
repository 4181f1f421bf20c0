"""Device catalog: prepared once, immutable, injected into generators.

The catalog contents (vendors, models, exposes trees) are supplied by the
caller. ``Catalog.from_records`` validates raw records into ``Definition``
objects; ``Catalog.from_json`` does the same from a JSON file holding a
list of records.
"""

import json
import logging
from collections import Counter
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from meshfixtures.catalog.models import CapabilityDescriptor, Definition, WhiteLabel
from meshfixtures.catalog.payload import device_exposes
from meshfixtures.catalog.walker import iterate_exposes, iterate_options
from meshfixtures.errors import CatalogError

logger = logging.getLogger(__name__)


def _descriptors(raw: Iterable[Any] | None) -> list[CapabilityDescriptor]:
    return [d if isinstance(d, CapabilityDescriptor) else CapabilityDescriptor.model_validate(d) for d in raw or []]


def prepare_definition(record: dict[str, Any] | Definition) -> Definition:
    """Validate one raw catalog record into a ``Definition``.

    Accepts both snake_case and the camelCase keys used by upstream
    catalogs (``whiteLabel``, ``modelID``).
    """
    if isinstance(record, Definition):
        return record

    exposes = record.get("exposes", [])
    white_label = record.get("white_label", record.get("whiteLabel")) or []
    fingerprint = [
        {**fp, "model_id": fp.get("model_id", fp.get("modelID"))} for fp in record.get("fingerprint") or []
    ]

    return Definition(
        vendor=record["vendor"],
        model=record["model"],
        description=record.get("description", ""),
        exposes=exposes if callable(exposes) else _descriptors(exposes),
        options=_descriptors(record.get("options")),
        white_label=[wl if isinstance(wl, WhiteLabel) else WhiteLabel(**wl) for wl in white_label],
        fingerprint=fingerprint,
        endpoint=record.get("endpoint"),
        ota=bool(record.get("ota")),
    )


def _models_with_white_labels(definitions: Iterable[Definition]) -> dict[str, list[str]]:
    out = {
        f"{d.vendor} {d.model}": sorted(f"{wl.vendor} {wl.model}" for wl in d.white_label) for d in definitions
    }
    return dict(sorted(out.items()))


def _counts_to_lines(counts: Counter) -> list[str]:
    return [f"- {name} ({count})" for name, count in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)]


class Catalog:
    """Ordered, read-only list of device definitions."""

    def __init__(self, definitions: Iterable[Definition]):
        self._definitions = tuple(definitions)
        self._gp_definitions = tuple(d for d in self._definitions if d.is_green_power)
        if self._definitions and not self._gp_definitions:
            logger.warning("Catalog has no Green Power definitions, GreenPower devices cannot be generated")

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any] | Definition], strict: bool = True) -> "Catalog":
        """Prepare a catalog from raw records.

        Args:
            records: Raw dict records or prepared ``Definition`` objects.
            strict: Raise ``CatalogError`` on the first invalid record;
                otherwise log and skip it.
        """
        definitions = []
        for record in records:
            try:
                definitions.append(prepare_definition(record))
            except (ValidationError, KeyError, TypeError) as e:
                model = record.get("model") if isinstance(record, dict) else None
                if strict:
                    raise CatalogError(f"Invalid catalog record for model '{model}': {e}") from e
                logger.warning("Skipping invalid catalog record for model %s: %s", model, e)

        logger.info("Catalog prepared with %d definitions", len(definitions))
        return cls(definitions)

    @classmethod
    def from_json(cls, path: str | Path, strict: bool = True) -> "Catalog":
        """Prepare a catalog from a JSON file containing a list of records."""
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
        if not isinstance(records, list):
            raise CatalogError(f"Catalog file {path} must contain a list of records")
        return cls.from_records(records, strict=strict)

    @property
    def definitions(self) -> tuple[Definition, ...]:
        return self._definitions

    @property
    def green_power_definitions(self) -> tuple[Definition, ...]:
        """Definitions with a ``GreenPower_`` fingerprint model id."""
        return self._gp_definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def find_by_model(self, model: str) -> Definition | None:
        """Find a definition by model or white-label model, case-insensitive."""
        lc_model = model.lower()
        for definition in self._definitions:
            if definition.model.lower() == lc_model:
                return definition
            if any(wl.model.lower() == lc_model for wl in definition.white_label):
                return definition
        return None

    # -- listings --

    def list_definition_models(self) -> dict[str, list[str]]:
        """Models mapped to their white labels, both as ``"{vendor} {model}"``, sorted."""
        return _models_with_white_labels(self._definitions)

    def list_green_power_definition_models(self) -> dict[str, list[str]]:
        """Same as ``list_definition_models`` for Green Power definitions only."""
        return _models_with_white_labels(self._gp_definitions)

    def list_definition_exposes(self) -> list[str]:
        """Expose names with use count, most used first, as ``"- {name} ({count})"``."""
        counts: Counter = Counter()

        def count_name(expose: CapabilityDescriptor) -> None:
            if expose.name:
                counts[expose.name] += 1

        for definition in self._definitions:
            iterate_exposes(device_exposes(definition), count_name)

        return _counts_to_lines(counts)

    def list_definition_options(self) -> list[str]:
        """Option names with use count, most used first."""
        counts: Counter = Counter()

        def count_name(option: CapabilityDescriptor) -> None:
            if option.name:
                counts[option.name] += 1

        for definition in self._definitions:
            iterate_options(definition.options, count_name)

        return _counts_to_lines(counts)

    def list_definition_exposes_categories(self) -> dict[str, list[str]]:
        """Expose categories mapped to the sorted expose names using them."""
        out: dict[str, list[str]] = {}

        def collect(expose: CapabilityDescriptor) -> None:
            if expose.name and expose.category:
                names = out.setdefault(expose.category, [])
                if expose.name not in names:
                    names.append(expose.name)

        for definition in self._definitions:
            iterate_exposes(device_exposes(definition), collect)

        return {category: sorted(names) for category, names in sorted(out.items())}
