"""Reader for captured broadcast intents stored as JSON Lines."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from btintentlog.core.errors import EventFileError
from btintentlog.core.model import (
    BroadcastEvent,
    DeviceClassDescriptor,
    DeviceDescriptor,
    ExtraValue,
    Long,
    OpaqueValue,
    Short,
)
from btintentlog.core.validation import load_schema_validator

EVENT_SCHEMA = "event.schema.json"

_JSON_TYPE_NAMES = {
    float: "java.lang.Double",
    list: "java.util.ArrayList",
}
_SHORT_RANGE = (-(2**15), 2**15 - 1)
_LONG_RANGE = (-(2**63), 2**63 - 1)


def _require_int(raw: dict[str, Any], name: str, *, context: str, optional: bool = False) -> int | None:
    value = raw.get(name)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise EventFileError(f"{context}: '{name}' must be an integer")
    return value


def _require_in_range(raw: dict[str, Any], bounds: tuple[int, int], *, context: str) -> int:
    value = _require_int(raw, "value", context=context)
    low, high = bounds
    if not low <= value <= high:
        raise EventFileError(f"{context}: {raw['type']} value {value} is outside [{low}, {high}]")
    return value


def _tagged_value(raw: dict[str, Any], *, context: str) -> ExtraValue:
    tag = raw["type"]
    if tag == "short":
        return Short(_require_in_range(raw, _SHORT_RANGE, context=context))
    if tag == "long":
        return Long(_require_in_range(raw, _LONG_RANGE, context=context))
    if tag == "device":
        return DeviceDescriptor(
            name=raw.get("name"),
            device_type=_require_int(raw, "device_type", context=context, optional=True),
            address=raw.get("address"),
        )
    if tag == "device_class":
        return DeviceClassDescriptor(
            major=_require_int(raw, "major", context=context),
            device_class=_require_int(raw, "device_class", context=context),
        )
    return OpaqueValue(type_name=tag, value=raw.get("value"))


def parse_extra_value(raw: Any, *, context: str = "extra") -> ExtraValue:
    """Convert a JSON extra value into the typed value the decoders expect."""
    if raw is None or isinstance(raw, (bool, str, int)):
        return raw
    if isinstance(raw, dict):
        return _tagged_value(raw, context=context)
    return OpaqueValue(type_name=_JSON_TYPE_NAMES.get(type(raw), type(raw).__name__), value=raw)


def parse_event(doc: dict[str, Any], *, context: str = "event") -> BroadcastEvent:
    extras = doc.get("extras")
    if extras is None:
        return BroadcastEvent(action=doc["action"])
    return BroadcastEvent(
        action=doc["action"],
        extras={
            key: parse_extra_value(value, context=f"{context}: extra '{key}'")
            for key, value in extras.items()
        },
    )


def load_events(path: Path) -> list[BroadcastEvent]:
    """Read one event per line; blank lines and ``#`` comments are skipped."""
    validator = load_schema_validator(EVENT_SCHEMA)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise EventFileError(f"Could not read event file {path}: {exc}") from exc

    events: list[BroadcastEvent] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        context = f"{path}:{lineno}"
        try:
            doc = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise EventFileError(f"{context}: invalid JSON: {exc.msg}") from exc
        try:
            validator.validate(doc)
        except ValidationError as exc:
            where = ".".join(str(p) for p in exc.path)
            where = f" ({where})" if where else ""
            raise EventFileError(f"{context}{where}: {exc.message}") from exc
        events.append(parse_event(doc, context=context))
    return events
