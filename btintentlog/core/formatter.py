"""Verbose and compact log layouts for Bluetooth intents."""

from __future__ import annotations

from btintentlog.core.model import BroadcastEvent, DecodedValue, SymbolTables, ValueKind
from btintentlog.core.naming import classify_action, normalize_extra_key
from btintentlog.core.values import NOT_PARSED, decode_value

NO_EXTRAS = "...Intent has no extras."


def format_bluetooth_event(
    event: BroadcastEvent,
    tables: SymbolTables,
    *,
    verbose: bool,
    device_type_available: bool = True,
) -> list[str]:
    """Render a Bluetooth intent as log lines.

    The first line names the action as ``<ApiClass>.ACTION_<NAME>``. Verbose
    output then repeats the raw action and labels every extra with its value,
    raw form and platform type; compact output shows only the key and the
    most readable form of the value.
    """
    lines = [str(classify_action(event.action, tables))]
    if verbose:
        lines.append(f"Action: {event.action}")

    if not event.extras:
        lines.append(NO_EXTRAS)
        return lines

    for key, value in event.extras.items():
        decoded = decode_value(
            event.action,
            key,
            value,
            tables,
            device_type_available=device_type_available,
        )
        display_key = normalize_extra_key(key, verbose, tables)
        if verbose:
            lines.append(_verbose_line(display_key, decoded, device_type_available))
        else:
            lines.append(_compact_line(display_key, decoded))
    return lines


def _verbose_line(key: str, decoded: DecodedValue, device_type_available: bool) -> str:
    parts = ["Extra: ", key, "   "]

    if decoded.resolved is not None:
        if decoded.kind is ValueKind.DEVICE:
            label = "Device Name/Type/Address: " if device_type_available else "Device Name/Address: "
            parts += [label, decoded.resolved, "   "]
        elif decoded.kind is ValueKind.DEVICE_CLASS:
            parts += ["Device Major/Class: ", decoded.resolved, "   "]
        else:
            parts += ["Value: ", decoded.resolved, " "]
            if decoded.resolved != NOT_PARSED:
                parts += ["(", decoded.raw or "", ")   "]
    elif decoded.raw is not None:
        parts += ["Value: ", decoded.raw, "   "]

    if decoded.type_name is not None:
        parts += ["Type: ", decoded.type_name]
    return "".join(parts)


def _compact_line(key: str, decoded: DecodedValue) -> str:
    if decoded.resolved is not None:
        return f"{key} {decoded.resolved}"
    return f"{key} {decoded.raw or ''}"
