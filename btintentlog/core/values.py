"""Per-type decoding of intent extra values into display strings."""

from __future__ import annotations

import functools
from dataclasses import dataclass

from btintentlog.core.model import (
    DecodedValue,
    DeviceClassDescriptor,
    DeviceDescriptor,
    DeviceType,
    ExtraValue,
    SymbolTables,
    ValueKind,
    platform_type_name,
)
from btintentlog.core.symbols import constant_key

NOT_PARSED = "(not parsed)"
UNRECOGNIZED = "unrecognized"
UNAVAILABLE = "unavailable"

_REPORTED_DEVICE_TYPES = frozenset(
    {DeviceType.DEVICE_TYPE_CLASSIC, DeviceType.DEVICE_TYPE_LE, DeviceType.DEVICE_TYPE_DUAL}
)


@dataclass(frozen=True)
class _Context:
    action: str
    key: str
    tables: SymbolTables
    device_type_available: bool

    def constant_name(self, value_text: str) -> str | None:
        return self.tables.constants.get(constant_key(self.action, self.key, value_text))


def decode_value(
    action: str,
    key: str,
    value: ExtraValue,
    tables: SymbolTables,
    *,
    device_type_available: bool = True,
) -> DecodedValue:
    """Decode one extra of a Bluetooth intent.

    Strings and integers are resolved to their API constant name through the
    (action, key, value) table; when no name is known the raw value is kept,
    with strings quoted. Device and device class values are expanded into
    their components. Values of any other type are reported as not parsed.
    """
    context = _Context(
        action=action,
        key=key,
        tables=tables,
        device_type_available=device_type_available,
    )
    return _decode(value, context)


@functools.singledispatch
def _decode(value: object, context: _Context) -> DecodedValue:
    return DecodedValue(
        kind=ValueKind.UNRECOGNIZED,
        resolved=NOT_PARSED,
        raw="",
        type_name=platform_type_name(value),
    )


@_decode.register(type(None))
def _decode_absent(value: None, context: _Context) -> DecodedValue:
    return DecodedValue(kind=ValueKind.ABSENT)


@_decode.register(str)
def _decode_string(value: str, context: _Context) -> DecodedValue:
    name = context.constant_name(value)
    if name is not None:
        return DecodedValue(kind=ValueKind.STRING, resolved=name, raw=value, type_name=platform_type_name(value))
    return DecodedValue(kind=ValueKind.STRING, raw=f'"{value}"', type_name=platform_type_name(value))


@_decode.register(int)
def _decode_integer(value: int, context: _Context) -> DecodedValue:
    text = str(int(value))
    return DecodedValue(
        kind=ValueKind.INTEGER,
        resolved=context.constant_name(text),
        raw=text,
        type_name=platform_type_name(value),
    )


@_decode.register(bool)
def _decode_boolean(value: bool, context: _Context) -> DecodedValue:
    return DecodedValue(
        kind=ValueKind.BOOLEAN,
        raw="true" if value else "false",
        type_name=platform_type_name(value),
    )


@_decode.register(DeviceDescriptor)
def _decode_device(value: DeviceDescriptor, context: _Context) -> DecodedValue:
    # The name is unavailable while Bluetooth is off.
    text = f'"{value.name}"' if value.name is not None else "null"
    if context.device_type_available:
        if value.device_type in _REPORTED_DEVICE_TYPES:
            text += f"/{DeviceType(value.device_type).name}/"
        else:
            text += f"/{UNAVAILABLE}/"
    text += value.address if value.address is not None else UNAVAILABLE
    return DecodedValue(kind=ValueKind.DEVICE, resolved=text, type_name=value.type_name)


@_decode.register(DeviceClassDescriptor)
def _decode_device_class(value: DeviceClassDescriptor, context: _Context) -> DecodedValue:
    major = context.tables.major_classes.get(value.major, UNRECOGNIZED)
    minor = context.tables.device_classes.get(value.device_class, UNRECOGNIZED)
    return DecodedValue(
        kind=ValueKind.DEVICE_CLASS,
        resolved=f"{major}/{minor}",
        type_name=value.type_name,
    )
