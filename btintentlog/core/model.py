"""Core data models shared by the symbol tables, decoders, and CLI."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Union

STRING_TYPE = "java.lang.String"
INTEGER_TYPE = "java.lang.Integer"
BOOLEAN_TYPE = "java.lang.Boolean"
SHORT_TYPE = "java.lang.Short"
LONG_TYPE = "java.lang.Long"
DEVICE_TYPE_NAME = "android.bluetooth.BluetoothDevice"
DEVICE_CLASS_TYPE_NAME = "android.bluetooth.BluetoothClass"


class Short(int):
    """Integer extra delivered as a 16-bit platform value."""

    type_name = SHORT_TYPE


class Long(int):
    """Integer extra delivered as a 64-bit platform value."""

    type_name = LONG_TYPE


class DeviceType(IntEnum):
    """Device type codes reported by ``BluetoothDevice.getType()``."""

    DEVICE_TYPE_UNKNOWN = 0
    DEVICE_TYPE_CLASSIC = 1
    DEVICE_TYPE_LE = 2
    DEVICE_TYPE_DUAL = 3


@dataclass(frozen=True)
class DeviceDescriptor:
    name: str | None = None
    device_type: int | None = None
    address: str | None = None

    type_name = DEVICE_TYPE_NAME


@dataclass(frozen=True)
class DeviceClassDescriptor:
    major: int
    device_class: int

    type_name = DEVICE_CLASS_TYPE_NAME


@dataclass(frozen=True)
class OpaqueValue:
    """A platform value whose type the decoders do not understand."""

    type_name: str
    value: Any = None


ExtraValue = Union[str, int, bool, DeviceDescriptor, DeviceClassDescriptor, OpaqueValue, None]


def platform_type_name(value: ExtraValue) -> str | None:
    """Return the platform class name an extra value was delivered as."""
    if value is None:
        return None
    if isinstance(value, bool):
        return BOOLEAN_TYPE
    if isinstance(value, str):
        return STRING_TYPE
    if isinstance(value, (Short, Long)):
        return value.type_name
    if isinstance(value, int):
        return INTEGER_TYPE
    return getattr(value, "type_name", type(value).__name__)


@dataclass(frozen=True)
class PrefixRule:
    prefix: str
    label: str


@dataclass(frozen=True)
class SymbolTables:
    """Read-only lookup tables used by every decode call."""

    class_prefixes: tuple[PrefixRule, ...]
    extra_prefixes: tuple[str, ...]
    constants: Mapping[str, str]
    major_classes: Mapping[int, str]
    device_classes: Mapping[int, str]
    extra_names: Mapping[str, str]
    warnings: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in ("constants", "major_classes", "device_classes", "extra_names"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))


@dataclass(frozen=True)
class BroadcastEvent:
    action: str
    extras: Mapping[str, ExtraValue] | None = field(default=None)


class ValueKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DEVICE = "device"
    DEVICE_CLASS = "device_class"
    UNRECOGNIZED = "unrecognized"
    ABSENT = "absent"


@dataclass(frozen=True)
class DecodedValue:
    kind: ValueKind
    resolved: str | None = None
    raw: str | None = None
    type_name: str | None = None


@dataclass(frozen=True)
class ClassifiedAction:
    class_label: str
    action_name: str

    def __str__(self) -> str:
        return f"{self.class_label}.{self.action_name}"
