from __future__ import annotations

from importlib import resources

import pytest

from btintentlog.core.model import (
    DeviceClassDescriptor,
    DeviceDescriptor,
    Long,
    OpaqueValue,
    Short,
    SymbolTables,
    ValueKind,
)
from btintentlog.core.symbols import PACKAGED_TABLE, _read_yaml
from btintentlog.core.values import NOT_PARSED, decode_value

STATE_CHANGED = "android.bluetooth.adapter.action.STATE_CHANGED"
EXTRA_STATE = "android.bluetooth.adapter.extra.STATE"
EXTRA_DEVICE = "android.bluetooth.device.extra.DEVICE"
EXTRA_CLASS = "android.bluetooth.device.extra.CLASS"


def test_integer_resolves_to_constant_name(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, EXTRA_STATE, 12, tables)
    assert decoded.kind is ValueKind.INTEGER
    assert decoded.resolved == "STATE_ON"
    assert decoded.raw == "12"
    assert decoded.type_name == "java.lang.Integer"


def test_every_packaged_constant_resolves(tables: SymbolTables) -> None:
    doc = _read_yaml(resources.files("btintentlog.data").joinpath(PACKAGED_TABLE))
    for group in doc["constants"]:
        for value_text, name in group["values"].items():
            decoded = decode_value(group["action"], group["extra"], int(value_text), tables)
            assert decoded.resolved == name


def test_unmapped_integer_keeps_raw_value(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, EXTRA_STATE, 99, tables)
    assert decoded.resolved is None
    assert decoded.raw == "99"


def test_constant_lookup_depends_on_action(tables: SymbolTables) -> None:
    decoded = decode_value("android.bluetooth.adapter.action.SCAN_MODE_CHANGED", EXTRA_STATE, 12, tables)
    assert decoded.resolved is None


def test_short_and_long_are_looked_up(tables: SymbolTables) -> None:
    short = decode_value(STATE_CHANGED, EXTRA_STATE, Short(10), tables)
    assert short.resolved == "STATE_OFF"
    assert short.type_name == "java.lang.Short"

    long = decode_value(STATE_CHANGED, EXTRA_STATE, Long(13), tables)
    assert long.resolved == "STATE_TURNING_OFF"
    assert long.raw == "13"
    assert long.type_name == "java.lang.Long"


def test_unmapped_string_is_quoted(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, "android.bluetooth.device.extra.NAME", "Pixel Buds", tables)
    assert decoded.kind is ValueKind.STRING
    assert decoded.resolved is None
    assert decoded.raw == '"Pixel Buds"'
    assert decoded.type_name == "java.lang.String"


def test_mapped_string_resolves() -> None:
    tables = SymbolTables(
        class_prefixes=(),
        extra_prefixes=(),
        constants={"com.vendor.action.Xcom.vendor.extra.MODEgaming": "MODE_GAMING"},
        major_classes={},
        device_classes={},
        extra_names={},
    )
    decoded = decode_value("com.vendor.action.X", "com.vendor.extra.MODE", "gaming", tables)
    assert decoded.resolved == "MODE_GAMING"


@pytest.mark.parametrize(("value", "expected"), [(True, "true"), (False, "false")])
def test_boolean_rendering(tables: SymbolTables, value: bool, expected: str) -> None:
    decoded = decode_value(STATE_CHANGED, "com.vendor.extra.FLAG", value, tables)
    assert decoded.kind is ValueKind.BOOLEAN
    assert decoded.resolved is None
    assert decoded.raw == expected
    assert decoded.type_name == "java.lang.Boolean"


def test_device_with_all_fields(tables: SymbolTables) -> None:
    device = DeviceDescriptor(name="Pixel Buds", device_type=1, address="AA:BB:CC:DD:EE:FF")
    decoded = decode_value(STATE_CHANGED, EXTRA_DEVICE, device, tables)
    assert decoded.kind is ValueKind.DEVICE
    assert decoded.resolved == '"Pixel Buds"/DEVICE_TYPE_CLASSIC/AA:BB:CC:DD:EE:FF'
    assert decoded.raw is None
    assert decoded.type_name == "android.bluetooth.BluetoothDevice"


@pytest.mark.parametrize(
    ("device_type", "marker"),
    [
        (2, "/DEVICE_TYPE_LE/"),
        (3, "/DEVICE_TYPE_DUAL/"),
        (0, "/unavailable/"),
        (7, "/unavailable/"),
        (None, "/unavailable/"),
    ],
)
def test_device_type_markers(tables: SymbolTables, device_type: int | None, marker: str) -> None:
    device = DeviceDescriptor(name="Watch", device_type=device_type, address="11:22:33:44:55:66")
    decoded = decode_value(STATE_CHANGED, EXTRA_DEVICE, device, tables)
    assert decoded.resolved == f'"Watch"{marker}11:22:33:44:55:66'


def test_device_without_name_or_address(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, EXTRA_DEVICE, DeviceDescriptor(), tables)
    assert decoded.resolved == "null/unavailable/unavailable"


def test_device_type_omitted_without_capability(tables: SymbolTables) -> None:
    device = DeviceDescriptor(name="Pixel Buds", device_type=9, address="AA:BB:CC:DD:EE:FF")
    decoded = decode_value(STATE_CHANGED, EXTRA_DEVICE, device, tables, device_type_available=False)
    assert decoded.resolved == '"Pixel Buds"AA:BB:CC:DD:EE:FF'


@pytest.mark.parametrize(
    ("major", "device_class", "expected"),
    [
        (0x0400, 0x0418, "AUDIO_VIDEO/AUDIO_VIDEO_HEADPHONES"),
        (0x0400, 0x04FC, "AUDIO_VIDEO/unrecognized"),
        (0x1234, 0x0418, "unrecognized/AUDIO_VIDEO_HEADPHONES"),
        (0x1234, 0x4321, "unrecognized/unrecognized"),
    ],
)
def test_device_class_halves_fall_back_independently(
    tables: SymbolTables, major: int, device_class: int, expected: str
) -> None:
    decoded = decode_value(STATE_CHANGED, EXTRA_CLASS, DeviceClassDescriptor(major, device_class), tables)
    assert decoded.kind is ValueKind.DEVICE_CLASS
    assert decoded.resolved == expected
    assert decoded.type_name == "android.bluetooth.BluetoothClass"


def test_unrecognized_type_is_not_parsed(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, "android.bluetooth.device.extra.UUID", OpaqueValue("android.os.ParcelUuid"), tables)
    assert decoded.kind is ValueKind.UNRECOGNIZED
    assert decoded.resolved == NOT_PARSED
    assert decoded.raw == ""
    assert decoded.type_name == "android.os.ParcelUuid"


def test_absent_value(tables: SymbolTables) -> None:
    decoded = decode_value(STATE_CHANGED, EXTRA_STATE, None, tables)
    assert decoded.kind is ValueKind.ABSENT
    assert decoded.resolved is None
    assert decoded.raw is None
    assert decoded.type_name is None
