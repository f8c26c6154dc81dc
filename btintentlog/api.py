"""Stable public API for building tooling on top of btintentlog.

This module is the supported integration surface for third-party callers.
Avoid importing from private/internal modules unless intentionally depending on
non-stable internals.
"""

from __future__ import annotations

from collections.abc import Mapping

from btintentlog.core.capture import load_events, parse_event
from btintentlog.core.errors import (
    BtIntentLogError,
    EventFileError,
    SettingsError,
    SymbolTableLoadError,
    SymbolTableValidationError,
)
from btintentlog.core.model import (
    BroadcastEvent,
    DeviceClassDescriptor,
    DeviceDescriptor,
    DeviceType,
    ExtraValue,
    Long,
    OpaqueValue,
    Short,
    SymbolTables,
)
from btintentlog.core.service import IntentLogService
from btintentlog.core.settings import Settings
from btintentlog.core.symbols import get_symbol_tables, load_symbol_tables

__all__ = [
    "BtIntentLogError",
    "EventFileError",
    "SettingsError",
    "SymbolTableLoadError",
    "SymbolTableValidationError",
    "BroadcastEvent",
    "DeviceClassDescriptor",
    "DeviceDescriptor",
    "DeviceType",
    "ExtraValue",
    "Long",
    "OpaqueValue",
    "Short",
    "SymbolTables",
    "IntentLogService",
    "Settings",
    "get_symbol_tables",
    "load_symbol_tables",
    "load_events",
    "parse_event",
    "decode_event",
]


def decode_event(
    action: str,
    extras: Mapping[str, ExtraValue] | None = None,
    *,
    verbose: bool = False,
    device_type_available: bool = True,
) -> list[str]:
    """Return the log lines for a single intent without touching persisted settings."""
    lines: list[str] = []
    service = IntentLogService(
        sink=lines.append,
        settings_provider=lambda: Settings(verbose=verbose, device_type_available=device_type_available),
    )
    service.receive(BroadcastEvent(action=action, extras=extras))
    return lines
