"""Service layer that routes broadcast intents to their decoders."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from btintentlog.core.formatter import format_bluetooth_event
from btintentlog.core.model import BroadcastEvent, SymbolTables
from btintentlog.core.music import format_music_event
from btintentlog.core.settings import Settings, load_settings
from btintentlog.core.symbols import get_symbol_tables

LOG_TAG = "BluetoothIntentLogger"
BLUETOOTH_HEADER = "--------------------New Bluetooth Broadcast Intent-------------------"
MUSIC_HEADER = "--------------------New Android Music Broadcast Intent---------------"
UNFAMILIAR_HEADER = "--------------------Unfamiliar Intent--------------------------------"

LOGGER = logging.getLogger(LOG_TAG)

LineSink = Callable[[str], None]


def _log_sink(line: str) -> None:
    LOGGER.debug(line)


class IntentLogService:
    def __init__(
        self,
        *,
        sink: LineSink | None = None,
        settings_provider: Callable[[], Settings] | None = None,
        tables: SymbolTables | None = None,
    ) -> None:
        self.tables = tables if tables is not None else get_symbol_tables()
        self.sink = sink or _log_sink
        self.settings_provider = settings_provider or load_settings

    @property
    def load_warnings(self) -> tuple[str, ...]:
        return self.tables.warnings

    def render(self, event: BroadcastEvent) -> list[str]:
        """Return the log lines for one intent, header included."""
        if event.action.startswith("android.bluetooth"):
            # Verbosity is re-read for every intent so toggles apply immediately.
            settings = self.settings_provider()
            return [BLUETOOTH_HEADER] + format_bluetooth_event(
                event,
                self.tables,
                verbose=settings.verbose,
                device_type_available=settings.device_type_available,
            )
        if event.action.startswith("com.android.music"):
            return [MUSIC_HEADER] + format_music_event(event)
        return [UNFAMILIAR_HEADER, event.action]

    def receive(self, event: BroadcastEvent) -> None:
        for line in self.render(event):
            self.sink(line)

    def receive_all(self, events: Iterable[BroadcastEvent]) -> int:
        count = 0
        for event in events:
            self.receive(event)
            count += 1
        return count
