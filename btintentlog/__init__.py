"""Decode Android Bluetooth broadcast intents into readable log lines."""

__version__ = "0.1.0"
