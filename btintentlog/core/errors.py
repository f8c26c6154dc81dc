"""Domain-specific errors for btintentlog."""


class BtIntentLogError(Exception):
    """Base error for btintentlog."""


class SymbolTableValidationError(BtIntentLogError):
    """Raised when a symbol table file does not conform to schema or semantics."""


class SymbolTableLoadError(BtIntentLogError):
    """Raised when reading symbol table sources fails."""


class SettingsError(BtIntentLogError):
    """Raised when the persisted settings file cannot be read or written."""


class EventFileError(BtIntentLogError):
    """Raised when a captured event file is malformed."""
