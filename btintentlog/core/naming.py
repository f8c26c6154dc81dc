"""Action and extra-key naming as documented in the Bluetooth API reference."""

from __future__ import annotations

from btintentlog.core.model import ClassifiedAction, PrefixRule, SymbolTables

UNKNOWN_CLASS = "(unknown class)"


def classify_action(action: str, tables: SymbolTables) -> ClassifiedAction:
    """Map an intent action to the API class that documents it.

    The longest matching prefix wins, earlier rules breaking ties; the
    remainder of the action is reported as ``ACTION_<remainder>``. Unmatched
    actions keep their raw name.
    """
    best: PrefixRule | None = None
    for rule in tables.class_prefixes:
        if action.startswith(rule.prefix) and (best is None or len(rule.prefix) > len(best.prefix)):
            best = rule
    if best is None:
        return ClassifiedAction(class_label=UNKNOWN_CLASS, action_name=action)
    return ClassifiedAction(
        class_label=best.label,
        action_name="ACTION_" + action[len(best.prefix):],
    )


def normalize_extra_key(key: str, verbose: bool, tables: SymbolTables) -> str:
    """Rewrite an extra key to its ``EXTRA_*`` constant name when one is known."""
    for prefix in tables.extra_prefixes:
        if key.startswith(prefix):
            name = tables.extra_names.get(key)
            if name is None:
                return key
            return f"{name} ({key})" if verbose else name
    return key
