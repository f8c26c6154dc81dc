"""Symbol table loading and validation for YAML-based constant definitions."""

from __future__ import annotations

import functools
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError

from btintentlog.core.errors import SymbolTableLoadError, SymbolTableValidationError
from btintentlog.core.model import PrefixRule, SymbolTables
from btintentlog.core.validation import load_schema_validator

PACKAGED_TABLE = "bluetooth_symbols.yaml"
SYMBOLS_SCHEMA = "symbols.schema.json"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


UniqueKeyLoader.yaml_implicit_resolvers = {
    key: list(value) for key, value in yaml.SafeLoader.yaml_implicit_resolvers.items()
}

# Keys such as ON/OFF/YES/NO are constant names here, never booleans.
for first_char, mappings in list(UniqueKeyLoader.yaml_implicit_resolvers.items()):
    UniqueKeyLoader.yaml_implicit_resolvers[first_char] = [
        (tag, regexp)
        for tag, regexp in mappings
        if tag != "tag:yaml.org,2002:bool"
    ]


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[Any, Any]:
    mapping: dict[Any, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise SymbolTableValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


def constant_key(action: str, extra: str, value_text: str) -> str:
    """Build the composite lookup key for an extra value's constant name."""
    return action + extra + value_text


@dataclass
class _TableBuilder:
    class_prefixes: dict[str, str] = field(default_factory=dict)
    extra_prefixes: list[str] = field(default_factory=list)
    constants: dict[str, str] = field(default_factory=dict)
    major_classes: dict[int, str] = field(default_factory=dict)
    device_classes: dict[int, str] = field(default_factory=dict)
    extra_names: dict[str, str] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def _override(self, what: str, source: Path | Traversable) -> None:
        warning = f"{source} overrides packaged {what}"
        LOGGER.warning(warning)
        self.warnings.append(warning)

    def merge(self, doc: dict[str, Any], source: Path | Traversable, *, overlay: bool) -> None:
        seen: set[str] = set()
        for rule in doc.get("class_prefixes", []):
            prefix = rule["prefix"]
            if prefix in seen:
                raise SymbolTableValidationError(f"Duplicate class prefix '{prefix}' in {source}")
            seen.add(prefix)
            if overlay and prefix in self.class_prefixes:
                self._override(f"class prefix '{prefix}'", source)
            self.class_prefixes[prefix] = rule["label"]

        for prefix in doc.get("extra_prefixes", []):
            if prefix in self.extra_prefixes:
                if not overlay:
                    raise SymbolTableValidationError(f"Duplicate extra prefix '{prefix}' in {source}")
                continue
            self.extra_prefixes.append(prefix)

        seen = set()
        for group in doc.get("constants", []):
            for value_text, name in group["values"].items():
                key = constant_key(group["action"], group["extra"], str(value_text))
                if key in seen:
                    raise SymbolTableValidationError(
                        f"Duplicate constant for {group['action']} / {group['extra']} = {value_text} in {source}"
                    )
                seen.add(key)
                if overlay and key in self.constants:
                    self._override(f"constant {group['extra']} = {value_text}", source)
                self.constants[key] = name

        self._merge_codes(doc.get("major_device_classes", {}), self.major_classes, source, overlay=overlay)
        self._merge_codes(doc.get("device_classes", {}), self.device_classes, source, overlay=overlay)

        seen = set()
        for name, extra_key in doc.get("extra_names", {}).items():
            if extra_key in seen:
                raise SymbolTableValidationError(f"Extra key '{extra_key}' is named twice in {source}")
            seen.add(extra_key)
            if overlay and extra_key in self.extra_names:
                self._override(f"extra name for '{extra_key}'", source)
            self.extra_names[extra_key] = name

    def _merge_codes(
        self,
        names: dict[str, int],
        table: dict[int, str],
        source: Path | Traversable,
        *,
        overlay: bool,
    ) -> None:
        seen: set[int] = set()
        for name, code in names.items():
            if code in seen:
                raise SymbolTableValidationError(f"Device class code 0x{code:04X} is named twice in {source}")
            seen.add(code)
            if overlay and code in table:
                self._override(f"device class 0x{code:04X}", source)
            table[code] = name

    def build(self) -> SymbolTables:
        return SymbolTables(
            class_prefixes=tuple(
                PrefixRule(prefix=prefix, label=label) for prefix, label in self.class_prefixes.items()
            ),
            extra_prefixes=tuple(self.extra_prefixes),
            constants=self.constants,
            major_classes=self.major_classes,
            device_classes=self.device_classes,
            extra_names=self.extra_names,
            warnings=tuple(self.warnings),
        )


def _symbol_dirs() -> tuple[Path, Path]:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    xdg_data = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local/share"))
    return xdg_config / "btintentlog/symbols", xdg_data / "btintentlog/symbols"


def _read_yaml(path: Path | Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SymbolTableLoadError(f"Could not read symbol file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise SymbolTableValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise SymbolTableValidationError(f"Symbol file {path} must contain a mapping at root")
    return loaded


def _validate(doc: dict[str, Any], source: Path | Traversable, validator: Any) -> None:
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise SymbolTableValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc


def _iter_user_symbol_paths() -> list[Path]:
    paths: list[Path] = []
    for directory in _symbol_dirs():
        if not directory.exists() or not directory.is_dir():
            continue
        paths.extend(sorted(p for p in directory.iterdir() if p.suffix in {".yml", ".yaml"}))
    return paths


def load_symbol_tables(*, include_user: bool = True) -> SymbolTables:
    """Read the packaged tables and any user overlays into one immutable set."""
    validator = load_schema_validator(SYMBOLS_SCHEMA)
    builder = _TableBuilder()

    packaged = resources.files("btintentlog.data").joinpath(PACKAGED_TABLE)
    doc = _read_yaml(packaged)
    _validate(doc, packaged, validator)
    builder.merge(doc, packaged, overlay=False)

    if include_user:
        for path in _iter_user_symbol_paths():
            doc = _read_yaml(path)
            _validate(doc, path, validator)
            builder.merge(doc, path, overlay=True)

    tables = builder.build()
    LOGGER.debug(
        "Loaded symbol tables: %d class prefixes, %d constants, %d device classes, %d extra names",
        len(tables.class_prefixes),
        len(tables.constants),
        len(tables.device_classes),
        len(tables.extra_names),
    )
    return tables


@functools.lru_cache(maxsize=None)
def get_symbol_tables() -> SymbolTables:
    """Process-wide tables, loaded on first use and never rebuilt."""
    return load_symbol_tables()
