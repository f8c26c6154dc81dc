"""JSON Schema validators for the packaged schema files."""

from __future__ import annotations

import json
from importlib import resources
from typing import Any

from jsonschema import validators


def load_schema_validator(schema_file: str) -> Any:
    schema_text = resources.files("btintentlog.schemas").joinpath(schema_file).read_text(encoding="utf-8")
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)
