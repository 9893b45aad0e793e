from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..store.schema import Schema
from .converters import get_converter

"""Import config loader.

Responsibilities:
- Load a YAML import config
- Validate it against config_schema.json (shipped next to this module)
- Resolve converter names to callables
- Build the acset Schema declared in the file
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    schema: Schema
    tables: dict[str, dict[str, Any]]  # ob -> TableSpec fields (converters resolved)
    null_sentinels: set[str] | None = None
    source_path: Path | None = field(default=None, compare=False)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: if the schema file is missing or unreadable, or the data
            fails validation (missing keys, wrong types, unknown fields).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _resolve_tables(raw_tables: dict[str, Any]) -> dict[str, dict[str, Any]]:
    tables: dict[str, dict[str, Any]] = {}
    for ob, raw in raw_tables.items():
        entry = dict(raw)
        convert_names = entry.get("convert") or {}
        try:
            entry["convert"] = {attr: get_converter(name) for attr, name in convert_names.items()}
        except KeyError as e:
            raise ConfigError(f"tables.{ob}.convert: {e.args[0]}") from e
        if isinstance(entry.get("row_range"), list):
            # kept as a tuple; the importer decides whether it is acceptable
            entry["row_range"] = tuple(entry["row_range"])
        tables[str(ob)] = entry
    return tables


def parse_config(data: dict[str, Any]) -> ImportConfig:
    """Validate an already parsed config mapping and build an ImportConfig."""
    _validate_config_schema(data)
    sentinels = data.get("null_sentinels")
    return ImportConfig(
        schema=Schema.from_dict(data["schema"]),
        tables=_resolve_tables(data.get("tables") or {}),
        null_sentinels={s.strip().upper() for s in sentinels} if sentinels else None,
    )


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    cfg = parse_config(data)
    return ImportConfig(
        schema=cfg.schema,
        tables=cfg.tables,
        null_sentinels=cfg.null_sentinels,
        source_path=path,
    )
