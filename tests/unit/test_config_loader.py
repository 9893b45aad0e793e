from __future__ import annotations

from pathlib import Path

import pytest

from xlsx_acset.config.converters import CONVERTERS
from xlsx_acset.config.loader import ConfigError, load_config, parse_config


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.schema.obs == ("Person", "Pet")
    assert cfg.schema.attrs("Person") == ["name", "age"]
    assert cfg.tables["Person"]["primary_key"] == "name"
    assert cfg.tables["Pet"]["column_labels"] == {"owner": "Owner"}
    assert cfg.tables["Pet"]["convert"]["name"] is CONVERTERS["strip"]
    assert cfg.null_sentinels == {"N/A"}
    assert cfg.source_path == write_config


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(temp_workdir: Path):
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text("schema: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(cfg)


def test_load_config_missing_schema(write_config: Path):
    text = write_config.read_text(encoding="utf-8")
    write_config.write_text(text.replace("schema:", "schemas:", 1), encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_unknown_converter_name():
    with pytest.raises(ConfigError, match="tables.Person.convert"):
        parse_config({
            "schema": {"Person": {"attributes": {"name": "str"}}},
            "tables": {"Person": {"convert": {"name": "titlecase"}}},
        })


def test_row_range_list_is_passed_through_as_tuple():
    cfg = parse_config({
        "schema": {"Person": {"attributes": {"name": "str"}}},
        "tables": {"Person": {"row_range": [2, 5]}},
    })
    assert cfg.tables["Person"]["row_range"] == (2, 5)


def test_single_element_row_range_list_rejected():
    with pytest.raises(ConfigError, match="config validation failed"):
        parse_config({
            "schema": {"Person": {"attributes": {"name": "str"}}},
            "tables": {"Person": {"row_range": [2]}},
        })


def test_minimal_config():
    cfg = parse_config({"schema": {"Person": None}})
    assert cfg.schema.obs == ("Person",)
    assert cfg.tables == {}
    assert cfg.null_sentinels is None
