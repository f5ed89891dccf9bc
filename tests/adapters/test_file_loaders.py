from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_data_model.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    loader_for,
)
from lib_data_model.domain.errors import InvalidFormat, NotFound


def test_toml_loader_keeps_quoted_dotted_keys_flat(tmp_path: Path) -> None:
    path = tmp_path / "table.toml"
    path.write_text('"cfg.db.host" = "localhost"\n[db]\nport = 5432\n', encoding="utf-8")
    data = TOMLFileLoader().load(str(path))
    assert data["cfg.db.host"] == "localhost"
    assert data["db"]["port"] == 5432


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_toml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("key = = 1\n", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        TOMLFileLoader().load(str(path))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "table.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        JSONFileLoader().load(str(path))


def test_json_loader_valid(tmp_path: Path) -> None:
    path = tmp_path / "table.json"
    path.write_text(json.dumps({"cfg.cache": "redis"}), encoding="utf-8")
    assert JSONFileLoader().load(str(path)) == {"cfg.cache": "redis"}


def test_json_loader_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(InvalidFormat, match="did not produce a mapping"):
        JSONFileLoader().load(str(path))


def test_yaml_loader_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "table.yaml"
    path.write_text("# empty file\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {}


def test_yaml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("key: [unclosed\n", encoding="utf-8")
    with pytest.raises(InvalidFormat):
        YAMLFileLoader().load(str(path))


@pytest.mark.parametrize(
    ("name", "expected"),
    [("a.toml", TOMLFileLoader), ("a.JSON", JSONFileLoader), ("a.yml", YAMLFileLoader), ("a.yaml", YAMLFileLoader)],
)
def test_loader_for_suffix(name: str, expected: type) -> None:
    assert isinstance(loader_for(name), expected)


def test_loader_for_unknown_suffix() -> None:
    assert loader_for("table.ini") is None
