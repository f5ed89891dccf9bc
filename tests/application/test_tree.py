"""Tree builder tests: concrete tables, stripping rules, and the flatten round-trip."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_data_model.application.tree import build_branch, build_tree, flatten_tree, split_key
from lib_data_model.domain.errors import MalformedPath, ValidationError
from lib_data_model.domain.tree import TreeOptions


def test_prefixed_config_table() -> None:
    table = {"cfg.db.host": "localhost", "cfg.db.port": "5432", "cfg.cache": "redis"}
    assert build_tree(table, ".", "cfg") == {
        "db": {"host": {"_value": "localhost"}, "port": {"_value": "5432"}},
        "cache": {"_value": "redis"},
    }


def test_single_segment_is_leaf_holder() -> None:
    assert build_tree({"name": "demo"}, ".") == {"name": {"_value": "demo"}}


def test_path_can_be_branch_and_leaf() -> None:
    tree = build_tree({"db": "primary", "db.host": "localhost"}, ".")
    assert tree == {"db": {"_value": "primary", "host": {"_value": "localhost"}}}


def test_first_entry_wins_on_same_leaf() -> None:
    tree = build_tree({"cfg.a": 1, "a": 2}, ".", "cfg")
    assert tree == {"a": {"_value": 1}}


def test_unmatched_prefix_leaves_key_untouched() -> None:
    assert build_tree({"other.db": "x"}, ".", "cfg") == {"other": {"db": {"_value": "x"}}}


def test_leading_separators_are_stripped() -> None:
    assert build_tree({"__APP__DB": "x"}, "__") == {"APP": {"DB": {"_value": "x"}}}


def test_key_equal_to_prefix_yields_empty_segment() -> None:
    assert build_tree({"cfg": "root"}, ".", "cfg") == {"": {"_value": "root"}}


def test_custom_leaf_key_avoids_collision() -> None:
    tree = build_tree({"a._value": 1, "a": 2}, ".", leaf_key="@")
    assert tree == {"a": {"_value": {"@": 1}, "@": 2}}


def test_empty_separator_rejected() -> None:
    with pytest.raises(ValidationError):
        build_tree({"a": 1}, "")


def test_empty_table_builds_empty_tree() -> None:
    assert build_tree({}, ".") == {}


def test_input_table_not_mutated() -> None:
    table = {"a.b": {"nested": True}}
    build_tree(table, ".")
    assert table == {"a.b": {"nested": True}}


def test_split_key_strips_prefix_then_separators() -> None:
    assert split_key("cfg..db.host", TreeOptions(prefix="cfg")) == ["db", "host"]


@pytest.mark.parametrize("key", ["", ".", "..", "cfg", "cfg."])
def test_every_key_addresses_a_location(key: str) -> None:
    assert split_key(key, TreeOptions(prefix="cfg")) == [""]
    assert build_tree({key: "x"}, ".", "cfg") == {"": {"_value": "x"}}


def test_build_branch_without_segments_is_malformed() -> None:
    with pytest.raises(MalformedPath):
        build_branch([], "value")


def test_tree_built_event_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="lib_data_model")
    build_tree({"a.b": 1}, ".")
    assert any(record.getMessage() == "tree_built" for record in caplog.records)


def test_flatten_tree_with_prefix() -> None:
    tree = {"db": {"_value": "primary", "host": {"_value": "localhost"}}}
    assert flatten_tree(tree, ".", "cfg") == {"cfg.db": "primary", "cfg.db.host": "localhost"}


SEGMENT = st.text(alphabet="abcdefghij", min_size=1, max_size=4)
LEAF = st.fixed_dictionaries({"_value": st.one_of(st.integers(), st.text(max_size=5))})
NODE = st.recursive(
    LEAF,
    lambda children: st.dictionaries(SEGMENT, children, min_size=1, max_size=3).flatmap(
        lambda branch: st.one_of(st.just(branch), LEAF.map(lambda leaf: {**branch, **leaf}))
    ),
    max_leaves=12,
)
TREE = st.dictionaries(SEGMENT, NODE, max_size=4)


@given(TREE, st.sampled_from([".", "/", "::"]), st.one_of(st.none(), st.just("cfg")))
def test_flatten_then_build_round_trip(tree, separator, prefix) -> None:
    assert build_tree(flatten_tree(tree, separator, prefix), separator, prefix) == tree
