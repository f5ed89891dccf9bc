from __future__ import annotations

import copy

from hypothesis import given
from hypothesis import strategies as st

from lib_data_model.application.merge import merge_distinct


SCALAR = st.one_of(st.booleans(), st.integers(), st.text(min_size=1, max_size=5))
VALUE = st.recursive(
    SCALAR,
    lambda children: st.dictionaries(st.text(min_size=1, max_size=5), children, max_size=3),
    max_leaves=10,
)
MAPPING = st.dictionaries(st.text(min_size=1, max_size=5), VALUE, max_size=4)


def test_nested_merge_retains_previous_keys() -> None:
    merged = merge_distinct({"db": {"host": "localhost", "port": 5432}}, {"db": {"password": "secret"}})
    assert merged == {"db": {"host": "localhost", "port": 5432, "password": "secret"}}


def test_overlay_scalar_replaces_mapping() -> None:
    assert merge_distinct({"a": {"x": 1}}, {"a": 5}) == {"a": 5}


def test_overlay_mapping_replaces_scalar() -> None:
    assert merge_distinct({"a": 5}, {"a": {"x": 1}}) == {"a": {"x": 1}}


def test_lists_are_replaced_not_concatenated() -> None:
    assert merge_distinct({"tags": ["a", "b"]}, {"tags": ["c"]}) == {"tags": ["c"]}


def test_none_overlay_value_replaces() -> None:
    assert merge_distinct({"a": {"x": 1}}, {"a": None}) == {"a": None}


@given(MAPPING)
def test_empty_overlay_is_identity(base) -> None:
    assert merge_distinct(base, {}) == base


@given(MAPPING)
def test_empty_base_yields_overlay(overlay) -> None:
    assert merge_distinct({}, overlay) == overlay


@given(MAPPING, MAPPING)
def test_inputs_are_not_mutated(base, overlay) -> None:
    base_before = copy.deepcopy(base)
    overlay_before = copy.deepcopy(overlay)
    merge_distinct(base, overlay)
    assert base == base_before
    assert overlay == overlay_before


@given(MAPPING, MAPPING)
def test_merge_with_itself_is_identity(base, _unused) -> None:
    assert merge_distinct(base, base) == base


@given(MAPPING, MAPPING)
def test_overlay_keys_always_survive(base, overlay) -> None:
    merged = merge_distinct(base, overlay)

    def _assert_contains(actual, expected):
        if isinstance(expected, dict):
            assert isinstance(actual, dict)
            for sub_key, sub_val in expected.items():
                assert sub_key in actual
                _assert_contains(actual[sub_key], sub_val)
        else:
            assert actual == expected

    for key, value in overlay.items():
        _assert_contains(merged[key], value)
