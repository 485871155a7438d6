"""Tests for the field merger."""

from logbatch.merge import merge


def test_no_sources_returns_empty_dict():
    assert merge() == {}


def test_none_sources_are_empty():
    assert merge(None, {"a": 1}, None) == {"a": 1}


def test_union_of_keys():
    assert merge({"a": 1}, {"b": 2}, {"c": 3}) == {"a": 1, "b": 2, "c": 3}


def test_last_source_wins():
    assert merge({"a": 1, "b": 1}, {"a": 2}, {"a": 3}) == {"a": 3, "b": 1}


def test_inputs_not_mutated():
    first = {"a": 1}
    second = {"a": 2, "b": 2}
    result = merge(first, second)
    assert first == {"a": 1}
    assert second == {"a": 2, "b": 2}
    assert result is not first
    assert result is not second


def test_merge_is_shallow():
    nested = {"inner": {"x": 1}}
    result = merge(nested, {"other": True})
    assert result["inner"] is nested["inner"]
