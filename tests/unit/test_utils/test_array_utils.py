"""Tests for null-safe collection helpers."""

import pytest

from src.utils.array_utils import filter_nullable_strings, get_unique_values, is_not_null


@pytest.mark.unit
def test_is_not_null():
    assert is_not_null("")
    assert is_not_null(0)
    assert not is_not_null(None)


@pytest.mark.unit
def test_filter_nullable_strings_keeps_empty_strings():
    assert filter_nullable_strings(["a", None, "", "b"]) == ["a", "", "b"]


@pytest.mark.unit
def test_get_unique_values_first_seen_order():
    assert get_unique_values(["東京", None, "大阪", "東京", None, "京都"]) == ["東京", "大阪", "京都"]


@pytest.mark.unit
def test_get_unique_values_with_selector():
    rows = [{"id": "1", "n": "a"}, {"id": "2", "n": "b"}, {"id": "1", "n": "c"}]

    unique = get_unique_values(rows, selector=lambda row: row["id"])

    assert unique == [{"id": "1", "n": "a"}, {"id": "2", "n": "b"}]


@pytest.mark.unit
def test_get_unique_values_empty():
    assert get_unique_values([]) == []
    assert get_unique_values(iter([None, None])) == []
