"""
Unit tests for collection item sorting.
"""

import random

import pytest

from pagetree.models.contracts import CollectionItem
from pagetree.services.item_sorting import compare_field_values, sort_items


def make_items(*values: str) -> list[CollectionItem]:
    return [
        CollectionItem(id=f"i{index}", collection_id="c", manual_order=len(values) - index, values={"f": value})
        for index, value in enumerate(values)
    ]


def ids(items: list[CollectionItem]) -> list[str]:
    return [item.id for item in items]


class TestCompareFieldValues:
    """Tests for three-way field value comparison."""

    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("2", "10", -1),
            ("10", "10.0", 0),
            ("apple", "Banana", -1),
            ("éclair", "eclair", 1),
            ("b", "a", 1),
        ],
    )
    def test_compare(self, a, b, expected):
        assert compare_field_values(a, b) == expected


class TestSortItems:
    """Tests for sort_items."""

    def test_none_keeps_fetch_order(self):
        items = make_items("b", "a", "c")

        assert ids(sort_items(items, None)) == ["i0", "i1", "i2"]
        assert ids(sort_items(items, "none")) == ["i0", "i1", "i2"]

    def test_manual_order(self):
        items = make_items("b", "a", "c")

        assert ids(sort_items(items, "manual")) == ["i2", "i1", "i0"]

    def test_numeric_field_sort(self):
        items = make_items("10", "9", "100")

        assert ids(sort_items(items, "f")) == ["i1", "i0", "i2"]
        assert ids(sort_items(items, "f", "desc")) == ["i2", "i0", "i1"]

    def test_missing_values_sort_first(self):
        items = make_items("b", "", "a")

        assert ids(sort_items(items, "f")) == ["i1", "i2", "i0"]

    def test_random_uses_given_rng(self):
        items = make_items(*"abcdefgh")

        first = sort_items(items, "random", rng=random.Random(7))
        second = sort_items(items, "random", rng=random.Random(7))

        assert ids(first) == ids(second)
        assert sorted(ids(first)) == ids(items)

    def test_input_list_is_not_reordered(self):
        items = make_items("b", "a")

        sort_items(items, "f")

        assert ids(items) == ["i0", "i1"]
