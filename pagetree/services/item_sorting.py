"""
Collection item sorting.

Sort modes of a collection binding:
- none (or unset): keep fetch order
- manual: by `manual_order`
- random: shuffled on every call
- any other value: a field ID, compared numerically when both values are
  numbers, else as text (case-insensitive, accent-aware)
"""

import random
import unicodedata
from functools import cmp_to_key

from pagetree.models.contracts.collections import CollectionItem


def _as_number(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    return None if number != number else number  # NaN


def _text_key(value: str) -> tuple[str, str]:
    normalized = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return (base.casefold(), value)


def compare_field_values(a: str, b: str) -> int:
    """Three-way compare of two stored field values."""
    a_num = _as_number(a)
    b_num = _as_number(b)
    if a_num is not None and b_num is not None:
        return (a_num > b_num) - (a_num < b_num)

    a_key = _text_key(a)
    b_key = _text_key(b)
    return (a_key > b_key) - (a_key < b_key)


def sort_items(
    items: list[CollectionItem],
    sort_by: str | None,
    sort_order: str = "asc",
    rng: random.Random | None = None,
) -> list[CollectionItem]:
    """
    Return a sorted copy of `items`.

    Args:
        items: Items in fetch order
        sort_by: "none", "manual", "random" or a field ID
        sort_order: "asc" or "desc" (field sorts only)
        rng: Random source for "random" (module-level random by default)
    """
    result = list(items)

    if not sort_by or sort_by == "none":
        return result

    if sort_by == "manual":
        return sorted(result, key=lambda item: item.manual_order)

    if sort_by == "random":
        (rng or random).shuffle(result)
        return result

    def compare(a: CollectionItem, b: CollectionItem) -> int:
        return compare_field_values(a.values.get(sort_by) or "", b.values.get(sort_by) or "")

    return sorted(result, key=cmp_to_key(compare), reverse=sort_order == "desc")
