"""
Collection contract models.

Collections, items and fields as handed to the engine by a data source.
Item values are stored as strings; multi-reference values are JSON-encoded
arrays of item IDs and are decoded here, at the data-model boundary, so the
resolution passes only ever see lists of IDs.
"""

import json
import logging

from pydantic import BaseModel, ConfigDict, Field

from pagetree.models.enums import FieldType

logger = logging.getLogger(__name__)


# ==================== DECODING HELPERS ====================


def decode_reference_ids(raw: str | None, field_type: FieldType | str | None) -> list[str]:
    """
    Decode a stored reference value into a list of item IDs.

    A `reference` field holds a single ID. Any other reference type holds a
    JSON array of IDs. Malformed JSON or a non-array payload decodes to an
    empty list; it is never an error.

    Args:
        raw: Stored value (may be None or empty)
        field_type: Type of the field that holds the value

    Returns:
        Referenced item IDs in stored order
    """
    if not raw:
        return []

    if field_type is not None and _is_single_reference(field_type):
        return [raw]

    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.debug(f"Ignoring malformed multi-reference value: {raw!r}")
        return []

    if not isinstance(parsed, list):
        return []

    return [str(item_id) for item_id in parsed if item_id]


def _is_single_reference(field_type: FieldType | str) -> bool:
    try:
        return FieldType(field_type) == FieldType.REFERENCE
    except ValueError:
        # Unknown types decode like any other multi-value field
        logger.debug(f"Unknown field type {field_type!r}; decoding as an ID array")
        return False


def encode_reference_ids(item_ids: list[str]) -> str:
    """Encode item IDs the way multi-reference values are stored."""
    return json.dumps(list(item_ids))


# ==================== FIELD MODELS ====================


class CollectionField(BaseModel):
    """Field definition of a collection."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    name: str = Field(default="", description="Display name")
    key: str | None = Field(default=None, description="Stable key (e.g. 'slug')")
    type: FieldType = Field(default=FieldType.TEXT)
    collection_id: str | None = None
    reference_collection_id: str | None = Field(
        default=None,
        description="Target collection for reference/multi-reference fields",
    )


# ==================== ITEM MODELS ====================


class CollectionItem(BaseModel):
    """A collection item with its field values (field_id -> raw string)."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    collection_id: str
    manual_order: int = 0
    values: dict[str, str] = Field(default_factory=dict)

    def reference_ids(self, field_id: str, field_type: FieldType | str | None) -> list[str]:
        """Referenced item IDs held by one of this item's fields."""
        return decode_reference_ids(self.values.get(field_id), field_type)


# ==================== QUERY MODELS ====================


class ItemFilters(BaseModel):
    """Filters pushed into an item fetch."""

    limit: int | None = Field(default=None, ge=0, description="Maximum items to return")
    offset: int | None = Field(default=None, ge=0, description="Items to skip")
    item_ids: list[str] | None = Field(
        default=None,
        description="Restrict to these item IDs (None = no restriction, [] = nothing)",
    )


class ItemsResult(BaseModel):
    """Result of an item fetch. `total` counts the filtered set, not the page."""

    items: list[CollectionItem] = Field(default_factory=list)
    total: int = 0
