"""
Collection data source contract.

The resolution engine never talks to storage directly. Anything that can
answer these three queries, for either the draft or the published variant
of the data, can back a page resolution.
"""

from typing import Protocol, runtime_checkable

from pagetree.models.contracts.collections import (
    CollectionField,
    CollectionItem,
    ItemFilters,
    ItemsResult,
)


@runtime_checkable
class CollectionDataSource(Protocol):
    """Read-only access to collection items and field definitions."""

    async def get_items_with_values(
        self,
        collection_id: str,
        is_published: bool,
        filters: ItemFilters | None = None,
    ) -> ItemsResult:
        """
        Fetch a window of items plus the total count under the same filter.

        Raises:
            CollectionFetchError: If the collection is unavailable.
        """
        ...

    async def get_item_with_values(
        self,
        item_id: str,
        is_published: bool,
    ) -> CollectionItem | None:
        """Fetch a single item by ID, or None if it does not exist."""
        ...

    async def get_fields_by_collection_id(
        self,
        collection_id: str,
        is_published: bool,
    ) -> list[CollectionField]:
        """Fetch the field definitions of a collection."""
        ...
