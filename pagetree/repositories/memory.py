"""
In-Memory Collection Repository

Holds draft and published collection data in memory. Used for editor
previews built from client state and as the data source in tests.
"""

import logging
from dataclasses import dataclass, field

from pagetree.core.exceptions import CollectionFetchError
from pagetree.models.contracts.collections import (
    CollectionField,
    CollectionItem,
    ItemFilters,
    ItemsResult,
)

logger = logging.getLogger(__name__)


@dataclass
class _CollectionData:
    fields: list[CollectionField] = field(default_factory=list)
    items: dict[str, CollectionItem] = field(default_factory=dict)


class InMemoryCollectionRepository:
    """
    CollectionDataSource over in-memory draft/published data.

    Items are returned in `manual_order`, filtered by `item_ids` first so
    that `total`, `offset` and `limit` all apply to the filtered set.

    Example usage:
        repo = InMemoryCollectionRepository()
        repo.add_collection("posts", fields=[...], items=[...])
        result = await repo.get_items_with_values("posts", True, ItemFilters(limit=2))
    """

    def __init__(self) -> None:
        self._data: dict[bool, dict[str, _CollectionData]] = {True: {}, False: {}}
        self.fetch_count = 0

    def add_collection(
        self,
        collection_id: str,
        fields: list[CollectionField] | None = None,
        items: list[CollectionItem] | None = None,
        is_published: bool | None = None,
    ) -> None:
        """
        Register a collection.

        Args:
            collection_id: Collection ID
            fields: Field definitions
            items: Items (their collection_id should match)
            is_published: Variant to populate; None populates both
        """
        variants = [True, False] if is_published is None else [is_published]
        for variant in variants:
            self._data[variant][collection_id] = _CollectionData(
                fields=list(fields or []),
                items={item.id: item for item in items or []},
            )

    def remove_collection(self, collection_id: str, is_published: bool | None = None) -> None:
        """Drop a collection so that fetches for it fail."""
        variants = [True, False] if is_published is None else [is_published]
        for variant in variants:
            self._data[variant].pop(collection_id, None)

    async def get_items_with_values(
        self,
        collection_id: str,
        is_published: bool,
        filters: ItemFilters | None = None,
    ) -> ItemsResult:
        self.fetch_count += 1
        collection = self._data[is_published].get(collection_id)
        if collection is None:
            raise CollectionFetchError(collection_id)

        filters = filters or ItemFilters()
        items = sorted(collection.items.values(), key=lambda item: item.manual_order)

        if filters.item_ids is not None:
            allowed = set(filters.item_ids)
            items = [item for item in items if item.id in allowed]

        total = len(items)

        if filters.offset:
            items = items[filters.offset:]
        if filters.limit:
            items = items[:filters.limit]

        return ItemsResult(items=items, total=total)

    async def get_item_with_values(
        self,
        item_id: str,
        is_published: bool,
    ) -> CollectionItem | None:
        self.fetch_count += 1
        for collection in self._data[is_published].values():
            if item_id in collection.items:
                return collection.items[item_id]
        return None

    async def get_fields_by_collection_id(
        self,
        collection_id: str,
        is_published: bool,
    ) -> list[CollectionField]:
        self.fetch_count += 1
        collection = self._data[is_published].get(collection_id)
        if collection is None:
            logger.debug(f"No fields for unknown collection '{collection_id}'")
            return []
        return list(collection.fields)
