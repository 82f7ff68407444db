"""
Reference Resolver

Follows reference and multi-reference fields so that values of referenced
items become addressable by dotted path. If a post's "author" field (ID
"author") references an item whose "name" field has ID "name", the
enhanced values gain the key "author.name".

Resolution is query-time and unbatched: one item fetch and one field fetch
per referenced item. Recursion is bounded by a visited set of
"{field_id}:{item_id}" pairs shared across the whole call, so cyclic
schemas terminate.
"""

import logging

from pagetree.core.exceptions import ContractViolationError
from pagetree.models.contracts.collections import CollectionField, decode_reference_ids
from pagetree.repositories.base import CollectionDataSource

logger = logging.getLogger(__name__)


class ReferenceResolver:
    """
    Resolves reference fields of an item into dotted-path values.

    One instance serves a single page resolution (one draft/published
    variant); it holds no state between calls.
    """

    def __init__(
        self,
        data_source: CollectionDataSource,
        is_published: bool,
        logger: logging.Logger | None = None,
    ):
        self.data_source = data_source
        self.is_published = is_published
        self.logger = logger or logging.getLogger(__name__)

    async def resolve(
        self,
        item_values: dict[str, str],
        fields: list[CollectionField],
        path_prefix: str = "",
        visited: set[str] | None = None,
    ) -> dict[str, str]:
        """
        Return the item's values enhanced with referenced values.

        Args:
            item_values: Raw values of the item (field_id -> value)
            fields: Field definitions of the item's collection
            path_prefix: Dotted path the item itself is reached by ("" at the root)
            visited: Already visited "{field_id}:{item_id}" pairs

        Returns:
            A new dict: the original values plus "{path}.{ref_field_id}" keys
        """
        enhanced = dict(item_values)
        await self._collect(
            item_values, fields, path_prefix, set() if visited is None else visited, enhanced
        )
        return enhanced

    async def _collect(
        self,
        item_values: dict[str, str],
        fields: list[CollectionField],
        path_prefix: str,
        visited: set[str],
        out: dict[str, str],
    ) -> None:
        for field in fields:
            if not field.type.is_reference or not field.reference_collection_id:
                continue

            ref_item_ids = decode_reference_ids(item_values.get(field.id), field.type)
            if not ref_item_ids:
                continue

            current_path = f"{path_prefix}.{field.id}" if path_prefix else field.id

            for ref_item_id in ref_item_ids:
                visit_key = f"{field.id}:{ref_item_id}"
                if visit_key in visited:
                    continue
                visited.add(visit_key)

                try:
                    ref_item = await self.data_source.get_item_with_values(
                        ref_item_id, self.is_published
                    )
                    if ref_item is None:
                        continue
                    ref_fields = await self.data_source.get_fields_by_collection_id(
                        field.reference_collection_id, self.is_published
                    )
                except ContractViolationError:
                    raise
                except Exception as e:
                    self.logger.warning(f"Failed to resolve reference field {field.id}: {e}")
                    continue

                for ref_field in ref_fields:
                    ref_value = ref_item.values.get(ref_field.id)
                    if ref_value is not None:
                        # First referenced item wins a path on multi-references
                        out.setdefault(f"{current_path}.{ref_field.id}", ref_value)

                await self._collect(ref_item.values, ref_fields, current_path, visited, out)
