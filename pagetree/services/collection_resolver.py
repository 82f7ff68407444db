"""
Collection Binding Resolver

Expands collection-bound layers into per-item clones:

1. Work out the fetch window (pagination page or static limit/offset)
2. Restrict to the parent item's references when the binding has a source field
3. Fetch items (and the filtered total), apply filter groups, sort
4. Clone the layer once per item, resolving nested bindings with that
   item's values and injecting the item into the clone
5. Replace the layer with a fragment holding the clones

A failing binding is logged and left unresolved; the rest of the page still
resolves. Only ContractViolationError propagates.
"""

import asyncio
import logging
import math
import random
from dataclasses import dataclass

from pagetree.config import Settings, get_settings
from pagetree.core.constants import (
    COLLECTION_ITEM_ID_ATTR,
    FRAGMENT_NAME,
    clone_id,
    fragment_id,
)
from pagetree.core.exceptions import ContractViolationError
from pagetree.models.contracts.collections import (
    CollectionField,
    CollectionItem,
    ItemFilters,
    decode_reference_ids,
)
from pagetree.models.contracts.layers import CollectionSource, Layer
from pagetree.models.contracts.pagination import PaginationContext, PaginationMeta
from pagetree.models.contracts.visibility import VisibilityContext
from pagetree.models.enums import FieldType
from pagetree.repositories.base import CollectionDataSource
from pagetree.services.field_injector import FieldInjector, inject_item_values
from pagetree.services.item_sorting import sort_items
from pagetree.services.reference_resolver import ReferenceResolver
from pagetree.services.visibility import VisibilityEvaluator, evaluate_visibility

logger = logging.getLogger(__name__)


@dataclass
class FetchWindow:
    """Limit/offset of one binding's fetch, plus the page it represents."""
    limit: int | None
    offset: int | None
    current_page: int = 1
    items_per_page: int | None = None


@dataclass
class _ResolutionScope:
    """Per-call state threaded through the recursion."""
    is_published: bool
    pagination: PaginationContext
    injector: FieldInjector


class CollectionBindingResolver:
    """
    Resolves every collection binding in a layer tree.

    Holds no per-request state; each call to resolve_collection_layers()
    builds its own scope.
    """

    def __init__(
        self,
        data_source: CollectionDataSource,
        *,
        settings: Settings | None = None,
        logger: logging.Logger | None = None,
        evaluator: VisibilityEvaluator = evaluate_visibility,
        rng: random.Random | None = None,
    ):
        self.data_source = data_source
        self.settings = settings or get_settings()
        self.logger = logger or logging.getLogger(__name__)
        self.evaluator = evaluator
        self.rng = rng

    async def resolve_collection_layers(
        self,
        layers: list[Layer],
        is_published: bool,
        parent_item_values: dict[str, str] | None = None,
        pagination_context: PaginationContext | None = None,
    ) -> list[Layer]:
        """
        Resolve collection bindings in a layer tree.

        Args:
            layers: Stored layer tree (never mutated)
            is_published: Fetch published (True) or draft (False) data
            parent_item_values: Item values in scope at the root (dynamic pages)
            pagination_context: Requested page numbers

        Returns:
            New layer tree with every resolvable binding replaced by a fragment
        """
        references = None
        if self.settings.resolve_references:
            references = ReferenceResolver(self.data_source, is_published, logger=self.logger)

        scope = _ResolutionScope(
            is_published=is_published,
            pagination=pagination_context or PaginationContext(),
            injector=FieldInjector(references),
        )
        return list(
            await asyncio.gather(
                *(self._resolve_layer(layer, parent_item_values, scope) for layer in layers)
            )
        )

    async def _resolve_layer(
        self,
        layer: Layer,
        item_values: dict[str, str] | None,
        scope: _ResolutionScope,
    ) -> Layer:
        if layer.is_fragment:
            raise ContractViolationError(
                f"Layer '{layer.id}' is a fragment; resolved trees cannot be resolved again"
            )

        if layer.has_collection_binding:
            try:
                return await self._resolve_binding(layer, item_values, scope)
            except ContractViolationError:
                raise
            except Exception as e:
                self.logger.warning(
                    f"Failed to resolve collection layer {layer.id}: {e}",
                    extra={"layer_id": layer.id, "collection_id": layer.variables.collection.id},
                )
                return await self._resolve_children(layer, item_values, scope)

        return await self._resolve_children(layer, item_values, scope)

    async def _resolve_children(
        self,
        layer: Layer,
        item_values: dict[str, str] | None,
        scope: _ResolutionScope,
    ) -> Layer:
        if not layer.children:
            return layer

        children = await asyncio.gather(
            *(self._resolve_layer(child, item_values, scope) for child in layer.children)
        )
        return layer.model_copy(update={"children": list(children)})

    # -------------------------------------------------------------------------
    # Binding resolution
    # -------------------------------------------------------------------------

    def fetch_window(self, layer: Layer, source: CollectionSource, pagination: PaginationContext) -> FetchWindow:
        """Limit/offset for a binding: the requested page, or its static window."""
        if source.is_paginated:
            items_per_page = source.pagination.items_per_page or self.settings.default_items_per_page
            current_page = pagination.page_for(layer.id)
            return FetchWindow(
                limit=items_per_page,
                offset=(current_page - 1) * items_per_page,
                current_page=current_page,
                items_per_page=items_per_page,
            )
        return FetchWindow(limit=source.limit, offset=source.offset)

    @staticmethod
    def allowed_item_ids(
        source: CollectionSource,
        parent_item_values: dict[str, str] | None,
    ) -> list[str] | None:
        """
        Item IDs a nested binding may show, from the parent item's reference field.

        Returns None when the binding is not restricted. An absent or
        undecodable parent value restricts to nothing.
        """
        if not source.source_field_id or parent_item_values is None:
            return None
        field_type = source.source_field_type or FieldType.MULTI_REFERENCE
        return decode_reference_ids(parent_item_values.get(source.source_field_id), field_type)

    async def _resolve_binding(
        self,
        layer: Layer,
        item_values: dict[str, str] | None,
        scope: _ResolutionScope,
    ) -> Layer:
        source = layer.variables.collection
        window = self.fetch_window(layer, source, scope.pagination)
        allowed_ids = self.allowed_item_ids(source, item_values)

        filters = ItemFilters(
            limit=window.limit or None,
            offset=window.offset or None,
            item_ids=allowed_ids,
        )

        result, fields = await asyncio.gather(
            self.data_source.get_items_with_values(source.id, scope.is_published, filters),
            self.data_source.get_fields_by_collection_id(source.id, scope.is_published),
        )
        items = result.items

        if source.filters is not None and not source.filters.is_empty:
            items = [
                item
                for item in items
                if self.evaluator(source.filters, VisibilityContext(collection_item_data=item.values))
            ]

        items = sort_items(items, source.sort_by, source.sort_order, rng=self.rng)

        self.logger.debug(
            f"Collection layer {layer.id}: {len(items)} of {result.total} items "
            f"(collection={source.id}, page={window.current_page}, "
            f"limit={window.limit}, offset={window.offset}, restricted={allowed_ids is not None})"
        )

        clones = await asyncio.gather(
            *(self._clone_for_item(layer, item, fields, scope) for item in items)
        )

        pagination_meta = None
        if source.is_paginated:
            pagination_meta = PaginationMeta(
                layer_id=layer.id,
                collection_id=source.id,
                current_page=window.current_page,
                total_pages=math.ceil(result.total / window.items_per_page),
                total_items=result.total,
                items_per_page=window.items_per_page,
            )

        return layer.model_copy(
            update={
                "id": fragment_id(layer.id),
                "name": FRAGMENT_NAME,
                "classes": [],
                "attributes": {},
                "variables": layer.variables.model_copy(update={"collection": None}),
                "children": list(clones),
                "pagination_meta": pagination_meta,
            }
        )

    async def _clone_for_item(
        self,
        layer: Layer,
        item: CollectionItem,
        fields: list[CollectionField],
        scope: _ResolutionScope,
    ) -> Layer:
        # Nested bindings filter against this item
        resolved_children = await asyncio.gather(
            *(self._resolve_layer(child, item.values, scope) for child in layer.children)
        )
        values = await scope.injector.enhance(item.values, fields)

        clone = layer.model_copy(
            update={
                "id": clone_id(layer.id, item.id),
                "attributes": {**layer.attributes, COLLECTION_ITEM_ID_ATTR: item.id},
                "variables": layer.variables.model_copy(update={"collection": None}),
                "children": list(resolved_children),
                "collection_item_id": item.id,
                "collection_item_slug": self._item_slug(item, fields),
                "collection_item_values": values,
            }
        )
        return inject_item_values(clone, values)

    def _item_slug(self, item: CollectionItem, fields: list[CollectionField]) -> str | None:
        for field in fields:
            if field.key == self.settings.slug_field_key:
                return item.values.get(field.id) or None
        return None
