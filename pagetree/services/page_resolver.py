"""
Page Resolver

Runs the resolution passes over a stored page tree, in order:

1. Expand component instances
2. Dynamic pages: inject the page's own item into top-level layers
3. Resolve collection bindings (fragments + per-item clones)
4. Aggregate collection counts, then filter by conditional visibility
5. Patch pagination controls
6. Index item slugs for link resolution

The order is load-bearing: visibility conditions read counts of collection
layers anywhere on the page, so filtering waits for every binding.
"""

import logging
import random
from collections.abc import Iterable

from pydantic import BaseModel, Field

from pagetree.config import Settings, get_settings
from pagetree.models.contracts.collections import CollectionField, CollectionItem
from pagetree.models.contracts.layers import Component, Layer, walk_layers
from pagetree.models.contracts.pagination import PaginationContext, PaginationMeta
from pagetree.repositories.base import CollectionDataSource
from pagetree.services.collection_resolver import CollectionBindingResolver
from pagetree.services.component_resolver import resolve_components
from pagetree.services.field_injector import inject_item_values
from pagetree.services.pagination import apply_pagination_meta, collect_pagination_meta
from pagetree.services.reference_resolver import ReferenceResolver
from pagetree.services.visibility import (
    VisibilityEvaluator,
    compute_collection_counts,
    evaluate_visibility,
    filter_by_visibility,
)

logger = logging.getLogger(__name__)


class ResolvedPage(BaseModel):
    """Output of a page resolution."""

    layers: list[Layer] = Field(default_factory=list)
    pagination: dict[str, PaginationMeta] = Field(
        default_factory=dict, description="Pagination state per collection layer ID"
    )
    collection_item_slugs: dict[str, str] = Field(
        default_factory=dict, description="Slug per collection item ID"
    )
    collection_counts: dict[str, int] = Field(
        default_factory=dict, description="Item count per collection layer ID"
    )


def collect_item_slugs(layers: list[Layer]) -> dict[str, str]:
    """Slugs stamped on per-item clones, by item ID."""
    return {
        layer.collection_item_id: layer.collection_item_slug
        for layer in walk_layers(layers)
        if layer.collection_item_id and layer.collection_item_slug
    }


class PageResolver:
    """Resolves a stored page tree into a render-ready tree."""

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
        self.collections = CollectionBindingResolver(
            data_source,
            settings=self.settings,
            logger=self.logger,
            evaluator=evaluator,
            rng=rng,
        )

    async def resolve_page(
        self,
        layers: list[Layer],
        is_published: bool,
        *,
        components: Iterable[Component] = (),
        page_item: CollectionItem | None = None,
        page_fields: list[CollectionField] | None = None,
        pagination_context: PaginationContext | None = None,
    ) -> ResolvedPage:
        """
        Resolve a page tree.

        Args:
            layers: Stored layer tree (draft or published variant)
            is_published: Fetch published (True) or draft (False) collection data
            components: Components available for instance expansion
            page_item: The item a dynamic page is rendered for
            page_fields: Field definitions of the page item's collection
            pagination_context: Requested page numbers

        Returns:
            ResolvedPage with the resolved tree, pagination state and slug index
        """
        tree = resolve_components(list(layers), components, logger=self.logger)

        root_values: dict[str, str] | None = None
        if page_item is not None:
            root_values = await self._page_item_values(page_item, page_fields or [], is_published)
            tree = [inject_item_values(layer, root_values) for layer in tree]

        resolved = await self.collections.resolve_collection_layers(
            tree, is_published, root_values, pagination_context
        )

        counts = compute_collection_counts(resolved)
        visible = filter_by_visibility(
            resolved, root_values, counts=counts, evaluator=self.evaluator, logger=self.logger
        )

        pagination = collect_pagination_meta(resolved)
        final = apply_pagination_meta(visible, pagination)

        slugs = collect_item_slugs(final)
        if page_item is not None:
            page_slug = self._page_item_slug(page_item, page_fields or [])
            if page_slug:
                slugs[page_item.id] = page_slug

        self.logger.debug(
            f"Resolved page: {len(final)} top-level layers, "
            f"{len(counts)} collection layers, {len(pagination)} paginated"
        )

        return ResolvedPage(
            layers=final,
            pagination=pagination,
            collection_item_slugs=slugs,
            collection_counts=counts,
        )

    async def _page_item_values(
        self,
        page_item: CollectionItem,
        page_fields: list[CollectionField],
        is_published: bool,
    ) -> dict[str, str]:
        if not self.settings.resolve_references or not page_fields:
            return dict(page_item.values)
        references = ReferenceResolver(self.data_source, is_published, logger=self.logger)
        return await references.resolve(page_item.values, page_fields)

    def _page_item_slug(self, page_item: CollectionItem, page_fields: list[CollectionField]) -> str | None:
        for field in page_fields:
            if field.key == self.settings.slug_field_key:
                return page_item.values.get(field.id) or None
        return None
