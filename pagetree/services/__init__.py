"""
Resolution passes over the layer tree.
"""

from pagetree.services.collection_resolver import CollectionBindingResolver
from pagetree.services.component_resolver import resolve_components
from pagetree.services.field_injector import (
    FieldInjector,
    inject_item_values,
    resolve_custom_code_placeholders,
    resolve_inline_variables,
    strip_inline_variables,
)
from pagetree.services.page_resolver import PageResolver, ResolvedPage
from pagetree.services.pagination import (
    apply_pagination_meta,
    build_pagination_wrapper,
    collect_pagination_meta,
)
from pagetree.services.reference_resolver import ReferenceResolver
from pagetree.services.visibility import (
    compute_collection_counts,
    evaluate_visibility,
    filter_by_visibility,
)

__all__ = [
    "CollectionBindingResolver",
    "FieldInjector",
    "PageResolver",
    "ReferenceResolver",
    "ResolvedPage",
    "apply_pagination_meta",
    "build_pagination_wrapper",
    "collect_pagination_meta",
    "compute_collection_counts",
    "evaluate_visibility",
    "filter_by_visibility",
    "inject_item_values",
    "resolve_components",
    "resolve_custom_code_placeholders",
    "resolve_inline_variables",
    "strip_inline_variables",
]
