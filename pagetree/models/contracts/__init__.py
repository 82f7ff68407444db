"""
Pydantic contracts consumed and produced by the resolution engine.
"""

from pagetree.models.contracts.collections import (
    CollectionField,
    CollectionItem,
    ItemFilters,
    ItemsResult,
    decode_reference_ids,
    encode_reference_ids,
)
from pagetree.models.contracts.layers import (
    AssetData,
    AssetValue,
    BindingValue,
    CollectionSource,
    Component,
    DynamicTextData,
    DynamicTextValue,
    FieldBinding,
    FieldBindingData,
    Layer,
    LayerSettings,
    LayerVariables,
    StaticValue,
    find_layer,
    walk_layers,
)
from pagetree.models.contracts.pagination import (
    PaginationConfig,
    PaginationContext,
    PaginationMeta,
)
from pagetree.models.contracts.visibility import (
    ConditionalVisibility,
    VisibilityCondition,
    VisibilityConditionGroup,
    VisibilityContext,
)

__all__ = [
    "AssetData",
    "AssetValue",
    "BindingValue",
    "CollectionField",
    "CollectionItem",
    "CollectionSource",
    "Component",
    "ConditionalVisibility",
    "DynamicTextData",
    "DynamicTextValue",
    "FieldBinding",
    "FieldBindingData",
    "ItemFilters",
    "ItemsResult",
    "Layer",
    "LayerSettings",
    "LayerVariables",
    "PaginationConfig",
    "PaginationContext",
    "PaginationMeta",
    "StaticValue",
    "VisibilityCondition",
    "VisibilityConditionGroup",
    "VisibilityContext",
    "decode_reference_ids",
    "encode_reference_ids",
    "find_layer",
    "walk_layers",
]
