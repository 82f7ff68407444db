"""
pagetree models

Pydantic contracts (layer tree, collections, visibility, pagination):
    from pagetree.models.contracts import Layer, CollectionItem
    from pagetree.models.contracts.layers import Layer  # Granular access

Enums:
    from pagetree.models.enums import FieldType
"""

from pagetree.models.enums import (
    CompareOperator,
    ConditionSource,
    FieldType,
    VisibilityOperator,
)

__all__ = [
    "CompareOperator",
    "ConditionSource",
    "FieldType",
    "VisibilityOperator",
]
