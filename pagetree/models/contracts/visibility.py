"""
Conditional visibility contract models.

The same expression shape drives two things: conditional visibility on a
layer (hides rendered nodes) and collection filters on a binding (reduces
the item set before clones are built).

Groups are AND-ed together; conditions inside one group are OR-ed.
Keys are accepted in the camelCase form the editor stores
(e.g. "fieldId", "collectionLayerId").
"""

from pydantic import BaseModel, ConfigDict, Field

from pagetree.models.enums import CompareOperator, ConditionSource, FieldType


class VisibilityCondition(BaseModel):
    """A single comparison against an item field or a collection count."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str | None = None
    source: ConditionSource = ConditionSource.COLLECTION_FIELD
    field_id: str | None = Field(default=None, alias="fieldId")
    field_type: FieldType | None = Field(default=None, alias="fieldType")
    reference_collection_id: str | None = Field(default=None, alias="referenceCollectionId")
    operator: str = Field(description="A VisibilityOperator value")
    value: str | None = None
    value2: str | None = Field(default=None, description="Upper bound for is_between")
    collection_layer_id: str | None = Field(
        default=None,
        alias="collectionLayerId",
        description="Collection layer whose item count is tested (page_collection source)",
    )
    compare_operator: CompareOperator | None = Field(default=None, alias="compareOperator")
    compare_value: float | None = Field(default=None, alias="compareValue")


class VisibilityConditionGroup(BaseModel):
    """Conditions OR-ed together."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    conditions: list[VisibilityCondition] = Field(default_factory=list)


class ConditionalVisibility(BaseModel):
    """Groups AND-ed together. No groups means always visible."""

    model_config = ConfigDict(frozen=True)

    groups: list[VisibilityConditionGroup] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups


class VisibilityContext(BaseModel):
    """Data a visibility expression is evaluated against."""

    collection_item_data: dict[str, str] | None = Field(
        default=None, description="Values of the item in scope (field_id -> value)"
    )
    page_collection_counts: dict[str, int] = Field(
        default_factory=dict, description="Item count per collection layer ID"
    )
