"""
Layer tree definitions

Core types for the declarative page tree the resolution engine consumes and
produces.

This module is the single source of truth for:
- Binding slot values (StaticValue, FieldBinding, DynamicTextValue, AssetValue)
- Collection bindings (CollectionSource)
- Layers, layer variables and settings
- Reusable components
"""

from __future__ import annotations

from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagetree.core.constants import FRAGMENT_NAME
from pagetree.models.contracts.pagination import PaginationConfig, PaginationMeta
from pagetree.models.contracts.visibility import ConditionalVisibility
from pagetree.models.enums import FieldType


# -----------------------------------------------------------------------------
# Binding slot values
# -----------------------------------------------------------------------------


class StaticValue(BaseModel):
    """Literal content."""

    model_config = ConfigDict(frozen=True)

    type: Literal["static"] = "static"
    value: str = ""


class FieldBindingData(BaseModel):
    """Which item field a slot is bound to."""

    model_config = ConfigDict(frozen=True)

    field_id: str = Field(description="Field on the item in scope")
    relationships: list[str] = Field(
        default_factory=list,
        description="Field IDs to follow through reference fields",
    )
    field_type: FieldType | None = None
    format: str | None = None

    @property
    def path(self) -> str:
        """Dotted lookup key, e.g. "author.name" for a followed reference."""
        return ".".join([self.field_id, *self.relationships])


class FieldBinding(BaseModel):
    """Slot bound to a field of the item in scope."""

    model_config = ConfigDict(frozen=True)

    type: Literal["field"] = "field"
    data: FieldBindingData


class DynamicTextData(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Text with embedded inline variable tokens")


class DynamicTextValue(BaseModel):
    """Rich or plain text containing inline variable tokens."""

    model_config = ConfigDict(frozen=True)

    type: Literal["dynamic_text"] = "dynamic_text"
    data: DynamicTextData = Field(default_factory=DynamicTextData)


class AssetData(BaseModel):
    model_config = ConfigDict(frozen=True)

    asset_id: str | None = None


class AssetValue(BaseModel):
    """Reference to a stored asset (image, video, document)."""

    model_config = ConfigDict(frozen=True)

    type: Literal["asset"] = "asset"
    data: AssetData = Field(default_factory=AssetData)


BindingValue = Annotated[
    Union[StaticValue, FieldBinding, DynamicTextValue, AssetValue],
    Field(discriminator="type"),
]


# -----------------------------------------------------------------------------
# Collection binding
# -----------------------------------------------------------------------------


class CollectionSource(BaseModel):
    """Binds a layer to a collection: the layer repeats once per item."""

    model_config = ConfigDict(frozen=True)

    type: Literal["collection"] = "collection"
    id: str = Field(description="Collection ID")
    sort_by: str | None = Field(
        default=None,
        description="'none', 'manual', 'random' or a field ID",
    )
    sort_order: Literal["asc", "desc"] = "asc"
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    source_field_id: str | None = Field(
        default=None,
        description="Field on the parent item whose references select the items",
    )
    source_field_type: FieldType | None = None
    filters: ConditionalVisibility | None = None
    pagination: PaginationConfig | None = None

    @property
    def is_paginated(self) -> bool:
        return self.pagination is not None and self.pagination.is_paged


# -----------------------------------------------------------------------------
# Layer
# -----------------------------------------------------------------------------

CONTENT_SLOTS = ("text", "image", "video", "icon", "link")


class LayerVariables(BaseModel):
    """Binding slots of a layer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: BindingValue | None = None
    image: BindingValue | None = None
    video: BindingValue | None = None
    icon: BindingValue | None = None
    link: BindingValue | None = None
    collection: CollectionSource | None = None
    conditional_visibility: ConditionalVisibility | None = Field(
        default=None, alias="conditionalVisibility"
    )

    def content_slots(self) -> Iterator[tuple[str, StaticValue | FieldBinding | DynamicTextValue | AssetValue]]:
        """Yield (slot, value) for each populated content slot."""
        for slot in CONTENT_SLOTS:
            value = getattr(self, slot)
            if value is not None:
                yield slot, value


class LayerSettings(BaseModel):
    """Element-specific configuration. Unknown keys are preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    tag: str | None = Field(default=None, description="HTML tag override")
    hidden: bool | None = None
    custom_attributes: dict[str, str] | None = Field(default=None, alias="customAttributes")


class Layer(BaseModel):
    """
    Node in the page tree.

    Layers are immutable: every resolution pass returns new layers. The
    `collection_item_*` and `pagination_meta` fields are stamped by the
    engine and are not part of the stored tree.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(description="Layer identifier, unique within a resolved tree")
    name: str = Field(default="div", description="Element/kind tag")
    custom_name: str | None = Field(default=None, alias="customName")
    classes: list[str] = Field(default_factory=list)
    children: list[Layer] = Field(default_factory=list)
    variables: LayerVariables = Field(default_factory=LayerVariables)
    attributes: dict[str, Any] = Field(default_factory=dict)
    settings: LayerSettings | None = None
    component_id: str | None = Field(default=None, alias="componentId")

    # Engine-stamped
    collection_item_id: str | None = Field(default=None, alias="_collectionItemId")
    collection_item_slug: str | None = Field(default=None, alias="_collectionItemSlug")
    collection_item_values: dict[str, str] | None = Field(default=None, exclude=True)
    pagination_meta: PaginationMeta | None = Field(default=None, alias="_paginationMeta")

    @field_validator("classes", mode="before")
    @classmethod
    def split_classes(cls, v: Any) -> Any:
        """Accept a space-separated class string as well as a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return v.split()
        return v

    @property
    def is_fragment(self) -> bool:
        return self.name == FRAGMENT_NAME

    @property
    def collection_source(self) -> CollectionSource | None:
        return self.variables.collection

    @property
    def has_collection_binding(self) -> bool:
        source = self.variables.collection
        return source is not None and bool(source.id)


class Component(BaseModel):
    """Reusable layer subtree. Instances reference it via `component_id`."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    layers: list[Layer] = Field(default_factory=list)


Layer.model_rebuild()


# -----------------------------------------------------------------------------
# Tree helpers
# -----------------------------------------------------------------------------


def walk_layers(layers: list[Layer]) -> Iterator[Layer]:
    """Depth-first, pre-order iteration over a layer forest."""
    for layer in layers:
        yield layer
        yield from walk_layers(layer.children)


def find_layer(layers: list[Layer], layer_id: str) -> Layer | None:
    """Find a layer by ID anywhere in the forest."""
    for layer in walk_layers(layers):
        if layer.id == layer_id:
            return layer
    return None
