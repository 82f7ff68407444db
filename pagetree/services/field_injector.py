"""
Field/Variable Injector

Substitutes item data into layer binding slots:
- FieldBinding slots become StaticValue (or AssetValue for asset fields)
- Inline variable tokens inside DynamicTextValue content are replaced
- {{Field Name}} placeholders in custom code are replaced by name

Injection never descends into a layer that carries its own collection
binding (or into a fragment already produced from one): those subtrees get
their item context from the collection resolver.
"""

import json
import re

from pagetree.core.constants import INLINE_VARIABLE_TAG
from pagetree.models.contracts.collections import CollectionField
from pagetree.models.contracts.layers import (
    AssetData,
    AssetValue,
    DynamicTextValue,
    FieldBinding,
    Layer,
    StaticValue,
)
from pagetree.services.reference_resolver import ReferenceResolver

INLINE_VARIABLE_REGEX = re.compile(
    rf"<{INLINE_VARIABLE_TAG}>([\s\S]*?)</{INLINE_VARIABLE_TAG}>"
)

CUSTOM_CODE_PLACEHOLDER_REGEX = re.compile(r"\{\{([^}]+)\}\}")


# =============================================================================
# String-level resolution
# =============================================================================


def resolve_inline_variables(text: str, item_values: dict[str, str] | None) -> str:
    """
    Replace inline variable tokens with item values.

    Token payload:
        {"type": "field", "data": {"field_id": "author", "relationships": ["name"]}}

    A field token resolves to the value at its dotted path, or "" when the
    item has no such value. Tokens that are not valid JSON or not field
    variables are left as they are. Without item values the text is
    returned unchanged.
    """
    if item_values is None:
        return text

    def replace(match: re.Match[str]) -> str:
        try:
            parsed = json.loads(match.group(1).strip())
        except json.JSONDecodeError:
            return match.group(0)

        if not isinstance(parsed, dict) or parsed.get("type") != "field":
            return match.group(0)

        data = parsed.get("data")
        if not isinstance(data, dict) or not data.get("field_id"):
            return match.group(0)

        relationships = data.get("relationships") or []
        path = ".".join([data["field_id"], *relationships])
        return item_values.get(path) or ""

    return INLINE_VARIABLE_REGEX.sub(replace, text)


def strip_inline_variables(text: str) -> str:
    """Remove all inline variable tokens (for rendering without item data)."""
    return INLINE_VARIABLE_REGEX.sub("", text)


def resolve_custom_code_placeholders(
    code: str,
    item_values: dict[str, str] | None,
    fields: list[CollectionField],
) -> str:
    """
    Replace {{Field Name}} placeholders in custom head/body code.

    Unknown field names are left as-is; known fields without a value
    become "".
    """
    if not item_values or not fields:
        return code

    field_ids_by_name = {field.name: field.id for field in fields}

    def replace(match: re.Match[str]) -> str:
        field_id = field_ids_by_name.get(match.group(1).strip())
        if field_id is None:
            return match.group(0)
        value = item_values.get(field_id)
        return str(value) if value is not None else ""

    return CUSTOM_CODE_PLACEHOLDER_REGEX.sub(replace, code)


# =============================================================================
# Layer-level injection
# =============================================================================


def resolve_binding_value(
    value: StaticValue | FieldBinding | DynamicTextValue | AssetValue,
    item_values: dict[str, str],
) -> StaticValue | FieldBinding | DynamicTextValue | AssetValue:
    """Resolve a single slot value against item values."""
    if isinstance(value, FieldBinding):
        resolved = item_values.get(value.data.path) or ""
        field_type = value.data.field_type
        if field_type is not None and field_type.is_asset:
            return AssetValue(data=AssetData(asset_id=resolved or None))
        return StaticValue(value=resolved)

    if isinstance(value, DynamicTextValue):
        return StaticValue(value=resolve_inline_variables(value.data.content, item_values))

    return value


def inject_item_values(layer: Layer, item_values: dict[str, str]) -> Layer:
    """
    Inject item values into a layer and its descendants.

    Layers with their own collection binding, and fragments, are returned
    untouched. Every other layer is copied, so the result never shares
    nodes with the input.
    """
    if layer.has_collection_binding or layer.is_fragment:
        return layer

    slot_updates = {
        slot: resolve_binding_value(value, item_values)
        for slot, value in layer.variables.content_slots()
    }
    variables = (
        layer.variables.model_copy(update=slot_updates) if slot_updates else layer.variables
    )

    return layer.model_copy(
        update={
            "variables": variables,
            "classes": list(layer.classes),
            "attributes": dict(layer.attributes),
            "children": [inject_item_values(child, item_values) for child in layer.children],
        }
    )


class FieldInjector:
    """Injects item data, following reference fields first when fields are given."""

    def __init__(self, reference_resolver: ReferenceResolver | None = None):
        self.reference_resolver = reference_resolver

    async def enhance(
        self,
        item_values: dict[str, str],
        fields: list[CollectionField] | None = None,
    ) -> dict[str, str]:
        """Item values plus dotted reference paths (when resolvable)."""
        if not fields or self.reference_resolver is None:
            return dict(item_values)
        return await self.reference_resolver.resolve(item_values, fields)

    async def inject(
        self,
        layer: Layer,
        item_values: dict[str, str],
        fields: list[CollectionField] | None = None,
    ) -> Layer:
        """Resolve references once, then inject into the whole subtree."""
        values = await self.enhance(item_values, fields)
        return inject_item_values(layer, values)
