"""
Pagination Metadata Builder

Pagination controls are sibling layers of a collection layer, linked to it
by a `data-pagination-for` attribute. Once the collection is resolved, the
controls are patched with the page state:
- "...-pagination-info" text becomes "Page {current} of {total}"
- "...-pagination-prev" is disabled on the first page
- "...-pagination-next" is disabled on the last page
"""

from pagetree.core.constants import (
    CURRENT_PAGE_ATTR,
    DISABLED_CLASSES,
    PAGINATION_ACTION_ATTR,
    PAGINATION_FOR_ATTR,
    PAGINATION_INFO_SUFFIX,
    PAGINATION_LAYER_ATTR,
    PAGINATION_NEXT_SUFFIX,
    PAGINATION_PREV_SUFFIX,
    PAGINATION_WRAPPER_ATTR,
    original_layer_id,
)
from pagetree.models.contracts.layers import Layer, LayerSettings, LayerVariables, StaticValue
from pagetree.models.contracts.pagination import PaginationMeta


def page_info_text(meta: PaginationMeta) -> str:
    return f"Page {meta.current_page} of {meta.total_pages}"


def collect_pagination_meta(layers: list[Layer]) -> dict[str, PaginationMeta]:
    """Pagination metadata of every paginated fragment, by collection layer ID."""
    meta_by_layer_id: dict[str, PaginationMeta] = {}

    def traverse(layer_list: list[Layer]) -> None:
        for layer in layer_list:
            if layer.is_fragment and layer.pagination_meta is not None:
                meta_by_layer_id[original_layer_id(layer.id)] = layer.pagination_meta
            if layer.children:
                traverse(layer.children)

    traverse(layers)
    return meta_by_layer_id


def apply_pagination_meta(
    layers: list[Layer],
    meta_by_layer_id: dict[str, PaginationMeta],
) -> list[Layer]:
    """Patch every pagination control layer that points at a paginated collection."""
    if not meta_by_layer_id:
        return list(layers)

    def update(layer: Layer) -> Layer:
        target = layer.attributes.get(PAGINATION_FOR_ATTR)
        if target and target in meta_by_layer_id:
            return _apply_meta(layer, meta_by_layer_id[target])
        if not layer.children:
            return layer
        return layer.model_copy(update={"children": [update(child) for child in layer.children]})

    return [update(layer) for layer in layers]


def _apply_meta(layer: Layer, meta: PaginationMeta) -> Layer:
    updates: dict = {}

    if layer.id.endswith(PAGINATION_INFO_SUFFIX):
        updates["variables"] = layer.variables.model_copy(
            update={"text": StaticValue(value=page_info_text(meta))}
        )

    is_prev = layer.id.endswith(PAGINATION_PREV_SUFFIX)
    is_next = layer.id.endswith(PAGINATION_NEXT_SUFFIX)
    if is_prev or is_next:
        # Reset first so controls stamped for another page can be re-patched
        attributes = {
            key: value for key, value in layer.attributes.items() if key != "disabled"
        }
        attributes[CURRENT_PAGE_ATTR] = str(meta.current_page)
        classes = [c for c in layer.classes if c not in DISABLED_CLASSES]
        if (is_prev and meta.is_first_page) or (is_next and meta.is_last_page):
            attributes["disabled"] = True
            classes.extend(DISABLED_CLASSES)
        updates["attributes"] = attributes
        updates["classes"] = classes

    if layer.children:
        updates["children"] = [_apply_meta(child, meta) for child in layer.children]

    return layer.model_copy(update=updates)


def build_pagination_wrapper(collection_layer_id: str, meta: PaginationMeta) -> Layer:
    """
    Build the default pagination controls for a collection layer.

    The editor inserts this as a sibling after the collection layer; the
    result already carries the state for `meta`.
    """
    prefix = f"{collection_layer_id}-pagination"
    button_classes = ["px-4", "py-2", "rounded", "bg-[#e5e7eb]", "hover:bg-[#d1d5db]", "transition-colors"]

    def button(suffix: str, action: str, label: str, disabled: bool) -> Layer:
        attributes: dict = {
            PAGINATION_ACTION_ATTR: action,
            PAGINATION_LAYER_ATTR: collection_layer_id,
            CURRENT_PAGE_ATTR: str(meta.current_page),
        }
        if disabled:
            attributes["disabled"] = True
        return Layer(
            id=f"{collection_layer_id}{suffix}",
            name="button",
            classes=[*button_classes, *(DISABLED_CLASSES if disabled else ("cursor-pointer",))],
            settings=LayerSettings(tag="button"),
            attributes=attributes,
            children=[
                Layer(
                    id=f"{collection_layer_id}{suffix}-text",
                    name="span",
                    variables=LayerVariables(text=StaticValue(value=label)),
                )
            ],
        )

    return Layer(
        id=prefix,
        name="div",
        classes=["flex", "items-center", "justify-center", "gap-4", "mt-4"],
        attributes={
            PAGINATION_WRAPPER_ATTR: "true",
            PAGINATION_LAYER_ATTR: collection_layer_id,
            PAGINATION_FOR_ATTR: collection_layer_id,
        },
        children=[
            button(PAGINATION_PREV_SUFFIX, "prev", "Previous", meta.is_first_page),
            Layer(
                id=f"{collection_layer_id}{PAGINATION_INFO_SUFFIX}",
                name="span",
                classes=["text-sm", "text-[#4b5563]"],
                variables=LayerVariables(text=StaticValue(value=page_info_text(meta))),
            ),
            button(PAGINATION_NEXT_SUFFIX, "next", "Next", meta.is_last_page),
        ],
    )
