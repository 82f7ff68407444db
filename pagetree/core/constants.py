"""
Engine Constants

Marker names, attribute keys and ID formats shared by the resolution passes.
"""

# Synthetic layer that replaces a collection-bound layer.
# Renderers splice its children in place of the layer itself.
FRAGMENT_NAME = "_fragment"
FRAGMENT_ID_SUFFIX = "-fragment"

# Per-item clone ID: "{layer_id}-item-{item_id}"
ITEM_ID_INFIX = "-item-"

# Attributes stamped on / read from layers
COLLECTION_ITEM_ID_ATTR = "data-collection-item-id"
PAGINATION_FOR_ATTR = "data-pagination-for"
PAGINATION_ACTION_ATTR = "data-pagination-action"
PAGINATION_LAYER_ATTR = "data-collection-layer-id"
PAGINATION_WRAPPER_ATTR = "data-pagination-wrapper"
CURRENT_PAGE_ATTR = "data-current-page"

# Pagination control ID suffixes (relative to the collection layer ID)
PAGINATION_INFO_SUFFIX = "-pagination-info"
PAGINATION_PREV_SUFFIX = "-pagination-prev"
PAGINATION_NEXT_SUFFIX = "-pagination-next"
DISABLED_CLASSES = ("opacity-50", "cursor-not-allowed")

# Inline variable token embedded in rich text:
#   <ycode-inline-variable>{"type":"field","data":{...}}</ycode-inline-variable>
INLINE_VARIABLE_TAG = "ycode-inline-variable"


def fragment_id(layer_id: str) -> str:
    """ID of the fragment that replaces a collection layer."""
    return f"{layer_id}{FRAGMENT_ID_SUFFIX}"


def clone_id(layer_id: str, item_id: str) -> str:
    """ID of the per-item clone of a collection layer."""
    return f"{layer_id}{ITEM_ID_INFIX}{item_id}"


def original_layer_id(fragment_layer_id: str) -> str:
    """Recover the collection layer ID from a fragment ID."""
    return fragment_layer_id.removesuffix(FRAGMENT_ID_SUFFIX)
