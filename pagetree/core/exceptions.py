"""
Core Exceptions

Custom exceptions for the layer-tree resolution engine.
"""


class PageTreeError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str = "Layer tree resolution failed"):
        self.message = message
        super().__init__(self.message)


class CollectionFetchError(PageTreeError):
    """
    Raised by a data source when a collection or its items are unavailable.

    The collection resolver catches this per binding: the affected layer is
    kept unresolved and the rest of the page still renders.
    """

    def __init__(self, collection_id: str, message: str | None = None):
        self.collection_id = collection_id
        super().__init__(message or f"Collection '{collection_id}' is unavailable")


class ContractViolationError(PageTreeError):
    """
    Raised when an engine invariant is broken.

    Unlike content problems, this is never swallowed by the resolver.

    Usage:
        if is_fragment(layer):
            raise ContractViolationError(f"Unexpected fragment '{layer.id}'")
    """
