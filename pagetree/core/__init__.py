"""
Core engine primitives: exceptions and constants.
"""

from pagetree.core.exceptions import (
    CollectionFetchError,
    ContractViolationError,
    PageTreeError,
)

__all__ = [
    "CollectionFetchError",
    "ContractViolationError",
    "PageTreeError",
]
