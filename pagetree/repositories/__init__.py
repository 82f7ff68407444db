# Data access layer - collection data sources
from pagetree.repositories.base import CollectionDataSource
from pagetree.repositories.memory import InMemoryCollectionRepository

__all__ = [
    "CollectionDataSource",
    "InMemoryCollectionRepository",
]
