"""
Pytest fixtures for pagetree unit tests.

This module provides:
1. Blog-style collection data (posts, authors, tags)
2. An in-memory data source populated with that data
3. Explicit engine settings (no environment lookup)
"""

import random

import pytest

from pagetree.config import Settings
from pagetree.models.contracts import CollectionField, CollectionItem, encode_reference_ids
from pagetree.models.enums import FieldType
from pagetree.repositories import InMemoryCollectionRepository


# ==================== FIELDS ====================


@pytest.fixture
def post_fields() -> list[CollectionField]:
    return [
        CollectionField(id="title", name="Title", key="title", type=FieldType.TEXT, collection_id="posts"),
        CollectionField(id="post_slug", name="Slug", key="slug", type=FieldType.TEXT, collection_id="posts"),
        CollectionField(id="views", name="Views", type=FieldType.NUMBER, collection_id="posts"),
        CollectionField(
            id="author",
            name="Author",
            type=FieldType.REFERENCE,
            collection_id="posts",
            reference_collection_id="authors",
        ),
        CollectionField(
            id="tags",
            name="Tags",
            type=FieldType.MULTI_REFERENCE,
            collection_id="posts",
            reference_collection_id="tags",
        ),
        CollectionField(id="cover", name="Cover", type=FieldType.IMAGE, collection_id="posts"),
    ]


@pytest.fixture
def author_fields() -> list[CollectionField]:
    return [
        CollectionField(id="name", name="Name", type=FieldType.TEXT, collection_id="authors"),
        CollectionField(id="author_slug", name="Slug", key="slug", type=FieldType.TEXT, collection_id="authors"),
        CollectionField(
            id="mentor",
            name="Mentor",
            type=FieldType.REFERENCE,
            collection_id="authors",
            reference_collection_id="authors",
        ),
    ]


@pytest.fixture
def tag_fields() -> list[CollectionField]:
    return [
        CollectionField(id="label", name="Label", type=FieldType.TEXT, collection_id="tags"),
        CollectionField(id="tag_slug", name="Slug", key="slug", type=FieldType.TEXT, collection_id="tags"),
    ]


# ==================== ITEMS ====================


@pytest.fixture
def posts() -> list[CollectionItem]:
    """Five posts in manual order p1..p5."""
    rows = [
        ("p1", "Hello World", "hello-world", "10", "a1", ["t1", "t2"], "asset-1"),
        ("p2", "Second Post", "second-post", "5", "a2", ["t2"], ""),
        ("p3", "Third Post", "third-post", "20", "a1", [], ""),
        ("p4", "Draft Notes", "draft-notes", "1", "a2", ["t1"], ""),
        ("p5", "Fifth Post", "fifth-post", "7", "", [], ""),
    ]
    return [
        CollectionItem(
            id=item_id,
            collection_id="posts",
            manual_order=index,
            values={
                "title": title,
                "post_slug": slug,
                "views": views,
                "author": author,
                "tags": encode_reference_ids(tags),
                "cover": cover,
            },
        )
        for index, (item_id, title, slug, views, author, tags, cover) in enumerate(rows)
    ]


@pytest.fixture
def authors() -> list[CollectionItem]:
    """Two authors who mentor each other (a reference cycle)."""
    return [
        CollectionItem(
            id="a1",
            collection_id="authors",
            manual_order=0,
            values={"name": "Ada", "author_slug": "ada", "mentor": "a2"},
        ),
        CollectionItem(
            id="a2",
            collection_id="authors",
            manual_order=1,
            values={"name": "Grace", "author_slug": "grace", "mentor": "a1"},
        ),
    ]


@pytest.fixture
def tags() -> list[CollectionItem]:
    return [
        CollectionItem(id="t1", collection_id="tags", manual_order=0, values={"label": "Python", "tag_slug": "python"}),
        CollectionItem(id="t2", collection_id="tags", manual_order=1, values={"label": "Design", "tag_slug": "design"}),
    ]


# ==================== DATA SOURCE ====================


@pytest.fixture
def repository(
    post_fields, author_fields, tag_fields, posts, authors, tags
) -> InMemoryCollectionRepository:
    """In-memory data source with identical draft and published data."""
    repo = InMemoryCollectionRepository()
    repo.add_collection("posts", fields=post_fields, items=posts)
    repo.add_collection("authors", fields=author_fields, items=authors)
    repo.add_collection("tags", fields=tag_fields, items=tags)
    return repo


# ==================== SETTINGS ====================


@pytest.fixture
def settings() -> Settings:
    return Settings(
        default_items_per_page=10,
        slug_field_key="slug",
        resolve_references=True,
    )


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
