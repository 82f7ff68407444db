"""
Unit tests for the pagination metadata builder.
"""

from pagetree.models.contracts import Layer, LayerVariables, PaginationMeta, StaticValue, find_layer
from pagetree.services.pagination import (
    apply_pagination_meta,
    build_pagination_wrapper,
    collect_pagination_meta,
    page_info_text,
)


def meta(current_page: int, total_pages: int = 3) -> PaginationMeta:
    return PaginationMeta(
        layer_id="list",
        collection_id="posts",
        current_page=current_page,
        total_pages=total_pages,
        total_items=total_pages * 2,
        items_per_page=2,
    )


def controls(target: str = "list") -> Layer:
    """Editor-authored controls linked to a collection layer."""
    return Layer(
        id="list-pagination",
        attributes={"data-pagination-for": target},
        children=[
            Layer(id="list-pagination-prev", classes=["btn"], children=[Layer(id="list-pagination-prev-text")]),
            Layer(id="list-pagination-info", variables=LayerVariables(text=StaticValue(value="Page 1 of 1"))),
            Layer(id="list-pagination-next", classes=["btn"]),
        ],
    )


class TestCollectPaginationMeta:
    """Tests for reading metadata off resolved fragments."""

    def test_collects_by_collection_layer_id(self):
        tree = [
            Layer(
                id="page",
                children=[
                    Layer(id="list-fragment", name="_fragment", pagination_meta=meta(2)),
                    Layer(id="other-fragment", name="_fragment"),
                ],
            )
        ]

        assert collect_pagination_meta(tree) == {"list": meta(2)}

    def test_non_fragments_are_ignored(self):
        assert collect_pagination_meta([Layer(id="list", pagination_meta=meta(1))]) == {}


class TestApplyPaginationMeta:
    """Tests for patching pagination controls."""

    def test_info_text_is_set(self):
        result = apply_pagination_meta([controls()], {"list": meta(2)})

        info = find_layer(result, "list-pagination-info")
        assert info.variables.text == StaticValue(value="Page 2 of 3")

    def test_middle_page_enables_both_buttons(self):
        result = apply_pagination_meta([controls()], {"list": meta(2)})

        prev = find_layer(result, "list-pagination-prev")
        next_ = find_layer(result, "list-pagination-next")
        assert "disabled" not in prev.attributes
        assert "disabled" not in next_.attributes
        assert prev.attributes["data-current-page"] == "2"
        assert prev.classes == ["btn"]

    def test_first_page_disables_prev(self):
        result = apply_pagination_meta([controls()], {"list": meta(1)})

        prev = find_layer(result, "list-pagination-prev")
        assert prev.attributes["disabled"] is True
        assert prev.classes == ["btn", "opacity-50", "cursor-not-allowed"]
        assert "disabled" not in find_layer(result, "list-pagination-next").attributes

    def test_last_page_disables_next(self):
        result = apply_pagination_meta([controls()], {"list": meta(3)})

        assert find_layer(result, "list-pagination-next").attributes["disabled"] is True
        assert "disabled" not in find_layer(result, "list-pagination-prev").attributes

    def test_button_text_children_are_untouched(self):
        result = apply_pagination_meta([controls()], {"list": meta(1)})

        text = find_layer(result, "list-pagination-prev-text")
        assert text.attributes == {}
        assert text.classes == []

    def test_controls_for_other_layers_are_untouched(self):
        tree = [Layer(id="page", children=[controls(target="elsewhere")])]

        assert apply_pagination_meta(tree, {"list": meta(2)}) == tree

    def test_no_meta_returns_tree(self):
        tree = [controls()]

        assert apply_pagination_meta(tree, {}) == tree

    def test_input_is_not_mutated(self):
        tree = [controls()]

        apply_pagination_meta(tree, {"list": meta(1)})

        assert find_layer(tree, "list-pagination-prev").attributes == {}


class TestBuildPaginationWrapper:
    """Tests for the default control layout."""

    def test_wrapper_layout(self):
        wrapper = build_pagination_wrapper("list", meta(1))

        assert wrapper.id == "list-pagination"
        assert wrapper.attributes["data-pagination-for"] == "list"
        assert wrapper.attributes["data-collection-layer-id"] == "list"
        assert [child.id for child in wrapper.children] == [
            "list-pagination-prev",
            "list-pagination-info",
            "list-pagination-next",
        ]

    def test_wrapper_reflects_state(self):
        wrapper = build_pagination_wrapper("list", meta(1, total_pages=1))

        prev, info, next_ = wrapper.children
        assert prev.attributes["disabled"] is True
        assert next_.attributes["disabled"] is True
        assert info.variables.text == StaticValue(value="Page 1 of 1")
        assert prev.children[0].variables.text == StaticValue(value="Previous")

    def test_wrapper_can_be_reapplied(self):
        wrapper = build_pagination_wrapper("list", meta(1))

        result = apply_pagination_meta([wrapper], {"list": meta(3)})

        assert find_layer(result, "list-pagination-info").variables.text == StaticValue(value=page_info_text(meta(3)))
        assert find_layer(result, "list-pagination-next").attributes["disabled"] is True
        assert "disabled" not in find_layer(result, "list-pagination-prev").attributes
        assert "opacity-50" not in find_layer(result, "list-pagination-prev").classes
