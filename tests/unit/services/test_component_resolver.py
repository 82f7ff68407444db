"""
Unit tests for component instance expansion.
"""

import logging

import pytest

from pagetree.core.exceptions import ContractViolationError
from pagetree.models.contracts import Component, Layer
from pagetree.services.component_resolver import resolve_components


class TestResolveComponents:
    """Tests for resolve_components."""

    def test_instance_gets_component_layers(self):
        card = Component(id="card", name="Card", layers=[Layer(id="card-title"), Layer(id="card-body")])
        tree = [Layer(id="page", children=[Layer(id="instance", component_id="card")])]

        result = resolve_components(tree, [card])

        instance = result[0].children[0]
        assert instance.id == "instance"
        assert [child.id for child in instance.children] == ["card-title", "card-body"]

    def test_nested_components_expand(self):
        button = Component(id="button", layers=[Layer(id="button-label")])
        card = Component(id="card", layers=[Layer(id="card-cta", component_id="button")])
        tree = [Layer(id="instance", component_id="card")]

        result = resolve_components(tree, [card, button])

        assert result[0].children[0].children[0].id == "button-label"

    def test_unknown_component_is_left_as_is(self):
        tree = [Layer(id="instance", component_id="missing", children=[Layer(id="kept")])]

        result = resolve_components(tree, [Component(id="other")])

        assert result == tree

    def test_no_components_returns_tree(self):
        tree = [Layer(id="instance", component_id="card")]

        assert resolve_components(tree, []) == tree

    def test_self_containing_component_raises(self):
        loop = Component(id="loop", layers=[Layer(id="inner", component_id="loop")])

        with pytest.raises(ContractViolationError, match="loop"):
            resolve_components([Layer(id="instance", component_id="loop")], [loop])

    def test_input_is_not_mutated(self):
        card = Component(id="card", layers=[Layer(id="card-title")])
        tree = [Layer(id="instance", component_id="card")]

        resolve_components(tree, [card])

        assert tree[0].children == []

    def test_unknown_component_is_logged_to_injected_logger(self, caplog):
        tree = [Layer(id="page", children=[Layer(id="instance", component_id="missing")])]
        page_logger = logging.getLogger("pagetree.page.components")

        with caplog.at_level(logging.DEBUG, logger="pagetree.page.components"):
            resolve_components(tree, [Component(id="other")], logger=page_logger)

        records = [record for record in caplog.records if record.name == "pagetree.page.components"]
        assert [record.getMessage() for record in records] == [
            "Component 'missing' not found for layer 'instance'"
        ]
