"""
Component Resolver

Expands component instances: a layer whose `component_id` names a known
component gets that component's stored layers as its children. Expansion
recurses into the inserted layers, so components may nest other components.
"""

import logging
from collections.abc import Iterable

from pagetree.core.exceptions import ContractViolationError
from pagetree.models.contracts.layers import Component, Layer

logger = logging.getLogger(__name__)


def resolve_components(
    layers: list[Layer],
    components: Iterable[Component],
    logger: logging.Logger | None = None,
) -> list[Layer]:
    """
    Replace component instances with the component's layers.

    Unknown component IDs leave the instance as it is.

    Args:
        layers: Page layer tree
        components: Components available to the page
        logger: Optional logger (defaults to this module's)

    Raises:
        ContractViolationError: If a component contains an instance of itself
    """
    components_by_id = {component.id: component for component in components}
    if not components_by_id:
        return list(layers)
    log = logger or logging.getLogger(__name__)
    return [_expand(layer, components_by_id, (), log) for layer in layers]


def _expand(
    layer: Layer,
    components_by_id: dict[str, Component],
    stack: tuple[str, ...],
    log: logging.Logger,
) -> Layer:
    component = components_by_id.get(layer.component_id) if layer.component_id else None

    if component is not None:
        if component.id in stack:
            chain = " -> ".join([*stack, component.id])
            raise ContractViolationError(f"Component '{component.id}' contains itself ({chain})")
        inner_stack = (*stack, component.id)
        return layer.model_copy(
            update={"children": [_expand(child, components_by_id, inner_stack, log) for child in component.layers]}
        )

    if layer.component_id:
        log.debug(f"Component '{layer.component_id}' not found for layer '{layer.id}'")

    if not layer.children:
        return layer

    return layer.model_copy(
        update={"children": [_expand(child, components_by_id, stack, log) for child in layer.children]}
    )
