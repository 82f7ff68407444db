"""
Conditional Visibility

Evaluates visibility expressions and filters resolved layer trees:
- evaluate_visibility: shared predicate evaluator (also used for collection filters)
- compute_collection_counts: item count per collection layer, read from fragments
- filter_by_visibility: drops nodes whose expression evaluates false

Filtering must only run on a fully resolved tree: a condition may test the
item count of a different collection layer anywhere on the page.
"""

import logging
from collections.abc import Callable
from datetime import date, datetime

from pagetree.core.constants import original_layer_id
from pagetree.models.contracts.collections import decode_reference_ids
from pagetree.models.contracts.layers import Layer
from pagetree.models.contracts.visibility import (
    ConditionalVisibility,
    VisibilityCondition,
    VisibilityContext,
)
from pagetree.models.enums import (
    CompareOperator,
    ConditionSource,
    FieldType,
    VisibilityOperator as Op,
)

logger = logging.getLogger(__name__)

VisibilityEvaluator = Callable[[ConditionalVisibility, VisibilityContext], bool]

_TRUTHY = ("true", "1", "yes", "on")


# =============================================================================
# Predicate evaluation
# =============================================================================


def evaluate_visibility(
    expression: ConditionalVisibility | None,
    context: VisibilityContext,
) -> bool:
    """
    Evaluate a visibility expression.

    Every group must pass (AND); a group passes when any of its conditions
    passes (OR). Empty expressions and empty groups pass.
    """
    if expression is None or expression.is_empty:
        return True

    for group in expression.groups:
        if not group.conditions:
            continue
        if not any(evaluate_condition(condition, context) for condition in group.conditions):
            return False
    return True


def evaluate_condition(condition: VisibilityCondition, context: VisibilityContext) -> bool:
    """Evaluate a single condition. Unknown operators never hide content."""
    try:
        operator = Op(condition.operator)
    except ValueError:
        logger.debug(f"Unknown visibility operator '{condition.operator}', treating as visible")
        return True

    if condition.source == ConditionSource.PAGE_COLLECTION:
        count = context.page_collection_counts.get(condition.collection_layer_id or "", 0)
        return _evaluate_count(operator, count, condition)

    values = context.collection_item_data or {}
    raw = values.get(condition.field_id) if condition.field_id else None

    field_type = condition.field_type
    if field_type == FieldType.MULTI_REFERENCE:
        return _evaluate_multi_reference(operator, raw, condition)
    if field_type is not None and (field_type == FieldType.REFERENCE or field_type.is_asset):
        return _evaluate_reference(operator, raw, condition)
    if field_type == FieldType.NUMBER:
        return _evaluate_number(operator, raw, condition.value)
    if field_type == FieldType.DATE:
        return _evaluate_date(operator, raw, condition)
    if field_type == FieldType.BOOLEAN:
        return _evaluate_boolean(operator, raw, condition.value)
    return _evaluate_text(operator, raw, condition.value)


def _compare(operator: CompareOperator, left: float, right: float) -> bool:
    if operator == CompareOperator.LT:
        return left < right
    if operator == CompareOperator.LTE:
        return left <= right
    if operator == CompareOperator.GT:
        return left > right
    if operator == CompareOperator.GTE:
        return left >= right
    return left == right


def _evaluate_count(operator: Op, count: int, condition: VisibilityCondition) -> bool:
    if operator == Op.HAS_ITEMS:
        return count > 0
    if operator == Op.HAS_NO_ITEMS:
        return count == 0
    if operator == Op.ITEM_COUNT:
        compare_operator = condition.compare_operator or CompareOperator.EQ
        return _compare(compare_operator, count, condition.compare_value or 0)
    return True


def _evaluate_text(operator: Op, raw: str | None, expected: str | None) -> bool:
    actual = raw or ""
    expected = expected or ""

    if operator == Op.IS:
        return actual == expected
    if operator == Op.IS_NOT:
        return actual != expected
    if operator == Op.CONTAINS:
        return expected.lower() in actual.lower()
    if operator == Op.DOES_NOT_CONTAIN:
        return expected.lower() not in actual.lower()
    if operator == Op.IS_PRESENT or operator == Op.IS_NOT_EMPTY:
        return bool(actual.strip())
    if operator == Op.IS_EMPTY:
        return not actual.strip()
    return True


def _parse_number(raw: str | None) -> float | None:
    if raw is None or not str(raw).strip():
        return None
    try:
        number = float(raw)
    except ValueError:
        return None
    return None if number != number else number  # NaN


def _evaluate_number(operator: Op, raw: str | None, expected: str | None) -> bool:
    actual_num = _parse_number(raw)
    expected_num = _parse_number(expected)

    if actual_num is None or expected_num is None:
        # Fall back to plain string semantics for is/is_not
        if operator in (Op.IS, Op.IS_NOT):
            return _evaluate_text(operator, raw, expected)
        return False

    compare_operator = {
        Op.IS: CompareOperator.EQ,
        Op.LT: CompareOperator.LT,
        Op.LTE: CompareOperator.LTE,
        Op.GT: CompareOperator.GT,
        Op.GTE: CompareOperator.GTE,
    }.get(operator)

    if operator == Op.IS_NOT:
        return actual_num != expected_num
    if compare_operator is None:
        return True
    return _compare(compare_operator, actual_num, expected_num)


def _parse_date(raw: str | None) -> date | None:
    if not raw or not str(raw).strip():
        return None
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def _evaluate_date(operator: Op, raw: str | None, condition: VisibilityCondition) -> bool:
    if operator == Op.IS_EMPTY:
        return _parse_date(raw) is None
    if operator == Op.IS_NOT_EMPTY:
        return _parse_date(raw) is not None

    actual = _parse_date(raw)
    expected = _parse_date(condition.value)
    if actual is None or expected is None:
        return False

    if operator == Op.IS:
        return actual == expected
    if operator == Op.IS_BEFORE:
        return actual < expected
    if operator == Op.IS_AFTER:
        return actual > expected
    if operator == Op.IS_BETWEEN:
        upper = _parse_date(condition.value2)
        if upper is None:
            return False
        return expected <= actual <= upper
    return True


def _evaluate_boolean(operator: Op, raw: str | None, expected: str | None) -> bool:
    if operator != Op.IS:
        return True
    actual_flag = (raw or "").strip().lower() in _TRUTHY
    expected_flag = (expected or "").strip().lower() in _TRUTHY
    return actual_flag == expected_flag


def _evaluate_reference(operator: Op, raw: str | None, condition: VisibilityCondition) -> bool:
    selected = set(decode_reference_ids(condition.value, FieldType.MULTI_REFERENCE))

    if operator == Op.EXISTS:
        return bool(raw)
    if operator == Op.DOES_NOT_EXIST:
        return not raw
    if operator == Op.IS_ONE_OF:
        return bool(raw) and raw in selected
    if operator == Op.IS_NOT_ONE_OF:
        return not raw or raw not in selected
    return True


def _evaluate_multi_reference(operator: Op, raw: str | None, condition: VisibilityCondition) -> bool:
    current = decode_reference_ids(raw, FieldType.MULTI_REFERENCE)
    current_set = set(current)
    selected = set(decode_reference_ids(condition.value, FieldType.MULTI_REFERENCE))

    if operator == Op.IS_ONE_OF:
        return bool(current_set & selected)
    if operator == Op.IS_NOT_ONE_OF:
        return not current_set & selected
    if operator == Op.CONTAINS_ALL_OF:
        return selected <= current_set
    if operator == Op.CONTAINS_EXACTLY:
        return selected == current_set
    if operator in (Op.ITEM_COUNT, Op.HAS_ITEMS, Op.HAS_NO_ITEMS):
        return _evaluate_count(operator, len(current), condition)
    return True


# =============================================================================
# Tree passes
# =============================================================================


def compute_collection_counts(layers: list[Layer]) -> dict[str, int]:
    """
    Compute the item count of every collection layer in a resolved tree.

    Each fragment contributes its child count under the ID of the
    collection layer it replaced.
    """
    counts: dict[str, int] = {}

    def traverse(layer_list: list[Layer]) -> None:
        for layer in layer_list:
            if layer.is_fragment:
                counts[original_layer_id(layer.id)] = len(layer.children)
            if layer.children:
                traverse(layer.children)

    traverse(layers)
    return counts


def filter_by_visibility(
    layers: list[Layer],
    root_item_values: dict[str, str] | None = None,
    *,
    counts: dict[str, int] | None = None,
    evaluator: VisibilityEvaluator = evaluate_visibility,
    logger: logging.Logger | None = None,
) -> list[Layer]:
    """
    Remove layers whose conditional visibility evaluates false.

    Args:
        layers: Fully resolved layer tree
        root_item_values: Item values in scope at the root (dynamic pages)
        counts: Precomputed collection counts (computed from `layers` if None)
        evaluator: Predicate evaluator
        logger: Optional logger (defaults to this module's)

    Returns:
        New layer tree without the hidden subtrees
    """
    log = logger or logging.getLogger(__name__)
    page_collection_counts = counts if counts is not None else compute_collection_counts(layers)

    def filter_layer(layer: Layer, current_values: dict[str, str] | None) -> Layer | None:
        # Children of a per-item clone see that clone's item
        effective_values = (
            layer.collection_item_values
            if layer.collection_item_values is not None
            else current_values
        )

        expression = layer.variables.conditional_visibility
        if expression is not None and not expression.is_empty:
            context = VisibilityContext(
                collection_item_data=effective_values,
                page_collection_counts=page_collection_counts,
            )
            if not evaluator(expression, context):
                log.debug(f"Layer '{layer.id}' hidden by conditional visibility")
                return None

        if not layer.children:
            return layer

        children = [
            child
            for child in (filter_layer(c, effective_values) for c in layer.children)
            if child is not None
        ]
        return layer.model_copy(update={"children": children})

    return [
        layer
        for layer in (filter_layer(root, root_item_values) for root in layers)
        if layer is not None
    ]
