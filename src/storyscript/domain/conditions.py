"""Single-comparison condition language used to gate choices."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Mapping

from storyscript.core.types import Value
from storyscript.core.values import is_number, parse_value

logger = logging.getLogger(__name__)

# Checked in this order so that ">=" is never split on ">".
OPERATORS = ("==", "!=", ">=", "<=", ">", "<")


class ConditionSyntaxError(ValueError):
    """Raised when a condition contains no recognized operator."""


class _Missing:
    """Marker for a variable that is absent from the session state."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


@dataclass(frozen=True, slots=True)
class Condition:
    """A parsed ``<variable> <operator> <literal>`` comparison."""

    variable: str
    operator: str
    raw_operand: str

    @property
    def operand(self) -> Value:
        return parse_value(self.raw_operand)

    def evaluate(self, variables: Mapping[str, Value]) -> bool:
        left = variables[self.variable] if self.variable in variables else MISSING
        return _COMPARATORS[self.operator](left, self.operand)


def parse_condition(condition: str) -> Condition:
    """Parse a condition string, raising ConditionSyntaxError if it has no operator."""
    operator = next((op for op in OPERATORS if op in condition), None)
    if operator is None:
        raise ConditionSyntaxError(f"Unknown operator in condition: {condition!r}")
    parts = condition.split(operator)
    return Condition(variable=parts[0].strip(), operator=operator, raw_operand=parts[1].strip())


def evaluate_condition(condition: str | None, variables: Mapping[str, Value]) -> bool:
    """Return whether a choice guarded by ``condition`` is visible.

    An empty condition is always true. A condition that cannot be parsed is
    logged and treated as false.
    """
    if not condition:
        return True
    try:
        parsed = parse_condition(condition)
    except ConditionSyntaxError as exc:
        logger.warning("%s", exc)
        return False
    return parsed.evaluate(variables)


def strict_equals(left: object, right: object) -> bool:
    """Type-and-value equality without cross-type coercion."""
    if left is MISSING or right is MISSING:
        return left is right
    if is_number(left) and is_number(right):
        return left == right
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, dict)):
        return left is right
    return left == right


def _to_number(value: object) -> float:
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _ordering(compare: Callable[[object, object], bool]) -> Callable[[object, object], bool]:
    def _compare(left: object, right: object) -> bool:
        if left is MISSING or right is MISSING:
            return False
        if isinstance(left, str) and isinstance(right, str):
            return compare(left, right)
        if is_number(left) and is_number(right):
            return compare(left, right)
        left_number = _to_number(left)
        right_number = _to_number(right)
        if math.isnan(left_number) or math.isnan(right_number):
            return False
        return compare(left_number, right_number)

    return _compare


_COMPARATORS: Dict[str, Callable[[object, object], bool]] = {
    "==": strict_equals,
    "!=": lambda left, right: not strict_equals(left, right),
    ">=": _ordering(lambda left, right: left >= right),
    "<=": _ordering(lambda left, right: left <= right),
    ">": _ordering(lambda left, right: left > right),
    "<": _ordering(lambda left, right: left < right),
}
