"""
Size evaluators - min, max and between.

On a field that also carries ``numeric`` or ``integer``, numeric strings
are compared by magnitude. Other strings are compared by length. Numbers
that arrive as int or float (from JSON input, say) always compare by
magnitude.
"""

import copy
from collections.abc import Collection, Sequence
from typing import Any

from formrules.core.exceptions import MalformedRuleError
from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator
from .type_validator import coerce_number

NUMERIC_RULES = frozenset({"numeric", "integer"})


def _format_bound(bound: float) -> str:
    return str(int(bound)) if bound.is_integer() else str(bound)


class SizeEvaluator(RuleEvaluator):
    """Shared argument parsing and size measurement for range rules."""

    numeric_message = "The {field} is out of range."
    length_message = "The {field} has an invalid length."

    # None until bound to a field; unbound, any numeric string compares by magnitude
    numeric_field: bool | None = None

    def parse_bounds(self, arguments: Sequence[str]) -> list[float]:
        bounds = []
        for argument in arguments:
            number = coerce_number(argument)
            if number is None:
                raise MalformedRuleError(self.name, f"argument '{argument}' is not a number")
            bounds.append(number)
        return bounds

    def check_arguments(self, arguments: Sequence[str]) -> None:
        super().check_arguments(arguments)
        self.parse_bounds(arguments)

    def bind_field(self, rule_names: Collection[str]) -> "SizeEvaluator":
        bound = copy.copy(self)
        bound.numeric_field = not NUMERIC_RULES.isdisjoint(rule_names)
        return bound

    def measure(self, value: Any) -> tuple[float, bool]:
        """
        Return (size, is_numeric) for a value.

        Args:
            value: The field value

        Returns:
            The magnitude for numbers (and numeric strings on a numeric
            field), else the string length
        """
        if self.numeric_field is not False or not isinstance(value, str):
            number = coerce_number(value)
            if number is not None:
                return number, True
        return float(len(str(value))), False

    def render(self, is_numeric: bool, **bounds: float) -> str:
        template = self.numeric_message if is_numeric else self.length_message
        return template.format(field="{field}", **{k: _format_bound(v) for k, v in bounds.items()})


class MinEvaluator(SizeEvaluator):
    """
    Validates that a value is at least ``min:n``.
    """

    name = "min"
    min_args = 1
    max_args = 1
    numeric_message = "The {field} must be at least {min}."
    length_message = "The {field} must be at least {min} characters."

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        (minimum,) = self.parse_bounds(arguments)
        size, is_numeric = self.measure(value)

        if size < minimum:
            return self.fail(self.render(is_numeric, min=minimum))
        return EvaluationOutcome.ok()


class MaxEvaluator(SizeEvaluator):
    """
    Validates that a value is at most ``max:n``.
    """

    name = "max"
    min_args = 1
    max_args = 1
    numeric_message = "The {field} may not be greater than {max}."
    length_message = "The {field} may not be greater than {max} characters."

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        (maximum,) = self.parse_bounds(arguments)
        size, is_numeric = self.measure(value)

        if size > maximum:
            return self.fail(self.render(is_numeric, max=maximum))
        return EvaluationOutcome.ok()


class BetweenEvaluator(SizeEvaluator):
    """
    Validates that a value lies within ``between:a,b`` (inclusive).
    """

    name = "between"
    min_args = 2
    max_args = 2
    numeric_message = "The {field} must be between {min} and {max}."
    length_message = "The {field} must be between {min} and {max} characters."

    def check_arguments(self, arguments: Sequence[str]) -> None:
        super().check_arguments(arguments)
        minimum, maximum = self.parse_bounds(arguments)
        if minimum > maximum:
            raise MalformedRuleError(self.name, f"lower bound {arguments[0]} exceeds upper bound {arguments[1]}")

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        minimum, maximum = self.parse_bounds(arguments)
        size, is_numeric = self.measure(value)

        if size < minimum or size > maximum:
            return self.fail(self.render(is_numeric, min=minimum, max=maximum))
        return EvaluationOutcome.ok()
