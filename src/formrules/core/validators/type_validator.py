"""
NumericEvaluator and IntegerEvaluator - validate that text parses as a number.
"""

import math
from collections.abc import Sequence
from typing import Any

from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator


def coerce_number(value: Any) -> float | None:
    """
    Attempt to coerce a value to a finite number.

    Args:
        value: The value to coerce ("99.99", 42, ...)

    Returns:
        The number, or None when the value is not numeric
    """
    # bool is an int subclass; "true" is not a number
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number


class NumericEvaluator(RuleEvaluator):
    """
    Validates that a field value is numeric ("12", "-3.5", "1e3").

    NaN and infinity are rejected.
    """

    name = "numeric"
    default_message = "The {field} must be a number."

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if coerce_number(value) is None:
            return self.fail()
        return EvaluationOutcome.ok()


class IntegerEvaluator(RuleEvaluator):
    """
    Validates that a field value is a whole number ("42", "-7").

    Decimal notation ("4.0") is rejected, matching what a form user typed.
    """

    name = "integer"
    default_message = "The {field} must be an integer."

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if isinstance(value, bool):
            return self.fail()
        if isinstance(value, int):
            return EvaluationOutcome.ok()

        text = str(value).strip()
        try:
            int(text)
        except ValueError:
            return self.fail()
        return EvaluationOutcome.ok()
