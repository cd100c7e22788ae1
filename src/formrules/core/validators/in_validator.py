"""
InEvaluator - validates that a value is one of a fixed set of options.
"""

from collections.abc import Sequence
from typing import Any

from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator


class InEvaluator(RuleEvaluator):
    """
    Validates that a field value is listed in ``in:a,b,c``.

    Comparison is exact and case-sensitive.
    """

    name = "in"
    default_message = "The selected {field} is invalid."
    min_args = 1
    max_args = None

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        value_str = value if isinstance(value, str) else str(value)
        if value_str not in arguments:
            return self.fail()
        return EvaluationOutcome.ok()
