"""
RequiredEvaluator - ensures a field is present and not empty.
"""

from collections.abc import Sequence
from typing import Any

from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator, is_blank


class RequiredEvaluator(RuleEvaluator):
    """
    Validates that a required field is present and not empty.

    Fails if:
    - Field is missing from the input
    - Field value is None
    - Field value is an empty string after trimming
    """

    name = "required"
    default_message = "This field is required."
    implicit = True

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if is_blank(value):
            return self.fail()
        return EvaluationOutcome.ok()
