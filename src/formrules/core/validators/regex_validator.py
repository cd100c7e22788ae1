"""
RegexEvaluator and EmailEvaluator - validate values against patterns.
"""

import re
from collections.abc import Sequence
from functools import lru_cache
from re import Pattern
from typing import Any

from formrules.core.exceptions import MalformedRuleError
from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern:
    """Compile and cache a pattern taken from a rule string."""
    return re.compile(pattern)


class RegexEvaluator(RuleEvaluator):
    """
    Validates that a field value matches ``regex:pattern``.

    The whole value must match. The rule grammar has no escaping, so the
    pattern cannot contain '|' or ','.
    """

    name = "regex"
    default_message = "The {field} format is invalid."
    min_args = 1
    max_args = 1

    def check_arguments(self, arguments: Sequence[str]) -> None:
        super().check_arguments(arguments)
        try:
            compile_pattern(arguments[0])
        except re.error as e:
            raise MalformedRuleError(self.name, f"invalid regex pattern: {e}")

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        pattern = compile_pattern(arguments[0])
        value_str = value if isinstance(value, str) else str(value)

        if not pattern.fullmatch(value_str):
            return self.fail()
        return EvaluationOutcome.ok()


class EmailEvaluator(RuleEvaluator):
    """
    Validates that a field value looks like an email address.
    """

    name = "email"
    default_message = "The {field} must be a valid email address."

    EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if not self.EMAIL_PATTERN.match(str(value).strip()):
            return self.fail()
        return EvaluationOutcome.ok()
