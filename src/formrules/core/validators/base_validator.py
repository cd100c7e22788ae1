"""
Base evaluator interface for all validation rules.

All rule evaluators inherit from RuleEvaluator and implement evaluate().
Evaluators are stateless: one instance is registered per rule name and
shared by every field and session that uses the rule. ``bind_field()``
lets a rule that depends on its neighbours hand out a configured copy.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from typing import Any

from formrules.core.exceptions import MalformedRuleError
from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome


def is_blank(value: Any) -> bool:
    """Return True for an absent value or a string that is empty after trimming."""
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


class RuleEvaluator(ABC):
    """
    Abstract base class for all rule evaluators.

    Subclasses set:
    - name: default registration name ("required", "exists", ...)
    - default_message: message template, may contain a {field} placeholder
    - min_args / max_args: accepted argument count (max_args=None for unbounded)
    - implicit: evaluate absent or blank values instead of passing them
    - requires_lookup: the rule needs an ExistenceLookup at bind time
    """

    name: str = ""
    default_message: str = "The {field} field is invalid."
    min_args: int = 0
    max_args: int | None = 0
    implicit: bool = False
    requires_lookup: bool = False

    def check_arguments(self, arguments: Sequence[str]) -> None:
        """
        Validate rule arguments when a rule is bound to a field.

        Args:
            arguments: Parsed rule arguments

        Raises:
            MalformedRuleError: If the argument count or values are invalid
        """
        count = len(arguments)
        if self.max_args is not None and self.min_args == self.max_args and count != self.min_args:
            raise MalformedRuleError(
                self.name,
                f"expects exactly {self.min_args} argument(s), got {count}"
            )
        if count < self.min_args:
            raise MalformedRuleError(
                self.name,
                f"expects at least {self.min_args} argument(s), got {count}"
            )
        if self.max_args is not None and count > self.max_args:
            raise MalformedRuleError(
                self.name,
                f"expects at most {self.max_args} argument(s), got {count}"
            )

    def applies_to(self, value: Any) -> bool:
        """Return False when the rule should be skipped for this value."""
        return self.implicit or not is_blank(value)

    def bind_field(self, rule_names: Collection[str]) -> "RuleEvaluator":
        """
        Return the evaluator to use on a field carrying ``rule_names``.

        The shared instance is returned unless a rule depends on its
        neighbours, in which case a configured copy is returned.
        """
        return self

    @abstractmethod
    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        """
        Evaluate a value against this rule.

        Args:
            value: The field value (None when absent)
            arguments: Parsed rule arguments (already checked)
            lookup: Existence lookup for rules that need one

        Returns:
            EvaluationOutcome.ok() or EvaluationOutcome.fail(message)

        Raises:
            LookupUnavailableError: If a required lookup cannot answer
        """
        pass

    def fail(self, message: str | None = None) -> EvaluationOutcome:
        return EvaluationOutcome.fail(message or self.default_message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
