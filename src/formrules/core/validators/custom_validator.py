"""
CallableEvaluator - validates using a custom Python function.
"""

from collections.abc import Callable, Sequence
from typing import Any

from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator


class CallableEvaluator(RuleEvaluator):
    """
    Wraps a plain function as a rule evaluator.

    The function signature should be:
        def my_rule(value: Any, arguments: Sequence[str], lookup: ExistenceLookup | None) -> bool:
            return value.startswith(arguments[0])

    Returning a falsy value fails the rule with ``message``. Exceptions raised
    by the function are not caught.
    """

    def __init__(
        self,
        name: str,
        func: Callable[[Any, Sequence[str], ExistenceLookup | None], bool],
        message: str = "The {field} field is invalid.",
        min_args: int = 0,
        max_args: int | None = None,
        implicit: bool = False,
    ):
        if not name:
            raise ValueError("CallableEvaluator requires a name")
        if not callable(func):
            raise ValueError("func must be callable")

        self.name = name
        self.func = func
        self.default_message = message
        self.min_args = min_args
        self.max_args = max_args
        self.implicit = implicit

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if self.func(value, arguments, lookup):
            return EvaluationOutcome.ok()
        return self.fail()

    def __repr__(self) -> str:
        return f"CallableEvaluator(name={self.name}, func={getattr(self.func, '__name__', self.func)!r})"
