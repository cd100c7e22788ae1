"""
Rule registry mapping rule names to evaluators.

A registry is passed explicitly to each session. ``default_registry()``
returns a fresh registry holding the built-in rules plus any rules added
with the ``register_rule`` decorator.
"""

from collections.abc import Callable, Iterator, Sequence
from typing import Any

from formrules.core.exceptions import UnknownRuleError
from formrules.core.lookup import ExistenceLookup
from formrules.core.validators import BUILTIN_EVALUATORS, CallableEvaluator, RuleEvaluator
from formrules.observability.logger import get_logger


logger = get_logger(__name__)


class RuleRegistry:
    """
    Mapping from rule name to RuleEvaluator.

    Registering a name that already exists replaces the previous evaluator
    (last registration wins), including built-in rules.
    """

    def __init__(self, evaluators: dict[str, RuleEvaluator] | None = None):
        self._evaluators: dict[str, RuleEvaluator] = {}
        for name, evaluator in (evaluators or {}).items():
            self.register(name, evaluator)

    def register(
        self,
        name: str,
        evaluator: RuleEvaluator | Callable[[Any, Sequence[str], ExistenceLookup | None], bool],
        message: str | None = None,
    ) -> "RuleRegistry":
        """
        Register an evaluator under a rule name.

        Args:
            name: Rule name used in rule strings
            evaluator: RuleEvaluator instance, or a plain function returning bool
            message: Default message when ``evaluator`` is a plain function

        Returns:
            The registry (for chaining)

        Raises:
            ValueError: If the name is empty, contains grammar separators,
                        or the evaluator is not usable
        """
        if not name or not name.strip():
            raise ValueError("Rule name must be a non-empty string")
        if any(sep in name for sep in ("|", ":", ",")) or name != name.strip():
            raise ValueError(f"Rule name '{name}' cannot contain '|', ':', ',' or surrounding whitespace")

        if not isinstance(evaluator, RuleEvaluator):
            if not callable(evaluator):
                raise ValueError(f"Evaluator for rule '{name}' must be a RuleEvaluator or callable")
            kwargs = {"message": message} if message else {}
            evaluator = CallableEvaluator(name, evaluator, **kwargs)
        elif message:
            raise ValueError("message is only accepted for plain function evaluators")

        if name in self._evaluators:
            logger.debug(f"Overriding rule '{name}' with {evaluator!r}")

        self._evaluators[name] = evaluator
        return self

    def unregister(self, name: str) -> None:
        """
        Remove a rule.

        Raises:
            UnknownRuleError: If the rule is not registered
        """
        if name not in self._evaluators:
            raise UnknownRuleError(name)
        del self._evaluators[name]

    def resolve(self, name: str) -> RuleEvaluator:
        """
        Look up the evaluator for a rule name.

        Raises:
            UnknownRuleError: If the rule is not registered
        """
        evaluator = self._evaluators.get(name)
        if evaluator is None:
            raise UnknownRuleError(name)
        return evaluator

    def names(self) -> list[str]:
        """Return registered rule names in registration order."""
        return list(self._evaluators)

    def copy(self) -> "RuleRegistry":
        """Return an independent registry with the same evaluators."""
        return RuleRegistry(dict(self._evaluators))

    def __contains__(self, name: object) -> bool:
        return name in self._evaluators

    def __iter__(self) -> Iterator[str]:
        return iter(self._evaluators)

    def __len__(self) -> int:
        return len(self._evaluators)

    def __repr__(self) -> str:
        return f"RuleRegistry(rules={self.names()})"


# Custom evaluator classes added with @register_rule
_custom_evaluators: dict[str, type[RuleEvaluator]] = {}


def register_rule(cls: type[RuleEvaluator]) -> type[RuleEvaluator]:
    """
    Class decorator adding a custom evaluator to every default registry.

    Usage:
        @register_rule
        class UppercaseEvaluator(RuleEvaluator):
            name = "uppercase"
            ...
    """
    if not isinstance(cls, type) or not issubclass(cls, RuleEvaluator):
        raise TypeError("register_rule expects a RuleEvaluator subclass")
    if not cls.name:
        raise ValueError(f"{cls.__name__} must define a rule name")

    _custom_evaluators[cls.name] = cls
    return cls


def default_registry() -> RuleRegistry:
    """Build a registry with the built-in rules and any decorator-registered rules."""
    registry = RuleRegistry()
    for evaluator_class in BUILTIN_EVALUATORS:
        registry.register(evaluator_class.name, evaluator_class())
    for name, evaluator_class in _custom_evaluators.items():
        registry.register(name, evaluator_class())
    return registry
