"""
Validation session for evaluating form rules against bound input.

A session is built once from field rules, custom messages and display names,
resolving every rule against a registry so configuration mistakes surface
at construction. Input is then bound with ``with_input()`` and evaluated
with ``passes()`` or ``validate()``.
"""

import time
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

from formrules.config import get_config
from formrules.core.exceptions import LookupUnavailableError, MalformedRuleError, NotBoundError, UnknownRuleError
from formrules.core.lookup import CachingLookup, ExistenceLookup
from formrules.core.models import FormDefinition, RuleDescriptor, ValidationError, ValidationResult
from formrules.core.rules.parser import parse_field_rules
from formrules.core.rules.registry import RuleRegistry, default_registry
from formrules.core.validators import RuleEvaluator
from formrules.observability import metrics
from formrules.observability.logger import get_logger


logger = get_logger(__name__)

ANONYMOUS_FORM = "anonymous"


class SessionState(str, Enum):
    UNBOUND = "unbound"
    BOUND = "bound"
    EVALUATED = "evaluated"


class ValidationSession:
    """
    Evaluates per-field rules against one bound input at a time.

    Fields are evaluated in declaration order and each field's rules in
    the order they were written. With ``bail=True`` (the default) a field
    stops at its first failing rule and contributes one message.

    Sessions hold mutable state and are not safe for concurrent use;
    build one session per concurrent validation.
    """

    def __init__(
        self,
        rules: Mapping[str, str | Sequence[str]],
        messages: Mapping[str, str] | None = None,
        attributes: Mapping[str, str] | None = None,
        registry: RuleRegistry | None = None,
        lookup: ExistenceLookup | None = None,
        bail: bool | None = None,
        form_name: str | None = None,
    ):
        """
        Initialize the session and bind every rule to its evaluator.

        Args:
            rules: Field name -> rule string (or list of rule strings)
            messages: "field.rule" or bare "rule" -> message template
            attributes: Field name -> display name substituted for {field}
            registry: Rule registry (defaults to default_registry())
            lookup: Existence lookup for rules such as exists
            bail: Stop at the first failing rule per field (defaults to config)
            form_name: Name used in logs and metrics

        Raises:
            MalformedRuleError: If a rule string is malformed or a rule gets the wrong arguments
            UnknownRuleError: If a rule name is not registered (a MalformedRuleError)
        """
        config = get_config()

        self.form_name = form_name or ANONYMOUS_FORM
        self.messages: dict[str, str] = dict(messages or {})
        self.attributes: dict[str, str] = dict(attributes or {})
        self.registry = registry if registry is not None else default_registry()
        self.bail = config.bail if bail is None else bail
        self.metrics_enabled = config.metrics_enabled

        if lookup is not None and config.lookup_cache and not isinstance(lookup, CachingLookup):
            lookup = CachingLookup(lookup)
        self.lookup = lookup

        self.field_rules = parse_field_rules(rules)
        self._bound_rules: dict[str, list[tuple[RuleDescriptor, RuleEvaluator]]] = {}
        self._bind_rules()

        self._input: dict[str, Any] | None = None
        self._result: ValidationResult | None = None

    @classmethod
    def from_definition(
        cls,
        definition: FormDefinition,
        registry: RuleRegistry | None = None,
        lookup: ExistenceLookup | None = None,
        bail: bool | None = None,
    ) -> "ValidationSession":
        """
        Build a session from a FormDefinition.

        An explicit ``bail`` overrides the definition's setting.
        """
        return cls(
            rules=definition.rules,
            messages=definition.messages,
            attributes=definition.attributes,
            registry=registry,
            lookup=lookup,
            bail=definition.bail if bail is None else bail,
            form_name=definition.name,
        )

    def _bind_rules(self) -> None:
        """Resolve every descriptor and check its arguments."""
        for field, descriptors in self.field_rules.items():
            rule_names = {descriptor.rule_name for descriptor in descriptors}
            bound = []
            for descriptor in descriptors:
                try:
                    evaluator = self.registry.resolve(descriptor.rule_name)
                except UnknownRuleError:
                    raise UnknownRuleError(descriptor.rule_name, field=field) from None

                try:
                    evaluator.check_arguments(descriptor.arguments)
                except MalformedRuleError as e:
                    raise MalformedRuleError(str(descriptor), e.message, field=field) from e

                if evaluator.requires_lookup and self.lookup is None:
                    raise MalformedRuleError(
                        str(descriptor),
                        "rule requires an ExistenceLookup but the session has none",
                        field=field,
                    )

                bound.append((descriptor, evaluator.bind_field(rule_names)))
            self._bound_rules[field] = bound

        logger.debug(
            f"Bound {sum(len(b) for b in self._bound_rules.values())} rules "
            f"across {len(self._bound_rules)} fields",
            extra={"form": self.form_name},
        )

    @property
    def state(self) -> SessionState:
        if self._input is None:
            return SessionState.UNBOUND
        if self._result is None:
            return SessionState.BOUND
        return SessionState.EVALUATED

    @property
    def result(self) -> ValidationResult | None:
        """The last ValidationResult, or None if the bound input has not been evaluated."""
        return self._result

    def with_input(self, data: Mapping[str, Any]) -> "ValidationSession":
        """
        Bind input to the session, discarding any previous result.

        Args:
            data: Field name -> raw value (missing keys and None are absent)

        Returns:
            The session (for chaining)
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"Input must be a mapping, got {type(data).__name__}")

        self._input = dict(data)
        self._result = None
        return self

    def validate(self) -> ValidationResult:
        """
        Evaluate all rules against the bound input.

        Returns:
            A fresh ValidationResult

        Raises:
            NotBoundError: If no input has been bound
            LookupUnavailableError: If an existence lookup cannot answer; no
                                    partial result is kept
        """
        if self._input is None:
            raise NotBoundError("validate")

        start = time.perf_counter()
        errors: list[ValidationError] = []

        try:
            for field, bound in self._bound_rules.items():
                errors.extend(self._evaluate_field(field, bound))
        except LookupUnavailableError as e:
            self._result = None
            logger.error(
                f"Lookup unavailable while validating form '{self.form_name}': {e}",
                extra={"form": self.form_name, "table": e.table, "column": e.column},
            )
            if self.metrics_enabled:
                metrics.record_lookup_error(self.form_name, e.table)
            raise

        duration = time.perf_counter() - start
        result = ValidationResult(passed=not errors, errors=tuple(errors))
        self._result = result

        if errors:
            logger.debug(
                f"Validation failed for form '{self.form_name}': {result.failed_fields()}",
                extra={"form": self.form_name, "error_count": len(errors)},
            )
        if self.metrics_enabled:
            metrics.record_validation(
                self.form_name,
                result.passed,
                [(error.field, error.rule_name) for error in errors],
                duration,
            )

        return result

    def passes(self) -> bool:
        """
        Evaluate all rules and report whether the input is valid.

        Raises:
            NotBoundError: If no input has been bound
            LookupUnavailableError: If an existence lookup cannot answer
        """
        if self._input is None:
            raise NotBoundError("passes")
        return self.validate().passed

    def fails(self) -> bool:
        """Inverse of passes()."""
        if self._input is None:
            raise NotBoundError("fails")
        return not self.passes()

    def errors(self) -> dict[str, list[str]]:
        """
        Return error messages grouped by field.

        Returns an empty mapping when the bound input has not been evaluated
        yet or when the last evaluation passed.

        Raises:
            NotBoundError: If no input has been bound
        """
        if self._input is None:
            raise NotBoundError("errors")
        if self._result is None:
            return {}
        return self._result.messages()

    def _evaluate_field(
        self,
        field: str,
        bound: list[tuple[RuleDescriptor, RuleEvaluator]],
    ) -> list[ValidationError]:
        value = self._input.get(field)
        failures = []

        for descriptor, evaluator in bound:
            if not evaluator.applies_to(value):
                continue

            outcome = evaluator.evaluate(value, descriptor.arguments, self.lookup)
            if outcome.passed:
                continue

            failures.append(
                ValidationError(
                    field=field,
                    rule_name=descriptor.rule_name,
                    message=self._resolve_message(field, descriptor, value, outcome.default_message),
                )
            )
            if self.bail:
                break

        return failures

    def _resolve_message(
        self,
        field: str,
        descriptor: RuleDescriptor,
        value: Any,
        default_message: str | None,
    ) -> str:
        """
        Pick and render the message for a failed rule.

        Order: custom "field.rule" -> custom bare "rule" -> evaluator default.
        """
        field_key = f"{field}.{descriptor.rule_name}"
        if field_key in self.messages:
            template = self.messages[field_key]
        elif descriptor.rule_name in self.messages:
            template = self.messages[descriptor.rule_name]
        else:
            template = default_message or "The {field} field is invalid."
        return (
            template
            .replace("{field}", self.attributes.get(field, field))
            .replace("{value}", "" if value is None else str(value))
            .replace("{args}", ", ".join(descriptor.arguments))
        )

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of bound rules.

        Returns:
            Dictionary with field, rule and per-rule counts
        """
        return {
            "form": self.form_name,
            "total_fields": len(self._bound_rules),
            "total_rules": sum(len(bound) for bound in self._bound_rules.values()),
            "rules_by_name": self._count_by_name(),
            "bail": self.bail,
        }

    def _count_by_name(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for bound in self._bound_rules.values():
            for descriptor, _ in bound:
                counts[descriptor.rule_name] = counts.get(descriptor.rule_name, 0) + 1
        return counts

    def __repr__(self) -> str:
        return f"ValidationSession(form={self.form_name}, fields={list(self.field_rules)}, state={self.state.value})"
