"""
Exception hierarchy for the form validation engine.

Configuration problems (bad rule strings, unknown rules, wrong arity) are
raised while a session is being built. Field-level rule failures are never
raised; they are collected into a ValidationResult.
"""


class FormRulesError(Exception):
    """Base class for all engine errors."""


class MalformedRuleError(FormRulesError, ValueError):
    """Raised when a rule string is malformed or a rule gets the wrong number of arguments."""

    def __init__(self, rule: str, message: str, field: str | None = None):
        self.rule = rule
        self.field = field
        self.message = message
        location = f"{field}: " if field else ""
        super().__init__(f"{location}[{rule}] {message}")


class UnknownRuleError(MalformedRuleError, LookupError):
    """
    Raised when a rule name cannot be resolved in the registry.

    Binding an unknown rule is a malformed rule set, so this is caught by
    ``except MalformedRuleError`` as well.
    """

    def __init__(self, rule_name: str, field: str | None = None):
        self.rule_name = rule_name
        super().__init__(rule_name, f"unknown rule '{rule_name}'", field=field)


class NotBoundError(FormRulesError):
    """Raised when results are queried before input is bound to the session."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot call {operation}() before input is bound with with_input()")


class LookupUnavailableError(FormRulesError):
    """Raised by an existence lookup that cannot answer."""

    def __init__(self, table: str, column: str, reason: str = "lookup unavailable"):
        self.table = table
        self.column = column
        self.reason = reason
        super().__init__(f"Cannot check {table}.{column}: {reason}")


class FormConfigError(FormRulesError, ValueError):
    """Raised when a form definition file is invalid."""
