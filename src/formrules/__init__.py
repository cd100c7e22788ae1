"""
formrules - rule-based form validation.

Form validation described as data: field name -> rule string
(``required|exists:users,id``), evaluated by a ValidationSession against
a pluggable rule registry and existence lookup.

Usage:
    session = ValidationSession(
        {"title": "required", "status_id": "required|exists:statuses,id"},
        lookup=InMemoryLookup({"statuses": [{"id": 1}]}),
    )
    if not session.with_input(form_data).passes():
        render(session.errors())
"""

from formrules.core.exceptions import (
    FormConfigError,
    FormRulesError,
    LookupUnavailableError,
    MalformedRuleError,
    NotBoundError,
    UnknownRuleError,
)
from formrules.core.lookup import CachingLookup, CallableLookup, ExistenceLookup, InMemoryLookup
from formrules.core.models import (
    EvaluationOutcome,
    FormDefinition,
    RuleDescriptor,
    ValidationError,
    ValidationResult,
)
from formrules.core.rules import (
    FormConfigLoader,
    FormDefinitionBuilder,
    RuleRegistry,
    default_registry,
    parse,
    parse_field_rules,
    register_rule,
)
from formrules.core.session import SessionState, ValidationSession
from formrules.core.validators import CallableEvaluator, RuleEvaluator

__version__ = "0.1.0"

__all__ = [
    "ValidationSession",
    "SessionState",
    "RuleRegistry",
    "default_registry",
    "register_rule",
    "parse",
    "parse_field_rules",
    "FormConfigLoader",
    "FormDefinitionBuilder",
    "RuleEvaluator",
    "CallableEvaluator",
    "ExistenceLookup",
    "InMemoryLookup",
    "CallableLookup",
    "CachingLookup",
    "RuleDescriptor",
    "EvaluationOutcome",
    "ValidationError",
    "ValidationResult",
    "FormDefinition",
    "FormRulesError",
    "MalformedRuleError",
    "UnknownRuleError",
    "NotBoundError",
    "LookupUnavailableError",
    "FormConfigError",
]
