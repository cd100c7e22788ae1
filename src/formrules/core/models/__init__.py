"""
Core data models for the form validation engine.

All models use Pydantic for runtime validation and immutability.
"""

from .evaluation_outcome import EvaluationOutcome
from .form_definition import FormDefinition
from .rule_descriptor import RuleDescriptor
from .validation_error import ValidationError
from .validation_result import ValidationResult

__all__ = [
    "RuleDescriptor",
    "EvaluationOutcome",
    "ValidationError",
    "ValidationResult",
    "FormDefinition",
]
