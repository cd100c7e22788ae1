"""
Rule evaluator implementations.

Provides the required and exists rules plus numeric, integer, size, regex,
email and membership checks, and a wrapper for custom functions.
"""

from .base_validator import RuleEvaluator, is_blank
from .custom_validator import CallableEvaluator
from .exists_validator import ExistsEvaluator
from .in_validator import InEvaluator
from .range_validator import BetweenEvaluator, MaxEvaluator, MinEvaluator
from .regex_validator import EmailEvaluator, RegexEvaluator
from .required_validator import RequiredEvaluator
from .type_validator import IntegerEvaluator, NumericEvaluator, coerce_number

BUILTIN_EVALUATORS: tuple[type[RuleEvaluator], ...] = (
    RequiredEvaluator,
    ExistsEvaluator,
    NumericEvaluator,
    IntegerEvaluator,
    MinEvaluator,
    MaxEvaluator,
    BetweenEvaluator,
    RegexEvaluator,
    EmailEvaluator,
    InEvaluator,
)

__all__ = [
    "RuleEvaluator",
    "is_blank",
    "coerce_number",
    "RequiredEvaluator",
    "ExistsEvaluator",
    "NumericEvaluator",
    "IntegerEvaluator",
    "MinEvaluator",
    "MaxEvaluator",
    "BetweenEvaluator",
    "RegexEvaluator",
    "EmailEvaluator",
    "InEvaluator",
    "CallableEvaluator",
    "BUILTIN_EVALUATORS",
]
