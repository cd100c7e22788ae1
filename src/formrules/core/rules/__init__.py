"""
Rule grammar parsing, rule registry and form configuration management.
"""

from .parser import FieldRules, parse, parse_field_rules, parse_rule
from .registry import RuleRegistry, default_registry, register_rule
from .rule_config import FormConfigLoader, FormDefinitionBuilder

__all__ = [
    "FieldRules",
    "parse",
    "parse_rule",
    "parse_field_rules",
    "RuleRegistry",
    "default_registry",
    "register_rule",
    "FormConfigLoader",
    "FormDefinitionBuilder",
]
