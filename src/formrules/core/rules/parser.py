"""
Rule string parser.

Parses the compact rule grammar used by form definitions:

    required|exists:users,id
    between: 1 , 10 | integer

Rules are separated by '|'. Each rule is ``name`` or ``name:arg1,arg2``.
Whitespace around separators is trimmed. There is no escaping, and rule
names are not checked here: resolution against a registry happens when a
session is built.
"""

from collections.abc import Mapping, Sequence

from formrules.core.exceptions import MalformedRuleError
from formrules.core.models import RuleDescriptor

RULE_SEPARATOR = "|"
NAME_SEPARATOR = ":"
ARGUMENT_SEPARATOR = ","

FieldRules = dict[str, list[RuleDescriptor]]


def parse_rule(segment: str, field: str | None = None) -> RuleDescriptor:
    """
    Parse a single rule segment such as ``exists:users,id``.

    Args:
        segment: One '|'-separated piece of a rule string
        field: Field name, used in error messages only

    Returns:
        RuleDescriptor for the segment

    Raises:
        MalformedRuleError: If the segment, its rule name or an argument is empty
    """
    segment = segment.strip()
    if not segment:
        raise MalformedRuleError(segment, "empty rule segment", field=field)

    name, has_arguments, raw_arguments = segment.partition(NAME_SEPARATOR)
    name = name.strip()
    if not name:
        raise MalformedRuleError(segment, "rule name is empty", field=field)

    arguments: tuple[str, ...] = ()
    if has_arguments and raw_arguments.strip():
        arguments = tuple(arg.strip() for arg in raw_arguments.split(ARGUMENT_SEPARATOR))
        if any(not arg for arg in arguments):
            raise MalformedRuleError(segment, "empty rule argument", field=field)

    return RuleDescriptor(rule_name=name, arguments=arguments)


def parse(rule_string: str, field: str | None = None) -> list[RuleDescriptor]:
    """
    Parse a rule string into an ordered list of descriptors.

    Args:
        rule_string: Rules joined by '|', e.g. "required|exists:users,id"
        field: Field name, used in error messages only

    Returns:
        Descriptors in declaration order (never empty)

    Raises:
        MalformedRuleError: If the string is blank or contains an empty segment
    """
    if not isinstance(rule_string, str):
        raise MalformedRuleError(repr(rule_string), "rule string must be a string", field=field)
    if not rule_string.strip():
        raise MalformedRuleError(rule_string, "rule string is empty", field=field)

    return [parse_rule(segment, field=field) for segment in rule_string.split(RULE_SEPARATOR)]


def parse_field_rules(spec: Mapping[str, str | Sequence[str]]) -> FieldRules:
    """
    Parse a mapping of field name to rule string.

    A field may also map to a list of rule strings, which are evaluated in
    list order, e.g. ``{"user_id": ["required", "exists:users,id"]}``.

    Args:
        spec: Field name -> rule string (or list of rule strings)

    Returns:
        Field name -> descriptors, in the mapping's iteration order

    Raises:
        MalformedRuleError: If any field's rules are malformed or empty
    """
    field_rules: FieldRules = {}

    for field, rules in spec.items():
        if not field or not str(field).strip():
            raise MalformedRuleError(str(rules), "field name is empty")

        if isinstance(rules, str):
            descriptors = parse(rules, field=field)
        else:
            descriptors = []
            for rule_string in rules:
                descriptors.extend(parse(rule_string, field=field))
            if not descriptors:
                raise MalformedRuleError("", "rule list is empty", field=field)

        field_rules[field] = descriptors

    return field_rules
