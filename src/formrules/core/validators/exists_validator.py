"""
ExistsEvaluator - validates that a value refers to an existing record.
"""

from collections.abc import Sequence
from typing import Any

from formrules.core.lookup import ExistenceLookup
from formrules.core.models import EvaluationOutcome

from .base_validator import RuleEvaluator


class ExistsEvaluator(RuleEvaluator):
    """
    Validates that a record with ``column == value`` exists in ``table``.

    Rule string: ``exists:table,column``

    The check is delegated to the session's ExistenceLookup. An absent value
    fails without consulting the lookup. LookupUnavailableError raised by the
    lookup is propagated unchanged.
    """

    name = "exists"
    default_message = "The selected {field} is invalid."
    min_args = 2
    max_args = 2
    implicit = True
    requires_lookup = True

    def evaluate(
        self,
        value: Any,
        arguments: Sequence[str],
        lookup: ExistenceLookup | None,
    ) -> EvaluationOutcome:
        if value is None:
            return self.fail()

        if lookup is None:
            # Sessions refuse to bind exists without a lookup
            raise RuntimeError("exists rule evaluated without an ExistenceLookup")

        table, column = arguments
        value_str = value if isinstance(value, str) else str(value)

        if not lookup.exists(table, column, value_str):
            return self.fail()
        return EvaluationOutcome.ok()
