"""
EvaluationOutcome model returned by every rule evaluator.
"""

from pydantic import BaseModel


class EvaluationOutcome(BaseModel):
    """
    Pass/fail result of evaluating one rule against one value.

    Attributes:
        passed: Whether the rule accepted the value
        default_message: Evaluator's message template when the rule failed
    """

    model_config = {"frozen": True}

    passed: bool
    default_message: str | None = None

    @classmethod
    def ok(cls) -> "EvaluationOutcome":
        return cls(passed=True)

    @classmethod
    def fail(cls, default_message: str) -> "EvaluationOutcome":
        return cls(passed=False, default_message=default_message)
