"""
ValidationResult model representing the outcome of one validation call (ephemeral).
"""

from pydantic import BaseModel, Field, field_validator

from .validation_error import ValidationError


class ValidationResult(BaseModel):
    """
    Outcome of evaluating a session's rules against its bound input.

    A fresh result is produced by every passes()/validate() call and is
    never mutated afterwards.

    Attributes:
        passed: Overall validation status
        errors: Failures in evaluation order (fields in declaration order)
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "passed": False,
                "errors": [
                    {
                        "field": "title",
                        "rule_name": "required",
                        "message": "This field is required.",
                    }
                ],
            }
        },
    }

    passed: bool
    errors: tuple[ValidationError, ...] = Field(default_factory=tuple)

    @field_validator("errors")
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies errors is empty, and the converse."""
        passed = info.data.get("passed")
        if passed and len(v) > 0:
            raise ValueError("passed=True but errors is not empty")
        if passed is False and len(v) == 0:
            raise ValueError("passed=False but errors is empty")
        return v

    def messages(self) -> dict[str, list[str]]:
        """Group error messages by field, preserving evaluation order."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped

    def failed_fields(self) -> list[str]:
        """Return the names of fields with at least one failure, in order."""
        return list(self.messages())

    def first(self, field: str) -> str | None:
        """Return the first message recorded for a field, if any."""
        for error in self.errors:
            if error.field == field:
                return error.message
        return None

    def for_field(self, field: str) -> list[ValidationError]:
        """Return all failures recorded for a field."""
        return [error for error in self.errors if error.field == field]
