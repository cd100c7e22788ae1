"""
ValidationError model representing one failed rule on one field.
"""

from pydantic import BaseModel, Field


class ValidationError(BaseModel):
    """
    A field-level rule failure (data, not an exception).

    Attributes:
        field: Field that failed
        rule_name: Rule that produced the failure
        message: Resolved, user-facing message
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "field": "status_id",
                "rule_name": "exists",
                "message": "The selected status_id is invalid.",
            }
        },
    }

    field: str = Field(..., min_length=1)
    rule_name: str = Field(..., min_length=1)
    message: str
