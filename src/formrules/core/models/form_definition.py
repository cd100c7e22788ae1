"""
FormDefinition model: a form validator expressed as data instead of a subclass.
"""

from pydantic import BaseModel, Field, field_validator


class FormDefinition(BaseModel):
    """
    Rules, messages and display names for one form.

    Attributes:
        name: Form identifier ("create_task")
        rules: Field name -> rule string, or list of rule strings
        messages: "field.rule" (or bare "rule") -> message template
        attributes: Field name -> display name used for {field}
        bail: Stop at the first failing rule per field (None = engine default)
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "name": "create_task",
                "rules": {
                    "title": "required",
                    "status_id": "required|exists:statuses,id",
                },
                "messages": {"status_id.exists": "That status does not exist"},
                "attributes": {"status_id": "status"},
                "bail": True,
            }
        },
    }

    name: str = Field(..., min_length=1)
    rules: dict[str, str | list[str]]
    messages: dict[str, str] = Field(default_factory=dict)
    attributes: dict[str, str] = Field(default_factory=dict)
    bail: bool | None = None

    @field_validator("rules")
    @classmethod
    def check_rules_not_empty(cls, v):
        """A form must validate at least one field."""
        if not v:
            raise ValueError("rules must define at least one field")
        return v
