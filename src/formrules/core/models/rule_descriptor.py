"""
RuleDescriptor model representing one parsed segment of a rule string.
"""

from pydantic import BaseModel, Field


class RuleDescriptor(BaseModel):
    """
    A single parsed rule, e.g. ``exists:users,id``.

    Attributes:
        rule_name: Rule identifier ("required", "exists", ...)
        arguments: Ordered rule arguments ("users", "id")
    """

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "rule_name": "exists",
                "arguments": ["users", "id"],
            }
        },
    }

    rule_name: str = Field(..., min_length=1)
    arguments: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.arguments:
            return self.rule_name
        return f"{self.rule_name}:{','.join(self.arguments)}"
