"""
Form configuration management.

Loads form definitions (rules, messages, display names) from YAML files
and provides a fluent builder for defining forms in code.
"""

from pathlib import Path
from typing import Any

import pydantic
import yaml

from formrules.core.exceptions import FormConfigError
from formrules.core.models import FormDefinition


class FormConfigLoader:
    """
    Loads form definitions from YAML configuration files.

    Expected YAML format:
    ```yaml
    forms:
      create_task:
        bail: true
        rules:
          title: required|max:255
          status_id: required|exists:statuses,id
          tags:
            - in:bug,feature
        messages:
          status_id.exists: That status does not exist
        attributes:
          status_id: status
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the form config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Form configuration file not found: {config_path}")

    def load_forms(self) -> dict[str, FormDefinition]:
        """
        Load and parse every form in the YAML file.

        Returns:
            Form name -> FormDefinition, in file order

        Raises:
            FormConfigError: If YAML is invalid or a form definition is malformed
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise FormConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict) or "forms" not in config:
            raise FormConfigError("Configuration file must contain 'forms' section")

        forms = config["forms"]
        if not isinstance(forms, dict) or not forms:
            raise FormConfigError("'forms' section must map form names to definitions")

        return {
            str(form_name): self._parse_form(str(form_name), form_def)
            for form_name, form_def in forms.items()
        }

    def load_form(self, name: str) -> FormDefinition:
        """
        Load a single form by name.

        Raises:
            FormConfigError: If the form is not defined in the file
        """
        forms = self.load_forms()
        if name not in forms:
            raise FormConfigError(f"Form '{name}' not found in {self.config_path} (available: {sorted(forms)})")
        return forms[name]

    def _parse_form(self, form_name: str, form_def: Any) -> FormDefinition:
        """
        Parse a single form definition.

        Args:
            form_name: The form's key in the YAML file
            form_def: The form definition from YAML

        Returns:
            Validated FormDefinition

        Raises:
            FormConfigError: If the definition is invalid
        """
        if not isinstance(form_def, dict):
            raise FormConfigError(f"Form '{form_name}' must be a mapping")
        if "rules" not in form_def:
            raise FormConfigError(f"Form '{form_name}' is missing 'rules'")

        rules = form_def["rules"]
        if not isinstance(rules, dict):
            raise FormConfigError(f"Rules for form '{form_name}' must map field names to rule strings")

        try:
            return FormDefinition(
                name=form_name,
                rules={str(field): self._normalize_rules(form_name, str(field), value) for field, value in rules.items()},
                messages=form_def.get("messages") or {},
                attributes=form_def.get("attributes") or {},
                bail=form_def.get("bail"),
            )
        except pydantic.ValidationError as e:
            raise FormConfigError(f"Invalid definition for form '{form_name}': {e}") from e

    @staticmethod
    def _normalize_rules(form_name: str, field: str, value: Any) -> str | list[str]:
        if isinstance(value, str):
            return value
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        raise FormConfigError(
            f"Rules for field '{field}' in form '{form_name}' must be a string or a list of strings"
        )


class FormDefinitionBuilder:
    """
    Programmatically build a form definition.

    Usage:
        form = FormDefinitionBuilder("create_task") \\
            .field("title", "required") \\
            .field("status_id", "required|exists:statuses,id") \\
            .message("status_id.exists", "That status does not exist") \\
            .build()
    """

    def __init__(self, name: str):
        """Initialize an empty form definition."""
        self.name = name
        self.rules: dict[str, list[str]] = {}
        self.messages: dict[str, str] = {}
        self.attributes: dict[str, str] = {}
        self.bail: bool | None = None

    def field(self, field_name: str, *rule_strings: str) -> "FormDefinitionBuilder":
        """Append rule strings to a field (fields keep first-declared order)."""
        self.rules.setdefault(field_name, []).extend(rule_strings)
        return self

    def add_required(self, field_name: str) -> "FormDefinitionBuilder":
        """Add a required rule."""
        return self.field(field_name, "required")

    def add_exists(self, field_name: str, table: str, column: str = "id") -> "FormDefinitionBuilder":
        """Add an exists rule."""
        return self.field(field_name, f"exists:{table},{column}")

    def add_between(self, field_name: str, min_value: float, max_value: float) -> "FormDefinitionBuilder":
        """Add a between rule."""
        return self.field(field_name, f"between:{min_value},{max_value}")

    def add_in(self, field_name: str, *options: str) -> "FormDefinitionBuilder":
        """Add an in rule."""
        return self.field(field_name, f"in:{','.join(options)}")

    def message(self, key: str, template: str) -> "FormDefinitionBuilder":
        """Add a custom message for "field.rule" or a bare rule name."""
        self.messages[key] = template
        return self

    def attribute(self, field_name: str, display_name: str) -> "FormDefinitionBuilder":
        """Set the display name substituted for {field}."""
        self.attributes[field_name] = display_name
        return self

    def stop_on_first_failure(self, bail: bool = True) -> "FormDefinitionBuilder":
        """Set per-field short-circuit behavior."""
        self.bail = bail
        return self

    def build(self) -> FormDefinition:
        """Build and return the form definition."""
        return FormDefinition(
            name=self.name,
            rules={field: list(rule_strings) for field, rule_strings in self.rules.items()},
            messages=dict(self.messages),
            attributes=dict(self.attributes),
            bail=self.bail,
        )
