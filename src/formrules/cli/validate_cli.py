"""
Command-line interface for validating input files against form definitions.

Usage:
    formrules-validate validate --forms <forms.yaml> --form <name> --input <data.json> [options]
    formrules-validate summary --forms <forms.yaml> [--form <name>]
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml

from formrules.core.exceptions import FormRulesError
from formrules.core.lookup import InMemoryLookup
from formrules.core.rules import FormConfigLoader
from formrules.core.session import ValidationSession
from formrules.observability.logger import get_logger, log_operation


logger = get_logger(__name__)

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def load_data_file(path: str | Path) -> Any:
    """
    Load a JSON or YAML document.

    Args:
        path: File path; ".json" files are parsed as JSON, anything else as YAML

    Returns:
        The parsed document

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path) as f:
        try:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Cannot parse {path}: {e}") from e


def build_lookup(path: str | None) -> InMemoryLookup:
    """
    Build an in-memory lookup from a "table -> list of rows" document.

    Args:
        path: Optional path to the lookup data file

    Returns:
        InMemoryLookup (empty when no path is given)
    """
    if path is None:
        return InMemoryLookup()

    tables = load_data_file(path) or {}
    if not isinstance(tables, dict) or not all(isinstance(rows, list) for rows in tables.values()):
        raise ValueError("Lookup data must map table names to lists of rows")
    for table, rows in tables.items():
        for row in rows:
            if not isinstance(row, dict):
                raise ValueError(f"Lookup rows must be mappings, got {type(row).__name__} in table '{table}'")
    return InMemoryLookup(tables)


def validate_command(args) -> int:
    """
    Execute the validate command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        definition = FormConfigLoader(args.forms).load_form(args.form)
        data = load_data_file(args.input)
        if not isinstance(data, dict):
            raise ValueError("Input must be a mapping of field names to values")

        session = ValidationSession.from_definition(
            definition,
            lookup=build_lookup(args.lookup_data),
            bail=False if args.all_failures else None,
        )

        with log_operation("Validating input", logger=logger, form=args.form, input=args.input):
            passed = session.with_input(data).passes()

    except (FormRulesError, FileNotFoundError, ValueError) as e:
        logger.error(f"Validation could not run: {e}")
        print(json.dumps({"form": args.form, "error": str(e)}), file=sys.stderr)
        return EXIT_ERROR

    report = {"form": args.form, "passed": passed, "errors": session.errors()}
    print(json.dumps(report, indent=2 if args.pretty else None))

    return EXIT_PASSED if passed else EXIT_FAILED


def summary_command(args) -> int:
    """
    Execute the summary command.

    Args:
        args: Command-line arguments

    Returns:
        Process exit code
    """
    try:
        forms = FormConfigLoader(args.forms).load_forms()
        if args.form:
            if args.form not in forms:
                raise ValueError(f"Form '{args.form}' not found (available: {sorted(forms)})")
            forms = {args.form: forms[args.form]}

        # Summaries only need rule resolution; exists rules get an empty lookup
        summaries = [
            ValidationSession.from_definition(definition, lookup=InMemoryLookup()).get_rule_summary()
            for definition in forms.values()
        ]
    except (FormRulesError, FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot summarize forms: {e}")
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return EXIT_ERROR

    print(json.dumps(summaries, indent=2 if args.pretty else None))
    return EXIT_PASSED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="formrules-validate",
        description="Validate input documents against form definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a JSON payload
  formrules-validate validate --forms config/forms.yaml --form create_task --input task.json

  # Resolve exists rules against fixture data
  formrules-validate validate --forms config/forms.yaml --form create_task --input task.json \\
      --lookup-data fixtures/tables.yaml

  # Report every failing rule instead of the first per field
  formrules-validate validate --forms config/forms.yaml --form create_task --input task.json --all-failures

  # Show the rules a form binds
  formrules-validate summary --forms config/forms.yaml --form create_task
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Validate an input file")
    validate_parser.add_argument(
        "--forms",
        required=True,
        help="Path to form definitions YAML file"
    )
    validate_parser.add_argument(
        "--form",
        required=True,
        help="Form name to validate against"
    )
    validate_parser.add_argument(
        "--input",
        required=True,
        help="Path to input file (JSON or YAML)"
    )
    validate_parser.add_argument(
        "--lookup-data",
        default=None,
        help="Path to table rows (JSON or YAML) used by exists rules"
    )
    validate_parser.add_argument(
        "--all-failures",
        action="store_true",
        help="Report every failing rule per field"
    )
    validate_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output"
    )

    # Summary command
    summary_parser = subparsers.add_parser("summary", help="Summarize form rules")
    summary_parser.add_argument(
        "--forms",
        required=True,
        help="Path to form definitions YAML file"
    )
    summary_parser.add_argument(
        "--form",
        default=None,
        help="Only summarize this form"
    )
    summary_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    if args.command == "validate":
        sys.exit(validate_command(args))
    elif args.command == "summary":
        sys.exit(summary_command(args))


if __name__ == "__main__":
    main()
