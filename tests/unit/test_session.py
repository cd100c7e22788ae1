"""
Unit tests for ValidationSession.
"""

import pytest

from formrules.config import EngineConfig, set_config
from formrules.core.exceptions import (
    LookupUnavailableError,
    MalformedRuleError,
    NotBoundError,
    UnknownRuleError,
)
from formrules.core.lookup import CachingLookup, InMemoryLookup
from formrules.core.rules import FormDefinitionBuilder, default_registry
from formrules.core.session import SessionState, ValidationSession


pytestmark = pytest.mark.unit

TASK_RULES = {
    "title": "required",
    "status_id": "required|exists:statuses,id",
}


class TestSessionConstruction:
    """Tests for binding rules at construction"""

    def test_unknown_rule_raises_error(self, lookup):
        """Test unknown rule names fail construction"""
        with pytest.raises(UnknownRuleError) as exc_info:
            ValidationSession({"title": "required|shiny"}, lookup=lookup)

        assert exc_info.value.rule_name == "shiny"
        assert exc_info.value.field == "title"

    def test_unknown_rule_is_malformed_rule_error(self, lookup):
        """Test unknown rule names are caught as MalformedRuleError"""
        with pytest.raises(MalformedRuleError) as exc_info:
            ValidationSession({"title": "required|shiny"}, lookup=lookup)

        assert exc_info.value.rule == "shiny"
        assert "title" in str(exc_info.value)
        assert isinstance(exc_info.value, LookupError)

    def test_wrong_arity_raises_error(self, lookup):
        """Test exists with one argument fails construction"""
        with pytest.raises(MalformedRuleError) as exc_info:
            ValidationSession({"user_id": "exists:users"}, lookup=lookup)

        assert exc_info.value.field == "user_id"
        assert "exactly 2" in str(exc_info.value)

    def test_malformed_rule_string_raises_error(self, lookup):
        with pytest.raises(MalformedRuleError):
            ValidationSession({"title": "required||max:3"}, lookup=lookup)

    def test_exists_without_lookup_raises_error(self):
        """Test rules needing a lookup cannot bind without one"""
        with pytest.raises(MalformedRuleError) as exc_info:
            ValidationSession(TASK_RULES)

        assert "ExistenceLookup" in str(exc_info.value)

    def test_rules_registered_after_parsing_resolve(self, lookup):
        """Test a custom registry populated before construction is used"""
        registry = default_registry().register(
            "uppercase", lambda value, arguments, lookup: value.isupper()
        )
        session = ValidationSession({"code": "uppercase"}, registry=registry)

        assert session.with_input({"code": "abc"}).passes() is False

    def test_rule_summary(self, lookup):
        session = ValidationSession(TASK_RULES, lookup=lookup, form_name="create_task")
        summary = session.get_rule_summary()

        assert summary["form"] == "create_task"
        assert summary["total_fields"] == 2
        assert summary["total_rules"] == 3
        assert summary["rules_by_name"] == {"required": 2, "exists": 1}


class TestSessionStateMachine:
    """Tests for Unbound -> Bound -> Evaluated transitions"""

    def test_new_session_is_unbound(self, lookup):
        session = ValidationSession(TASK_RULES, lookup=lookup)
        assert session.state is SessionState.UNBOUND
        assert session.result is None

    @pytest.mark.parametrize("operation", ["passes", "errors", "validate", "fails"])
    def test_queries_before_binding_raise_error(self, lookup, operation):
        """Test results cannot be queried before with_input()"""
        session = ValidationSession(TASK_RULES, lookup=lookup)

        with pytest.raises(NotBoundError) as exc_info:
            getattr(session, operation)()

        assert operation in str(exc_info.value)

    def test_with_input_is_fluent_and_binds(self, lookup):
        session = ValidationSession(TASK_RULES, lookup=lookup)

        assert session.with_input({"title": "x"}) is session
        assert session.state is SessionState.BOUND
        assert session.errors() == {}

    def test_passes_moves_to_evaluated(self, lookup):
        session = ValidationSession(TASK_RULES, lookup=lookup).with_input({})
        session.passes()

        assert session.state is SessionState.EVALUATED
        assert session.result is not None

    def test_rebinding_discards_previous_result(self, lookup):
        """Test with_input() after evaluation returns to Bound"""
        session = ValidationSession(TASK_RULES, lookup=lookup).with_input({})
        session.passes()

        session.with_input({"title": "ok", "status_id": "1"})

        assert session.state is SessionState.BOUND
        assert session.result is None
        assert session.errors() == {}

    def test_input_must_be_mapping(self, lookup):
        with pytest.raises(TypeError):
            ValidationSession(TASK_RULES, lookup=lookup).with_input(["title"])


class TestSessionEvaluation:
    """Tests for passes(), validate() and errors()"""

    def test_valid_input_passes(self, lookup):
        """Test input satisfying every rule passes with no errors"""
        session = ValidationSession(TASK_RULES, lookup=lookup)

        assert session.with_input({"title": "Write docs", "status_id": "2"}).passes() is True
        assert session.errors() == {}

    def test_example_scenario(self, lookup):
        """Test blank title and unknown status produce one message each"""
        session = ValidationSession(TASK_RULES, lookup=lookup)

        assert session.with_input({"title": "", "status_id": "9"}).passes() is False
        assert session.errors() == {
            "title": ["This field is required."],
            "status_id": ["The selected status_id is invalid."],
        }

    def test_required_short_circuits(self, recording_lookup):
        """Test a failing required rule skips later rules for the field"""
        session = ValidationSession({"user_id": "required|exists:users,id"}, lookup=recording_lookup)

        session.with_input({}).passes()

        assert session.errors() == {"user_id": ["This field is required."]}
        assert recording_lookup.calls == []

    def test_reordered_rules_change_evaluation(self, recording_lookup):
        """Test exists before required runs first and reports its own message"""
        session = ValidationSession({"user_id": "exists:users,id|required"}, lookup=recording_lookup)

        session.with_input({"user_id": "  "}).passes()

        assert recording_lookup.calls == [("users", "id", "  ")]
        assert session.errors() == {"user_id": ["The selected user_id is invalid."]}

    def test_accumulate_all_failures(self):
        """Test bail=False records every failing rule of a field"""
        session = ValidationSession({"code": "min:5|integer|in:12345"}, bail=False)

        session.with_input({"code": "ab"}).passes()

        assert session.errors() == {
            "code": [
                "The code must be at least 5 characters.",
                "The code must be an integer.",
                "The selected code is invalid.",
            ]
        }

    def test_optional_field_skips_non_implicit_rules(self):
        """Test blank optional fields are not checked by format rules"""
        session = ValidationSession({"age": "integer|min:18"})

        assert session.with_input({"age": ""}).passes() is True
        assert session.with_input({}).passes() is True
        assert session.with_input({"age": "12"}).passes() is False

    def test_size_rules_follow_numeric_rules_on_the_field(self):
        """Test max:255 measures a title's length and an integer field's value"""
        session = ValidationSession({"title": "required|max:255", "priority": "integer|max:255"})

        session.with_input({"title": "1000", "priority": "1000"}).passes()

        assert session.errors() == {"priority": ["The priority may not be greater than 255."]}

    def test_fields_evaluated_in_declaration_order(self, lookup):
        session = ValidationSession({"b": "required", "a": "required", "c": "required"})

        result = session.with_input({}).validate()

        assert [error.field for error in result.errors] == ["b", "a", "c"]

    def test_passes_is_idempotent(self, recording_lookup):
        """Test two passes() calls without rebinding give identical results"""
        session = ValidationSession(TASK_RULES, lookup=recording_lookup).with_input(
            {"title": "", "status_id": "9"}
        )

        first = session.validate()
        second = session.validate()

        assert first == second
        assert first is not second
        assert len(recording_lookup.calls) == 2

    def test_rebinding_evaluates_only_new_input(self, lookup):
        """Test with_input(a), with_input(b), passes() uses only b"""
        session = ValidationSession(TASK_RULES, lookup=lookup)

        session.with_input({"title": "", "status_id": "9"})
        session.with_input({"title": "Ship it", "status_id": "3"})

        assert session.passes() is True

    def test_input_is_not_mutated(self, lookup):
        data = {"title": "  x  ", "status_id": "1"}
        ValidationSession(TASK_RULES, lookup=lookup).with_input(data).passes()

        assert data == {"title": "  x  ", "status_id": "1"}

    def test_fails_is_inverse_of_passes(self, lookup):
        session = ValidationSession(TASK_RULES, lookup=lookup).with_input({})
        assert session.fails() is True


class TestMessageResolution:
    """Tests for custom messages and display names"""

    def test_field_rule_message_overrides_default(self, lookup):
        """Test "user_id.exists" replaces the evaluator's default message"""
        session = ValidationSession(
            {"user_id": "required|exists:users,id"},
            messages={"user_id.exists": "That user does not exist"},
            lookup=lookup,
        )

        session.with_input({"user_id": "99"}).passes()

        assert session.errors()["user_id"] == ["That user does not exist"]

    def test_empty_custom_message_is_used(self):
        """Test a custom message set to "" is not replaced by the default"""
        session = ValidationSession(
            {"title": "required", "body": "required"},
            messages={"title.required": "", "required": "Missing {field}."},
        )

        session.with_input({}).passes()

        assert session.errors() == {"title": [""], "body": ["Missing body."]}

    def test_field_message_beats_bare_rule_message(self, lookup):
        session = ValidationSession(
            {"user_id": "exists:users,id", "owner_id": "exists:users,id"},
            messages={
                "exists": "Unknown {field}.",
                "user_id.exists": "That user does not exist",
            },
            lookup=lookup,
        )

        session.with_input({"user_id": "99", "owner_id": "98"}).passes()

        assert session.errors() == {
            "user_id": ["That user does not exist"],
            "owner_id": ["Unknown owner_id."],
        }

    def test_display_name_substitution(self, lookup):
        session = ValidationSession(
            {"status_id": "exists:statuses,id"},
            attributes={"status_id": "status"},
            lookup=lookup,
        )

        session.with_input({"status_id": "9"}).passes()

        assert session.errors() == {"status_id": ["The selected status is invalid."]}

    def test_value_and_args_placeholders(self):
        session = ValidationSession(
            {"role": "in:admin,editor"},
            messages={"role.in": "'{value}' is not one of: {args}"},
        )

        session.with_input({"role": "root"}).passes()

        assert session.errors() == {"role": ["'root' is not one of: admin, editor"]}

    def test_custom_message_with_other_braces_is_left_alone(self):
        session = ValidationSession(
            {"code": "regex:^[0-9]{4}$"},
            messages={"code.regex": "The {field} must match [0-9]{4}."},
        )

        session.with_input({"code": "12"}).passes()

        assert session.errors() == {"code": ["The code must match [0-9]{4}."]}


class TestLookupFailures:
    """Tests for LookupUnavailableError handling"""

    def test_lookup_failure_aborts_validation(self, unavailable_lookup):
        """Test the error propagates and no partial result is kept"""
        session = ValidationSession(TASK_RULES, lookup=unavailable_lookup).with_input(
            {"title": "", "status_id": "1"}
        )

        with pytest.raises(LookupUnavailableError) as exc_info:
            session.passes()

        assert exc_info.value.table == "statuses"
        assert session.state is SessionState.BOUND
        assert session.result is None
        assert session.errors() == {}

    def test_lookup_failure_is_not_retried(self, unavailable_lookup):
        session = ValidationSession(TASK_RULES, lookup=unavailable_lookup).with_input(
            {"title": "x", "status_id": "1"}
        )

        with pytest.raises(LookupUnavailableError):
            session.passes()

        assert unavailable_lookup.calls == 1


class TestSessionConfiguration:
    """Tests for defaults taken from EngineConfig and FormDefinition"""

    def test_bail_default_from_config(self):
        set_config(EngineConfig(bail=False))
        session = ValidationSession({"code": "min:5|integer"})

        session.with_input({"code": "ab"}).passes()

        assert len(session.errors()["code"]) == 2

    def test_explicit_bail_overrides_config(self):
        set_config(EngineConfig(bail=False))
        session = ValidationSession({"code": "min:5|integer"}, bail=True)

        session.with_input({"code": "ab"}).passes()

        assert len(session.errors()["code"]) == 1

    def test_lookup_cache_from_config(self, lookup):
        set_config(EngineConfig(lookup_cache=True))
        session = ValidationSession(TASK_RULES, lookup=lookup)

        assert isinstance(session.lookup, CachingLookup)

    def test_from_definition(self, lookup):
        definition = FormDefinitionBuilder("create_task") \
            .add_required("title") \
            .add_required("status_id") \
            .add_exists("status_id", "statuses") \
            .message("status_id.exists", "That status does not exist") \
            .build()

        session = ValidationSession.from_definition(definition, lookup=lookup)
        session.with_input({"title": "x", "status_id": "42"}).passes()

        assert session.form_name == "create_task"
        assert session.errors() == {"status_id": ["That status does not exist"]}

    def test_from_definition_bail_override(self):
        definition = FormDefinitionBuilder("codes") \
            .field("code", "min:5", "integer") \
            .stop_on_first_failure(True) \
            .build()

        session = ValidationSession.from_definition(definition, bail=False)
        session.with_input({"code": "ab"}).passes()

        assert len(session.errors()["code"]) == 2

    def test_empty_lookup_still_binds_exists(self):
        session = ValidationSession(TASK_RULES, lookup=InMemoryLookup())
        assert session.with_input({"title": "x", "status_id": "1"}).passes() is False
