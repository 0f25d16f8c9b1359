"""Tests for structural validation of untyped flow trees.

validate_raw_flow is exercised directly with Python data, so these tests
cover shapes YAML can produce but the parser tests do not bother with
(tuples, non-string keys, null values).
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from usermind.dsl.errors import ParseError
from usermind.dsl.serialization.schema import (
    ClickStep,
    Constraint,
    FillStep,
    RawFlow,
)
from usermind.dsl.serialization.validation import validate_raw_flow, validate_step
from usermind.dsl.types import ActionType, ConstraintScope

VALID_STEPS: dict[str, dict[str, Any]] = {
    "navigate": {"action": "navigate", "url": "https://example.com"},
    "click": {"action": "click", "selector": "#btn"},
    "fill": {"action": "fill", "selector": "#input", "value": "hello"},
    "assert": {"action": "assert", "selector": "h1", "text": "Title"},
    "select": {"action": "select", "selector": "#dropdown", "value": "opt1"},
    "hover": {"action": "hover", "selector": ".menu"},
    "wait": {"action": "wait", "duration": 500},
}


@pytest.fixture
def flow_data() -> dict[str, Any]:
    """A valid untyped flow tree."""
    return {
        "name": "checkout",
        "actor": {"role": "shopper"},
        "constraints": ["stay on the store", {"rule": "no real cards"}],
        "steps": [
            {"action": "navigate", "url": "https://shop.example.com"},
            {"action": "click", "selector": "#buy"},
        ],
    }


def _error_for(data: Any) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        validate_raw_flow(data)
    return exc_info.value


# =============================================================================
# Accepted shapes
# =============================================================================


class TestValidFlows:
    """Tests for trees that pass validation."""

    def test_returns_raw_flow_with_shorthand_constraints(
        self, flow_data: dict[str, Any]
    ) -> None:
        """Test that string constraints are kept as strings."""
        raw = validate_raw_flow(flow_data)

        assert isinstance(raw, RawFlow)
        assert raw.constraints[0] == "stay on the store"
        assert isinstance(raw.constraints[1], Constraint)
        assert raw.constraints[1].rule == "no real cards"

    def test_steps_become_typed_models(self, flow_data: dict[str, Any]) -> None:
        """Test that each step is built as the model for its action."""
        raw = validate_raw_flow(flow_data)

        assert isinstance(raw.steps[1], ClickStep)
        assert raw.steps[1].action is ActionType.CLICK
        assert raw.steps[1].selector == "#buy"

    def test_constraint_scope_becomes_enum(self, flow_data: dict[str, Any]) -> None:
        """Test that a valid scope string is typed as ConstraintScope."""
        flow_data["constraints"] = [{"rule": "one at a time", "scope": "step"}]

        raw = validate_raw_flow(flow_data)

        assert raw.constraints[0].scope is ConstraintScope.STEP

    def test_tuples_count_as_arrays(self, flow_data: dict[str, Any]) -> None:
        """Test that tuple sequences are accepted like lists."""
        flow_data["constraints"] = ()
        flow_data["steps"] = tuple(flow_data["steps"])

        raw = validate_raw_flow(flow_data)

        assert raw.constraints == []
        assert len(raw.steps) == 2

    def test_non_string_keys_are_stringified(
        self, flow_data: dict[str, Any]
    ) -> None:
        """Test that YAML integer keys survive as string extras."""
        flow_data[2024] = "release"

        raw = validate_raw_flow(flow_data)

        assert raw.model_extra == {"2024": "release"}

    def test_unknown_step_fields_are_kept(self, flow_data: dict[str, Any]) -> None:
        """Test that unknown step keys pass through."""
        flow_data["steps"][1]["timeout"] = 30

        raw = validate_raw_flow(flow_data)

        assert raw.steps[1].model_extra == {"timeout": 30}

    def test_input_is_not_mutated(self, flow_data: dict[str, Any]) -> None:
        """Test that validation leaves the caller's tree untouched."""
        before = copy.deepcopy(flow_data)

        validate_raw_flow(flow_data)

        assert flow_data == before

    @pytest.mark.parametrize("duration", [1, 0.5, 500, 60000.0])
    def test_positive_durations_accepted(
        self, flow_data: dict[str, Any], duration: float
    ) -> None:
        """Test that any finite positive duration is accepted."""
        flow_data["steps"] = [{"action": "wait", "duration": duration}]

        raw = validate_raw_flow(flow_data)

        assert raw.steps[0].duration == duration


# =============================================================================
# Top-level errors
# =============================================================================


class TestTopLevelErrors:
    """Tests for failures on the flow's own fields."""

    @pytest.mark.parametrize("data", [None, "hello", 42, ["a", "b"]])
    def test_non_object_flow(self, data: Any) -> None:
        """Test that only mappings are accepted as flows."""
        error = _error_for(data)
        assert error.message == "Flow definition must be an object"
        assert error.path is None

    @pytest.mark.parametrize("name", [None, "", 7])
    def test_bad_name(self, flow_data: dict[str, Any], name: Any) -> None:
        """Test that name must be a non-empty string."""
        flow_data["name"] = name
        error = _error_for(flow_data)
        assert error.message == "'name' must be a non-empty string"
        assert error.path == "name"

    def test_non_string_description(self, flow_data: dict[str, Any]) -> None:
        """Test that description must be a string when present."""
        flow_data["description"] = ["not", "text"]
        error = _error_for(flow_data)
        assert error.path == "description"

    def test_null_description_counts_as_present(
        self, flow_data: dict[str, Any]
    ) -> None:
        """Test that an explicit null is treated as a wrong type."""
        flow_data["description"] = None
        assert _error_for(flow_data).path == "description"

    def test_missing_actor(self, flow_data: dict[str, Any]) -> None:
        """Test that the actor key is required."""
        del flow_data["actor"]
        error = _error_for(flow_data)
        assert error.message == "'actor' is required"
        assert error.path == "actor"

    def test_non_object_actor(self, flow_data: dict[str, Any]) -> None:
        """Test that the actor must be a mapping."""
        flow_data["actor"] = "admin"
        error = _error_for(flow_data)
        assert error.message == "'actor' must be an object"

    def test_bad_permissions(self, flow_data: dict[str, Any]) -> None:
        """Test that permissions must be a list of strings."""
        flow_data["actor"]["permissions"] = ["read", 3]
        assert _error_for(flow_data).path == "actor.permissions"

    def test_non_object_session(self, flow_data: dict[str, Any]) -> None:
        """Test that the session must be a mapping."""
        flow_data["actor"]["session"] = ["token"]
        assert _error_for(flow_data).path == "actor.session"

    def test_non_string_session_value(self, flow_data: dict[str, Any]) -> None:
        """Test that session values must be strings."""
        flow_data["actor"]["session"] = {"token": "abc", "user_id": 42}
        error = _error_for(flow_data)
        assert error.message == "'actor.session.user_id' must be a string"
        assert error.path == "actor.session.user_id"

    def test_missing_constraints(self, flow_data: dict[str, Any]) -> None:
        """Test that constraints are required, even if empty."""
        del flow_data["constraints"]
        error = _error_for(flow_data)
        assert error.message == "'constraints' must be an array"
        assert error.path == "constraints"

    def test_constraint_of_wrong_type(self, flow_data: dict[str, Any]) -> None:
        """Test that a constraint must be a string or a mapping."""
        flow_data["constraints"] = ["ok", 12]
        error = _error_for(flow_data)
        assert error.message == (
            "Constraint at index 1 must be a string or an object with a 'rule' field"
        )
        assert error.path == "constraints[1]"

    def test_constraint_without_rule(self, flow_data: dict[str, Any]) -> None:
        """Test that object constraints need a rule."""
        flow_data["constraints"] = [{"scope": "flow"}]
        error = _error_for(flow_data)
        assert error.path == "constraints[0].rule"

    def test_non_array_fragments(self, flow_data: dict[str, Any]) -> None:
        """Test that fragments must be a list when present."""
        flow_data["fragments"] = {"name": "x"}
        error = _error_for(flow_data)
        assert error.message == "'fragments' must be an array"
        assert error.path == "fragments"


# =============================================================================
# Step errors
# =============================================================================


class TestStepErrors:
    """Tests for per-step validation."""

    @pytest.mark.parametrize(
        ("action", "field"),
        [
            (action, field)
            for action, step in VALID_STEPS.items()
            for field in step
            if field != "action"
        ],
    )
    def test_each_required_field_is_enforced(self, action: str, field: str) -> None:
        """Test that dropping any required field names it in the error."""
        step = dict(VALID_STEPS[action])
        del step[field]

        with pytest.raises(ParseError) as exc_info:
            validate_step(step, 3)

        error = exc_info.value
        assert error.message.startswith(f"Step 3 (action: '{action}')")
        assert f"'{field}'" in error.message
        assert error.path == f"steps[3].{field}"

    def test_null_required_field_counts_as_missing(self) -> None:
        """Test that an explicit null does not satisfy a required field."""
        with pytest.raises(ParseError, match="missing required field 'url'"):
            validate_step({"action": "navigate", "url": None}, 0)

    @pytest.mark.parametrize(
        "duration",
        [0, -100, "fast", True, float("inf"), float("nan"), 10**400],
    )
    def test_invalid_duration(self, duration: Any) -> None:
        """Test that the duration must be a finite positive number."""
        with pytest.raises(ParseError, match="must be a positive number"):
            validate_step({"action": "wait", "duration": duration}, 0)

    def test_missing_action(self) -> None:
        """Test that a step without an action is reported as unknown."""
        with pytest.raises(ParseError) as exc_info:
            validate_step({"url": "https://example.com"}, 0)
        assert exc_info.value.path == "steps[0].action"
        assert "unknown action 'None'" in exc_info.value.message

    def test_action_names_are_case_sensitive(self) -> None:
        """Test that action identifiers match exactly."""
        with pytest.raises(ParseError, match="unknown action 'Navigate'"):
            validate_step({"action": "Navigate", "url": "https://example.com"}, 0)

    def test_custom_prefix(self) -> None:
        """Test that the prefix is used for the error path."""
        with pytest.raises(ParseError) as exc_info:
            validate_step({"action": "click"}, 1, prefix="fragments[0].steps")
        assert exc_info.value.path == "fragments[0].steps[1].selector"

    def test_first_failure_wins(self, flow_data: dict[str, Any]) -> None:
        """Test that the earliest violation in document order is reported."""
        flow_data["steps"] = [{"action": "click"}, {"action": "fly"}]
        flow_data["fragments"] = "broken"

        assert _error_for(flow_data).path == "steps[0].selector"


# =============================================================================
# Fragment errors
# =============================================================================


class TestFragments:
    """Tests for fragment validation."""

    def test_valid_fragment(self, flow_data: dict[str, Any]) -> None:
        """Test that fragment steps are built like top-level steps."""
        flow_data["fragments"] = [
            {
                "name": "login",
                "steps": [{"action": "fill", "selector": "#u", "value": "me"}],
            }
        ]

        raw = validate_raw_flow(flow_data)

        assert raw.fragments is not None
        assert isinstance(raw.fragments[0].steps[0], FillStep)

    def test_non_object_fragment(self, flow_data: dict[str, Any]) -> None:
        """Test that each fragment must be a mapping."""
        flow_data["fragments"] = ["login"]
        error = _error_for(flow_data)
        assert error.message == "Fragment at index 0 must be an object"
        assert error.path == "fragments[0]"

    def test_fragment_without_name(self, flow_data: dict[str, Any]) -> None:
        """Test that fragments need a name."""
        flow_data["fragments"] = [{"steps": [VALID_STEPS["hover"]]}]
        assert _error_for(flow_data).path == "fragments[0].name"

    def test_fragment_missing_steps(self, flow_data: dict[str, Any]) -> None:
        """Test that the fragment is named when its steps are missing."""
        flow_data["fragments"] = [{"name": "login"}]
        error = _error_for(flow_data)
        assert error.message == "Fragment 'login' must have a non-empty 'steps' array"

    def test_fragment_step_error_path(self, flow_data: dict[str, Any]) -> None:
        """Test that fragment step errors point inside the fragment."""
        flow_data["fragments"] = [
            {"name": "ok", "steps": [VALID_STEPS["click"]]},
            {"name": "bad", "steps": [VALID_STEPS["click"], {"action": "wait"}]},
        ]

        error = _error_for(flow_data)

        assert error.message == (
            "Step 1 (action: 'wait') is missing required field 'duration'"
        )
        assert error.path == "fragments[1].steps[1].duration"
