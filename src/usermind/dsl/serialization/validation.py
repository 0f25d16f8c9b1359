"""Structural validation for flow documents.

This module checks an untyped tree (as produced by ``yaml.safe_load``) against
the raw flow shape and returns it typed as a :class:`RawFlow`. It validates:
- Top-level shape, ``name`` and ``description``
- The actor (role, permissions, session values)
- Constraints, in either shorthand string or object form
- Steps, using the action registry's required-field table
- Fragments, whose steps obey exactly the same rules as top-level steps

Validation fails fast: the first violation raises a :class:`ParseError`
carrying a message and the dot/bracket path of the offending field. Errors
are never aggregated. Unknown top-level keys are not checked and pass through
to the result.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, NoReturn

from usermind.dsl.errors import ParseError
from usermind.dsl.serialization.registry import (
    ACTION_TYPES,
    POSITIVE_NUMBER_FIELDS,
    REQUIRED_FIELDS,
    is_action_type,
)
from usermind.dsl.serialization.schema import (
    STEP_MODELS,
    Actor,
    BaseStep,
    Constraint,
    ConstraintInput,
    Fragment,
    RawFlow,
)
from usermind.dsl.types import ActionType, ConstraintScope

__all__ = ["validate_raw_flow", "validate_step"]

_VALID_SCOPES = tuple(scope.value for scope in ConstraintScope)


# =============================================================================
# Helpers
# =============================================================================


def _fail(message: str, path: str | None = None) -> NoReturn:
    raise ParseError(message, path=path)


def _is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def _is_positive_number(value: Any) -> bool:
    # bool is an int subclass but never a duration
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value > 0
    except OverflowError:
        # Integers beyond float range read as infinity
        return False


# =============================================================================
# Section validators
# =============================================================================


def _validate_actor(actor: Any) -> None:
    if not _is_record(actor):
        _fail("'actor' must be an object", "actor")
    if not _is_non_empty_string(actor.get("role")):
        _fail("'actor.role' must be a non-empty string", "actor.role")

    if "permissions" in actor:
        permissions = actor["permissions"]
        if not _is_array(permissions) or not all(
            isinstance(p, str) for p in permissions
        ):
            _fail(
                "'actor.permissions' must be an array of strings",
                "actor.permissions",
            )

    if "session" in actor:
        session = actor["session"]
        if not _is_record(session):
            _fail(
                "'actor.session' must be an object of string key-value pairs",
                "actor.session",
            )
        for key, value in session.items():
            if not isinstance(value, str):
                _fail(
                    f"'actor.session.{key}' must be a string",
                    f"actor.session.{key}",
                )


def _validate_constraint(constraint: Any, index: int) -> None:
    if isinstance(constraint, str):
        return
    path = f"constraints[{index}]"
    if not _is_record(constraint):
        _fail(
            f"Constraint at index {index} must be a string or an object "
            "with a 'rule' field",
            path,
        )
    if not _is_non_empty_string(constraint.get("rule")):
        _fail(
            f"Constraint at index {index} is missing a non-empty 'rule' field",
            f"{path}.rule",
        )
    if "scope" in constraint and constraint["scope"] not in _VALID_SCOPES:
        _fail(
            f"Constraint at index {index} has invalid scope "
            f"'{constraint['scope']}'; expected 'flow' or 'step'",
            f"{path}.scope",
        )


def validate_step(step: Any, index: int, prefix: str = "steps") -> None:
    """Validate one step of a flow or fragment.

    Args:
        step: Untyped step value.
        index: Position of the step within its list; used in messages.
        prefix: Path of the list holding the step (``steps`` or
            ``fragments[j].steps``).

    Raises:
        ParseError: If the step is not an object, names an unknown action,
            lacks a required field, or has a non-positive duration.
    """
    path = f"{prefix}[{index}]"
    if not _is_record(step):
        _fail(f"Step at index {index} must be an object", path)

    action = step.get("action")
    if not is_action_type(action):
        _fail(
            f"Step at index {index} has unknown action '{action}'; "
            f"expected one of: {', '.join(ACTION_TYPES)}",
            f"{path}.action",
        )

    for field in REQUIRED_FIELDS[action]:
        value = step.get(field)
        if value is None:
            _fail(
                f"Step {index} (action: '{action}') is missing required "
                f"field '{field}'",
                f"{path}.{field}",
            )
        if field in POSITIVE_NUMBER_FIELDS and not _is_positive_number(value):
            _fail(
                f"Step {index} (action: '{action}') field '{field}' must be "
                "a positive number",
                f"{path}.{field}",
            )


def _validate_fragment(fragment: Any, index: int) -> None:
    path = f"fragments[{index}]"
    if not _is_record(fragment):
        _fail(f"Fragment at index {index} must be an object", path)
    if not _is_non_empty_string(fragment.get("name")):
        _fail(
            f"Fragment at index {index} is missing a non-empty 'name' field",
            f"{path}.name",
        )

    steps = fragment.get("steps")
    if not _is_array(steps) or len(steps) == 0:
        _fail(
            f"Fragment '{fragment['name']}' must have a non-empty 'steps' array",
            f"{path}.steps",
        )
    for i, step in enumerate(steps):
        validate_step(step, i, prefix=f"{path}.steps")


# =============================================================================
# Typed construction
# =============================================================================


def _fields(mapping: Mapping[Any, Any]) -> dict[str, Any]:
    # YAML allows non-string keys; model fields and extras are keyed by str.
    # Extras go into _fields_set too so exclude_unset dumps keep them.
    return {str(key): value for key, value in mapping.items()}


def _build_step(step: Mapping[Any, Any]) -> BaseStep:
    fields = _fields(step)
    fields["action"] = ActionType(fields["action"])
    model = STEP_MODELS[fields["action"]]
    return model.model_construct(_fields_set=set(fields), **fields)


def _build_constraint(constraint: Any) -> ConstraintInput:
    if isinstance(constraint, str):
        return constraint
    fields = _fields(constraint)
    if "scope" in fields:
        fields["scope"] = ConstraintScope(fields["scope"])
    return Constraint.model_construct(_fields_set=set(fields), **fields)


def _build_fragment(fragment: Mapping[Any, Any]) -> Fragment:
    fields = _fields(fragment)
    fields["steps"] = [_build_step(s) for s in fragment["steps"]]
    return Fragment.model_construct(_fields_set=set(fields), **fields)


def _build_raw_flow(data: Mapping[Any, Any]) -> RawFlow:
    fields = _fields(data)
    actor = _fields(data["actor"])
    fields["actor"] = Actor.model_construct(_fields_set=set(actor), **actor)
    fields["constraints"] = [_build_constraint(c) for c in data["constraints"]]
    fields["steps"] = [_build_step(s) for s in data["steps"]]
    if "fragments" in data:
        fields["fragments"] = [_build_fragment(f) for f in data["fragments"]]
    return RawFlow.model_construct(_fields_set=set(fields), **fields)


# =============================================================================
# Public
# =============================================================================


def validate_raw_flow(data: Any) -> RawFlow:
    """Validate an untyped parsed-YAML value and return it as a RawFlow.

    Checks run in document order and the first failure wins.

    Args:
        data: Value produced by the YAML deserializer.

    Returns:
        The same content typed as :class:`RawFlow`.

    Raises:
        ParseError: On the first structural violation, with ``path`` set to
            the offending location.

    Examples:
        >>> raw = validate_raw_flow({
        ...     "name": "hello",
        ...     "actor": {"role": "visitor"},
        ...     "constraints": ["stay on example.com"],
        ...     "steps": [{"action": "navigate", "url": "https://example.com"}],
        ... })
        >>> raw.constraints
        ['stay on example.com']
    """
    # -- Top-level shape --
    if not _is_record(data):
        _fail("Flow definition must be an object")

    # -- name --
    if not _is_non_empty_string(data.get("name")):
        _fail("'name' must be a non-empty string", "name")

    # -- description (optional) --
    if "description" in data and not isinstance(data["description"], str):
        _fail("'description' must be a string", "description")

    # -- actor --
    if "actor" not in data:
        _fail("'actor' is required", "actor")
    _validate_actor(data["actor"])

    # -- constraints --
    constraints = data.get("constraints")
    if not _is_array(constraints):
        _fail("'constraints' must be an array", "constraints")
    for i, constraint in enumerate(constraints):
        _validate_constraint(constraint, i)

    # -- steps --
    steps = data.get("steps")
    if not _is_array(steps) or len(steps) == 0:
        _fail("'steps' must be a non-empty array", "steps")
    for i, step in enumerate(steps):
        validate_step(step, i)

    # -- fragments (optional) --
    if "fragments" in data:
        fragments = data["fragments"]
        if not _is_array(fragments):
            _fail("'fragments' must be an array", "fragments")
        for i, fragment in enumerate(fragments):
            _validate_fragment(fragment, i)

    return _build_raw_flow(data)
