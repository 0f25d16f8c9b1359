"""Flow DSL for usermind.

Flows are YAML documents describing an automated agent journey: the actor
the agent plays, the constraints it must respect, and the steps it performs.

Example:
    >>> from usermind.dsl import load_flow
    >>> flow = load_flow("flows/hello.yaml")
    >>> [step.action.value for step in flow.steps]
    ['navigate', 'assert']
"""

from __future__ import annotations

from usermind.dsl.errors import DSLError, FlowNotFoundError, ParseError
from usermind.dsl.loader import FlowFileResult, FlowLocator, check_flow_files, load_flow
from usermind.dsl.serialization import (
    ACTION_TYPES,
    REQUIRED_FIELDS,
    Actor,
    AssertStep,
    ClickStep,
    Constraint,
    ConstraintInput,
    FillStep,
    Flow,
    Fragment,
    HoverStep,
    NavigateStep,
    RawFlow,
    SelectStep,
    Step,
    WaitStep,
    normalize_flow,
    parse_flow,
    validate_raw_flow,
)
from usermind.dsl.types import ActionType, ConstraintScope

__all__ = [
    # Errors
    "DSLError",
    "ParseError",
    "FlowNotFoundError",
    # Types
    "ActionType",
    "ConstraintScope",
    "ACTION_TYPES",
    "REQUIRED_FIELDS",
    # Models
    "Flow",
    "RawFlow",
    "Actor",
    "Constraint",
    "ConstraintInput",
    "Fragment",
    "Step",
    "NavigateStep",
    "ClickStep",
    "FillStep",
    "AssertStep",
    "SelectStep",
    "HoverStep",
    "WaitStep",
    # Parsing
    "parse_flow",
    "validate_raw_flow",
    "normalize_flow",
    # Files
    "FlowLocator",
    "FlowFileResult",
    "load_flow",
    "check_flow_files",
]
