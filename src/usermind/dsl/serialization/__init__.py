"""Flow document parsing, validation and normalization.

The serialization system includes:
- registry.py: Static table of action kinds and their required fields
- schema.py: Pydantic models defining the flow format
- validation.py: Structural validator producing a RawFlow
- normalize.py: RawFlow to Flow conversion (constraint shorthand expansion)
- parser.py: YAML entry point tying the stages together

Example flow file:
    name: hello
    actor:
      role: visitor
    constraints:
      - do not navigate away from example.com
    steps:
      - action: navigate
        url: https://example.com
      - action: assert
        selector: h1
        text: Example Domain
"""

from __future__ import annotations

from usermind.dsl.errors import ParseError
from usermind.dsl.serialization.normalize import normalize_constraint, normalize_flow
from usermind.dsl.serialization.parser import parse_flow, parse_yaml
from usermind.dsl.serialization.registry import (
    ACTION_TYPES,
    REQUIRED_FIELDS,
    is_action_type,
)
from usermind.dsl.serialization.schema import (
    STEP_MODELS,
    Actor,
    AssertStep,
    BaseStep,
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
)
from usermind.dsl.serialization.validation import validate_raw_flow, validate_step

__all__ = [
    # Errors
    "ParseError",
    # Registry
    "ACTION_TYPES",
    "REQUIRED_FIELDS",
    "is_action_type",
    # Schema
    "Actor",
    "Constraint",
    "ConstraintInput",
    "BaseStep",
    "NavigateStep",
    "ClickStep",
    "FillStep",
    "AssertStep",
    "SelectStep",
    "HoverStep",
    "WaitStep",
    "Step",
    "STEP_MODELS",
    "Fragment",
    "RawFlow",
    "Flow",
    # Pipeline
    "parse_yaml",
    "validate_raw_flow",
    "validate_step",
    "normalize_constraint",
    "normalize_flow",
    "parse_flow",
]
