"""Pydantic models for flow documents.

This module defines the in-memory shape of a flow:
- Actor: identity the agent assumes while running a flow
- Constraint / ConstraintInput: guardrails, canonical and shorthand forms
- Step: discriminated union of the seven action steps
- Fragment: named, reusable group of steps
- RawFlow: validated flow before constraint normalization
- Flow: canonical, normalized flow

Instances produced by the parser are built from an already validated tree
(see :mod:`usermind.dsl.serialization.validation`) with ``model_construct``,
so field values are exactly what the document held. Every model allows extra
keys; unknown fields survive parsing unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from usermind.dsl.types import ActionType, ConstraintScope

__all__ = [
    # Identity and guardrails
    "Actor",
    "Constraint",
    "ConstraintInput",
    # Step models - base
    "BaseStep",
    # Step models - concrete types
    "NavigateStep",
    "ClickStep",
    "FillStep",
    "AssertStep",
    "SelectStep",
    "HoverStep",
    "WaitStep",
    # Discriminated union
    "Step",
    "STEP_MODELS",
    # Composition
    "Fragment",
    "RawFlow",
    "Flow",
]


class FlowModel(BaseModel):
    """Base for all flow models: unknown keys are kept, not rejected."""

    model_config = ConfigDict(extra="allow")

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain data, omitting fields the document did not set."""
        return self.model_dump(mode="json", exclude_unset=True)


# =============================================================================
# Actor and Constraints
# =============================================================================


class Actor(FlowModel):
    """Role-aware identity that the agent assumes during flow execution.

    Fields:
        role: The role the agent assumes (e.g. "admin", "visitor")
        permissions: Permissions associated with this role
        session: Key-value session data (credentials, fixtures) interpolated
            at run time
    """

    role: str = Field(..., min_length=1)
    permissions: list[str] | None = None
    session: dict[str, str] | None = None


class Constraint(FlowModel):
    """A guardrail that restricts agent behavior during flow execution."""

    rule: str = Field(..., min_length=1)
    scope: ConstraintScope | None = None

    @property
    def effective_scope(self) -> ConstraintScope:
        """Scope the runner applies; an absent scope means the whole flow."""
        if self.scope is None:
            return ConstraintScope.FLOW
        return ConstraintScope(self.scope)


# Shorthand accepted in documents: a bare rule string or a full constraint.
ConstraintInput = Union[str, Constraint]


# =============================================================================
# Step Models
# =============================================================================


class BaseStep(FlowModel, ABC):
    """Fields shared by every step.

    The ``action`` field is the discriminator of the :data:`Step` union.
    Concrete steps say what they act on through :attr:`target`.
    """

    action: ActionType
    description: str | None = None
    condition: str | None = None

    @property
    @abstractmethod
    def target(self) -> str:
        """What the action operates on, as recorded in evidence."""


class _SelectorStep(BaseStep):
    selector: str

    @property
    def target(self) -> str:
        return str(self.selector)


class NavigateStep(BaseStep):
    """Load a URL in the browser."""

    action: Literal[ActionType.NAVIGATE] = ActionType.NAVIGATE
    url: str

    @property
    def target(self) -> str:
        return str(self.url)


class ClickStep(_SelectorStep):
    action: Literal[ActionType.CLICK] = ActionType.CLICK


class FillStep(_SelectorStep):
    """Type ``value`` into the element matching ``selector``."""

    action: Literal[ActionType.FILL] = ActionType.FILL
    value: str


class AssertStep(_SelectorStep):
    """Check that the element matching ``selector`` shows ``text``."""

    action: Literal[ActionType.ASSERT] = ActionType.ASSERT
    text: str


class SelectStep(_SelectorStep):
    """Choose ``value`` in the dropdown matching ``selector``."""

    action: Literal[ActionType.SELECT] = ActionType.SELECT
    value: str


class HoverStep(_SelectorStep):
    action: Literal[ActionType.HOVER] = ActionType.HOVER


class WaitStep(BaseStep):
    """Pause for ``duration`` milliseconds."""

    action: Literal[ActionType.WAIT] = ActionType.WAIT
    duration: float = Field(..., gt=0, allow_inf_nan=False)

    @property
    def target(self) -> str:
        return str(self.duration)


Step = Annotated[
    Union[
        NavigateStep,
        ClickStep,
        FillStep,
        AssertStep,
        SelectStep,
        HoverStep,
        WaitStep,
    ],
    Field(discriminator="action"),
]

STEP_MODELS: Mapping[ActionType, type[BaseStep]] = MappingProxyType(
    {
        ActionType.NAVIGATE: NavigateStep,
        ActionType.CLICK: ClickStep,
        ActionType.FILL: FillStep,
        ActionType.ASSERT: AssertStep,
        ActionType.SELECT: SelectStep,
        ActionType.HOVER: HoverStep,
        ActionType.WAIT: WaitStep,
    }
)


# =============================================================================
# Fragments and Flows
# =============================================================================


class Fragment(FlowModel):
    """A reusable group of steps.

    Fragments sit beside a flow's top-level steps; the parser does not splice
    them in.
    """

    name: str = Field(..., min_length=1)
    steps: list[Step] = Field(..., min_length=1)
    condition: str | None = None


class _FlowBase(FlowModel):
    name: str = Field(..., min_length=1)
    description: str | None = None
    actor: Actor
    constraints: list[Any]
    steps: list[Step] = Field(..., min_length=1)
    fragments: list[Fragment] | None = None


class RawFlow(_FlowBase):
    """A structurally valid flow whose constraints may still be shorthand."""

    constraints: list[ConstraintInput]


class Flow(_FlowBase):
    """A complete user journey definition.

    Flows describe the sequence of actions an agent performs, the role it
    assumes, and the constraints it must respect. Constraints are always
    full :class:`Constraint` objects.
    """

    constraints: list[Constraint]

    @classmethod
    def from_yaml(cls, yaml_content: str) -> Flow:
        """Create a flow from YAML text.

        Raises:
            ParseError: If the YAML is malformed or the flow is invalid.
        """
        # Import here to avoid circular imports
        from usermind.dsl.serialization.parser import parse_flow

        return parse_flow(yaml_content)

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Top-level keys the flow format does not define."""
        return dict(self.model_extra or {})
