"""DSL type definitions for usermind flows.

This module defines the enumerations shared by the flow models, the
structural validator and the evidence contract.
"""

from __future__ import annotations

from enum import Enum

__all__ = ["ActionType", "ConstraintScope"]


class ActionType(str, Enum):
    """Step action kinds.

    The ``action`` field of every step holds one of these values and acts as
    the discriminator of the step union. Member order is the canonical order
    used in error messages and in the evidence JSON Schema.
    """

    NAVIGATE = "navigate"
    CLICK = "click"
    FILL = "fill"
    ASSERT = "assert"
    SELECT = "select"
    HOVER = "hover"
    WAIT = "wait"


class ConstraintScope(str, Enum):
    """Applicability of a constraint.

    An absent scope means ``FLOW`` at run time; the parser never fills it in.
    """

    FLOW = "flow"
    STEP = "step"
