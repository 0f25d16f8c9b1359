"""Action registry for flow steps.

Static, read-only tables describing the step language:

- ``ACTION_TYPES``: every recognised action identifier, in canonical order.
- ``REQUIRED_FIELDS``: for each action, the fields a step must carry.

``action`` itself is implicitly required and is not listed. The optional
base-step fields ``description`` and ``condition`` are never required.
Adding an action kind takes one ``ActionType`` member, one step model in
:mod:`usermind.dsl.serialization.schema`, and one entry here.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from usermind.dsl.types import ActionType

__all__ = [
    "ACTION_TYPES",
    "REQUIRED_FIELDS",
    "POSITIVE_NUMBER_FIELDS",
    "is_action_type",
]

ACTION_TYPES: tuple[str, ...] = tuple(action.value for action in ActionType)

REQUIRED_FIELDS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        ActionType.NAVIGATE.value: ("url",),
        ActionType.CLICK.value: ("selector",),
        ActionType.FILL.value: ("selector", "value"),
        ActionType.ASSERT.value: ("selector", "text"),
        ActionType.SELECT.value: ("selector", "value"),
        ActionType.HOVER.value: ("selector",),
        ActionType.WAIT.value: ("duration",),
    }
)

# Required fields that must also be a finite number greater than zero.
POSITIVE_NUMBER_FIELDS: frozenset[str] = frozenset({"duration"})


def is_action_type(value: Any) -> bool:
    """Return True if ``value`` is a recognised action identifier."""
    return isinstance(value, str) and value in REQUIRED_FIELDS
