"""Output formatting utilities for the usermind CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

__all__ = [
    "OutputFormat",
    "format_error",
    "format_json",
]


class OutputFormat(str, Enum):
    """Supported output formats for CLI commands.

    Values:
        TEXT: Human-readable lines (default).
        JSON: Machine-readable JSON output.
    """

    TEXT = "text"
    JSON = "json"


def format_error(message: str, details: list[str] | None = None) -> str:
    """Format an error message with optional indented details.

    Example:
        >>> print(format_error(
        ...     "Flow parsing failed: 'steps' must be a non-empty array",
        ...     details=["Path: steps"],
        ... ))
        Error: Flow parsing failed: 'steps' must be a non-empty array
          Path: steps
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    return "\n".join(lines)


def format_json(data: Any) -> str:
    """Format data as indented JSON.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    return json.dumps(data, indent=2)
