"""usermind exception hierarchy.

All package-level exceptions can be imported from here:
    from usermind.exceptions import ConfigError, UsermindError

DSL-specific errors live in :mod:`usermind.dsl.errors`.
"""

from __future__ import annotations

# Base exception
from usermind.exceptions.base import UsermindError

# Configuration exceptions
from usermind.exceptions.config import ConfigError

__all__ = [
    "UsermindError",
    "ConfigError",
]
