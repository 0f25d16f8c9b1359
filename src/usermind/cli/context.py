"""Shared CLI state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from usermind.config import UsermindConfig

__all__ = ["ExitCode", "CLIContext"]


class ExitCode(IntEnum):
    """Exit codes for the usermind CLI.

    Follows Unix conventions: 0 for success, 1 for failure (invalid flows,
    bad configuration). Usage errors exit with 2 and are reported by click
    itself.
    """

    SUCCESS = 0
    FAILURE = 1


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Values resolved by the top-level command for its subcommands.

    Attributes:
        config: Loaded configuration.
    """

    config: UsermindConfig
