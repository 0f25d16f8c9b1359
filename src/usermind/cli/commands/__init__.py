"""CLI subcommands."""

from __future__ import annotations

from usermind.cli.commands.validate import validate

__all__ = ["validate"]
