"""Command-line interface for usermind."""

from __future__ import annotations
