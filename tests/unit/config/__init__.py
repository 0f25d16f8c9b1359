"""Unit tests for configuration module.

This package contains tests for UsermindConfig and FlowsConfig, including
defaults, file loading, environment variable overrides and validation errors.
"""

from __future__ import annotations
