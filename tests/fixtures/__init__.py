"""Shared test fixtures for the usermind test suite.

Available Fixtures
==================

Configuration (from tests/fixtures/config.py)
---------------------------------------------

Fixtures:
    sample_config_yaml: usermind.yaml content with non-default flow settings.

    sample_config: Loads a UsermindConfig from that file inside a temporary
        directory, with HOME redirected so user config never leaks in.

Example:
    >>> def test_config_usage(sample_config):
    ...     assert sample_config.flows.directory == Path("journeys")

Flow documents (from tests/fixtures/flows.py)
---------------------------------------------

Fixtures:
    minimal_yaml: Smallest valid flow.
    hello_yaml: Navigate to example.com and check the heading.
    login_yaml: Actor session data, an object constraint and a fragment.
    flows_dir: A directory with two valid flows (one nested), one invalid
        flow and a non-flow file.

Example:
    >>> def test_parse(hello_yaml):
    ...     flow = parse_flow(hello_yaml)
    ...     assert flow.name == "hello"
"""

from __future__ import annotations

from tests.fixtures.config import sample_config, sample_config_yaml
from tests.fixtures.flows import (
    HELLO_YAML,
    LOGIN_YAML,
    MINIMAL_YAML,
    flows_dir,
    hello_yaml,
    login_yaml,
    minimal_yaml,
)

__all__ = [
    # Configuration
    "sample_config",
    "sample_config_yaml",
    # Flow documents
    "MINIMAL_YAML",
    "HELLO_YAML",
    "LOGIN_YAML",
    "minimal_yaml",
    "hello_yaml",
    "login_yaml",
    "flows_dir",
]
