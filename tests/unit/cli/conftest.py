"""Shared fixtures for CLI command tests.

Common fixtures available from parent conftest.py:
- cli_runner: Click CLI test runner (from tests/conftest.py)
- temp_dir: Temporary directory for test files (from tests/conftest.py)
- clean_env: Clean environment without USERMIND_ vars (from tests/conftest.py)
- flows_dir: Directory of sample flows (from tests/fixtures/flows.py)
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def workspace(
    temp_dir: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
) -> Path:
    """Run the CLI from an isolated project directory.

    The working directory is the temporary directory and the user config
    location points inside it, so only files a test writes are seen.
    """
    monkeypatch.chdir(temp_dir)
    monkeypatch.setattr(Path, "home", lambda: temp_dir)
    return temp_dir
