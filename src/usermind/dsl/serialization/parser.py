"""Flow YAML parser.

This module provides the entry points that turn YAML text into a
:class:`Flow`:
- parse_yaml: Deserialize YAML text, converting syntax errors to ParseError
- parse_flow: Main entry point - deserialize, validate, normalize

Parsing is a pure function of the input text. Either a fully valid
:class:`Flow` is returned or a :class:`ParseError` is raised; partial results
never escape.
"""

from __future__ import annotations

from typing import Any

import yaml

from usermind.dsl.errors import ParseError
from usermind.dsl.serialization.normalize import normalize_flow
from usermind.dsl.serialization.schema import Flow
from usermind.dsl.serialization.validation import validate_raw_flow
from usermind.logging import get_logger

__all__ = [
    "INVALID_YAML_MESSAGE",
    "parse_yaml",
    "parse_flow",
]

logger = get_logger(__name__)

INVALID_YAML_MESSAGE = "Invalid YAML syntax"


def parse_yaml(yaml_content: str) -> Any:
    """Deserialize YAML text into an untyped tree.

    Args:
        yaml_content: YAML string to parse.

    Returns:
        Whatever the document holds (mapping, list, scalar, or None for an
        empty document). Shape checks are left to the validator.

    Raises:
        ParseError: If the text is not valid YAML. The message is always
            ``"Invalid YAML syntax"``; the YAML library's error is attached
            as ``cause`` and chained as ``__cause__``.
    """
    try:
        # safe_load only builds plain Python types
        return yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        line_number = None
        if getattr(e, "problem_mark", None) is not None:
            line_number = e.problem_mark.line + 1  # Convert to 1-indexed
        logger.debug("flow_yaml_invalid", line=line_number, error=str(e))
        raise ParseError(INVALID_YAML_MESSAGE, cause=e) from e


def parse_flow(yaml_content: str) -> Flow:
    """Parse YAML text into a fully validated and normalized :class:`Flow`.

    Orchestrates the parsing pipeline:
    1. Deserialize YAML (syntax errors become ParseError without a path)
    2. Validate the structure (first violation raises ParseError with a path)
    3. Normalize shorthand constraints

    Args:
        yaml_content: YAML string to parse.

    Returns:
        The normalized flow.

    Raises:
        ParseError: On invalid YAML syntax or the first structural violation.

    Examples:
        >>> flow = parse_flow('''
        ... name: hello
        ... actor:
        ...   role: visitor
        ... constraints:
        ...   - do not navigate away from example.com
        ... steps:
        ...   - action: navigate
        ...     url: https://example.com
        ... ''')
        >>> flow.constraints[0].rule
        'do not navigate away from example.com'
    """
    data = parse_yaml(yaml_content)
    raw = validate_raw_flow(data)
    flow = normalize_flow(raw)

    logger.debug(
        "flow_parsed",
        flow_name=flow.name,
        steps=len(flow.steps),
        fragments=len(flow.fragments or []),
    )
    return flow
