"""usermind - declarative flows for automated agent journeys.

Parse a flow:
    >>> from usermind import parse_flow
    >>> flow = parse_flow(yaml_text)

Record what happened when running it:
    >>> from usermind import EvidenceBundle
    >>> bundle = EvidenceBundle.start(flow)
"""

from __future__ import annotations

__version__ = "0.0.1"

from usermind.dsl import (  # noqa: E402
    ActionType,
    Flow,
    FlowNotFoundError,
    ParseError,
    load_flow,
    parse_flow,
)
from usermind.evidence import EvidenceBundle  # noqa: E402
from usermind.exceptions import UsermindError  # noqa: E402

__all__ = [
    "__version__",
    "ActionType",
    "Flow",
    "ParseError",
    "FlowNotFoundError",
    "UsermindError",
    "parse_flow",
    "load_flow",
    "EvidenceBundle",
]
