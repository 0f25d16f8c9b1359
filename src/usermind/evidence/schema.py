"""Access to the published evidence bundle JSON Schema.

The schema (``usermind/schemas/evidence-bundle.schema.json``, draft 2020-12)
is hand-authored for tools outside Python. Its enums must stay identical to
:class:`BundleStatus`, :class:`StepResultStatus` and :class:`ActionType`.
"""

from __future__ import annotations

import json
from functools import cache
from importlib import resources
from typing import Any

__all__ = [
    "EVIDENCE_BUNDLE_SCHEMA_FILE",
    "load_evidence_bundle_schema",
]

EVIDENCE_BUNDLE_SCHEMA_FILE = "evidence-bundle.schema.json"


@cache
def _schema_text() -> str:
    return (
        resources.files("usermind")
        .joinpath("schemas", EVIDENCE_BUNDLE_SCHEMA_FILE)
        .read_text(encoding="utf-8")
    )


def load_evidence_bundle_schema() -> dict[str, Any]:
    """Return the evidence bundle JSON Schema as a fresh dict."""
    schema: dict[str, Any] = json.loads(_schema_text())
    return schema
