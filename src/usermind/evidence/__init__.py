"""Evidence produced by flow executions.

Runners record what happened during a flow run in an :class:`EvidenceBundle`;
reporters read it back, in Python or through the published JSON Schema.
"""

from __future__ import annotations

from usermind.evidence.models import (
    ActorSnapshot,
    BundleStatus,
    EvidenceBundle,
    EvidenceError,
    EvidenceSealedError,
    EvidenceStepResult,
    StepResultStatus,
)
from usermind.evidence.schema import load_evidence_bundle_schema

__all__ = [
    "ActorSnapshot",
    "BundleStatus",
    "StepResultStatus",
    "EvidenceBundle",
    "EvidenceStepResult",
    "EvidenceError",
    "EvidenceSealedError",
    "load_evidence_bundle_schema",
]
