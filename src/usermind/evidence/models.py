"""Evidence models for flow executions.

An :class:`EvidenceBundle` is the execution trace a runner produces for one
flow run: who ran it, when, how each step went, and what went wrong. The
models mirror ``schemas/evidence-bundle.schema.json`` exactly: wire names are
camelCase, extra keys are rejected, and the enums match the schema enums.

Lifecycle:
    bundle = EvidenceBundle.start(flow)           # status=running
    bundle.record_step(0, flow.steps[0], StepResultStatus.PASSED)
    bundle.record_error("TimeoutError", "...", step_index=1)
    bundle.seal(BundleStatus.FAILED)              # sets finishedAt

A sealed bundle is never mutated again.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from usermind.dsl.serialization.schema import Actor, BaseStep, Flow
from usermind.dsl.types import ActionType
from usermind.exceptions import UsermindError
from usermind.logging import get_logger

__all__ = [
    "BundleStatus",
    "StepResultStatus",
    "ActorSnapshot",
    "EvidenceStepResult",
    "EvidenceError",
    "EvidenceBundle",
    "EvidenceSealedError",
]

logger = get_logger(__name__)


def _now() -> str:
    return datetime.now(UTC).isoformat()


# =============================================================================
# Enums
# =============================================================================


class BundleStatus(str, Enum):
    """Overall outcome of a flow execution."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    RUNNING = "running"


class StepResultStatus(str, Enum):
    """Outcome of an individual step execution.

    Values:
        PASSED: The step did what it should
        FAILED: The step's check did not match (functional failure)
        ERROR: Infrastructure problem (timeout, crash, network issue)
        SKIPPED: The step did not run
    """

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"
    SKIPPED = "skipped"


class EvidenceSealedError(UsermindError):
    """Raised when a sealed evidence bundle would be modified.

    Attributes:
        message: Human-readable error message.
        session_id: Session of the sealed bundle.
    """

    def __init__(self, message: str, session_id: str | None = None) -> None:
        self.session_id = session_id
        super().__init__(message)


# =============================================================================
# Models
# =============================================================================


class _EvidenceModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to JSON-ready data using the wire (camelCase) names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class ActorSnapshot(Actor):
    """Copy of the flow's actor taken when a run starts."""

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def of(cls, actor: Actor) -> ActorSnapshot:
        return cls.model_validate(
            actor.model_dump(
                include={"role", "permissions", "session"}, exclude_unset=True
            )
        )


class EvidenceStepResult(_EvidenceModel):
    """Evidence record for a single step within a flow run.

    Fields:
        step_index: Zero-based position of the step in the flow's steps
        action: The action that was executed
        target: URL for navigate, selector for element actions, duration as
            a string for wait
        result: Outcome of the step
        timestamp: ISO-8601 time the step completed
        screenshot: Screenshot path or data URI, None if not captured
        duration_ms: Wall-clock duration in milliseconds, when measured
    """

    step_index: int = Field(..., ge=0)
    action: ActionType
    target: str
    result: StepResultStatus
    timestamp: str
    screenshot: str | None
    duration_ms: float | None = Field(default=None, ge=0)


class EvidenceError(_EvidenceModel):
    """A single error captured during flow execution.

    ``step_index`` is None for flow-level errors such as session setup
    failures.
    """

    code: str
    message: str
    step_index: int | None = Field(..., ge=0)
    timestamp: str
    details: str | None = None


class EvidenceBundle(_EvidenceModel):
    """Complete execution trace for a single flow run."""

    flow_name: str = Field(..., min_length=1)
    session_id: str = Field(..., min_length=1)
    actor: ActorSnapshot
    started_at: str
    finished_at: str | None
    status: BundleStatus
    steps: list[EvidenceStepResult]
    errors: list[EvidenceError]

    @classmethod
    def start(cls, flow: Flow, session_id: str | None = None) -> EvidenceBundle:
        """Create a running bundle for a new execution of ``flow``.

        Args:
            flow: The flow about to run.
            session_id: Identifier for the run; a random UUID if omitted.
        """
        bundle = cls(
            flow_name=flow.name,
            session_id=session_id or str(uuid.uuid4()),
            actor=ActorSnapshot.of(flow.actor),
            started_at=_now(),
            finished_at=None,
            status=BundleStatus.RUNNING,
            steps=[],
            errors=[],
        )
        logger.debug(
            "evidence_bundle_started",
            flow_name=bundle.flow_name,
            session_id=bundle.session_id,
        )
        return bundle

    @property
    def sealed(self) -> bool:
        return self.status != BundleStatus.RUNNING

    def _ensure_open(self) -> None:
        if self.sealed:
            raise EvidenceSealedError(
                f"Evidence bundle for session '{self.session_id}' is sealed "
                f"with status '{self.status.value}'",
                session_id=self.session_id,
            )

    def record_step(
        self,
        step_index: int,
        step: BaseStep,
        result: StepResultStatus,
        *,
        screenshot: str | None = None,
        duration_ms: float | None = None,
        timestamp: str | None = None,
    ) -> EvidenceStepResult:
        """Append the result of one executed step.

        Raises:
            EvidenceSealedError: If the bundle is already sealed.
        """
        self._ensure_open()
        fields: dict[str, Any] = {
            "step_index": step_index,
            "action": step.action,
            "target": step.target,
            "result": result,
            "timestamp": timestamp or _now(),
            "screenshot": screenshot,
        }
        if duration_ms is not None:
            fields["duration_ms"] = duration_ms
        entry = EvidenceStepResult(**fields)
        self.steps.append(entry)
        return entry

    def record_error(
        self,
        code: str,
        message: str,
        *,
        step_index: int | None = None,
        details: str | None = None,
        timestamp: str | None = None,
    ) -> EvidenceError:
        """Append an error; ``step_index`` None marks a flow-level error.

        Raises:
            EvidenceSealedError: If the bundle is already sealed.
        """
        self._ensure_open()
        fields: dict[str, Any] = {
            "code": code,
            "message": message,
            "step_index": step_index,
            "timestamp": timestamp or _now(),
        }
        if details is not None:
            fields["details"] = details
        entry = EvidenceError(**fields)
        self.errors.append(entry)
        return entry

    def seal(self, status: BundleStatus, *, finished_at: str | None = None) -> None:
        """Close the bundle with a terminal status.

        Raises:
            EvidenceSealedError: If the bundle is already sealed or
                ``status`` is RUNNING.
        """
        self._ensure_open()
        if status == BundleStatus.RUNNING:
            raise EvidenceSealedError(
                "A bundle cannot be sealed with status 'running'",
                session_id=self.session_id,
            )
        self.status = BundleStatus(status)
        self.finished_at = finished_at or _now()
        logger.info(
            "evidence_bundle_sealed",
            flow_name=self.flow_name,
            session_id=self.session_id,
            status=self.status.value,
            steps=len(self.steps),
            errors=len(self.errors),
        )
