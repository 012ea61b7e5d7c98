"""
Pydantic v2 value types shared by the capture, evaluation and presentation layers.

Every model here is frozen: a capture, a result or a pipeline state is
replaced wholesale, never mutated in place.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from voiceprobe.core.exceptions import VoiceProbeError


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Capture
# ---------------------------------------------------------------------------


class AudioCapture(BaseModel):
    """A finalized in-memory audio payload from one recording session."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    media_type: str = "application/octet-stream"
    chunk_count: int = 0
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def size(self) -> int:
        """Payload length in bytes."""
        return len(self.data)

    @property
    def is_empty(self) -> bool:
        return not self.data


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class Verdict(StrEnum):
    """Binary classification of a capture."""

    authentic = "authentic"
    synthetic = "synthetic"


class Metrics(BaseModel):
    """Three bounded scores, each a rounded percentage."""

    model_config = ConfigDict(frozen=True)

    authentication_rate: int = Field(ge=0, le=100)
    naturalness: int = Field(ge=0, le=100)
    stability: int = Field(ge=0, le=100)

    def values(self) -> tuple[int, int, int]:
        return (self.authentication_rate, self.naturalness, self.stability)


class AnalysisResult(BaseModel):
    """Metrics and verdict from one successful evaluation."""

    model_config = ConfigDict(frozen=True)

    metrics: Metrics
    verdict: Verdict
    model_used: str = ""
    analyzed_at: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Error
# ---------------------------------------------------------------------------


class ErrorInfo(BaseModel):
    """Displayable error envelope carried by a failed pipeline state."""

    model_config = ConfigDict(frozen=True)

    code: str
    detail: str
    timestamp: str

    @classmethod
    def from_exception(
        cls, exc: BaseException, default_code: str = "EVALUATION_FAILURE"
    ) -> "ErrorInfo":
        """Build an envelope from any exception.

        Domain errors keep their own code and detail; anything else is
        reported under ``default_code``.
        """
        if isinstance(exc, VoiceProbeError):
            return cls(code=exc.code, detail=exc.detail, timestamp=exc.timestamp)
        return cls(
            code=default_code,
            detail=str(exc) or type(exc).__name__,
            timestamp=_utcnow().isoformat(),
        )


# ---------------------------------------------------------------------------
# Pipeline state
# ---------------------------------------------------------------------------


class PipelinePhase(StrEnum):
    """Possible phases of the capture-and-evaluate pipeline."""

    idle = "idle"
    recording = "recording"
    analyzing = "analyzing"
    result = "result"
    failed = "failed"


class PipelineState(BaseModel):
    """The single live state of the pipeline.

    ``run_id`` identifies the recording run that produced the state, so a
    completion arriving for an older run can be told apart and ignored.
    """

    model_config = ConfigDict(frozen=True)

    phase: PipelinePhase = PipelinePhase.idle
    run_id: int = 0
    result: AnalysisResult | None = None
    error: ErrorInfo | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> "PipelineState":
        if (self.result is not None) != (self.phase is PipelinePhase.result):
            raise ValueError("result must be set exactly when phase is 'result'")
        if (self.error is not None) != (self.phase is PipelinePhase.failed):
            raise ValueError("error must be set exactly when phase is 'failed'")
        return self

    @property
    def is_busy(self) -> bool:
        """True while a recording or an evaluation is in flight."""
        return self.phase in (PipelinePhase.recording, PipelinePhase.analyzing)
