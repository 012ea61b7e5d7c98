"""Pipeline state machine as a pure reducer.

``reduce(state, event)`` computes the next ``PipelineState`` without side
effects. Events that do not apply to the current phase (a second start
while recording, a completion for an older run) return the state object
unchanged, which lets the driver detect a rejected command by identity.

    idle --StartRecording--> recording --StopRecording--> analyzing
    analyzing --AnalysisSucceeded--> result
    recording | analyzing --OperationFailed--> failed
    any --Reset--> idle
"""

from dataclasses import dataclass

from voiceprobe.core.models import AnalysisResult, ErrorInfo, PipelinePhase, PipelineState


@dataclass(frozen=True)
class StartRecording:
    """User asked to start a new recording run."""


@dataclass(frozen=True)
class StopRecording:
    """The recorder finalized its capture; analysis begins."""


@dataclass(frozen=True)
class AnalysisSucceeded:
    """The evaluator returned a result for run ``run_id``."""

    run_id: int
    result: AnalysisResult


@dataclass(frozen=True)
class OperationFailed:
    """Recording or evaluation for run ``run_id`` raised an error."""

    run_id: int
    error: ErrorInfo


@dataclass(frozen=True)
class Reset:
    """User asked to return to idle, discarding everything held."""


PipelineEvent = StartRecording | StopRecording | AnalysisSucceeded | OperationFailed | Reset


def initial_state() -> PipelineState:
    return PipelineState()


def reduce(state: PipelineState, event: PipelineEvent) -> PipelineState:
    """Return the state that follows ``state`` after ``event``."""
    phase = state.phase

    if isinstance(event, Reset):
        if phase is PipelinePhase.idle:
            return state
        return PipelineState(phase=PipelinePhase.idle, run_id=state.run_id)

    if isinstance(event, StartRecording):
        if phase is not PipelinePhase.idle:
            return state
        return PipelineState(phase=PipelinePhase.recording, run_id=state.run_id + 1)

    if isinstance(event, StopRecording):
        if phase is not PipelinePhase.recording:
            return state
        return PipelineState(phase=PipelinePhase.analyzing, run_id=state.run_id)

    if isinstance(event, AnalysisSucceeded):
        if phase is not PipelinePhase.analyzing or event.run_id != state.run_id:
            return state
        return PipelineState(
            phase=PipelinePhase.result, run_id=state.run_id, result=event.result
        )

    if isinstance(event, OperationFailed):
        if phase not in (PipelinePhase.recording, PipelinePhase.analyzing):
            return state
        if event.run_id != state.run_id:
            return state
        return PipelineState(phase=PipelinePhase.failed, run_id=state.run_id, error=event.error)

    raise TypeError(f"Unknown pipeline event: {event!r}")
