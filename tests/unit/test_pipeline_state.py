"""Tests for the pure pipeline reducer.

Every transition of the state table is exercised, along with the
rejected events that must leave the state object untouched.
"""

import pytest

from voiceprobe.core.models import (
    AnalysisResult,
    ErrorInfo,
    PipelinePhase,
    PipelineState,
    Verdict,
)
from voiceprobe.services.pipeline.state import (
    AnalysisSucceeded,
    OperationFailed,
    Reset,
    StartRecording,
    StopRecording,
    initial_state,
    reduce,
)


@pytest.fixture
def result(authentic_metrics):
    return AnalysisResult(metrics=authentic_metrics, verdict=Verdict.authentic)


@pytest.fixture
def error():
    return ErrorInfo(code="EMPTY_CAPTURE", detail="empty", timestamp="2026-01-01T00:00:00")


def _recording(run_id=1):
    return PipelineState(phase=PipelinePhase.recording, run_id=run_id)


def _analyzing(run_id=1):
    return PipelineState(phase=PipelinePhase.analyzing, run_id=run_id)


class TestHappyPath:
    """idle → recording → analyzing → result."""

    def test_initial_state_is_idle(self):
        assert initial_state().phase is PipelinePhase.idle

    def test_start_enters_recording_with_new_run(self):
        state = reduce(initial_state(), StartRecording())
        assert state.phase is PipelinePhase.recording
        assert state.run_id == 1

    def test_stop_enters_analyzing(self):
        state = reduce(_recording(), StopRecording())
        assert state.phase is PipelinePhase.analyzing
        assert state.run_id == 1

    def test_success_carries_result(self, result):
        state = reduce(_analyzing(), AnalysisSucceeded(run_id=1, result=result))
        assert state.phase is PipelinePhase.result
        assert state.result == result
        assert state.error is None

    def test_run_ids_increase_across_runs(self, result):
        state = initial_state()
        for expected_run in (1, 2, 3):
            state = reduce(state, StartRecording())
            assert state.run_id == expected_run
            state = reduce(state, StopRecording())
            state = reduce(state, AnalysisSucceeded(run_id=expected_run, result=result))
            state = reduce(state, Reset())


class TestFailures:
    def test_failure_while_recording(self, error):
        state = reduce(_recording(), OperationFailed(run_id=1, error=error))
        assert state.phase is PipelinePhase.failed
        assert state.error == error

    def test_failure_while_analyzing(self, error):
        state = reduce(_analyzing(), OperationFailed(run_id=1, error=error))
        assert state.phase is PipelinePhase.failed


class TestRejectedEvents:
    """Inapplicable events return the very same state object."""

    @pytest.mark.parametrize(
        "state",
        [_recording(), _analyzing(), PipelineState(phase=PipelinePhase.idle, run_id=3)],
        ids=["recording", "analyzing", "idle"],
    )
    def test_start_only_from_idle(self, state):
        if state.phase is PipelinePhase.idle:
            assert reduce(state, StartRecording()) is not state
        else:
            assert reduce(state, StartRecording()) is state

    def test_stop_outside_recording(self):
        state = initial_state()
        assert reduce(state, StopRecording()) is state

    def test_stale_success_ignored(self, result):
        state = _analyzing(run_id=2)
        assert reduce(state, AnalysisSucceeded(run_id=1, result=result)) is state

    def test_success_after_reset_ignored(self, result):
        state = reduce(_analyzing(), Reset())
        assert reduce(state, AnalysisSucceeded(run_id=1, result=result)) is state

    def test_stale_failure_ignored(self, error):
        state = _recording(run_id=2)
        assert reduce(state, OperationFailed(run_id=1, error=error)) is state

    def test_failure_in_idle_ignored(self, error):
        state = initial_state()
        assert reduce(state, OperationFailed(run_id=0, error=error)) is state

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(initial_state(), object())


class TestReset:
    """Reset from any state returns to idle with nothing held."""

    def test_from_every_phase(self, result, error):
        states = [
            _recording(),
            _analyzing(),
            PipelineState(phase=PipelinePhase.result, run_id=1, result=result),
            PipelineState(phase=PipelinePhase.failed, run_id=1, error=error),
        ]
        for state in states:
            after = reduce(state, Reset())
            assert after.phase is PipelinePhase.idle
            assert after.result is None
            assert after.error is None
            assert after.run_id == state.run_id

    def test_idle_reset_is_noop(self):
        state = initial_state()
        assert reduce(state, Reset()) is state
