"""Tests for the shared value types (capture, metrics, error, pipeline state)."""

import pytest
from pydantic import ValidationError

from voiceprobe.core.exceptions import EmptyCaptureError
from voiceprobe.core.models import (
    AnalysisResult,
    AudioCapture,
    ErrorInfo,
    Metrics,
    PipelinePhase,
    PipelineState,
    Verdict,
)


class TestAudioCapture:
    def test_size_and_empty(self):
        assert AudioCapture(data=b"abc").size == 3
        assert AudioCapture(data=b"").is_empty is True

    def test_is_immutable(self):
        capture = AudioCapture(data=b"abc")
        with pytest.raises(ValidationError):
            capture.data = b"xyz"


class TestMetrics:
    @pytest.mark.parametrize("value", [-1, 101])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError):
            Metrics(authentication_rate=value, naturalness=80, stability=80)

    def test_values_order(self):
        metrics = Metrics(authentication_rate=1, naturalness=2, stability=3)
        assert metrics.values() == (1, 2, 3)


class TestErrorInfo:
    def test_from_domain_error(self):
        """Domain errors keep their code and detail."""
        info = ErrorInfo.from_exception(EmptyCaptureError())
        assert info.code == "EMPTY_CAPTURE"
        assert info.detail == "The recording contains no audio"

    def test_from_unexpected_error(self):
        """Other exceptions are reported as evaluation failures."""
        info = ErrorInfo.from_exception(RuntimeError("boom"))
        assert info.code == "EVALUATION_FAILURE"
        assert info.detail == "boom"

    def test_from_exception_without_message(self):
        info = ErrorInfo.from_exception(KeyError())
        assert info.detail == "KeyError"

    def test_caller_default_code(self):
        """Callers can label unexpected errors with their own code."""
        info = ErrorInfo.from_exception(OSError("gone"), default_code="DEVICE_UNAVAILABLE")
        assert info.code == "DEVICE_UNAVAILABLE"
        assert info.detail == "gone"

    def test_domain_error_ignores_default_code(self):
        info = ErrorInfo.from_exception(EmptyCaptureError(), default_code="DEVICE_UNAVAILABLE")
        assert info.code == "EMPTY_CAPTURE"


class TestPipelineState:
    def test_default_is_idle(self):
        state = PipelineState()
        assert state.phase is PipelinePhase.idle
        assert state.result is None
        assert state.error is None
        assert state.is_busy is False

    def test_result_requires_result_phase(self, authentic_metrics):
        result = AnalysisResult(metrics=authentic_metrics, verdict=Verdict.authentic)
        with pytest.raises(ValidationError):
            PipelineState(phase=PipelinePhase.idle, result=result)
        with pytest.raises(ValidationError):
            PipelineState(phase=PipelinePhase.result)

    def test_error_requires_failed_phase(self):
        error = ErrorInfo(code="X", detail="x", timestamp="t")
        with pytest.raises(ValidationError):
            PipelineState(phase=PipelinePhase.analyzing, error=error)
        with pytest.raises(ValidationError):
            PipelineState(phase=PipelinePhase.failed)

    @pytest.mark.parametrize(
        "phase,busy",
        [(PipelinePhase.recording, True), (PipelinePhase.analyzing, True)],
    )
    def test_busy_phases(self, phase, busy):
        assert PipelineState(phase=phase).is_busy is busy
