"""
VoiceProbe exception hierarchy.

All application-specific exceptions inherit from VoiceProbeError so the
pipeline can turn any of them into a displayable error state.
"""

from datetime import UTC, datetime


class VoiceProbeError(Exception):
    """Base exception for all VoiceProbe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICEPROBE_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------


class MicrophonePermissionError(VoiceProbeError):
    """Raised when access to the microphone is refused."""

    def __init__(self, detail: str = "Microphone access was denied") -> None:
        super().__init__(detail=detail, code="PERMISSION_DENIED")


class DeviceUnavailableError(VoiceProbeError):
    """Raised when no usable audio input device exists."""

    def __init__(self, detail: str = "No audio input device is available") -> None:
        super().__init__(detail=detail, code="DEVICE_UNAVAILABLE")


class NotRecordingError(VoiceProbeError):
    """Raised when stopping a recorder that is not active."""

    def __init__(self) -> None:
        super().__init__(detail="No recording is active", code="NOT_RECORDING")


class RecordingAlreadyActiveError(VoiceProbeError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
        )


# ---------------------------------------------------------------------------
# Evaluator
# ---------------------------------------------------------------------------


class EmptyCaptureError(VoiceProbeError):
    """Raised when an evaluator receives a capture with no audio bytes."""

    def __init__(self) -> None:
        super().__init__(detail="The recording contains no audio", code="EMPTY_CAPTURE")


class EvaluationFailureError(VoiceProbeError):
    """Raised when evaluation fails for any reason other than an empty capture."""

    def __init__(self, detail: str = "Evaluation failed") -> None:
        super().__init__(detail=detail, code="EVALUATION_FAILURE")
