"""
Rendering contract for the pipeline.

``render()`` turns a ``PipelineState`` into a flat ``PipelineView`` that
any UI layer can draw without knowing the state machine: which text to
show, which metric rows to display, and which buttons are enabled.
"""

from pydantic import BaseModel, Field

from voiceprobe.core.config import get_settings
from voiceprobe.core.models import PipelinePhase, PipelineState, Verdict

DEFAULT_LOCALE = "en"

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "idle.headline": "Ready to record",
        "idle.message": "Press start and speak for a few seconds.",
        "recording.headline": "Recording…",
        "recording.message": "Press stop when you are done speaking.",
        "analyzing.headline": "Analyzing…",
        "analyzing.message": "Evaluating the recorded voice sample.",
        "result.headline": "Analysis complete",
        "result.message": "The evaluation of your recording is shown below.",
        "failed.headline": "Something went wrong",
        "metric.authentication_rate": "Authentication rate",
        "metric.naturalness": "Naturalness",
        "metric.stability": "Stability",
        "verdict.authentic": "Authentic voice",
        "verdict.synthetic": "Synthetic voice suspected",
        "error.PERMISSION_DENIED": "Microphone access was denied. Allow access and try again.",
        "error.DEVICE_UNAVAILABLE": "No microphone was found. Connect one and try again.",
        "error.EMPTY_CAPTURE": "The recording was empty. Please record again.",
        "error.default": "The analysis could not be completed. Please try again.",
    },
    "ko": {
        "idle.headline": "녹음 준비 완료",
        "idle.message": "시작을 누르고 몇 초간 말씀해 주세요.",
        "recording.headline": "녹음 중…",
        "recording.message": "말씀을 마치면 정지를 눌러 주세요.",
        "analyzing.headline": "분석 중…",
        "analyzing.message": "녹음된 음성을 평가하고 있습니다.",
        "result.headline": "분석 완료",
        "result.message": "녹음에 대한 평가 결과입니다.",
        "failed.headline": "오류가 발생했습니다",
        "metric.authentication_rate": "인증률",
        "metric.naturalness": "자연스러움",
        "metric.stability": "안정성",
        "verdict.authentic": "실제 음성",
        "verdict.synthetic": "합성 음성 의심",
        "error.PERMISSION_DENIED": (
            "마이크 접근이 거부되었습니다. 권한을 허용한 뒤 다시 시도해 주세요."
        ),
        "error.DEVICE_UNAVAILABLE": (
            "마이크를 찾을 수 없습니다. 연결 후 다시 시도해 주세요."
        ),
        "error.EMPTY_CAPTURE": "녹음된 내용이 없습니다. 다시 녹음해 주세요.",
        "error.default": "분석을 완료하지 못했습니다. 다시 시도해 주세요.",
    },
}

_METRIC_KEYS = ("authentication_rate", "naturalness", "stability")


class MetricView(BaseModel):
    """One displayable metric row."""

    key: str
    label: str
    value: int
    display: str


class PipelineView(BaseModel):
    """Everything a UI needs to draw the current pipeline state."""

    phase: PipelinePhase
    headline: str
    message: str
    metrics: list[MetricView] = Field(default_factory=list)
    verdict: Verdict | None = None
    verdict_label: str = ""
    error_code: str | None = None
    can_start: bool = False
    can_stop: bool = False
    can_reset: bool = False
    busy: bool = False


def available_locales() -> list[str]:
    return sorted(_MESSAGES)


def _catalog(locale: str) -> dict[str, str]:
    return _MESSAGES.get(locale, _MESSAGES[DEFAULT_LOCALE])


def render(state: PipelineState, locale: str | None = None) -> PipelineView:
    """Build the view for ``state`` in the given locale.

    ``locale`` defaults to ``settings.locale``; unknown locales fall back
    to English.
    """
    text = _catalog(locale or get_settings().locale)
    phase = state.phase
    view = PipelineView(
        phase=phase,
        headline=text[f"{phase}.headline"],
        message=text.get(f"{phase}.message", ""),
        can_start=phase is PipelinePhase.idle,
        can_stop=phase is PipelinePhase.recording,
        can_reset=phase is not PipelinePhase.idle,
        busy=state.is_busy,
    )

    if state.result is not None:
        metrics = state.result.metrics
        view.metrics = [
            MetricView(
                key=key,
                label=text[f"metric.{key}"],
                value=getattr(metrics, key),
                display=f"{getattr(metrics, key)}%",
            )
            for key in _METRIC_KEYS
        ]
        view.verdict = state.result.verdict
        view.verdict_label = text[f"verdict.{state.result.verdict}"]

    if state.error is not None:
        view.error_code = state.error.code
        view.message = text.get(f"error.{state.error.code}", text["error.default"])

    return view
