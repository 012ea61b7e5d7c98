"""
Abstract base class for evaluators.

All evaluator implementations (the simulated placeholder, a future
model-backed one) plug in here, so the pipeline driver never depends on
how metrics are produced.
"""

import logging
from abc import ABC, abstractmethod

from voiceprobe.core.exceptions import (
    EmptyCaptureError,
    EvaluationFailureError,
    VoiceProbeError,
)
from voiceprobe.core.models import AnalysisResult, AudioCapture, Metrics
from voiceprobe.services.evaluation.verdict import AUTHENTIC_THRESHOLD, decide_verdict

logger = logging.getLogger(__name__)


class BaseEvaluator(ABC):
    """Interface that every evaluator must implement.

    Subclasses provide ``_analyze``; ``evaluate`` wraps it with the
    empty-capture gate, failure translation and the verdict rule.

    Args:
        authentic_threshold: Minimum score every metric needs for an
            authentic verdict.
    """

    model_name: str = "unknown"

    def __init__(self, authentic_threshold: int = AUTHENTIC_THRESHOLD) -> None:
        self._threshold = authentic_threshold

    async def evaluate(self, capture: AudioCapture) -> AnalysisResult:
        """Analyze a finalized capture.

        Args:
            capture: The recording to evaluate; never modified.

        Returns:
            AnalysisResult with metrics, verdict and the model name.

        Raises:
            EmptyCaptureError: If the capture holds zero bytes.
            EvaluationFailureError: If analysis fails for any other reason.
        """
        if capture.is_empty:
            raise EmptyCaptureError()

        try:
            metrics = await self._analyze(capture)
        except VoiceProbeError:
            raise
        except Exception as exc:
            logger.exception("Evaluation failed (model=%s)", self.model_name)
            raise EvaluationFailureError(f"Evaluation failed: {exc}") from exc

        verdict = decide_verdict(metrics, self._threshold)
        logger.info(
            "Evaluated %d-byte capture: %s (auth=%d, natural=%d, stable=%d)",
            capture.size,
            verdict,
            metrics.authentication_rate,
            metrics.naturalness,
            metrics.stability,
        )
        return AnalysisResult(metrics=metrics, verdict=verdict, model_used=self.model_name)

    @abstractmethod
    async def _analyze(self, capture: AudioCapture) -> Metrics:
        """Produce metrics for a non-empty capture.

        Args:
            capture: A capture with at least one byte of audio.

        Returns:
            The three bounded scores.
        """
