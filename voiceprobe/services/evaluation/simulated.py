"""Placeholder evaluator producing pseudo-random scores.

No audio analysis happens here: after an artificial latency the metrics
come straight from a ``MetricSource``. It exists so the capture → evaluate
→ present pipeline can run end to end before a real model is available.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import numpy as np

from voiceprobe.core.config import get_settings
from voiceprobe.core.models import AudioCapture, Metrics
from voiceprobe.services.evaluation.base import BaseEvaluator
from voiceprobe.services.evaluation.sources import MetricSource, UniformMetricSource

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class SimulatedEvaluator(BaseEvaluator):
    """Evaluator stand-in with injectable randomness and latency.

    Args:
        metric_source: Where metrics come from (defaults to uniform sampling
            over ``[settings.metric_min, settings.metric_max]``).
        delay_range: ``(min, max)`` artificial latency in seconds.
        sleep: Coroutine function used to wait; tests pass a no-op.
        rng: numpy Generator shared by latency and default metric sampling.
        authentic_threshold: Override for ``settings.authentic_threshold``.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    model_name = "simulated"

    def __init__(
        self,
        metric_source: MetricSource | None = None,
        delay_range: tuple[float, float] | None = None,
        sleep: SleepFn = asyncio.sleep,
        rng: np.random.Generator | None = None,
        authentic_threshold: int | None = None,
        settings=None,
    ) -> None:
        settings = settings or get_settings()
        super().__init__(
            authentic_threshold=(
                authentic_threshold
                if authentic_threshold is not None
                else settings.authentic_threshold
            )
        )
        self._rng = rng if rng is not None else np.random.default_rng(settings.random_seed)
        self._source = metric_source or UniformMetricSource(
            low=settings.metric_min,
            high=settings.metric_max,
            rng=self._rng,
        )
        delay_min, delay_max = delay_range or (
            settings.analysis_delay_min,
            settings.analysis_delay_max,
        )
        if not 0 <= delay_min <= delay_max:
            raise ValueError(f"Invalid analysis delay range: {delay_min}..{delay_max}")
        self._delay_min = delay_min
        self._delay_max = delay_max
        self._sleep = sleep

    def next_delay(self) -> float:
        """Sample the artificial latency for one evaluation, in seconds."""
        if self._delay_max == self._delay_min:
            return self._delay_min
        return float(self._rng.uniform(self._delay_min, self._delay_max))

    async def _analyze(self, capture: AudioCapture) -> Metrics:
        delay = self.next_delay()
        logger.debug("Simulating %.2fs of analysis for %d-byte capture", delay, capture.size)
        await self._sleep(delay)
        return self._source.sample()
