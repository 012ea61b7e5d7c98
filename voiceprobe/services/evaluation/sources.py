"""Metric sources for the simulated evaluator.

A source stands in for model inference: it hands back one ``Metrics``
per call. ``UniformMetricSource`` samples with numpy; ``FixedMetricSource``
replays predetermined metrics for deterministic runs.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

import numpy as np

from voiceprobe.core.models import Metrics


class MetricSource(ABC):
    """Supplies metrics to ``SimulatedEvaluator``."""

    @abstractmethod
    def sample(self) -> Metrics:
        """Return the metrics for one evaluation."""


class UniformMetricSource(MetricSource):
    """Draws each metric independently and uniformly from ``[low, high]``.

    Args:
        low: Inclusive lower bound.
        high: Inclusive upper bound.
        seed: Seed for a fresh generator (ignored when ``rng`` is given).
        rng: Shared numpy Generator.
    """

    def __init__(
        self,
        low: int = 60,
        high: int = 100,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        if not 0 <= low <= high <= 100:
            raise ValueError(
                f"Metric bounds must satisfy 0 <= low <= high <= 100, got {low}..{high}"
            )
        self._low = low
        self._high = high
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def sample(self) -> Metrics:
        values = self._rng.integers(self._low, self._high, size=3, endpoint=True)
        return Metrics(
            authentication_rate=int(values[0]),
            naturalness=int(values[1]),
            stability=int(values[2]),
        )


class FixedMetricSource(MetricSource):
    """Replays the given metrics in order, repeating the last one."""

    def __init__(self, metrics: Metrics | Iterable[Metrics]) -> None:
        self._queue = [metrics] if isinstance(metrics, Metrics) else list(metrics)
        if not self._queue:
            raise ValueError("FixedMetricSource needs at least one Metrics value")

    def sample(self) -> Metrics:
        if len(self._queue) > 1:
            return self._queue.pop(0)
        return self._queue[0]
