"""
Evaluation module - Capture-to-verdict abstraction layer.

Factory function for creating evaluator instances based on provider
configuration.
"""

from .base import BaseEvaluator
from .sources import FixedMetricSource, MetricSource, UniformMetricSource
from .verdict import AUTHENTIC_THRESHOLD, decide_verdict

__all__ = [
    "AUTHENTIC_THRESHOLD",
    "BaseEvaluator",
    "FixedMetricSource",
    "MetricSource",
    "UniformMetricSource",
    "create_evaluator",
    "decide_verdict",
]


def create_evaluator(provider: str, **kwargs) -> BaseEvaluator:
    """
    Factory function to create an evaluator instance based on provider.

    Args:
        provider: Evaluator name ("simulated")
        **kwargs: Provider-specific configuration

    Returns:
        BaseEvaluator implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "simulated":
        from .simulated import SimulatedEvaluator

        return SimulatedEvaluator(**kwargs)
    else:
        raise ValueError(f"Unknown evaluator provider: {provider}")
