"""Verdict rule applied to every evaluator's metrics."""

from voiceprobe.core.models import Metrics, Verdict

# Placeholder policy: paired with [60, 100] sampling it is not a tuned
# detection threshold.
AUTHENTIC_THRESHOLD = 75


def decide_verdict(metrics: Metrics, threshold: int = AUTHENTIC_THRESHOLD) -> Verdict:
    """Return ``authentic`` iff every metric is at least ``threshold``."""
    if all(value >= threshold for value in metrics.values()):
        return Verdict.authentic
    return Verdict.synthetic
