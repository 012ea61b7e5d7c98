"""
Pipeline module - Capture → evaluation → presentation state machine.
"""

from .presenter import Presenter, build_presenter
from .state import (
    AnalysisSucceeded,
    OperationFailed,
    PipelineEvent,
    Reset,
    StartRecording,
    StopRecording,
    initial_state,
    reduce,
)

__all__ = [
    "AnalysisSucceeded",
    "OperationFailed",
    "PipelineEvent",
    "Presenter",
    "Reset",
    "StartRecording",
    "StopRecording",
    "build_presenter",
    "initial_state",
    "reduce",
]
