"""
UI module - Framework-independent rendering contract.
"""

from .view import MetricView, PipelineView, available_locales, render

__all__ = ["MetricView", "PipelineView", "available_locales", "render"]
