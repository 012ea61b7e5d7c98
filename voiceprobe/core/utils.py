"""Shared utility functions for VoiceProbe."""

import logging

from voiceprobe.core.config import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for an application embedding the pipeline.

    Args:
        level: Logging level name; falls back to ``settings.log_level``.
    """
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=_LOG_FORMAT)
