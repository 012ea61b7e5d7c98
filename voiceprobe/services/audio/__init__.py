"""
Audio module - Microphone capture and recording.

Factory function for creating microphone stream instances based on
backend configuration.
"""

from .base import AudioInputStream
from .recorder import ChunkBuffer, Recorder

__all__ = ["AudioInputStream", "ChunkBuffer", "Recorder", "create_stream"]


def create_stream(provider: str, **kwargs) -> AudioInputStream:
    """
    Factory function to create a microphone stream based on backend.

    Args:
        provider: Capture backend name ("sounddevice")
        **kwargs: Backend-specific configuration

    Returns:
        AudioInputStream implementation instance

    Raises:
        ValueError: If provider is unknown
    """
    if provider == "sounddevice":
        from .sounddevice_stream import SoundDeviceStream

        return SoundDeviceStream(**kwargs)
    else:
        raise ValueError(f"Unknown audio backend: {provider}")
