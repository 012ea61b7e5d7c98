"""
Abstract base class for microphone streams.

A stream is the platform capability the Recorder depends on: acquire the
device, receive ordered binary chunks, release the device. Keeping it
abstract lets the Recorder run against a fake stream without hardware.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

ChunkCallback = Callable[[bytes], None]


class AudioInputStream(ABC):
    """Interface that every microphone backend must implement."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """Media type tag describing the bytes delivered to ``on_chunk``."""

    @abstractmethod
    async def open(self, on_chunk: ChunkCallback) -> None:
        """Acquire the device and start delivering chunks.

        Args:
            on_chunk: Called once per chunk, on the event loop that called
                ``open``, in arrival order.

        Raises:
            MicrophonePermissionError: If access to the microphone is refused.
            DeviceUnavailableError: If no usable input device exists.
        """

    @abstractmethod
    async def close(self) -> None:
        """Stop delivering chunks and release the device."""
