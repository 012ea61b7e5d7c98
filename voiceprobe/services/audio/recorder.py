"""Microphone recorder.

Owns the input stream while a recording is active, accumulates the chunks
it delivers in arrival order, and finalizes them into one ``AudioCapture``
on stop.
"""

import logging

from voiceprobe.core.exceptions import NotRecordingError, RecordingAlreadyActiveError
from voiceprobe.core.models import AudioCapture
from voiceprobe.services.audio.base import AudioInputStream

logger = logging.getLogger(__name__)


class ChunkBuffer:
    """Append-only, ordered store of raw audio chunks.

    Chunks are kept as delivered and only joined on ``finalize()``, so the
    finalized payload is exactly their concatenation in arrival order.
    """

    def __init__(self) -> None:
        self._chunks: list[bytes] = []
        self._byte_count = 0

    @property
    def chunk_count(self) -> int:
        """Number of chunks appended since the last reset."""
        return len(self._chunks)

    @property
    def byte_count(self) -> int:
        """Total bytes appended since the last reset."""
        return self._byte_count

    def buffered_duration(self, bytes_per_second: int) -> float:
        """Duration of currently buffered audio in seconds."""
        if bytes_per_second <= 0:
            raise ValueError("bytes_per_second must be positive")
        return self._byte_count / bytes_per_second

    def add_bytes(self, data: bytes) -> None:
        """Append one chunk; empty chunks are ignored."""
        if not data:
            return
        self._chunks.append(bytes(data))
        self._byte_count += len(data)

    def finalize(self) -> bytes:
        """Concatenate all chunks in arrival order."""
        return b"".join(self._chunks)

    def reset(self) -> None:
        """Clear the buffer."""
        self._chunks.clear()
        self._byte_count = 0


class Recorder:
    """Records one capture at a time from an injected ``AudioInputStream``.

    Args:
        stream: Microphone capability; owned exclusively by this recorder
            while a recording is active.
    """

    def __init__(self, stream: AudioInputStream) -> None:
        self._stream = stream
        self._buffer = ChunkBuffer()
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def buffered_bytes(self) -> int:
        return self._buffer.byte_count

    async def start(self) -> None:
        """Acquire the microphone and begin buffering chunks.

        Raises:
            RecordingAlreadyActiveError: If a recording is already active.
            MicrophonePermissionError: If microphone access is refused.
            DeviceUnavailableError: If no input device can be opened.
        """
        if self._active:
            raise RecordingAlreadyActiveError()

        self._buffer.reset()
        # Chunks may arrive before open() returns; accept them from here on.
        self._active = True
        try:
            await self._stream.open(self._on_chunk)
        except Exception:
            self._active = False
            self._buffer.reset()
            raise
        logger.info("Recording started (%s)", self._stream.media_type)

    async def stop(self) -> AudioCapture:
        """Release the microphone and return the finalized capture.

        Raises:
            NotRecordingError: If no recording is active.
        """
        if not self._active:
            raise NotRecordingError()

        try:
            await self._stream.close()
        except Exception:
            self._buffer.reset()
            raise
        finally:
            self._active = False

        capture = AudioCapture(
            data=self._buffer.finalize(),
            media_type=self._stream.media_type,
            chunk_count=self._buffer.chunk_count,
        )
        self._buffer.reset()
        logger.info(
            "Recording stopped: %d bytes in %d chunks", capture.size, capture.chunk_count
        )
        return capture

    async def abort(self) -> None:
        """Release the microphone and discard buffered audio. No-op when inactive."""
        if not self._active:
            return
        try:
            await self._stream.close()
        finally:
            self._active = False
            self._buffer.reset()
        logger.info("Recording aborted")

    def _on_chunk(self, data: bytes) -> None:
        if not self._active:
            logger.debug("Dropping %d-byte chunk delivered while inactive", len(data))
            return
        self._buffer.add_bytes(data)
