"""Microphone stream backed by sounddevice (PortAudio).

The PortAudio callback runs on its own thread; every block is copied and
handed to the event loop with ``call_soon_threadsafe`` so chunk order is
preserved and the recorder only ever runs on the loop.
"""

import asyncio
import logging

import sounddevice as sd

from voiceprobe.core.config import get_settings
from voiceprobe.core.exceptions import (
    DeviceUnavailableError,
    MicrophonePermissionError,
    RecordingAlreadyActiveError,
)
from voiceprobe.services.audio.base import AudioInputStream, ChunkCallback

logger = logging.getLogger(__name__)

_PERMISSION_MARKERS = ("permission", "not authorized", "access denied")


class SoundDeviceStream(AudioInputStream):
    """16-bit PCM microphone stream backed by ``sounddevice.RawInputStream``.

    Args:
        sample_rate: Capture rate in Hz (falls back to settings).
        channels: Number of input channels.
        block_duration: Seconds of audio per delivered chunk.
        device: PortAudio device index or name; None selects the default input.
        settings: Optional Settings instance (defaults to get_settings()).
    """

    def __init__(
        self,
        sample_rate: int | None = None,
        channels: int | None = None,
        block_duration: float | None = None,
        device: int | str | None = None,
        settings=None,
    ) -> None:
        self._settings = settings or get_settings()
        self._sample_rate = sample_rate or self._settings.sample_rate
        self._channels = channels or self._settings.channels
        self._block_duration = block_duration or self._settings.block_duration
        self._device = device if device is not None else self._settings.input_device
        self._stream: sd.RawInputStream | None = None

    @property
    def media_type(self) -> str:
        return f"audio/L16;rate={self._sample_rate};channels={self._channels}"

    @property
    def is_open(self) -> bool:
        return self._stream is not None

    async def open(self, on_chunk: ChunkCallback) -> None:
        if self._stream is not None:
            raise RecordingAlreadyActiveError()

        loop = asyncio.get_running_loop()

        def _callback(indata, frames, time_info, status):
            if status:
                logger.debug("Input stream status: %s", status)
            loop.call_soon_threadsafe(on_chunk, bytes(indata))

        try:
            self._stream = await asyncio.to_thread(self._open_stream, _callback)
        except PermissionError as exc:
            raise MicrophonePermissionError(f"Microphone access was denied: {exc}") from exc
        except (sd.PortAudioError, ValueError) as exc:
            if any(marker in str(exc).lower() for marker in _PERMISSION_MARKERS):
                raise MicrophonePermissionError(
                    f"Microphone access was denied: {exc}"
                ) from exc
            raise DeviceUnavailableError(f"Cannot open audio input device: {exc}") from exc

        logger.info(
            "Input stream started (%d Hz, %d ch, device=%s)",
            self._sample_rate,
            self._channels,
            self._device if self._device is not None else "default",
        )

    def _open_stream(self, callback) -> sd.RawInputStream:
        """Validate the device and start a raw input stream (blocking)."""
        sd.check_input_settings(
            device=self._device,
            channels=self._channels,
            dtype="int16",
            samplerate=self._sample_rate,
        )
        stream = sd.RawInputStream(
            samplerate=self._sample_rate,
            blocksize=int(self._sample_rate * self._block_duration),
            device=self._device,
            channels=self._channels,
            dtype="int16",
            callback=callback,
        )
        try:
            stream.start()
        except Exception:
            stream.close()
            raise
        return stream

    async def close(self) -> None:
        stream = self._stream
        if stream is None:
            return
        self._stream = None
        try:
            await asyncio.to_thread(_stop_and_close, stream)
        except sd.PortAudioError as exc:
            logger.warning("Input stream close error: %s", exc)
        logger.info("Input stream stopped")


def _stop_and_close(stream: sd.RawInputStream) -> None:
    try:
        stream.stop()
    finally:
        stream.close()
