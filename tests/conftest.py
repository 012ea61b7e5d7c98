"""Shared pytest fixtures for VoiceProbe test suite.

Provides a fake microphone stream, a no-op sleep, and evaluators with
fixed metrics so the pipeline can be exercised without hardware or
randomness.
"""

import asyncio
import struct

import pytest

from voiceprobe.core.config import Settings
from voiceprobe.core.models import Metrics
from voiceprobe.services.audio.base import AudioInputStream

# ---------------------------------------------------------------------------
# Fake microphone
# ---------------------------------------------------------------------------


class FakeStream(AudioInputStream):
    """In-memory microphone that delivers chunks when told to.

    Args:
        initial_chunks: Chunks delivered synchronously during ``open()``.
        open_error: Exception raised by ``open()`` instead of acquiring.
        close_error: Exception raised by ``close()`` after releasing.
    """

    def __init__(self, initial_chunks=(), open_error=None, close_error=None) -> None:
        self.initial_chunks = list(initial_chunks)
        self.open_error = open_error
        self.close_error = close_error
        self.open_count = 0
        self.close_count = 0
        self._on_chunk = None

    @property
    def media_type(self) -> str:
        return "audio/L16;rate=16000;channels=1"

    @property
    def is_open(self) -> bool:
        return self._on_chunk is not None

    async def open(self, on_chunk) -> None:
        if self.open_error is not None:
            raise self.open_error
        self.open_count += 1
        self._on_chunk = on_chunk
        for chunk in self.initial_chunks:
            on_chunk(chunk)

    async def close(self) -> None:
        self.close_count += 1
        self._on_chunk = None
        if self.close_error is not None:
            raise self.close_error

    def emit(self, *chunks: bytes) -> None:
        """Deliver chunks as if the device had produced them."""
        assert self._on_chunk is not None, "stream is not open"
        for chunk in chunks:
            self._on_chunk(chunk)


class GatedStream(FakeStream):
    """FakeStream whose open() and close() wait until the test releases them.

    Args:
        hold_open: Block ``open()`` until ``open_released`` is set.
        hold_close: Block ``close()`` until ``close_released`` is set.
    """

    def __init__(self, hold_open=False, hold_close=False, **kwargs) -> None:
        super().__init__(**kwargs)
        self.open_released = asyncio.Event()
        self.close_released = asyncio.Event()
        if not hold_open:
            self.open_released.set()
        if not hold_close:
            self.close_released.set()

    async def open(self, on_chunk) -> None:
        await self.open_released.wait()
        await super().open(on_chunk)

    async def close(self) -> None:
        await self.close_released.wait()
        await super().close()


@pytest.fixture
def fake_stream():
    """A fresh FakeStream with no pre-loaded chunks."""
    return FakeStream()


@pytest.fixture
def make_stream():
    """Factory for FakeStream instances with custom behaviour."""
    return FakeStream


@pytest.fixture
def make_gated_stream():
    """Factory for GatedStream instances."""
    return GatedStream


# ---------------------------------------------------------------------------
# Evaluation helpers
# ---------------------------------------------------------------------------


class RecordingSleep:
    """Async stand-in for ``asyncio.sleep`` that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def no_sleep():
    """A sleep function that returns immediately and remembers its calls."""
    return RecordingSleep()


@pytest.fixture
def settings():
    """Settings with a fixed seed and the default 1–3 s latency window."""
    return Settings(
        _env_file=None,
        random_seed=1234,
        analysis_delay_min=1.0,
        analysis_delay_max=3.0,
    )


@pytest.fixture
def authentic_metrics():
    """Metrics sitting exactly on the authentic boundary."""
    return Metrics(authentication_rate=80, naturalness=76, stability=75)


@pytest.fixture
def synthetic_metrics():
    """Metrics with one component just below the threshold."""
    return Metrics(authentication_rate=80, naturalness=76, stability=74)


# ---------------------------------------------------------------------------
# Audio fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_pcm_bytes():
    """Generate 1 second of 440Hz sine-wave PCM audio (16kHz, 16-bit, mono).

    Returns:
        bytes: Raw PCM audio data.
    """
    import math

    sample_rate = 16000
    frequency = 440.0
    amplitude = 16000  # ~50% of max int16

    samples = []
    for i in range(sample_rate):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)
