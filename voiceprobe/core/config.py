"""
Application configuration via pydantic-settings.

Loads values from .env file with sensible defaults for local development.
Use ``get_settings()`` to obtain the cached singleton instance.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """VoiceProbe settings loaded from environment / .env file.

    All settings can be overridden via environment variables or a `.env` file.
    Field names map directly to env var names (case-insensitive).

    Attributes:
        evaluator_provider: Which evaluator backend to use ("simulated").
        authentic_threshold: Minimum score every metric needs for an authentic verdict.
        audio_backend: Microphone capture backend ("sounddevice").
        random_seed: Seed for the simulated metric generator (None = OS entropy).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Silently ignore unrecognized env vars
    )

    # --- Evaluation ---
    evaluator_provider: str = "simulated"
    metric_min: int = 60  # Inclusive lower bound of simulated scores
    metric_max: int = 100  # Inclusive upper bound of simulated scores
    authentic_threshold: int = 75
    random_seed: int | None = None

    # Artificial latency window for the simulated evaluator, in seconds
    analysis_delay_min: float = 1.0
    analysis_delay_max: float = 3.0

    # --- Audio capture ---
    audio_backend: str = "sounddevice"
    sample_rate: int = 16000
    channels: int = 1  # 1 = mono
    block_duration: float = 0.1  # Seconds of audio per delivered chunk
    input_device: int | str | None = None  # None = system default input

    # --- Application ---
    log_level: str = "INFO"  # Python logging level
    locale: str = "en"  # Display language for rendered messages ("en", "ko")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings singleton.

    Uses ``functools.lru_cache`` so the .env file is read only once.
    Subsequent calls return the same ``Settings`` instance.

    Returns:
        Settings: The application-wide configuration object.
    """
    return Settings()
