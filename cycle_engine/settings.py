"""Engine defaults loaded from the environment."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defaults for pipelines built without an explicit config.

    Every field can be overridden with a ``CYCLE_``-prefixed environment
    variable or a ``.env`` file, e.g. ``CYCLE_ESTIMATOR=dft``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Period band
    min_period: int = 10
    max_period: int = 48
    smooth_length: int = 20

    # Roofing filter
    roofing_upper_length: int = 48
    roofing_lower_length: int = 10
    high_pass_variant: str = "standard"

    # Estimator
    estimator: str = "homodyne"
    quadrature: str = "peak_normalized"

    # Adaptive oscillator (empty = none)
    adaptive_indicator: str = ""
    adaptive_cap: int | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
