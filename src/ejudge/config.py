"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ejudge.rep_logic import Thresholds


class Settings(BaseSettings):
    """Settings loaded from EJUDGE_* environment variables or a .env file."""

    model_config = SettingsConfigDict(env_prefix="EJUDGE_", env_file=".env", extra="ignore")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Classifier thresholds (normalized image units)
    squat_depth_threshold: float = 0.04
    deadlift_lockout_delta: float = 0.03

    # Keypoint adapter
    min_keypoint_conf: float = 0.3

    # Replay and smoothing
    sample_fps: float = 30.0
    filter_min_cutoff: float = 1.0
    filter_beta: float = 0.1
    filter_d_cutoff: float = 1.0

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def thresholds(self) -> Thresholds:
        return Thresholds(
            squat_depth_threshold=self.squat_depth_threshold,
            deadlift_lockout_delta=self.deadlift_lockout_delta,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
