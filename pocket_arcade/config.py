"""
Configuration - Environment-driven settings.

Environment:
    ARCADE_ENV                  deployment name (default: development)
    ARCADE_LOG_LEVEL            loguru level (default: INFO)
    ARCADE_LOG_FILE             optional log file path
    ALLOWED_ORIGINS             comma separated CORS origins (default: *)
    ARCADE_HOST / ARCADE_PORT   API bind address (default: 127.0.0.1:8000)

Pacing (seconds), used by reducers that schedule delayed follow-ups:
    ARCADE_AI_PLAY_DELAY        end of player turn -> AI plays (0.4)
    ARCADE_AI_ATTACK_DELAY      AI plays -> AI attacks (0.5)
    ARCADE_MEMORY_HIDE_DELAY    mismatched pair stays visible (0.45)
    ARCADE_STIMULUS_DELAY_MIN   reaction stimulus delay lower bound (1.0)
    ARCADE_STIMULUS_DELAY_MAX   reaction stimulus delay upper bound (2.7)
"""

from __future__ import annotations
import os

from pydantic import BaseModel, Field, model_validator

ARCADE_ENV = os.getenv("ARCADE_ENV", "development")
ARCADE_LOG_LEVEL = os.getenv("ARCADE_LOG_LEVEL", "INFO")
ARCADE_LOG_FILE = os.getenv("ARCADE_LOG_FILE", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
ARCADE_HOST = os.getenv("ARCADE_HOST", "127.0.0.1")
ARCADE_PORT = int(os.getenv("ARCADE_PORT", "8000"))


class PacingSettings(BaseModel):
    """Artificial delays for UX pacing. Zero disables a delay."""
    ai_play_delay: float = Field(default=0.4, ge=0)
    ai_attack_delay: float = Field(default=0.5, ge=0)
    memory_hide_delay: float = Field(default=0.45, ge=0)
    stimulus_delay_min: float = Field(default=1.0, ge=0)
    stimulus_delay_max: float = Field(default=2.7, ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_stimulus_range(self) -> PacingSettings:
        if self.stimulus_delay_min > self.stimulus_delay_max:
            raise ValueError("stimulus_delay_min must not exceed stimulus_delay_max")
        return self

    @classmethod
    def instant(cls) -> PacingSettings:
        """No delays at all (tests, headless simulation)."""
        return cls(
            ai_play_delay=0,
            ai_attack_delay=0,
            memory_hide_delay=0,
            stimulus_delay_min=0,
            stimulus_delay_max=0,
        )


_PACING_ENV = {
    "ai_play_delay": "ARCADE_AI_PLAY_DELAY",
    "ai_attack_delay": "ARCADE_AI_ATTACK_DELAY",
    "memory_hide_delay": "ARCADE_MEMORY_HIDE_DELAY",
    "stimulus_delay_min": "ARCADE_STIMULUS_DELAY_MIN",
    "stimulus_delay_max": "ARCADE_STIMULUS_DELAY_MAX",
}


def load_pacing() -> PacingSettings:
    """Read pacing overrides from the environment."""
    overrides = {
        name: os.environ[var]
        for name, var in _PACING_ENV.items()
        if os.environ.get(var)
    }
    return PacingSettings(**overrides)
