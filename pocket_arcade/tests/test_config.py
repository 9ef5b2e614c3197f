"""
Tests for configuration.
"""

import pytest
from pydantic import ValidationError

from ..config import PacingSettings, load_pacing


class TestPacing:
    def test_defaults(self, monkeypatch):
        for var in ("ARCADE_AI_PLAY_DELAY", "ARCADE_MEMORY_HIDE_DELAY"):
            monkeypatch.delenv(var, raising=False)
        pacing = load_pacing()
        assert pacing.ai_play_delay == 0.4
        assert pacing.memory_hide_delay == 0.45

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("ARCADE_AI_PLAY_DELAY", "0")
        monkeypatch.setenv("ARCADE_STIMULUS_DELAY_MAX", "3.5")
        pacing = load_pacing()
        assert pacing.ai_play_delay == 0
        assert pacing.stimulus_delay_max == 3.5

    def test_instant(self):
        pacing = PacingSettings.instant()
        assert pacing.ai_attack_delay == 0
        assert pacing.stimulus_delay_min == pacing.stimulus_delay_max == 0

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            PacingSettings(ai_play_delay=-1)

    def test_inverted_stimulus_range_rejected(self):
        with pytest.raises(ValidationError):
            PacingSettings(stimulus_delay_min=3, stimulus_delay_max=1)

    def test_bad_env_value_rejected(self, monkeypatch):
        monkeypatch.setenv("ARCADE_MEMORY_HIDE_DELAY", "soon")
        with pytest.raises(ValidationError):
            load_pacing()
