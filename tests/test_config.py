"""Tests for frameset configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from frameset.config import FramesetConfig
from frameset.filters import PERSISTENT_FILTERS, SESSION_FILTERS
from frameset.models import DisplayPolicy, OnscreenMode, ReusePolicy


ENV_VARS = ("FRAMESET_DIR", "FRAMESET_REUSE", "FRAMESET_DISPLAY", "FRAMESET_ONSCREEN", "FRAMESET_FILTERS")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestFramesetConfig:
    """Test configuration defaults and environment loading."""

    def test_defaults(self, clean_env):
        config = FramesetConfig.from_environment()

        assert config.storage_dir == Path.home() / ".local/share/frameset"
        assert config.reuse == ReusePolicy.ALL
        assert config.display == DisplayPolicy.ORIGINAL
        assert config.onscreen == OnscreenMode.FULLY_OFFSCREEN
        assert config.filter_table() is PERSISTENT_FILTERS

    def test_from_environment(self, clean_env, tmp_path):
        clean_env.setenv("FRAMESET_DIR", str(tmp_path))
        clean_env.setenv("FRAMESET_REUSE", "keep")
        clean_env.setenv("FRAMESET_DISPLAY", "current")
        clean_env.setenv("FRAMESET_ONSCREEN", "any-edge")
        clean_env.setenv("FRAMESET_FILTERS", "session")

        config = FramesetConfig.from_environment()

        assert config.storage_dir == tmp_path
        assert config.reuse == ReusePolicy.KEEP
        assert config.display == DisplayPolicy.CURRENT
        assert config.onscreen == OnscreenMode.ANY_EDGE
        assert config.filter_table() is SESSION_FILTERS

    def test_invalid_policy(self, clean_env):
        clean_env.setenv("FRAMESET_REUSE", "sometimes")

        with pytest.raises(ValidationError):
            FramesetConfig.from_environment()

    def test_storage_dir_expanded(self):
        config = FramesetConfig(storage_dir="~/framesets")

        assert config.storage_dir == Path.home() / "framesets"
