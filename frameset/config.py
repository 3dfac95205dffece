"""
Frameset configuration.

Defaults for where framesets are stored and how they are restored, loadable
from environment variables:

    FRAMESET_DIR        storage directory (default: ~/.local/share/frameset)
    FRAMESET_REUSE      all | none | keep | match
    FRAMESET_DISPLAY    original | current | delete
    FRAMESET_ONSCREEN   none | fully-offscreen | any-edge
    FRAMESET_FILTERS    persistent | session
"""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from .filters import PERSISTENT_FILTERS, SESSION_FILTERS, FilterTable
from .models import DisplayPolicy, OnscreenMode, ReusePolicy

DEFAULT_STORAGE_DIR = Path.home() / ".local/share/frameset"


class FramesetConfig(BaseModel):
    """Storage location and default restore policies"""

    storage_dir: Path = Field(default=DEFAULT_STORAGE_DIR, description="Directory for saved framesets")
    reuse: ReusePolicy = Field(default=ReusePolicy.ALL, description="Default reuse policy")
    display: DisplayPolicy = Field(default=DisplayPolicy.ORIGINAL, description="Default display policy")
    onscreen: OnscreenMode = Field(default=OnscreenMode.FULLY_OFFSCREEN, description="Default onscreen mode")
    filters: Literal["persistent", "session"] = Field(default="persistent", description="Filter table")

    @field_validator('storage_dir')
    @classmethod
    def expand_storage_dir(cls, v: Path) -> Path:
        """Expand ~ and make the directory absolute"""
        return v.expanduser().absolute()

    @classmethod
    def from_environment(cls) -> "FramesetConfig":
        """Load configuration from environment variables."""
        env = {
            "storage_dir": os.getenv("FRAMESET_DIR"),
            "reuse": os.getenv("FRAMESET_REUSE"),
            "display": os.getenv("FRAMESET_DISPLAY"),
            "onscreen": os.getenv("FRAMESET_ONSCREEN"),
            "filters": os.getenv("FRAMESET_FILTERS"),
        }
        return cls(**{key: value for key, value in env.items() if value})

    def filter_table(self) -> FilterTable:
        """Return the configured filter table"""
        return SESSION_FILTERS if self.filters == "session" else PERSISTENT_FILTERS
