"""
Data models for frameset save and restore.

All models use Pydantic v2 for data validation and serialization.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import (
    APP_PROPERTY,
    DESCRIPTION_PROPERTY,
    FRAMESET_VERSION,
    NAME_PROPERTY,
)


# ============================================================================
# Enums
# ============================================================================

class ReusePolicy(str, Enum):
    """Which live frames may be reused when restoring.

    An explicit list of frames may be passed instead of a policy value.
    """
    ALL = "all"          # Every live frame is a reuse candidate
    NONE = "none"        # Nothing is reused; old frames are deleted afterwards
    KEEP = "keep"        # Nothing is reused; old frames are kept
    MATCH = "match"      # Only frames whose identity appears in the frameset


class DisplayPolicy(str, Enum):
    """Where to restore frames saved on another display."""
    ORIGINAL = "original"  # Restore on the saved display when possible
    CURRENT = "current"    # Force the host's current display
    DELETE = "delete"      # Skip frames saved on other displays


class OnscreenMode(str, Enum):
    """When to move restored frames back onto their monitor."""
    NONE = "none"                        # Never
    FULLY_OFFSCREEN = "fully-offscreen"  # Only frames entirely outside the work area
    ANY_EDGE = "any-edge"                # Frames with any edge outside the work area


class FrameAction(str, Enum):
    """What a restore did with a live frame."""
    CREATED = "created"    # Did not exist; created and restored upon
    REUSED = "reused"      # Existed, was a candidate and was restored upon
    IGNORED = "ignored"    # Existed, was a candidate, but was not reused
    REJECTED = "rejected"  # Existed, but was not a reuse candidate


# ============================================================================
# Geometry
# ============================================================================

class Box(BaseModel):
    """Pixel rectangle; right and bottom are inclusive edges."""
    left: int
    top: int
    width: int = Field(ge=0)
    height: int = Field(ge=0)

    @property
    def right(self) -> int:
        return self.left + self.width - 1

    @property
    def bottom(self) -> int:
        return self.top + self.height - 1


# ============================================================================
# Minibuffer linkage
# ============================================================================

class MinibufferLink(BaseModel):
    """Value of the frameset--mini attribute.

    A frame either owns its minibuffer (and may be the host's default
    minibuffer provider), or borrows the minibuffer of the frame whose
    identity is provider_id.
    """
    model_config = ConfigDict(frozen=True)

    owns: bool
    default: bool = False
    provider_id: Optional[str] = None

    @model_validator(mode='after')
    def validate_shape(self) -> 'MinibufferLink':
        """Owners carry no provider; borrowers must name one"""
        if self.owns and self.provider_id is not None:
            raise ValueError("A minibuffer-owning frame cannot name a provider")
        if not self.owns:
            if not self.provider_id:
                raise ValueError("A minibufferless frame must name its provider")
            if self.default:
                raise ValueError("A minibufferless frame cannot be the default provider")
        return self

    @classmethod
    def owner(cls, default: bool = False) -> 'MinibufferLink':
        return cls(owns=True, default=default)

    @classmethod
    def borrower(cls, provider_id: str) -> 'MinibufferLink':
        return cls(owns=False, provider_id=provider_id)

    @classmethod
    def from_value(cls, value: Any) -> Optional['MinibufferLink']:
        """Parse an attribute value as stored on a frame or in a document.

        Accepts a MinibufferLink, its dumped dict form, or a two-item
        sequence (True, is_default) / (False, provider_id).
        """
        if value is None:
            return None
        if isinstance(value, MinibufferLink):
            return value
        if isinstance(value, dict):
            return cls.model_validate(value)
        if isinstance(value, (list, tuple)) and len(value) == 2:
            owns, extra = value
            if owns:
                return cls.owner(default=bool(extra))
            return cls.borrower(str(extra))
        raise ValueError(f"Invalid minibuffer link: {value!r}")

    def to_value(self) -> dict[str, Any]:
        """Serializable form stored as the frame attribute"""
        return self.model_dump(exclude_none=True)

    @property
    def is_default(self) -> bool:
        return self.owns and self.default


# ============================================================================
# Frameset document
# ============================================================================

class FrameState(BaseModel):
    """Saved attributes and window state of one frame"""
    model_config = ConfigDict(frozen=True)

    parameters: dict[str, Any] = Field(default_factory=dict)
    window_state: Any = None

    def param(self, name: str, default: Any = None) -> Any:
        return self.parameters.get(name, default)


class Frameset(BaseModel):
    """A saved set of frames plus freeform properties

    The app, name and description of the producing feature are stored
    in properties under reserved keys.
    """
    version: int = Field(default=FRAMESET_VERSION, frozen=True)
    properties: dict[str, Any] = Field(default_factory=dict)
    states: list[FrameState] = Field(min_length=1)

    @field_validator('version')
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Only the current format version is understood"""
        if v != FRAMESET_VERSION:
            raise ValueError(f"Unsupported frameset version: {v}")
        return v

    @property
    def app(self) -> Any:
        return self.properties.get(APP_PROPERTY)

    @property
    def name(self) -> Optional[str]:
        return self.properties.get(NAME_PROPERTY)

    @property
    def description(self) -> Optional[str]:
        return self.properties.get(DESCRIPTION_PROPERTY)

    def prop(self, key: str, default: Any = None) -> Any:
        """Return the value of property KEY"""
        return self.properties.get(key, default)

    def set_prop(self, key: str, value: Any) -> Any:
        """Set property KEY to VALUE, returning VALUE"""
        self.properties[key] = value
        return value


def is_frameset(value: Any) -> Optional[int]:
    """Return the version of VALUE if it is a valid frameset, else None.

    VALUE may be a Frameset or its plain mapping form (as loaded from JSON).
    """
    if isinstance(value, Frameset):
        value = value.model_dump()
    if not isinstance(value, dict):
        return None
    if not all(key in value for key in ("version", "properties", "states")):
        return None
    try:
        frameset = Frameset.model_validate(value)
    except ValueError:
        return None
    return frameset.version


def copy_frameset(frameset: Frameset) -> Frameset:
    """Return a deep copy of FRAMESET"""
    return frameset.model_copy(deep=True)
