"""
Frameset: save and restore sets of frames

A frameset is a serializable snapshot of a group of top-level frames: their
attributes, their minibuffer relationships and the opaque window state of
each frame's root window. Framesets are captured from and restored onto a
WindowingHost.
"""

from .models import (
    # Core entities
    Box,
    Frameset,
    FrameState,
    MinibufferLink,

    # Enums
    DisplayPolicy,
    FrameAction,
    OnscreenMode,
    ReusePolicy,

    # Helpers
    copy_frameset,
    is_frameset,
)

from .errors import (
    DependencyError,
    ErrorCode,
    FramesetError,
    FramesetNotFoundError,
    FramesetValidationError,
    HostOperationError,
    RuleError,
)
from .filters import (
    DEFAULT_FILTERS,
    PERSISTENT_FILTERS,
    SESSION_FILTERS,
    CustomFilter,
    DisplayTarget,
    FilterAction,
    FilteredParams,
    filter_params,
)
from .host import WindowingHost
from .identity import frame_id, frame_id_equal, frame_with_id
from .capture import FramesetCapture, save
from .onscreen import move_onscreen
from .restore import FramesetRestore, RestoreResult, restore
from .persistence import (
    FramesetPersistence,
    delete_frameset,
    list_framesets,
    load_frameset,
    save_frameset,
)

__all__ = [
    # Models
    "Box",
    "Frameset",
    "FrameState",
    "MinibufferLink",
    "copy_frameset",
    "is_frameset",

    # Enums
    "DisplayPolicy",
    "FrameAction",
    "OnscreenMode",
    "ReusePolicy",

    # Errors
    "DependencyError",
    "ErrorCode",
    "FramesetError",
    "FramesetNotFoundError",
    "FramesetValidationError",
    "HostOperationError",
    "RuleError",

    # Filters
    "DEFAULT_FILTERS",
    "PERSISTENT_FILTERS",
    "SESSION_FILTERS",
    "CustomFilter",
    "DisplayTarget",
    "FilterAction",
    "FilteredParams",
    "filter_params",

    # Host
    "WindowingHost",
    "frame_id",
    "frame_id_equal",
    "frame_with_id",

    # Capture
    "FramesetCapture",
    "save",

    # Restore
    "FramesetRestore",
    "RestoreResult",
    "restore",
    "move_onscreen",

    # Persistence
    "FramesetPersistence",
    "save_frameset",
    "load_frameset",
    "list_framesets",
    "delete_frameset",
]
