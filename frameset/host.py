"""
Windowing host interface.

Frameset never talks to a display server directly. Everything it needs from
the host (enumerating frames, reading and writing frame attributes, creating
and deleting frames, window-state blobs, monitor geometry, the default
minibuffer frame) goes through a WindowingHost. Frame and window handles are
opaque to frameset; they are only compared and passed back to the host.

Implementations raise HostOperationError when an operation fails.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

from .models import Box


class WindowingHost(ABC):
    """Operations frameset needs from the windowing host"""

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    @abstractmethod
    def frame_list(self) -> list[Any]:
        """Return all live frames"""

    @abstractmethod
    def frame_live_p(self, frame: Any) -> bool:
        """Return True if FRAME has not been deleted"""

    @abstractmethod
    def frame_parameters(self, frame: Any) -> dict[str, Any]:
        """Return a copy of FRAME's attributes, in host order"""

    @abstractmethod
    def modify_frame_parameters(self, frame: Any, params: Iterable[tuple[str, Any]]) -> None:
        """Set each (name, value) attribute of FRAME; None removes it"""

    @abstractmethod
    def frame_display(self, frame: Any) -> Optional[str]:
        """Return FRAME's display, or None for a text terminal"""

    @abstractmethod
    def current_display(self) -> Optional[str]:
        """Return the display of the selected frame"""

    @abstractmethod
    def make_frame(self, display: Optional[str], params: Iterable[tuple[str, Any]]) -> Any:
        """Create a frame on DISPLAY with initial attributes PARAMS"""

    @abstractmethod
    def delete_frame(self, frame: Any) -> None:
        """Delete FRAME"""

    @abstractmethod
    def frame_visible_p(self, frame: Any) -> bool:
        """Return True if FRAME is visible"""

    @abstractmethod
    def make_frame_visible(self, frame: Optional[Any] = None) -> None:
        """Make FRAME (default: the selected frame) visible"""

    def frame_parameter(self, frame: Any, name: str, default: Any = None) -> Any:
        return self.frame_parameters(frame).get(name, default)

    def set_frame_parameter(self, frame: Any, name: str, value: Any) -> None:
        self.modify_frame_parameters(frame, [(name, value)])

    # ------------------------------------------------------------------
    # Window state
    # ------------------------------------------------------------------

    @abstractmethod
    def window_state_get(self, frame: Any) -> Any:
        """Capture the window state of FRAME's root window"""

    @abstractmethod
    def window_state_put(self, frame: Any, state: Any) -> None:
        """Apply STATE to FRAME's root window, skipping missing content"""

    # ------------------------------------------------------------------
    # Minibuffers
    # ------------------------------------------------------------------

    @abstractmethod
    def minibuffer_window(self, frame: Any) -> Any:
        """Return the minibuffer window FRAME uses"""

    @abstractmethod
    def window_frame(self, window: Any) -> Any:
        """Return the frame holding WINDOW"""

    @abstractmethod
    def window_live_p(self, window: Any) -> bool:
        """Return True if WINDOW is a live window"""

    @abstractmethod
    def window_minibuffer_p(self, window: Any) -> bool:
        """Return True if WINDOW is a minibuffer window"""

    @abstractmethod
    def default_minibuffer_frame(self) -> Optional[Any]:
        """Return the frame providing minibuffers to new minibufferless frames"""

    @abstractmethod
    def set_default_minibuffer_frame(self, frame: Any) -> None:
        """Make FRAME the default minibuffer provider"""

    def owns_minibuffer(self, frame: Any) -> bool:
        """Return True if FRAME hosts the minibuffer window it uses"""
        window = self.minibuffer_window(frame)
        return window is not None and self.window_frame(window) == frame

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @abstractmethod
    def monitor_workarea(self, frame: Any) -> Box:
        """Return the work area of the monitor FRAME is on"""

    @abstractmethod
    def frame_pixel_size(self, frame: Any) -> tuple[int, int]:
        """Return FRAME's outer (width, height) in pixels"""

    @abstractmethod
    def frame_char_size(self, frame: Any) -> tuple[int, int]:
        """Return FRAME's character cell (width, height) in pixels"""

    @abstractmethod
    def frame_text_pixel_size(self, frame: Any) -> tuple[int, int]:
        """Return FRAME's text area (width, height) in pixels"""

    @abstractmethod
    def set_frame_text_pixel_size(self, frame: Any, width: int, height: int) -> None:
        """Resize FRAME's text area to exactly WIDTH x HEIGHT pixels"""

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def daemon_p(self) -> bool:
        """Return True for a headless session that needs no visible frame"""
        return False

    def settle(self) -> None:
        """Let pending frame visibility changes take effect"""
