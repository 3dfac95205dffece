"""
In-memory windowing host.

VirtualHost keeps frames, windows and monitors as plain Python objects. It
behaves like a real host where frameset cares: frames on unknown displays
cannot be created, a frame whose minibuffer another frame uses cannot be
deleted, and the last visible frame cannot be deleted. It backs the test
suite and the CLI's simulate command.

Frame "width" and "height" attributes are in character cells; each frame
has a character cell size in pixels (1x1 unless set).
"""

import copy
import itertools
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from .errors import ErrorCode, HostOperationError
from .host import WindowingHost
from .models import Box

logger = logging.getLogger(__name__)

DEFAULT_WORKAREA = Box(left=0, top=0, width=1920, height=1080)

_CURRENT = object()


class VirtualWindow:
    """A window of a VirtualFrame; only minibuffer windows matter here"""

    def __init__(self, frame: "VirtualFrame", minibuffer: bool = False):
        self.frame = frame
        self.minibuffer = minibuffer
        self.live = True

    def __repr__(self) -> str:
        kind = "minibuffer" if self.minibuffer else "root"
        return f"<VirtualWindow {kind} of frame {self.frame.number}>"


class VirtualFrame:
    """A frame of a VirtualHost"""

    _numbers = itertools.count(1)

    def __init__(self, display: Optional[str], char_size: tuple[int, int] = (1, 1)):
        self.number = next(self._numbers)
        self.display = display
        self.params: dict[str, Any] = {}
        self.live = True
        self.char_size = char_size
        self.text_pixel_size: Optional[tuple[int, int]] = None
        self.root_window = VirtualWindow(self)
        self.own_minibuffer: Optional[VirtualWindow] = None
        self.minibuffer_window: Optional[VirtualWindow] = None
        self.minibuffer_only = False
        self.window_state: Any = None

    def __repr__(self) -> str:
        state = "" if self.live else " dead"
        return f"<VirtualFrame {self.number} on {self.display or 'tty'}{state}>"


class VirtualHost(WindowingHost):
    """
    In-memory WindowingHost

    Args:
        displays: Graphical displays available (text terminals always are)
        current_display: Display of the selected frame
        workarea: Monitor work area used for every display without its own
        workareas: Per-display monitor work areas
        char_size: Default character cell size for new frames
        daemon: Behave as a headless session
    """

    def __init__(
        self,
        displays: Optional[Iterable[str]] = None,
        current_display: Optional[str] = ":0",
        workarea: Box = DEFAULT_WORKAREA,
        workareas: Optional[Mapping[Optional[str], Box]] = None,
        char_size: tuple[int, int] = (1, 1),
        daemon: bool = False,
    ):
        self.displays = set(displays) if displays is not None else set()
        if current_display is not None:
            self.displays.add(current_display)
        self._current_display = current_display
        self.workarea = workarea
        self.workareas = dict(workareas or {})
        self.char_size = char_size
        self.daemon = daemon
        self.frames: list[VirtualFrame] = []
        self._default_minibuffer_frame: Optional[VirtualFrame] = None
        self.settle_count = 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_live(self, frame: Any, operation: str) -> VirtualFrame:
        if not self.frame_live_p(frame):
            raise HostOperationError(operation, f"{frame} is not a live frame",
                                     code=ErrorCode.FRAME_NOT_LIVE)
        return frame

    def _selected_frame(self) -> Optional[VirtualFrame]:
        live = self.frame_list()
        return live[0] if live else None

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def frame_list(self) -> list[Any]:
        return [frame for frame in self.frames if frame.live]

    def frame_live_p(self, frame: Any) -> bool:
        return isinstance(frame, VirtualFrame) and frame.live

    def frame_parameters(self, frame: Any) -> dict[str, Any]:
        frame = self._check_live(frame, "frame_parameters")
        params = {"display": frame.display}
        params.update(copy.deepcopy(frame.params))
        params["minibuffer"] = "only" if frame.minibuffer_only else frame.minibuffer_window
        return params

    def modify_frame_parameters(self, frame: Any, params: Iterable[tuple[str, Any]]) -> None:
        frame = self._check_live(frame, "modify_frame_parameters")
        for name, value in params:
            if name == "display":
                frame.display = value
            elif name == "minibuffer":
                # Fixed at creation time
                continue
            elif value is None:
                frame.params.pop(name, None)
            else:
                frame.params[name] = value

    def frame_display(self, frame: Any) -> Optional[str]:
        return self._check_live(frame, "frame_display").display

    def current_display(self) -> Optional[str]:
        return self._current_display

    def make_frame(
        self,
        display: Any = _CURRENT,
        params: Union[Iterable[tuple[str, Any]], Mapping[str, Any]] = (),
    ) -> Any:
        """Create a frame; PARAMS["minibuffer"] may be True, "only", False or a minibuffer window"""
        if display is _CURRENT:
            display = self._current_display
        if display is not None and display not in self.displays:
            raise HostOperationError("make_frame", f"Display {display} is not available",
                                     code=ErrorCode.FRAME_CREATE_FAILED)

        params = dict(params.items() if isinstance(params, Mapping) else params)
        minibuffer = params.pop("minibuffer", True)

        frame = VirtualFrame(display, char_size=self.char_size)
        if isinstance(minibuffer, VirtualWindow):
            if not (minibuffer.live and minibuffer.minibuffer):
                raise HostOperationError("make_frame", f"{minibuffer} is not a live minibuffer window",
                                         code=ErrorCode.FRAME_CREATE_FAILED)
            frame.minibuffer_window = minibuffer
        elif minibuffer is True or minibuffer == "only":
            frame.own_minibuffer = VirtualWindow(frame, minibuffer=True)
            frame.minibuffer_window = frame.own_minibuffer
            frame.minibuffer_only = minibuffer == "only"
        else:
            default = self._default_minibuffer_frame
            if default is None or not default.live:
                raise HostOperationError("make_frame", "No default minibuffer frame to borrow from",
                                         code=ErrorCode.FRAME_CREATE_FAILED)
            frame.minibuffer_window = default.own_minibuffer

        frame.params.update({"visibility": True})
        frame.params.update({k: v for k, v in params.items() if v is not None})
        self.frames.append(frame)

        if frame.own_minibuffer is not None and self._default_minibuffer_frame is None:
            self._default_minibuffer_frame = frame

        logger.debug(f"Created {frame}")
        return frame

    def delete_frame(self, frame: Any) -> None:
        frame = self._check_live(frame, "delete_frame")
        others = [f for f in self.frame_list() if f is not frame]
        if not others:
            raise HostOperationError("delete_frame", "Attempt to delete the sole frame",
                                     code=ErrorCode.FRAME_DELETE_FAILED)
        if self.frame_visible_p(frame) and not any(self.frame_visible_p(f) for f in others):
            raise HostOperationError("delete_frame", "Attempt to delete the sole visible frame",
                                     code=ErrorCode.FRAME_DELETE_FAILED)
        users = [f for f in others if f.minibuffer_window is frame.own_minibuffer
                 and frame.own_minibuffer is not None]
        if users:
            raise HostOperationError("delete_frame", f"Minibuffer of {frame} is used by {users[0]}",
                                     code=ErrorCode.FRAME_DELETE_FAILED)

        frame.live = False
        frame.root_window.live = False
        if frame.own_minibuffer is not None:
            frame.own_minibuffer.live = False
        if self._default_minibuffer_frame is frame:
            owners = [f for f in others if f.own_minibuffer is not None]
            self._default_minibuffer_frame = owners[0] if owners else None
        logger.debug(f"Deleted {frame}")

    def frame_visible_p(self, frame: Any) -> bool:
        frame = self._check_live(frame, "frame_visible_p")
        return frame.params.get("visibility", True) is True

    def make_frame_visible(self, frame: Optional[Any] = None) -> None:
        frame = frame if frame is not None else self._selected_frame()
        if frame is None:
            return
        self._check_live(frame, "make_frame_visible").params["visibility"] = True

    # ------------------------------------------------------------------
    # Window state
    # ------------------------------------------------------------------

    def window_state_get(self, frame: Any) -> Any:
        return copy.deepcopy(self._check_live(frame, "window_state_get").window_state)

    def window_state_put(self, frame: Any, state: Any) -> None:
        self._check_live(frame, "window_state_put").window_state = copy.deepcopy(state)

    # ------------------------------------------------------------------
    # Minibuffers
    # ------------------------------------------------------------------

    def minibuffer_window(self, frame: Any) -> Any:
        return self._check_live(frame, "minibuffer_window").minibuffer_window

    def window_frame(self, window: Any) -> Any:
        return window.frame if isinstance(window, VirtualWindow) else None

    def window_live_p(self, window: Any) -> bool:
        return isinstance(window, VirtualWindow) and window.live

    def window_minibuffer_p(self, window: Any) -> bool:
        return isinstance(window, VirtualWindow) and window.minibuffer

    def default_minibuffer_frame(self) -> Optional[Any]:
        return self._default_minibuffer_frame

    def set_default_minibuffer_frame(self, frame: Any) -> None:
        self._default_minibuffer_frame = self._check_live(frame, "set_default_minibuffer_frame")

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def monitor_workarea(self, frame: Any) -> Box:
        frame = self._check_live(frame, "monitor_workarea")
        return self.workareas.get(frame.display, self.workarea)

    def frame_pixel_size(self, frame: Any) -> tuple[int, int]:
        frame = self._check_live(frame, "frame_pixel_size")
        char_width, char_height = frame.char_size
        width = frame.params.get("width")
        height = frame.params.get("height")
        return (
            char_width * width if isinstance(width, int) else 0,
            char_height * height if isinstance(height, int) else 0,
        )

    def frame_char_size(self, frame: Any) -> tuple[int, int]:
        return self._check_live(frame, "frame_char_size").char_size

    def frame_text_pixel_size(self, frame: Any) -> tuple[int, int]:
        frame = self._check_live(frame, "frame_text_pixel_size")
        return frame.text_pixel_size or self.frame_pixel_size(frame)

    def set_frame_text_pixel_size(self, frame: Any, width: int, height: int) -> None:
        self._check_live(frame, "set_frame_text_pixel_size").text_pixel_size = (width, height)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def daemon_p(self) -> bool:
        return self.daemon

    def settle(self) -> None:
        self.settle_count += 1
