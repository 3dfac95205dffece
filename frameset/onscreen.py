"""
Onscreen repositioning of restored frames.

A frame restored from another monitor setup may end up partly or fully
outside its monitor's work area. Depending on the mode, such a frame is
moved back, and marked fullwidth / fullheight / maximized when it is larger
than the work area.
"""

import logging
from typing import Any, Callable, Union

from .host import WindowingHost
from .models import Box, OnscreenMode

logger = logging.getLogger(__name__)

OnscreenPredicate = Callable[[Any, Box, Box], bool]


def compute_pos(value: Any, start: int, end: int) -> int:
    """
    Resolve a frame position attribute to an absolute pixel position

    Args:
        value: An integer, or a ("+", n) / ("-", n) position relative
            to the start or end of the monitor
        start: Left (or top) edge of the monitor work area
        end: Right (or bottom) edge of the monitor work area

    Returns:
        Absolute position
    """
    if isinstance(value, (list, tuple)) and len(value) == 2:
        sign, offset = value
        if sign == "+":
            return start + int(offset)
        if sign == "-":
            return end + int(offset)
    if value is None:
        return start
    return int(value)


def frame_box(host: WindowingHost, frame: Any, workarea: Box) -> Box:
    """Return FRAME's outer pixel box, resolving relative positions against WORKAREA"""
    left = compute_pos(host.frame_parameter(frame, "left"), workarea.left, workarea.right)
    top = compute_pos(host.frame_parameter(frame, "top"), workarea.top, workarea.bottom)
    char_width, char_height = host.frame_char_size(frame)
    pixel_width, pixel_height = host.frame_pixel_size(frame)
    width = max(pixel_width, char_width * int(host.frame_parameter(frame, "width") or 0))
    height = max(pixel_height, char_height * int(host.frame_parameter(frame, "height") or 0))
    return Box(left=left, top=top, width=width, height=height)


def needs_move(
    mode: Union[OnscreenMode, OnscreenPredicate],
    frame: Any,
    fr: Box,
    area: Box,
) -> bool:
    """Return True if frame box FR should be moved back into work area AREA"""
    if callable(mode):
        return bool(mode(frame, fr, area))
    if mode == OnscreenMode.ANY_EDGE:
        return (fr.bottom < area.top or fr.bottom > area.bottom
                or fr.left < area.left or fr.left > area.right
                or fr.right < area.left or fr.right > area.right
                or fr.top < area.top or fr.top > area.bottom)
    if mode == OnscreenMode.FULLY_OFFSCREEN:
        return (fr.left > area.right
                or fr.right < area.left
                or fr.top > area.bottom
                or fr.bottom < area.top)
    return False


def onscreen_params(fr: Box, area: Box) -> dict[str, Any]:
    """
    Compute the attributes that bring frame box FR back into work area AREA

    Args:
        fr: Frame box
        area: Monitor work area

    Returns:
        Changed attributes among left, top and fullscreen
    """
    fullwidth = fr.width > area.width
    fullheight = fr.height > area.height
    params: dict[str, Any] = {}

    # Horizontal
    if fullwidth:
        params["left"] = area.left
    elif fr.right > area.right:
        params["left"] = fr.left - (fr.right - area.right)
    elif fr.left < area.left:
        params["left"] = area.left

    # Vertical
    if fullheight:
        params["top"] = area.top
    elif fr.bottom > area.bottom:
        params["top"] = fr.top - (fr.bottom - area.bottom)
    elif fr.top < area.top:
        params["top"] = area.top

    if fullwidth or fullheight:
        if not fullwidth:
            params["fullscreen"] = "fullheight"
        elif not fullheight:
            params["fullscreen"] = "fullwidth"
        else:
            params["fullscreen"] = "maximized"

    return params


def move_onscreen(
    host: WindowingHost,
    frame: Any,
    mode: Union[OnscreenMode, OnscreenPredicate] = OnscreenMode.FULLY_OFFSCREEN,
) -> dict[str, Any]:
    """
    Move FRAME back into its monitor's work area if MODE requires it

    Args:
        host: Windowing host
        frame: Frame to check
        mode: OnscreenMode, or a predicate called with (frame, frame_box, workarea)

    Returns:
        The attributes actually changed (empty if the frame was left alone)
    """
    if mode == OnscreenMode.NONE:
        return {}

    area = host.monitor_workarea(frame)
    fr = frame_box(host, frame, area)
    if not needs_move(mode, frame, fr, area):
        return {}

    current = host.frame_parameters(frame)
    changed = {
        name: value
        for name, value in onscreen_params(fr, area).items()
        if current.get(name) != value
    }
    if changed:
        logger.info(f"Moving {frame} onscreen: {changed}")
        host.modify_frame_parameters(frame, list(changed.items()))
    return changed
