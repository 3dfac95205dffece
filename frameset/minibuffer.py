"""
Minibuffer relationships between frames.

A frame either hosts its own minibuffer window or uses the minibuffer window
of another frame. Before saving, every frame is tagged with a
frameset--mini attribute describing which case applies, so the restore path
can create minibuffer-owning frames first and wire the others to them.
"""

import logging
from typing import Any, Iterable, Mapping, Optional

from .constants import MINI_PARAM
from .errors import DependencyError, ErrorCode
from .host import WindowingHost
from .identity import frame_id
from .models import FrameState, MinibufferLink

logger = logging.getLogger(__name__)


def mini_link(parameters: Mapping[str, Any]) -> Optional[MinibufferLink]:
    """Return the minibuffer link recorded in PARAMETERS, if any"""
    value = parameters.get(MINI_PARAM)
    if value is None:
        return None
    try:
        return MinibufferLink.from_value(value)
    except ValueError as e:
        logger.warning(f"Ignoring malformed {MINI_PARAM} value {value!r}: {e}")
        return None


def record_minibuffer_relationships(host: WindowingHost, frames: Iterable[Any]) -> None:
    """
    Tag FRAMES with their minibuffer relationships.

    Frames hosting their own minibuffer are tagged as owners (marking the
    host's default minibuffer frame); every other frame is tagged with the
    identity of the frame whose minibuffer it uses.

    Args:
        host: Windowing host
        frames: Frames about to be saved

    Raises:
        DependencyError: If a frame's minibuffer frame is not among FRAMES
    """
    frames = list(frames)
    for frame in frames:
        host.set_frame_parameter(frame, MINI_PARAM, None)

    default = host.default_minibuffer_frame()
    owners = [frame for frame in frames if host.owns_minibuffer(frame)]
    for frame in owners:
        frame_id(host, frame)
        link = MinibufferLink.owner(default=frame == default)
        host.set_frame_parameter(frame, MINI_PARAM, link.to_value())

    for frame in frames:
        if frame in owners:
            continue
        frame_id(host, frame)
        window = host.minibuffer_window(frame)
        mb_frame = host.window_frame(window) if window is not None else None
        if mb_frame is None or mb_frame not in owners:
            raise DependencyError(
                f"Minibuffer frame {mb_frame} for {frame} is not being saved",
                code=ErrorCode.MINIBUFFER_FRAME_NOT_SAVED,
                context={"frame": frame, "minibuffer_frame": mb_frame},
            )
        link = MinibufferLink.borrower(frame_id(host, mb_frame))
        host.set_frame_parameter(frame, MINI_PARAM, link.to_value())

    logger.debug(
        f"Recorded minibuffer relationships: {len(owners)} owner(s), "
        f"{len(frames) - len(owners)} minibufferless"
    )


def minibufferless_last_key(state: FrameState) -> tuple[int, str]:
    """Sort key putting frames in an order suitable for creating them.

    The default minibuffer frame comes first, then other frames with their
    own minibuffer, then minibufferless frames grouped by provider.
    """
    link = mini_link(state.parameters)
    if link is None:
        return (1, "")
    if link.owns:
        return (0 if link.default else 1, "")
    return (2, link.provider_id)


def restore_order(states: Iterable[FrameState]) -> list[FrameState]:
    """Return STATES sorted so minibuffer providers precede their users"""
    return sorted(states, key=minibufferless_last_key)


def deletion_order(host: WindowingHost, frames: Iterable[Any]) -> list[Any]:
    """Return FRAMES with minibufferless frames first.

    Deleting a frame whose minibuffer window another frame still uses fails,
    so the users go first.
    """
    return sorted(frames, key=lambda frame: 1 if host.owns_minibuffer(frame) else 0)
