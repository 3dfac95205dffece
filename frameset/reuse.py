"""
Reuse of existing frames when restoring.

A ReusePool holds the live frames a single restore call may restore onto.
Each saved frame state claims at most one pool frame, and a claimed frame
leaves the pool for good, so two states never end up on the same frame.
"""

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from .host import WindowingHost
from .identity import cfg_id, frame_id_equal
from .minibuffer import mini_link

logger = logging.getLogger(__name__)


class ReusePool:
    """Live frames available for reuse during one restore"""

    def __init__(self, host: WindowingHost, frames: Iterable[Any] = ()):
        """
        Initialize reuse pool

        Args:
            host: Windowing host owning the frames
            frames: Candidate frames
        """
        self.host = host
        self._frames: list[Any] = list(frames)

    def __contains__(self, frame: object) -> bool:
        return frame in self._frames

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._frames))

    def __len__(self) -> int:
        return len(self._frames)

    def _find(self, display: Optional[str], predicate: Callable[[Any], bool]) -> Optional[Any]:
        for frame in self._frames:
            if (self.host.frame_live_p(frame)
                    and self.host.frame_display(frame) == display
                    and predicate(frame)):
                return frame
        return None

    def _hosts_own_minibuffer(self, frame: Any) -> bool:
        window = self.host.minibuffer_window(frame)
        return (
            window is not None
            and self.host.window_live_p(window)
            and self.host.window_minibuffer_p(window)
            and self.host.window_frame(window) == frame
        )

    def _uses_minibuffer_of(self, frame: Any, provider_id: Optional[str]) -> bool:
        window = self.host.minibuffer_window(frame)
        if window is None:
            return False
        return frame_id_equal(self.host, self.host.window_frame(window), provider_id)

    def claim(self, display: Optional[str], parameters: Mapping[str, Any]) -> Optional[Any]:
        """
        Find a pool frame suitable for a saved frame and remove it from the pool

        Only frames on DISPLAY are considered. A frame without minibuffer
        information takes any frame. A minibuffer-owning frame prefers the
        frame with its identity, then any frame hosting its own minibuffer
        (unless it is minibuffer-only). A minibufferless frame needs the frame
        with its identity, still using its provider's minibuffer.

        Args:
            display: Display the frame is restored onto
            parameters: Filtered parameters of the saved frame

        Returns:
            The claimed frame, or None
        """
        link = mini_link(parameters)
        fid = cfg_id(parameters)

        if link is None:
            frame = self._find(display, lambda f: True)
        elif link.owns:
            frame = self._find(display, lambda f: frame_id_equal(self.host, f, fid))
            if frame is None and parameters.get("minibuffer") != "only":
                frame = self._find(display, self._hosts_own_minibuffer)
        else:
            frame = self._find(
                display,
                lambda f: (frame_id_equal(self.host, f, fid)
                           and self._uses_minibuffer_of(f, link.provider_id)),
            )

        if frame is not None:
            self._frames.remove(frame)
            logger.debug(f"Reusing {frame} for frame id {fid}")
        return frame
