"""
Frameset Capture Module

Captures a set of live frames into a Frameset document:
- Frame identities (assigned on first save)
- Minibuffer relationships between the frames
- Filtered frame attributes
- Opaque window state of each frame's root window
"""

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from .constants import (
    APP_PROPERTY,
    DESCRIPTION_PROPERTY,
    NAME_PROPERTY,
    TEXT_PIXEL_HEIGHT_PARAM,
    TEXT_PIXEL_WIDTH_PARAM,
)
from .errors import ErrorCode, FramesetValidationError
from .filters import FilterTable, filter_params
from .host import WindowingHost
from .minibuffer import record_minibuffer_relationships
from .models import Frameset, FrameState

logger = logging.getLogger(__name__)


class FramesetCapture:
    """
    Captures frames from a windowing host

    Process:
    1. Select live frames (optionally narrowed by a predicate)
    2. Record text pixel sizes and minibuffer relationships
    3. Filter each frame's attributes for saving
    4. Capture each frame's window state
    """

    def __init__(self, host: WindowingHost):
        """
        Initialize frameset capture

        Args:
            host: Windowing host to read frames from
        """
        self.host = host

    def capture(
        self,
        frames: Optional[Iterable[Any]] = None,
        filters: Optional[FilterTable] = None,
        predicate: Optional[Callable[[Any], bool]] = None,
        properties: Optional[Mapping[str, Any]] = None,
        app: Any = None,
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> Frameset:
        """
        Capture frames into a Frameset

        Args:
            frames: Frames to save (default: all live frames)
            filters: Filter table (default: the persistent table)
            predicate: Only frames for which this returns True are saved
            properties: Extra properties stored with the frameset
            app: Producing application tag, stored as the :app property
            name: Frameset name, stored as the :name property
            description: Description, stored as the :desc property

        Returns:
            Frameset with one state per saved frame

        Raises:
            DependencyError: If a saved frame uses the minibuffer of an unsaved frame
            FramesetValidationError: If no frame is left to save
        """
        candidates = list(frames) if frames is not None else self.host.frame_list()
        if predicate is not None:
            candidates = [frame for frame in candidates if predicate(frame)]
        selected = [frame for frame in candidates if self.host.frame_live_p(frame)]

        if not selected:
            raise FramesetValidationError(
                "No live frames to save",
                code=ErrorCode.EMPTY_FRAMESET,
            )

        logger.info(f"Capturing frameset: {len(selected)} frame(s)")

        self._record_text_pixel_sizes(selected)
        record_minibuffer_relationships(self.host, selected)

        states = [self._capture_frame(frame, filters) for frame in selected]

        props = dict(properties or {})
        if app is not None:
            props[APP_PROPERTY] = app
        if name is not None:
            props[NAME_PROPERTY] = name
        if description is not None:
            props[DESCRIPTION_PROPERTY] = description

        frameset = Frameset(properties=props, states=states)
        logger.info(f"Captured frameset {name or '(unnamed)'}: {len(states)} frame state(s)")
        return frameset

    def _record_text_pixel_sizes(self, frames: list[Any]) -> None:
        """Store exact text area sizes so restore can be pixel exact"""
        for frame in frames:
            width, height = self.host.frame_text_pixel_size(frame)
            self.host.modify_frame_parameters(frame, [
                (TEXT_PIXEL_WIDTH_PARAM, width),
                (TEXT_PIXEL_HEIGHT_PARAM, height),
            ])

    def _capture_frame(self, frame: Any, filters: Optional[FilterTable]) -> FrameState:
        parameters = filter_params(self.host.frame_parameters(frame), filters, saving=True)
        window_state = self.host.window_state_get(frame)
        logger.debug(f"Captured {frame}: {len(parameters)} parameter(s)")
        return FrameState(parameters=dict(parameters), window_state=window_state)


def save(
    host: WindowingHost,
    frames: Optional[Iterable[Any]] = None,
    filters: Optional[FilterTable] = None,
    predicate: Optional[Callable[[Any], bool]] = None,
    properties: Optional[Mapping[str, Any]] = None,
    app: Any = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Frameset:
    """
    Convenience function to capture frames into a Frameset

    Args:
        host: Windowing host
        frames: Frames to save (default: all live frames)
        filters: Filter table
        predicate: Frame selection predicate
        properties: Extra properties
        app: Producing application tag
        name: Frameset name
        description: Frameset description

    Returns:
        Frameset
    """
    capture = FramesetCapture(host)
    return capture.capture(
        frames=frames,
        filters=filters,
        predicate=predicate,
        properties=properties,
        app=app,
        name=name,
        description=description,
    )
