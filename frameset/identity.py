"""
Frame identity registry.

Each saved frame carries a random, process-independent identifier in its
frameset--id attribute. The identifier is created lazily the first time a
frame is saved and is what the restore path uses to find the live frame
that corresponds to a saved one.
"""

import logging
from typing import Any, Iterable, Mapping, Optional
from uuid import uuid4

from .constants import ID_PARAM
from .host import WindowingHost

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Return a fresh frame identifier"""
    return str(uuid4()).upper()


def frame_id(host: WindowingHost, frame: Any) -> str:
    """Return FRAME's identifier, assigning one if it has none yet"""
    current = host.frame_parameter(frame, ID_PARAM)
    if current:
        return current
    fid = new_id()
    host.set_frame_parameter(frame, ID_PARAM, fid)
    logger.debug(f"Assigned frame id {fid} to {frame}")
    return fid


def cfg_id(parameters: Mapping[str, Any]) -> Optional[str]:
    """Return the identifier recorded in a saved parameter map"""
    return parameters.get(ID_PARAM)


def frame_id_equal(host: WindowingHost, frame: Any, fid: Optional[str]) -> bool:
    """Return True if FRAME is live and holds identifier FID"""
    return (
        fid is not None
        and host.frame_live_p(frame)
        and host.frame_parameter(frame, ID_PARAM) == fid
    )


def frame_with_id(
    host: WindowingHost,
    fid: Optional[str],
    frames: Optional[Iterable[Any]] = None,
) -> Optional[Any]:
    """Return the live frame holding FID, searching FRAMES or all frames"""
    if fid is None:
        return None
    candidates = host.frame_list() if frames is None else frames
    for frame in candidates:
        if frame_id_equal(host, frame, fid):
            return frame
    return None


def clear_frame_id(host: WindowingHost, frame: Any) -> None:
    """Remove FRAME's identifier so another frame can take it over"""
    logger.info(f"Clearing duplicate frame id {host.frame_parameter(frame, ID_PARAM)} on {frame}")
    host.set_frame_parameter(frame, ID_PARAM, None)
