"""
Frameset Restoration Module

Restores a saved Frameset onto a windowing host by:
1. Choosing which live frames may be reused (reuse policy)
2. Restoring frame states in minibuffer dependency order
3. Reusing or creating a frame for each state and applying its attributes
4. Moving frames back onscreen and applying window state
5. Deleting leftover frames
6. Making sure at least one frame is visible

A failure while restoring one frame state is logged and recorded in the
result; the remaining states are still restored.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .constants import (
    CREATION_ONLY_PARAMS,
    FINISHING_PARAMS,
    FRAMESET_VERSION,
    ICONIFIED_VALUES,
    INITIAL_PARAMS,
    TEXT_PIXEL_HEIGHT_PARAM,
    TEXT_PIXEL_WIDTH_PARAM,
)
from .errors import DependencyError, ErrorCode, FramesetError, FramesetValidationError
from .filters import DisplayTarget, FilteredParams, FilterTable, filter_params
from .host import WindowingHost
from .identity import cfg_id, clear_frame_id, frame_with_id
from .minibuffer import deletion_order, mini_link, restore_order
from .models import (
    DisplayPolicy,
    FrameAction,
    Frameset,
    FrameState,
    OnscreenMode,
    ReusePolicy,
    is_frameset,
)
from .onscreen import OnscreenPredicate, move_onscreen
from .reuse import ReusePool

logger = logging.getLogger(__name__)

DisplayChooser = Callable[[Mapping[str, Any], Any], DisplayPolicy]
StatePredicate = Callable[[Mapping[str, Any], Any], bool]


@dataclass
class RestoreResult:
    """Outcome of a frameset restore"""
    actions: dict[Any, FrameAction] = field(default_factory=dict)
    deleted: list[Any] = field(default_factory=list)
    skipped: int = 0
    errors: list[dict[str, Any]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def created(self) -> list[Any]:
        return [frame for frame, action in self.actions.items() if action == FrameAction.CREATED]

    @property
    def reused(self) -> list[Any]:
        return [frame for frame, action in self.actions.items() if action == FrameAction.REUSED]

    @property
    def restored(self) -> list[Any]:
        return self.created + self.reused


class FramesetRestore:
    """
    Restores framesets onto a windowing host

    Each frame state goes through: display resolution, skip check, duplicate
    identity detection, minibuffer wiring, frame reuse or creation, attribute
    application, onscreen repositioning, finishing attributes (visibility,
    fullscreen) and window state.
    """

    def __init__(self, host: WindowingHost):
        """
        Initialize frameset restore

        Args:
            host: Windowing host to restore onto
        """
        self.host = host

    def restore(
        self,
        frameset: Union[Frameset, Mapping[str, Any]],
        filters: Optional[FilterTable] = None,
        reuse: Union[ReusePolicy, Iterable[Any]] = ReusePolicy.ALL,
        display: Union[DisplayPolicy, DisplayChooser] = DisplayPolicy.ORIGINAL,
        onscreen: Union[OnscreenMode, OnscreenPredicate] = OnscreenMode.FULLY_OFFSCREEN,
        predicate: Optional[StatePredicate] = None,
        cleanup: bool = True,
    ) -> RestoreResult:
        """
        Restore FRAMESET

        Args:
            frameset: Frameset, or its mapping form
            filters: Filter table (default: the persistent table)
            reuse: ReusePolicy, or an explicit list of frames that may be reused
            display: DisplayPolicy, or a function of (parameters, window_state)
                returning one
            onscreen: OnscreenMode, or a predicate of (frame, frame_box, workarea)
            predicate: Only states for which predicate(parameters, window_state)
                is True are restored
            cleanup: Delete leftover frames (never done under ReusePolicy.KEEP)

        Returns:
            RestoreResult

        Raises:
            FramesetValidationError: If FRAMESET is not a valid frameset
        """
        frameset = self._validate(frameset)
        policy, explicit = self._resolve_reuse(reuse)

        logger.info(
            f"Restoring frameset {frameset.name or '(unnamed)'}: "
            f"{len(frameset.states)} frame state(s), reuse={policy.value if policy else 'explicit'}"
        )

        result = RestoreResult()
        pool, other_frames = self._select_pool(frameset, policy, explicit)
        for frame in other_frames:
            result.actions[frame] = FrameAction.REJECTED
        for frame in pool:
            result.actions[frame] = FrameAction.IGNORED

        # Kept frames give up identities about to be restored
        kept = other_frames if policy in (ReusePolicy.KEEP, None) else []

        for state in restore_order(frameset.states):
            if predicate is not None and not predicate(state.parameters, state.window_state):
                result.skipped += 1
                continue
            try:
                self._restore_state(state, filters, display, onscreen, pool, kept, result)
            except Exception as e:
                fid = cfg_id(state.parameters)
                logger.error(f"Failed to restore frame {fid}: {e}")
                error = e.to_dict() if isinstance(e, FramesetError) else {"message": str(e)}
                error["frame_id"] = fid
                result.errors.append(error)

        # Let visibility changes of restored frames take effect before
        # deleting frames the host might otherwise consider the last one
        self.host.settle()

        if cleanup and policy != ReusePolicy.KEEP:
            self._cleanup(result, delete_rejected=explicit is None)

        self._ensure_visible()

        logger.info(
            f"Frameset restore completed: {len(result.created)} created, "
            f"{len(result.reused)} reused, {len(result.deleted)} deleted, "
            f"{result.skipped} skipped, {len(result.errors)} failed"
        )
        return result

    def _validate(self, frameset: Union[Frameset, Mapping[str, Any]]) -> Frameset:
        if isinstance(frameset, Mapping):
            frameset = dict(frameset)
        if is_frameset(frameset) is None:
            version = frameset.get("version") if isinstance(frameset, dict) else None
            code = (ErrorCode.UNSUPPORTED_VERSION
                    if version not in (None, FRAMESET_VERSION) else ErrorCode.INVALID_FRAMESET)
            raise FramesetValidationError(f"Unknown frameset {frameset!r:.200}", code=code)
        if isinstance(frameset, Frameset):
            return frameset
        return Frameset.model_validate(frameset)

    @staticmethod
    def _resolve_reuse(
        reuse: Union[ReusePolicy, Iterable[Any]],
    ) -> tuple[Optional[ReusePolicy], Optional[list[Any]]]:
        if isinstance(reuse, str):
            try:
                return ReusePolicy(reuse), None
            except ValueError:
                raise ValueError(f"Invalid reuse policy: {reuse}")
        return None, list(reuse)

    def _select_pool(
        self,
        frameset: Frameset,
        policy: Optional[ReusePolicy],
        explicit: Optional[list[Any]],
    ) -> tuple[ReusePool, list[Any]]:
        """Split live frames into reuse candidates and other frames"""
        live = self.host.frame_list()

        if explicit is not None:
            candidates = [frame for frame in explicit if self.host.frame_live_p(frame)]
        elif policy == ReusePolicy.ALL:
            candidates = list(live)
        elif policy == ReusePolicy.MATCH:
            candidates = []
            for state in frameset.states:
                frame = frame_with_id(self.host, cfg_id(state.parameters), live)
                if frame is not None and frame not in candidates:
                    candidates.append(frame)
        else:
            candidates = []

        others = [frame for frame in live if frame not in candidates]
        logger.debug(f"Reuse pool: {len(candidates)} candidate(s), {len(others)} other frame(s)")
        return ReusePool(self.host, candidates), others

    def _restore_state(
        self,
        state: FrameState,
        filters: Optional[FilterTable],
        display: Union[DisplayPolicy, DisplayChooser],
        onscreen: Union[OnscreenMode, OnscreenPredicate],
        pool: ReusePool,
        kept: list[Any],
        result: RestoreResult,
    ) -> Optional[Any]:
        """Restore one frame state; return the frame, or None if skipped"""
        params = dict(state.parameters)
        fid = cfg_id(params)
        link = mini_link(params)

        policy = display(params, state.window_state) if callable(display) else display
        policy = DisplayPolicy(policy)

        # Only set a target when forcing displays and the display differs
        target = None
        current_display = self.host.current_display()
        if policy != DisplayPolicy.ORIGINAL and params.get("display") != current_display:
            target = DisplayTarget(current_display)
        to_tty = target is not None and target.display is None

        # Skip frames from other displays when asked to, and minibuffer-only
        # frames that cannot live on a text terminal
        if target is not None and (
            policy == DisplayPolicy.DELETE
            or (to_tty and params.get("minibuffer") == "only")
        ):
            logger.info(f"Skipping frame {fid} saved on display {params.get('display')}")
            result.skipped += 1
            return None

        duplicate = frame_with_id(self.host, fid, kept)
        if duplicate is not None:
            clear_frame_id(self.host, duplicate)

        if link is not None and not to_tty:
            if not link.owns:
                params["minibuffer"] = self._provider_window(link.provider_id, result)
            elif params.get("minibuffer") == "only":
                params = {"tool-bar-lines": 0, "menu-bar-lines": 0, **params}

        frame = self._restore_frame(params, state.window_state, filters, target,
                                    onscreen, pool, result)

        if link is not None and link.is_default:
            self.host.set_default_minibuffer_frame(frame)

        return frame

    def _provider_window(self, provider_id: Optional[str], result: RestoreResult) -> Any:
        """Return the minibuffer window of the frame with identity PROVIDER_ID

        Frames restored in this call take precedence over older frames still
        holding the same identity.
        """
        mb_frame = frame_with_id(self.host, provider_id, result.restored)
        if mb_frame is None:
            mb_frame = frame_with_id(self.host, provider_id)
        if mb_frame is None:
            raise DependencyError(
                f"Minibuffer frame {provider_id} not found",
                code=ErrorCode.MINIBUFFER_FRAME_NOT_FOUND,
                context={"provider_id": provider_id},
            )
        window = self.host.minibuffer_window(mb_frame)
        if (window is None
                or not self.host.window_live_p(window)
                or not self.host.window_minibuffer_p(window)):
            raise DependencyError(
                f"Not a minibuffer window {window}",
                code=ErrorCode.NOT_A_MINIBUFFER_WINDOW,
                context={"provider_id": provider_id, "window": window},
            )
        return window

    def _restore_frame(
        self,
        params: dict[str, Any],
        window_state: Any,
        filters: Optional[FilterTable],
        target: Optional[DisplayTarget],
        onscreen: Union[OnscreenMode, OnscreenPredicate],
        pool: ReusePool,
        result: RestoreResult,
    ) -> Any:
        """Reuse or create a frame for PARAMS and restore it"""
        filtered = FilteredParams(filter_params(params, filters, saving=False, target=target))
        display = filtered.get("display")

        frame = pool.claim(display, filtered) if len(pool) else None
        if frame is not None:
            result.actions[frame] = FrameAction.REUSED

        # Visibility and fullscreen are set once the frame is in place
        finishing = [(name, filtered.get(name)) for name in FINISHING_PARAMS if name in filtered]
        for name, _ in finishing:
            filtered.remove(name)
        fullscreen = dict(finishing).get("fullscreen")

        if frame is None:
            initial = [(name, filtered.get(name)) for name in INITIAL_PARAMS if name in filtered]
            frame = self.host.make_frame(display, initial)
            result.actions[frame] = FrameAction.CREATED
            logger.debug(f"Created {frame} on display {display}")

        for name in CREATION_ONLY_PARAMS:
            filtered.remove(name)

        # A reused frame in another fullscreen state would ignore the size
        if self.host.frame_parameter(frame, "fullscreen") != fullscreen:
            filtered.add("fullscreen", None)
        self.host.modify_frame_parameters(frame, filtered.to_list())

        text_width = params.get(TEXT_PIXEL_WIDTH_PARAM)
        text_height = params.get(TEXT_PIXEL_HEIGHT_PARAM)
        if text_width and text_height and target is None and not fullscreen:
            self.host.set_frame_text_pixel_size(frame, text_width, text_height)

        # Iconified frames cannot be checked without deiconifying them
        if (onscreen != OnscreenMode.NONE
                and self.host.frame_parameter(frame, "visibility") not in ICONIFIED_VALUES):
            move_onscreen(self.host, frame, onscreen)

        if finishing:
            self.host.modify_frame_parameters(frame, finishing)

        self.host.window_state_put(frame, window_state)
        return frame

    def _cleanup(self, result: RestoreResult, delete_rejected: bool) -> None:
        """Delete frames that were not restored upon"""
        doomed = [
            frame for frame, action in result.actions.items()
            if self.host.frame_live_p(frame)
            and (action == FrameAction.IGNORED
                 or (delete_rejected and action == FrameAction.REJECTED))
        ]
        for frame in deletion_order(self.host, doomed):
            try:
                self.host.delete_frame(frame)
                result.deleted.append(frame)
            except Exception as e:
                logger.warning(f"Could not delete {frame}: {e}")
                error = e.to_dict() if isinstance(e, FramesetError) else {"message": str(e)}
                error["frame"] = repr(frame)
                result.errors.append(error)

    def _ensure_visible(self) -> None:
        """Make sure there is at least one visible frame"""
        if self.host.daemon_p():
            return
        if not any(self.host.frame_visible_p(frame) for frame in self.host.frame_list()):
            logger.info("No visible frame after restore, making the selected frame visible")
            self.host.make_frame_visible()


def restore(
    host: WindowingHost,
    frameset: Union[Frameset, Mapping[str, Any]],
    filters: Optional[FilterTable] = None,
    reuse: Union[ReusePolicy, Iterable[Any]] = ReusePolicy.ALL,
    display: Union[DisplayPolicy, DisplayChooser] = DisplayPolicy.ORIGINAL,
    onscreen: Union[OnscreenMode, OnscreenPredicate] = OnscreenMode.FULLY_OFFSCREEN,
    predicate: Optional[StatePredicate] = None,
    cleanup: bool = True,
) -> RestoreResult:
    """
    Convenience function to restore a frameset

    Args:
        host: Windowing host
        frameset: Frameset to restore
        filters: Filter table
        reuse: Reuse policy or explicit frame list
        display: Display policy
        onscreen: Onscreen mode
        predicate: State selection predicate
        cleanup: Delete leftover frames

    Returns:
        RestoreResult
    """
    restorer = FramesetRestore(host)
    return restorer.restore(
        frameset,
        filters=filters,
        reuse=reuse,
        display=display,
        onscreen=onscreen,
        predicate=predicate,
        cleanup=cleanup,
    )
