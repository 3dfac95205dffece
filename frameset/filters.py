"""
Frame parameter filtering.

A filter table maps attribute names to rules deciding whether the attribute
is saved into a frameset, re-applied when restoring, or rewritten on the way.
Attributes without a rule pass through unchanged.

Rules are either a FilterAction:

    PASSTHROUGH  keep the attribute
    NEVER        drop it, saving or restoring
    SAVE         keep it only when saving
    RESTORE      keep it only when restoring

or a CustomFilter wrapping a function called as

    func(current, filtered, parameters, saving, target, *args)

where CURRENT is the (name, value) pair being filtered, FILTERED is the
FilteredParams accumulated so far, PARAMETERS is the complete, unfiltered
attribute map, SAVING is True when saving and TARGET is the DisplayTarget of
the frame being restored (None when the display does not change). It returns
True to keep CURRENT, a falsy value to drop it, or a (name, value) pair to add
instead.

When restoring onto a different kind of display, a frame moving from a text
terminal to a graphical display (or back) needs some attributes dropped or
put aside: the standard filters below handle colors, terminal attributes and
the GUI-only font and size attributes, which are shelved under a "GUI:"
prefix while the frame lives on a terminal and unshelved when it returns to
a graphical display.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Union

from .constants import (
    DEFAULT_SHELVE_PREFIX,
    ICONIFIED_VALUES,
    TEXT_PIXEL_HEIGHT_PARAM,
    TEXT_PIXEL_WIDTH_PARAM,
    UNSPECIFIED_COLORS,
)
from .errors import RuleError

logger = logging.getLogger(__name__)


# ============================================================================
# Rules
# ============================================================================

class FilterAction(str, Enum):
    """Built-in filter rules"""
    PASSTHROUGH = "passthrough"
    NEVER = "never"
    SAVE = "save"
    RESTORE = "restore"


@dataclass(frozen=True)
class CustomFilter:
    """A filter function plus extra arguments appended to each call"""
    func: Callable[..., Any]
    args: tuple = ()

    def __call__(self, current, filtered, parameters, saving, target):
        return self.func(current, filtered, parameters, saving, target, *self.args)


FilterRule = Union[FilterAction, CustomFilter]
FilterTable = Mapping[str, FilterRule]


@dataclass(frozen=True)
class DisplayTarget:
    """Display a frame is being restored onto, when it differs from the saved one.

    A display of None means a text terminal.
    """
    display: Optional[str]


# ============================================================================
# Accumulator
# ============================================================================

class FilteredParams:
    """Ordered attribute map built up while filtering.

    Filters may look up and replace entries added earlier in the same pass.
    Adding a name that is already present replaces its value in place.
    """

    def __init__(self, params: Optional[Iterable[tuple[str, Any]]] = None):
        self._params: dict[str, Any] = {}
        for name, value in params or ():
            self.add(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"FilteredParams({self.to_list()!r})"

    def get(self, name: str, default: Any = None) -> Any:
        return self._params.get(name, default)

    def add(self, name: str, value: Any) -> None:
        self._params[name] = value

    def replace(self, name: str, value: Any) -> None:
        """Overwrite the value of an entry already present"""
        if name not in self._params:
            raise KeyError(name)
        self._params[name] = value

    def remove(self, name: str) -> None:
        self._params.pop(name, None)

    def items(self):
        return self._params.items()

    def to_list(self) -> list[tuple[str, Any]]:
        return list(self._params.items())

    def to_dict(self) -> dict[str, Any]:
        return dict(self._params)


# ============================================================================
# Display switch detection
# ============================================================================

def switch_to_gui_p(parameters: Mapping[str, Any], target: Optional[DisplayTarget]) -> bool:
    """True when a frame saved on a text terminal is restored on a graphical display"""
    return (
        target is not None
        and parameters.get("display") is None
        and target.display is not None
    )


def switch_to_tty_p(parameters: Mapping[str, Any], target: Optional[DisplayTarget]) -> bool:
    """True when a frame saved on a graphical display is restored on a text terminal"""
    return (
        target is not None
        and target.display is None
        and parameters.get("display") is not None
    )


# ============================================================================
# Standard filters
# ============================================================================

def filter_tty_to_gui(current, filtered, parameters, saving, target):
    """Drop terminal attributes when moving to a graphical display"""
    return saving or not switch_to_gui_p(parameters, target)


def filter_sanitize_color(current, filtered, parameters, saving, target):
    """Drop terminal placeholder colors when moving to a graphical display.

    The new frame then gets the colors of the current theme instead of
    "unspecified-fg" / "unspecified-bg".
    """
    value = current[1]
    return (
        saving
        or not isinstance(value, str)
        or not (switch_to_gui_p(parameters, target) and value in UNSPECIFIED_COLORS)
    )


def _window_ref_p(value: Any) -> bool:
    # Host window handles are the only non-plain values a minibuffer
    # attribute can hold
    return not isinstance(value, (bool, int, float, str, list, tuple, dict, type(None)))


def filter_minibuffer(current, filtered, parameters, saving, target):
    """Save a minibuffer window reference as True"""
    name, value = current
    if saving and _window_ref_p(value):
        return (name, True)
    return True


def filter_shelve_param(current, filtered, parameters, saving, target,
                        prefix: str = DEFAULT_SHELVE_PREFIX):
    """Shelve a GUI-only attribute as PREFIX:NAME when moving to a text terminal.

    When moving back to a graphical display, the plain attribute is dropped
    if a shelved PREFIX:NAME exists, because filter_unshelve_param restores
    the shelved value instead.
    """
    name, value = current
    shelved = f"{prefix}:{name}"
    if saving:
        return True
    if switch_to_tty_p(parameters, target):
        # Do not clobber a value shelved on an earlier trip
        if shelved in parameters:
            return None
        return (shelved, value)
    if switch_to_gui_p(parameters, target):
        return shelved not in parameters
    return True


def filter_unshelve_param(current, filtered, parameters, saving, target,
                          prefix: str = DEFAULT_SHELVE_PREFIX):
    """Restore a PREFIX:NAME attribute as NAME when moving to a graphical display"""
    if saving or not switch_to_gui_p(parameters, target):
        return True
    name, value = current
    mark = f"{prefix}:"
    if not name.startswith(mark):
        return True
    member = name[len(mark):]
    if member in filtered:
        filtered.replace(member, value)
        return None
    return (member, value)


def filter_iconified(current, filtered, parameters, saving, target):
    """Do not save the position of an iconified frame"""
    return not (saving and parameters.get("visibility") in ICONIFIED_VALUES)


# ============================================================================
# Standard tables
# ============================================================================

# Attributes internal to the host that must never be carried over
HOST_INTERNAL_PARAMS = ("name", "parent-id", "window-id", "outer-window-id")

SESSION_FILTERS: FilterTable = MappingProxyType({
    "left": CustomFilter(filter_iconified),
    "minibuffer": CustomFilter(filter_minibuffer),
    "top": CustomFilter(filter_iconified),
    **{name: FilterAction.NEVER for name in HOST_INTERNAL_PARAMS},
})

PERSISTENT_FILTERS: FilterTable = MappingProxyType({
    "background-color": CustomFilter(filter_sanitize_color),
    "buried-buffer-list": FilterAction.NEVER,
    "buffer-list": FilterAction.NEVER,
    "buffer-predicate": FilterAction.NEVER,
    "cursor-color": CustomFilter(filter_sanitize_color),
    "delete-before": FilterAction.NEVER,
    "font": CustomFilter(filter_shelve_param),
    "font-backend": FilterAction.NEVER,
    "foreground-color": CustomFilter(filter_sanitize_color),
    TEXT_PIXEL_HEIGHT_PARAM: FilterAction.SAVE,
    TEXT_PIXEL_WIDTH_PARAM: FilterAction.SAVE,
    "fullscreen": CustomFilter(filter_shelve_param),
    "GUI:font": CustomFilter(filter_unshelve_param),
    "GUI:fullscreen": CustomFilter(filter_unshelve_param),
    "GUI:height": CustomFilter(filter_unshelve_param),
    "GUI:width": CustomFilter(filter_unshelve_param),
    "height": CustomFilter(filter_shelve_param),
    "mouse-wheel-frame": FilterAction.NEVER,
    "parent-frame": FilterAction.NEVER,
    "tty": CustomFilter(filter_tty_to_gui),
    "tty-type": CustomFilter(filter_tty_to_gui),
    "width": CustomFilter(filter_shelve_param),
    "window-system": FilterAction.NEVER,
    **SESSION_FILTERS,
})

DEFAULT_FILTERS = PERSISTENT_FILTERS


# ============================================================================
# Engine
# ============================================================================

def _as_pairs(parameters: Union[Mapping[str, Any], Iterable[tuple[str, Any]]]) -> list[tuple[str, Any]]:
    if isinstance(parameters, Mapping):
        return list(parameters.items())
    return [(name, value) for name, value in parameters]


def filter_params(
    parameters: Union[Mapping[str, Any], Iterable[tuple[str, Any]]],
    filters: Optional[FilterTable],
    saving: bool,
    target: Optional[DisplayTarget] = None,
) -> list[tuple[str, Any]]:
    """
    Filter frame attributes for saving or restoring.

    Args:
        parameters: Frame attributes, as a mapping or (name, value) pairs
        filters: Filter table (default: DEFAULT_FILTERS)
        saving: True when saving, False when restoring
        target: Display the frame is restored onto, if it changes

    Returns:
        Filtered (name, value) pairs in input order
    """
    if filters is None:
        filters = DEFAULT_FILTERS

    pairs = _as_pairs(parameters)
    original: dict[str, Any] = {}
    for name, value in pairs:
        original.setdefault(name, value)
    original_view = MappingProxyType(original)

    filtered = FilteredParams()
    for current in pairs:
        name, value = current
        rule = filters.get(name)
        if rule is None:
            rule = FilterAction.PASSTHROUGH

        # A CustomFilter, or a bare filter function taking no extra arguments
        if callable(rule):
            result = rule(current, filtered, original_view, saving, target)
            if result is True:
                filtered.add(name, value)
            elif isinstance(result, tuple):
                new_name, new_value = result
                filtered.add(new_name, new_value)
            elif result:
                filtered.add(name, value)
            continue

        try:
            action = FilterAction(rule)
        except (ValueError, TypeError):
            logger.warning(RuleError(name, rule).message)
            continue

        if action == FilterAction.PASSTHROUGH:
            filtered.add(name, value)
        elif action == FilterAction.SAVE:
            if saving:
                filtered.add(name, value)
        elif action == FilterAction.RESTORE:
            if not saving:
                filtered.add(name, value)
        # FilterAction.NEVER: dropped

    # Set the display after filtering so filters see the original value
    if target is not None:
        filtered.add("display", target.display)

    logger.debug(
        f"Filtered {len(pairs)} -> {len(filtered)} parameters "
        f"({'saving' if saving else 'restoring'}, target={target})"
    )
    return filtered.to_list()
