"""
Onscreen repositioning test suite.

Tests cover:
- Relative position resolution
- Move decisions per mode
- Computed positions and fullscreen states
"""

import pytest

from frameset.models import Box, OnscreenMode
from frameset.onscreen import compute_pos, frame_box, move_onscreen, needs_move, onscreen_params
from frameset.virtual_host import VirtualHost


AREA = Box(left=0, top=0, width=1000, height=800)


class TestComputePos:
    """Test position resolution."""

    @pytest.mark.parametrize("value,expected", [
        (40, 40),
        (-50, -50),
        (("+", 25), 25),
        (("-", -10), 989),
        (["+", -20], -20),
        (None, 0),
    ])
    def test_positions(self, value, expected):
        assert compute_pos(value, AREA.left, AREA.right) == expected


class TestNeedsMove:
    """Test move decisions."""

    def test_any_edge(self):
        partly_out = Box(left=-50, top=10, width=200, height=100)

        assert needs_move(OnscreenMode.ANY_EDGE, None, partly_out, AREA)
        assert not needs_move(OnscreenMode.FULLY_OFFSCREEN, None, partly_out, AREA)

    def test_fully_offscreen(self):
        gone = Box(left=2000, top=10, width=200, height=100)

        assert needs_move(OnscreenMode.FULLY_OFFSCREEN, None, gone, AREA)
        assert needs_move(OnscreenMode.ANY_EDGE, None, gone, AREA)

    def test_inside(self):
        inside = Box(left=10, top=10, width=200, height=100)

        assert not needs_move(OnscreenMode.ANY_EDGE, None, inside, AREA)
        assert not needs_move(OnscreenMode.FULLY_OFFSCREEN, None, inside, AREA)

    def test_predicate(self):
        calls = []

        def predicate(frame, fr, area):
            calls.append((frame, fr, area))
            return True

        inside = Box(left=10, top=10, width=200, height=100)

        assert needs_move(predicate, "frame", inside, AREA)
        assert calls == [("frame", inside, AREA)]


class TestOnscreenParams:
    """Test computed attributes."""

    def test_right_overflow(self):
        fr = Box(left=900, top=10, width=200, height=100)

        assert onscreen_params(fr, AREA) == {"left": 800}

    def test_bottom_overflow(self):
        fr = Box(left=10, top=750, width=200, height=100)

        assert onscreen_params(fr, AREA) == {"top": 700}

    def test_wider_than_monitor(self):
        fr = Box(left=-100, top=10, width=1200, height=100)

        assert onscreen_params(fr, AREA) == {"left": 0, "fullscreen": "fullwidth"}

    def test_taller_than_monitor(self):
        fr = Box(left=10, top=10, width=200, height=900)

        assert onscreen_params(fr, AREA) == {"top": 0, "fullscreen": "fullheight"}

    def test_larger_than_monitor(self):
        fr = Box(left=10, top=10, width=1200, height=900)

        assert onscreen_params(fr, AREA) == {"left": 0, "top": 0, "fullscreen": "maximized"}


class TestMoveOnscreen:
    """Test moving host frames."""

    def test_left_edge_example(self):
        """A frame hanging off the left edge moves to the left edge only."""
        host = VirtualHost(workarea=AREA)
        frame = host.make_frame(":0", [("left", -50), ("top", 10), ("width", 200), ("height", 100)])

        changed = move_onscreen(host, frame, OnscreenMode.ANY_EDGE)

        assert changed == {"left": 0}
        assert host.frame_parameter(frame, "left") == 0
        assert host.frame_parameter(frame, "top") == 10
        assert host.frame_parameter(frame, "fullscreen") is None

    def test_none_mode(self):
        host = VirtualHost(workarea=AREA)
        frame = host.make_frame(":0", [("left", 5000), ("top", 10), ("width", 200), ("height", 100)])

        assert move_onscreen(host, frame, OnscreenMode.NONE) == {}
        assert host.frame_parameter(frame, "left") == 5000

    def test_character_cells(self):
        """Frame sizes in character cells are scaled by the cell size."""
        host = VirtualHost(workarea=AREA, char_size=(10, 20))
        frame = host.make_frame(":0", [("left", 0), ("top", 0), ("width", 80), ("height", 30)])

        assert frame_box(host, frame, AREA) == Box(left=0, top=0, width=800, height=600)

    def test_relative_position(self):
        host = VirtualHost(workarea=AREA)
        frame = host.make_frame(":0", [("left", ("-", 5000)), ("top", 10), ("width", 200), ("height", 100)])

        changed = move_onscreen(host, frame, OnscreenMode.FULLY_OFFSCREEN)

        assert changed == {"left": 800}
