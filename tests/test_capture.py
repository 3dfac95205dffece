"""
Frameset capture test suite.

Tests cover:
- Capturing all frames or a selection
- Filtering attributes while saving
- Window state and text pixel sizes
- Frameset properties
"""

import pytest

from frameset.capture import FramesetCapture, save
from frameset.constants import ID_PARAM, TEXT_PIXEL_HEIGHT_PARAM, TEXT_PIXEL_WIDTH_PARAM
from frameset.errors import ErrorCode, FramesetValidationError
from frameset.models import is_frameset


class TestCapture:
    """Test capturing frames into a frameset."""

    def test_captures_all_frames(self, host, frames):
        frameset = save(host)

        assert is_frameset(frameset) == 1
        assert len(frameset.states) == 2

    def test_window_states(self, host, frames):
        frameset = save(host)

        assert [s.window_state for s in frameset.states] == [
            {"buffers": ["*scratch*"]},
            {"buffers": ["notes.txt"]},
        ]

    def test_window_state_is_a_copy(self, host, frames):
        main, _ = frames
        frameset = save(host)

        host.window_state_put(main, {"buffers": []})

        assert frameset.states[0].window_state == {"buffers": ["*scratch*"]}

    def test_attributes_filtered(self, host, frames):
        main, _ = frames
        host.modify_frame_parameters(main, [("buffer-list", ["a"]), ("window-id", "0x42")])

        params = save(host).states[0].parameters

        assert params["left"] == 10
        assert params["font"] == "Mono-10"
        assert params["minibuffer"] is True
        assert "buffer-list" not in params
        assert "window-id" not in params

    def test_identities_stable_across_saves(self, host, frames):
        first = save(host)
        second = save(host)

        assert ([s.param(ID_PARAM) for s in first.states]
                == [s.param(ID_PARAM) for s in second.states])

    def test_text_pixel_sizes_recorded(self, host, frames):
        params = save(host).states[0].parameters

        assert params[TEXT_PIXEL_WIDTH_PARAM] == 80
        assert params[TEXT_PIXEL_HEIGHT_PARAM] == 40

    def test_properties(self, host, frames):
        frameset = FramesetCapture(host).capture(
            app="desktop", name="work", description="Two frames",
            properties={"session": 7},
        )

        assert frameset.app == "desktop"
        assert frameset.name == "work"
        assert frameset.description == "Two frames"
        assert frameset.prop("session") == 7

    def test_predicate_selects_frames(self, host, frames):
        main, _ = frames
        host.make_frame(":1", [("left", 0)])

        frameset = save(host, [main, host.frame_list()[-1]],
                        predicate=lambda f: host.frame_display(f) == ":1")

        assert len(frameset.states) == 1
        assert frameset.states[0].param("display") == ":1"

    def test_nothing_to_save(self, host, frames):
        with pytest.raises(FramesetValidationError) as exc_info:
            save(host, [])

        assert exc_info.value.code == ErrorCode.EMPTY_FRAMESET

    def test_dead_frames_skipped(self, host, frames):
        extra = host.make_frame(":0", [])
        host.delete_frame(extra)

        frameset = save(host, list(frames) + [extra])

        assert len(frameset.states) == 2
