"""
Minibuffer dependency test suite.

Tests cover:
- Tagging frames with their minibuffer relationships before saving
- Failing when a frame's minibuffer provider is not saved
- Creation and deletion ordering
"""

import logging

import pytest

from frameset.capture import save
from frameset.constants import ID_PARAM, MINI_PARAM
from frameset.errors import DependencyError, ErrorCode
from frameset.identity import frame_id
from frameset.minibuffer import (
    deletion_order,
    mini_link,
    record_minibuffer_relationships,
    restore_order,
)
from frameset.models import FrameState, MinibufferLink


def state(link=None, fid=None):
    params = {}
    if link is not None:
        params[MINI_PARAM] = link.to_value()
    if fid is not None:
        params[ID_PARAM] = fid
    return FrameState(parameters=params)


class TestRecordRelationships:
    """Test tagging frames before saving."""

    def test_owner_and_borrower_tags(self, host, frames):
        main, child = frames

        record_minibuffer_relationships(host, [main, child])

        assert mini_link(host.frame_parameters(main)) == MinibufferLink.owner(default=True)
        assert mini_link(host.frame_parameters(child)) == MinibufferLink.borrower(frame_id(host, main))

    def test_non_default_owner(self, host, frames):
        other = host.make_frame(":0", [])

        record_minibuffer_relationships(host, [other])

        assert mini_link(host.frame_parameters(other)) == MinibufferLink.owner(default=False)

    def test_provider_must_be_saved(self, host, frames):
        """Saving a minibufferless frame without its provider fails."""
        main, child = frames

        with pytest.raises(DependencyError) as exc_info:
            save(host, [child])

        assert exc_info.value.code == ErrorCode.MINIBUFFER_FRAME_NOT_SAVED
        assert exc_info.value.suggestion

    def test_every_saved_frame_tagged(self, host, frames):
        frameset = save(host, list(frames))

        for saved in frameset.states:
            assert mini_link(saved.parameters) is not None
            assert saved.param(ID_PARAM)

    def test_malformed_link_ignored(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert mini_link({MINI_PARAM: "garbage"}) is None

        assert "Ignoring malformed" in caplog.text


class TestOrdering:
    """Test creation and deletion order."""

    def test_restore_order(self):
        borrower = state(MinibufferLink.borrower("P"), "B")
        plain = state(fid="N")
        owner = state(MinibufferLink.owner(), "O")
        default = state(MinibufferLink.owner(default=True), "P")

        ordered = restore_order([borrower, plain, owner, default])

        assert ordered[0] is default
        assert ordered[-1] is borrower
        assert set(map(id, ordered[1:3])) == {id(plain), id(owner)}

    def test_deletion_order(self, host, frames):
        main, child = frames

        assert deletion_order(host, [main, child]) == [child, main]
