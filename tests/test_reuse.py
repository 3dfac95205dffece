"""
Reuse matcher test suite.

Tests cover:
- Each pool frame is claimed at most once
- Identity and minibuffer matching rules
- Display matching
"""

from frameset.constants import ID_PARAM, MINI_PARAM
from frameset.identity import frame_id
from frameset.models import MinibufferLink
from frameset.reuse import ReusePool


def params(link=None, fid=None, **extra):
    result = dict(extra)
    if link is not None:
        result[MINI_PARAM] = link.to_value()
    if fid is not None:
        result[ID_PARAM] = fid
    return result


class TestReusePool:
    """Test claiming frames from a reuse pool."""

    def test_claimed_frame_leaves_pool(self, host):
        """A pool frame is handed out to at most one saved frame."""
        first = host.make_frame(":0", [])
        second = host.make_frame(":0", [])
        pool = ReusePool(host, [first, second])

        claimed = [pool.claim(":0", params()) for _ in range(3)]

        assert claimed[0] is not None and claimed[1] is not None
        assert claimed[0] is not claimed[1]
        assert claimed[2] is None
        assert len(pool) == 0

    def test_display_must_match(self, host):
        frame = host.make_frame(":1", [])
        pool = ReusePool(host, [frame])

        assert pool.claim(":0", params()) is None
        assert pool.claim(":1", params()) is frame

    def test_owner_prefers_same_identity(self, host):
        other = host.make_frame(":0", [])
        same = host.make_frame(":0", [])
        fid = frame_id(host, same)
        pool = ReusePool(host, [other, same])

        assert pool.claim(":0", params(MinibufferLink.owner(), fid)) is same
        assert other in pool

    def test_owner_falls_back_to_minibuffer_frame(self, host):
        owner = host.make_frame(":0", [])
        borrower = host.make_frame(":0", [("minibuffer", False)])
        pool = ReusePool(host, [borrower, owner])

        assert pool.claim(":0", params(MinibufferLink.owner(), "NEW")) is owner

    def test_minibuffer_only_needs_identity(self, host):
        frame = host.make_frame(":0", [])
        pool = ReusePool(host, [frame])

        saved = params(MinibufferLink.owner(), "NEW", minibuffer="only")

        assert pool.claim(":0", saved) is None
        assert frame in pool

    def test_borrower_needs_identity_and_provider(self, host):
        main = host.make_frame(":0", [])
        child = host.make_frame(":0", [("minibuffer", False)])
        main_id = frame_id(host, main)
        child_id = frame_id(host, child)
        pool = ReusePool(host, [main, child])

        assert pool.claim(":0", params(MinibufferLink.borrower("ELSEWHERE"), child_id)) is None
        assert pool.claim(":0", params(MinibufferLink.borrower(main_id), "NEW")) is None
        assert pool.claim(":0", params(MinibufferLink.borrower(main_id), child_id)) is child

    def test_dead_frames_never_claimed(self, host):
        keep = host.make_frame(":0", [])
        doomed = host.make_frame(":0", [])
        pool = ReusePool(host, [doomed, keep])
        host.delete_frame(doomed)

        assert pool.claim(":0", params()) is keep
