# Area: Core Tests
"""Tests for status serialization and read-only selectors."""

import json

import pytest

from bb_engine._core.snapshot import alive_players, build_game_snapshot, is_blocked_on_human
from bb_engine._core.state import (
    GameState,
    PendingDecision,
    Player,
    StatusTag,
    status_from_str,
    status_to_str,
)


def make_state():
    players = [Player(id=f"p{i}", name=f"P{i}", is_user=(i == 1)) for i in range(1, 5)]
    return GameState(players=players, seed=5)


class TestStatusStrings:
    """Compound status strings."""

    @pytest.mark.parametrize("value", [
        "active", "hoh", "pov", "nominated", "hoh+pov", "nominated+pov", "evicted", "jury",
    ])
    def test_known_values(self, value):
        assert status_to_str(status_from_str(value)) == value

    def test_out_wins_over_week_tags(self):
        assert status_to_str(StatusTag.JURY | StatusTag.HOH) == "jury"

    def test_unknown_rejected(self):
        with pytest.raises(ValueError):
            status_from_str("banished")


class TestSelectors:
    """Snapshots are copies."""

    def test_alive_players(self):
        state = make_state()
        state.get_player("p4").status = StatusTag.EVICTED
        assert [p["id"] for p in alive_players(state)] == ["p1", "p2", "p3"]

    def test_blocked_on_human(self):
        state = make_state()
        assert is_blocked_on_human(state) is False
        state.block(PendingDecision.HUMAN_VOTE)
        assert is_blocked_on_human(state) is True

    def test_snapshot_is_a_copy(self):
        state = make_state()
        state.nominee_ids = ["p2", "p3"]
        snap = build_game_snapshot(state)
        snap["nominee_ids"].append("p4")
        snap["players"][0]["status"] = "jury"
        assert state.nominee_ids == ["p2", "p3"]
        assert state.get_player("p1").status == StatusTag.ACTIVE

    def test_snapshot_serializable(self):
        state = make_state()
        state.get_player("p2").add_tag(StatusTag.HOH)
        state.get_player("p2").add_tag(StatusTag.POV)
        state.push("Hello.")
        snap = json.loads(json.dumps(build_game_snapshot(state)))
        assert snap["phase"] == "week_start"
        assert snap["players"][1]["status"] == "hoh+pov"
        assert snap["narrative"][0]["text"] == "Hello."
        assert snap["pending"] is None
