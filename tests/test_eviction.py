# Area: Core Tests
"""Tests for the live vote, eviction results and jury tiering."""

from unittest.mock import patch

from bb_engine._core import decisions
from bb_engine._core.handlers.eviction import eligible_voter_ids, evict_player
from bb_engine._core.router import advance
from bb_engine._core.state import GameState, Phase, Player, StatusTag
from bb_engine.config import GameConfig


def make_state(n=12, human=None, hoh="p1", nominees=("p2", "p3"),
               phase=Phase.LIVE_VOTE, seed=321):
    players = [Player(id=f"p{i}", name=f"P{i}", is_user=(f"p{i}" == human))
               for i in range(1, n + 1)]
    state = GameState(players=players, seed=seed, phase=phase)
    state.hoh_id = hoh
    state.get_player(hoh).add_tag(StatusTag.HOH)
    state.nominee_ids = list(nominees)
    for nid in nominees:
        state.get_player(nid).add_tag(StatusTag.NOMINATED)
    return state


class TestLiveVote:
    """AI ballots and the human vote."""

    def test_ai_voters_all_vote(self):
        state = make_state(phase=Phase.SOCIAL_2)
        advance(state, GameConfig())
        assert state.phase is Phase.LIVE_VOTE
        voters = eligible_voter_ids(state)
        assert sorted(state.votes) == sorted(voters)
        assert set(state.votes.values()) <= {"p2", "p3"}
        assert "p1" not in state.votes

    def test_human_voter_blocks(self):
        state = make_state(human="p5", phase=Phase.SOCIAL_2)
        advance(state, GameConfig())
        assert state.awaiting_human_vote is True
        assert "p5" not in state.votes
        assert len(state.votes) == len(eligible_voter_ids(state)) - 1

    def test_submit_human_vote(self):
        state = make_state(human="p5", phase=Phase.SOCIAL_2)
        advance(state, GameConfig())
        assert decisions.submit_human_vote(state, GameConfig(), "p7") is False
        assert decisions.submit_human_vote(state, GameConfig(), "p3") is True
        assert state.votes["p5"] == "p3"
        assert state.pending is None

    def test_human_nominee_does_not_vote(self):
        state = make_state(human="p2", phase=Phase.SOCIAL_2)
        advance(state, GameConfig())
        assert state.pending is None

    def test_vote_without_pending_rejected(self):
        state = make_state(human="p5")
        assert decisions.submit_human_vote(state, GameConfig(), "p3") is False


class TestEvictionResults:
    """Tally outcomes."""

    def test_majority_evicts(self):
        state = make_state()
        state.votes = {"v1": "p2", "v2": "p2", "v3": "p3"}
        advance(state, GameConfig())
        evictee = state.get_player("p2")
        assert evictee.status in (StatusTag.EVICTED, StatusTag.JURY)
        assert state.votes == {}
        assert state.vote_results == {"p2": 2, "p3": 1}
        assert state.eviction_order == ["p2"]
        assert "p2" not in state.alive_ids()

    def test_first_evictee_is_pre_jury(self):
        state = make_state()
        state.votes = {"v1": "p2", "v2": "p2", "v3": "p3"}
        advance(state, GameConfig())
        assert state.get_player("p2").status == StatusTag.EVICTED

    def test_tie_blocks_human_hoh(self):
        state = make_state(human="p1")
        state.votes = {"v1": "p2", "v2": "p3"}
        advance(state, GameConfig())
        assert state.awaiting_tie_break is True
        assert state.tied_nominee_ids == ["p2", "p3"]
        assert advance(state, GameConfig()) is False

    def test_submit_tie_break(self):
        state = make_state(human="p1")
        state.votes = {"v1": "p2", "v2": "p3"}
        advance(state, GameConfig())
        assert decisions.submit_tie_break(state, GameConfig(), "p4") is False
        assert decisions.submit_tie_break(state, GameConfig(), "p2") is True
        assert not state.get_player("p2").is_alive
        assert state.phase is Phase.WEEK_END
        assert state.pending is None
        assert state.tied_nominee_ids == []

    def test_tie_resolved_by_ai_hoh(self):
        for seed in range(15):
            state = make_state(seed=seed)
            state.votes = {"v1": "p2", "v2": "p3"}
            advance(state, GameConfig())
            assert state.pending is None
            assert len(state.eviction_order) == 1
            assert state.eviction_order[0] in ("p2", "p3")

    def test_skips_with_fewer_than_two_alive(self):
        state = make_state(n=3)
        for pid in ("p2", "p3"):
            state.get_player(pid).status = StatusTag.EVICTED
        advance(state, GameConfig())
        assert state.eviction_order == []
        assert state.narrative.latest().type == "warning"

    def test_skips_without_nominees(self):
        state = make_state(nominees=())
        advance(state, GameConfig())
        assert state.eviction_order == []
        assert state.narrative.latest().type == "warning"


class TestJuryTiering:
    """12 players with a jury of 7 gives three pre-jury evictions."""

    def test_first_three_evicted_rest_jury(self):
        state = make_state(nominees=())
        order = ["p12", "p11", "p10", "p9", "p8", "p7"]
        for pid in order:
            evict_player(state, GameConfig(), pid)
        statuses = [state.get_player(pid).status for pid in order]
        assert statuses[:3] == [StatusTag.EVICTED] * 3
        assert statuses[3:] == [StatusTag.JURY] * 3
        assert state.eviction_order == order

    def test_small_cast_goes_straight_to_jury(self):
        state = make_state(n=6, nominees=())
        evict_player(state, GameConfig(), "p6")
        assert state.get_player("p6").status == StatusTag.JURY

    def test_custom_jury_size(self):
        state = make_state(nominees=())
        config = GameConfig(jury_size=5)
        for pid in ("p12", "p11", "p10", "p9", "p8", "p7"):
            evict_player(state, config, pid)
        assert state.get_player("p8").status == StatusTag.EVICTED
        assert state.get_player("p7").status == StatusTag.JURY

    def test_jury_event_posted(self):
        state = make_state(n=6, nominees=())
        evict_player(state, GameConfig(), "p6")
        assert "jury" in state.narrative.latest().text

    def test_tier_decided_by_should_be_juror(self):
        state = make_state(nominees=())
        target = "bb_engine._core.handlers.eviction.should_be_juror"
        with patch(target, return_value=True) as mock_juror:
            evict_player(state, GameConfig(), "p12")
        mock_juror.assert_called_once_with(0, 12, 7)
        assert state.get_player("p12").status == StatusTag.JURY
