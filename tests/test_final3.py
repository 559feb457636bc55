# Area: Endgame Tests
"""Tests for the three-part Final 3 HOH competition."""

from unittest.mock import patch

from bb_engine._core import decisions
from bb_engine._core.router import advance
from bb_engine._core.state import GameState, Phase, Player, StatusTag
from bb_engine.config import GameConfig


def make_final3(human=None, seed=3030, phase=Phase.WEEK_END):
    """Six players with p4-p6 already on the jury."""
    players = [Player(id=f"p{i}", name=f"P{i}", is_user=(f"p{i}" == human))
               for i in range(1, 7)]
    state = GameState(players=players, seed=seed, phase=phase)
    for pid in ("p6", "p5", "p4"):
        state.get_player(pid).status = StatusTag.JURY
        state.eviction_order.append(pid)
    state.hoh_id = "p1"
    return state


def advance_to(state, phase, limit=20):
    for _ in range(limit):
        if state.phase is phase:
            return
        advance(state, GameConfig())
    raise AssertionError(f"never reached {phase.value}, stuck at {state.phase.value}")


class TestFinal3Sequence:
    """Phase order from week_start to the jury."""

    def test_week_start_jumps_to_final3(self):
        state = make_final3()
        advance(state, GameConfig())
        assert state.phase is Phase.WEEK_START
        advance(state, GameConfig())
        assert state.phase is Phase.FINAL3

    def test_full_sequence(self):
        state = make_final3()
        seen = []
        while state.phase is not Phase.JURY:
            advance(state, GameConfig())
            seen.append(state.phase)
        assert seen == [
            Phase.WEEK_START,
            Phase.FINAL3,
            Phase.FINAL3_COMP1,
            Phase.FINAL3_COMP2,
            Phase.FINAL3_COMP3,
            Phase.FINAL3_DECISION,
            Phase.WEEK_END,
            Phase.JURY,
        ]
        assert len(state.alive_ids()) == 2

    def test_comp1_clears_previous_hoh(self):
        state = make_final3()
        advance_to(state, Phase.FINAL3_COMP1)
        assert state.prev_hoh_id is None
        assert any("three-part HOH" in t for t in state.narrative.texts())


class TestFinal3Parts:
    """Who plays each part."""

    def test_part_winners(self):
        state = make_final3()
        advance_to(state, Phase.FINAL3_COMP2)
        part1 = state.f3_part1_winner_id
        assert part1 in ("p1", "p2", "p3")
        advance(state, GameConfig())
        part2 = state.f3_part2_winner_id
        assert part2 in ("p1", "p2", "p3")
        assert part2 != part1

    def test_final_hoh_is_a_part_winner(self):
        for seed in range(10):
            state = make_final3(seed=seed)
            advance_to(state, Phase.FINAL3_COMP3)
            winners = {state.f3_part1_winner_id, state.f3_part2_winner_id}
            advance(state, GameConfig())
            assert state.hoh_id in winners
            assert state.get_player(state.hoh_id).is_alive

    def test_ai_final_hoh_evicts_other(self):
        state = make_final3()
        advance_to(state, Phase.FINAL3_COMP3)
        advance(state, GameConfig())
        assert state.phase is Phase.FINAL3_DECISION
        evictee = state.eviction_order[-1]
        assert evictee != state.hoh_id
        assert evictee in ("p1", "p2", "p3")
        assert state.get_player(evictee).status == StatusTag.JURY
        feed = state.narrative.texts()
        assert any("Part 3 is underway" in t for t in feed)
        assert any("Final Head of Household" in t for t in feed)
        assert any("Part 1 result" in t for t in feed)

    def test_deterministic(self):
        a = make_final3(seed=77)
        b = make_final3(seed=77)
        advance_to(a, Phase.JURY)
        advance_to(b, Phase.JURY)
        assert a.eviction_order == b.eviction_order
        assert a.narrative.texts() == b.narrative.texts()


class TestHumanFinalHoh:
    """A human Final HOH chooses who goes to the Final 2."""

    def make_blocked(self):
        state = make_final3(human="p2")
        advance_to(state, Phase.FINAL3_COMP3)
        target = "bb_engine._core.handlers.endgame.run_competition"
        with patch(target, return_value="p2"):
            advance(state, GameConfig())
        return state

    def test_blocks(self):
        state = self.make_blocked()
        assert state.phase is Phase.FINAL3_DECISION
        assert state.hoh_id == "p2"
        assert state.awaiting_final3_eviction is True
        assert sorted(state.nominee_ids) == ["p1", "p3"]
        assert advance(state, GameConfig()) is False

    def test_submit_final3_eviction(self):
        state = self.make_blocked()
        assert decisions.submit_final3_eviction(state, GameConfig(), "p2") is False
        assert decisions.submit_final3_eviction(state, GameConfig(), "p3") is True
        assert state.phase is Phase.WEEK_END
        assert state.pending is None
        assert not state.get_player("p3").is_alive
        advance(state, GameConfig())
        assert state.phase is Phase.JURY

    def test_submit_without_block_rejected(self):
        state = make_final3(human="p2")
        assert decisions.submit_final3_eviction(state, GameConfig(), "p3") is False


class TestAIFinalHohStep:
    """An AI Final HOH evicts on entry and the phase moves one step at a time."""

    def make_comp3(self, seed=5150):
        state = make_final3(seed=seed, phase=Phase.FINAL3_COMP3)
        state.hoh_id = None
        state.f3_part1_winner_id = "p1"
        state.f3_part2_winner_id = "p2"
        return state

    def test_one_advance_lands_in_decision(self):
        state = self.make_comp3()
        advance(state, GameConfig())
        assert state.phase is Phase.FINAL3_DECISION
        assert len(state.alive_ids()) == 2
        assert state.pending is None

    def test_next_advance_reaches_week_end(self):
        state = self.make_comp3()
        advance(state, GameConfig())
        advance(state, GameConfig())
        assert state.phase is Phase.WEEK_END
        advance(state, GameConfig())
        assert state.phase is Phase.JURY
