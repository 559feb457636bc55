# Area: Core Tests
"""Tests for phase ordering, entry effects and advance() guards."""

from bb_engine._core.router import CYCLE, advance, blocked_reason, next_phase
from bb_engine._core.rng import next_seed
from bb_engine._core.state import (
    CompetitionSession,
    GameState,
    PendingDecision,
    Phase,
    Player,
    StatusTag,
)
from bb_engine.config import GameConfig


def make_state(n=6, human=None, phase=Phase.WEEK_START, seed=1234):
    players = [Player(id=f"p{i}", name=f"P{i}", is_user=(f"p{i}" == human))
               for i in range(1, n + 1)]
    return GameState(players=players, seed=seed, phase=phase)


def evict(state, *ids):
    for pid in ids:
        state.get_player(pid).status = StatusTag.EVICTED


class TestPhaseOrder:
    """Tests for next_phase."""

    def test_cycle_order(self):
        assert [p.value for p in CYCLE] == [
            "week_start", "hoh_comp", "hoh_results", "social_1", "nominations",
            "nomination_results", "pov_comp", "pov_results", "pov_ceremony",
            "pov_ceremony_results", "social_2", "live_vote", "eviction_results",
            "week_end",
        ]

    def test_each_cycle_step(self):
        state = make_state()
        for current, expected in zip(CYCLE[:-1], CYCLE[1:]):
            state.phase = current
            assert next_phase(state) is expected

    def test_week_end_loops_to_week_start(self):
        state = make_state(phase=Phase.WEEK_END)
        assert next_phase(state) is Phase.WEEK_START

    def test_week_end_with_two_alive_goes_to_jury(self):
        state = make_state(n=4, phase=Phase.WEEK_END)
        evict(state, "p3", "p4")
        assert next_phase(state) is Phase.JURY

    def test_week_start_with_three_alive_goes_to_final3(self):
        state = make_state(n=5)
        evict(state, "p4", "p5")
        assert next_phase(state) is Phase.FINAL3

    def test_final3_sequence(self):
        state = make_state(n=3)
        chain = [Phase.FINAL3, Phase.FINAL3_COMP1, Phase.FINAL3_COMP2,
                 Phase.FINAL3_COMP3, Phase.FINAL3_DECISION, Phase.WEEK_END]
        for current, expected in zip(chain[:-1], chain[1:]):
            state.phase = current
            assert next_phase(state) is expected


class TestAdvanceGuards:
    """advance() must be a no-op while blocked."""

    def test_advance_moves_one_step(self):
        state = make_state()
        assert advance(state, GameConfig()) is True
        assert state.phase is Phase.HOH_COMP

    def test_advance_consumes_seed_once(self):
        state = make_state()
        advance(state, GameConfig())
        assert state.seed == next_seed(1234)

    def test_noop_in_jury(self):
        state = make_state(phase=Phase.JURY)
        assert advance(state, GameConfig()) is False
        assert state.phase is Phase.JURY
        assert state.seed == 1234

    def test_noop_for_every_pending_decision(self):
        for decision in PendingDecision:
            state = make_state(phase=Phase.SOCIAL_1)
            state.pending = decision
            assert advance(state, GameConfig()) is False
            assert state.phase is Phase.SOCIAL_1
            assert state.seed == 1234
            assert blocked_reason(state) == decision.value

    def test_noop_while_battle_back_active(self):
        state = make_state(phase=Phase.WEEK_END)
        state.battle_back.active = True
        assert advance(state, GameConfig()) is False
        assert state.phase is Phase.WEEK_END

    def test_noop_does_not_touch_narrative(self):
        state = make_state(phase=Phase.JURY)
        advance(state, GameConfig())
        assert len(state.narrative) == 0

    def test_pending_session_is_discarded(self):
        state = make_state(phase=Phase.POV_COMP)
        state.competition = CompetitionSession(kind="pov", week=1, participant_ids=["p1"])
        advance(state, GameConfig())
        assert state.competition is None
        assert state.phase is Phase.POV_RESULTS
        assert state.pov_winner_id in state.alive_ids()


class TestWeekBoundaries:
    """Entry effects at week_start and week_end."""

    def test_week_start_rolls_week_fields(self):
        state = make_state(phase=Phase.WEEK_END)
        state.week = 3
        state.hoh_id = "p2"
        state.get_player("p2").status = StatusTag.HOH
        state.nominee_ids = ["p3", "p4"]
        state.get_player("p3").status = StatusTag.NOMINATED
        state.get_player("p4").status = StatusTag.NOMINATED | StatusTag.POV
        state.pov_winner_id = "p4"

        advance(state, GameConfig())

        assert state.phase is Phase.WEEK_START
        assert state.week == 4
        assert state.prev_hoh_id == "p2"
        assert state.hoh_id is None
        assert state.nominee_ids == []
        assert state.pov_winner_id is None
        assert all(p.status == StatusTag.ACTIVE for p in state.players)

    def test_week_start_keeps_out_statuses(self):
        state = make_state(phase=Phase.WEEK_END)
        state.get_player("p6").status = StatusTag.JURY
        advance(state, GameConfig())
        assert state.get_player("p6").status == StatusTag.JURY

    def test_week_end_to_jury(self):
        state = make_state(n=4, phase=Phase.WEEK_END)
        evict(state, "p3", "p4")
        advance(state, GameConfig())
        assert state.phase is Phase.JURY
        seed = state.seed
        assert advance(state, GameConfig()) is False
        assert state.seed == seed

    def test_hoh_results_sets_hoh(self):
        state = make_state(phase=Phase.HOH_COMP)
        advance(state, GameConfig())
        assert state.phase is Phase.HOH_RESULTS
        hoh = state.get_player(state.hoh_id)
        assert hoh.status & StatusTag.HOH
        assert hoh.stats.hoh_wins == 1

    def test_social_phases_post_social_events(self):
        state = make_state(phase=Phase.HOH_RESULTS)
        advance(state, GameConfig())
        assert state.phase is Phase.SOCIAL_1
        assert state.narrative.latest().type == "social"

    def test_advance_replays_identically(self):
        a = make_state(seed=77)
        b = make_state(seed=77)
        for _ in range(10):
            advance(a, GameConfig())
            advance(b, GameConfig())
        assert a.phase is b.phase
        assert a.hoh_id == b.hoh_id
        assert a.nominee_ids == b.nominee_ids
        assert a.narrative.texts() == b.narrative.texts()
