# Area: Shared
"""
bb_engine.autopilot — Automatic stand-in for the human player
=============================================================

Resolves whatever the engine is waiting for with a reproducible choice,
so a season can be simulated end to end without input (spectator mode,
the CLI, integration tests).

Usage:
    from bb_engine import AutoPilot, GameEngine

    engine = GameEngine(seed=7)
    AutoPilot(engine).play_season()
    print(engine.finale_snapshot()["winner_id"])

Choices are drawn from a generator keyed on the current seed and the
decision kind. They never advance the stored seed themselves.
"""

import logging
from typing import Callable, Dict, Optional, Sequence

from .engine import GameEngine
from ._core.handlers.veto import replacement_pool
from ._core.handlers.week import hoh_eligible_ids, nomination_pool
from ._core.rng import DeterministicRNG, hash_str, pick_n, pick_one
from ._core.state import PendingDecision, Phase

logger = logging.getLogger("bb_engine.autopilot")

MAX_STEPS = 10_000


class AutoPilot:
    """
    Plays the human seat with deterministic choices.

    Parameters
    ----------
    engine : GameEngine
        The engine to drive.
    play_competitions : bool
        When True the human's competitions go through the interactive
        session path with a simulated score instead of the random pick.
    """

    def __init__(self, engine: GameEngine, play_competitions: bool = True):
        self.engine = engine
        self.play_competitions = play_competitions
        self._handlers: Dict[PendingDecision, Callable[[], bool]] = {
            PendingDecision.NOMINATIONS: self._nominate,
            PendingDecision.POV_DECISION: self._pov_decision,
            PendingDecision.POV_SAVE_TARGET: self._pov_save_target,
            PendingDecision.REPLACEMENT_NOMINEE: self._replacement,
            PendingDecision.HUMAN_VOTE: self._vote,
            PendingDecision.TIE_BREAK: self._tie_break,
            PendingDecision.FINAL3_EVICTION: self._final3_eviction,
        }

    def _rng(self, kind: str) -> DeterministicRNG:
        return DeterministicRNG((self.engine.state.seed ^ hash_str(kind)) & 0xFFFFFFFF)

    def _choose(self, kind: str, options: Sequence[str]) -> Optional[str]:
        return pick_one(self._rng(kind), list(options)) if options else None

    # ── Decision resolvers ───────────────────────────────────

    def _nominate(self) -> bool:
        pool = nomination_pool(self.engine.state)
        if len(pool) < 2:
            return False
        return self.engine.submit_nominees(pick_n(self._rng("nominations"), pool, 2))

    def _pov_decision(self) -> bool:
        state = self.engine.state
        if state.phase is Phase.FINAL4_EVICTION:
            return self.engine.submit_final4_eviction(self._choose("final4", state.nominee_ids))
        use = self._rng("pov_decision").next_float() < 0.5
        return self.engine.submit_pov_decision(use)

    def _pov_save_target(self) -> bool:
        return self.engine.submit_pov_save_target(
            self._choose("pov_save", self.engine.state.nominee_ids))

    def _replacement(self) -> bool:
        return self.engine.submit_replacement_nominee(
            self._choose("replacement", replacement_pool(self.engine.state)))

    def _vote(self) -> bool:
        return self.engine.submit_human_vote(self._choose("vote", self.engine.state.nominee_ids))

    def _tie_break(self) -> bool:
        return self.engine.submit_tie_break(
            self._choose("tie_break", self.engine.state.tied_nominee_ids))

    def _final3_eviction(self) -> bool:
        return self.engine.submit_final3_eviction(
            self._choose("final3", self.engine.state.nominee_ids))

    def resolve_pending(self) -> bool:
        """Answer the outstanding decision. Returns False if none."""
        pending = self.engine.state.pending
        if pending is None:
            return False
        if not self._handlers[pending]():
            logger.warning(f"Auto-pilot could not resolve {pending.value}; clearing it")
            self.engine.force_clear_blocks()
        return True

    # ── Competitions ─────────────────────────────────────────

    def _play_competition(self) -> bool:
        state = self.engine.state
        human = state.human_id()
        if state.phase is Phase.HOH_COMP:
            pool = hoh_eligible_ids(state)
        elif state.phase is Phase.POV_COMP:
            pool = state.alive_ids()
        else:
            return False
        if human not in pool or not self.engine.launch_competition(game_key=state.phase.value):
            return False
        score = round(self._rng("score").next_float() * 100, 2)
        self.engine.complete_competition({human: score})
        return True

    # ── Driving ──────────────────────────────────────────────

    def step(self) -> bool:
        """Make one unit of progress. False once the engine reaches ``jury``."""
        state = self.engine.state
        if state.phase is Phase.JURY:
            return False
        if state.battle_back.active:
            self.engine.step_battle_back_vote()
            return True
        if self.resolve_pending():
            return True
        if self.play_competitions and state.competition is None and self._play_competition():
            return True
        return self.engine.advance()

    def run_to_jury(self, max_steps: int = MAX_STEPS) -> int:
        steps = 0
        while steps < max_steps and self.step():
            steps += 1
        if self.engine.state.phase is not Phase.JURY:
            logger.warning(f"Stopped after {steps} steps in {self.engine.state.phase.value}")
        return steps

    def run_finale(self) -> Optional[str]:
        """Reveal every juror, using fallback ballots for the human juror."""
        engine = self.engine
        engine.start_finale()
        for _ in range(MAX_STEPS):
            if engine.finale.state.is_complete:
                break
            engine.reveal_next_juror()
            if engine.finale.state.awaiting_human_juror_id is not None:
                engine.human_juror_timeout()
        return engine.finale.state.winner_id

    def play_season(self) -> Optional[str]:
        self.run_to_jury()
        return self.run_finale()
