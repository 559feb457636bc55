# Area: Engine
"""
bb_engine.engine — Season engine facade
=======================================

``GameEngine`` owns one season: the main phase machine, the jury vote
sub-machine and the season archive list. Every public operation is a
single synchronous call. Decision operations return False when the
action does not match what the engine is waiting for; they never raise.
"""

from __future__ import annotations

import copy
import logging
from typing import List, Mapping, Optional, Sequence

from .config import GameConfig
from .roster import default_roster
from ._core import debug, decisions, router, snapshot
from ._core.state import GameState, Phase, Player, StatusTag
from ._core.twist import (
    can_roll_battle_back,
    complete_battle_back,
    dismiss_battle_back,
    maybe_activate_battle_back,
    step_battle_back_vote,
)
from ._core.context import draw_context
from ._finale.finale import JuryVotingEngine
from ._finale.season_archive import (
    SeasonArchive,
    add_season_archive,
    assign_final_ranks,
    build_season_archive,
)
from ._shared.narrative import NarrativeLog
from .types import FinaleSnapshot, GameSnapshot, PlayerSnapshot

logger = logging.getLogger("bb_engine.engine")

DEFAULT_SEED = 42


class GameEngine:
    """
    Deterministic season engine.

    Identical roster, seed, config and call sequence always produce an
    identical final state and narrative.
    """

    def __init__(
        self,
        players: Optional[Sequence[Player]] = None,
        seed: int = DEFAULT_SEED,
        config: Optional[GameConfig] = None,
    ):
        self.config = config or GameConfig()
        self._roster = [copy.deepcopy(p) for p in (players or default_roster())]
        self.season_archives: List[SeasonArchive] = []
        self.state = self._new_state(seed, season=1)
        self.finale = JuryVotingEngine(self.config)

    def _new_state(self, seed: int, season: int) -> GameState:
        state = GameState(
            players=[copy.deepcopy(p) for p in self._roster],
            seed=seed & 0xFFFFFFFF,
            season=season,
            narrative=NarrativeLog(self.config.narrative_capacity),
            season_archives=self.season_archives,
        )
        state.push(f"Welcome to Season {season}! {len(state.players)} houseguests enter the house.")
        logger.info(f"Season {season} created with seed {state.seed}")
        return state

    # ── Phase machine ────────────────────────────────────────

    def advance(self) -> bool:
        """Move one phase forward. No-op while blocked or in ``jury``."""
        return router.advance(self.state, self.config)

    @property
    def phase(self) -> Phase:
        return self.state.phase

    # ── Decisions ────────────────────────────────────────────

    def submit_nominees(self, nominee_ids: Sequence[str]) -> bool:
        return decisions.submit_nominees(self.state, self.config, nominee_ids)

    def select_first_nominee(self, nominee_id: str) -> bool:
        return decisions.select_first_nominee(self.state, self.config, nominee_id)

    def submit_second_nominee(self, nominee_id: str) -> bool:
        return decisions.submit_second_nominee(self.state, self.config, nominee_id)

    def submit_pov_decision(self, use_veto: bool) -> bool:
        return decisions.submit_pov_decision(self.state, self.config, use_veto)

    def submit_pov_save_target(self, nominee_id: str) -> bool:
        return decisions.submit_pov_save_target(self.state, self.config, nominee_id)

    def submit_replacement_nominee(self, player_id: str) -> bool:
        return decisions.submit_replacement_nominee(self.state, self.config, player_id)

    def submit_human_vote(self, nominee_id: str) -> bool:
        return decisions.submit_human_vote(self.state, self.config, nominee_id)

    def submit_tie_break(self, nominee_id: str) -> bool:
        return decisions.submit_tie_break(self.state, self.config, nominee_id)

    def submit_final3_eviction(self, evictee_id: str) -> bool:
        return decisions.submit_final3_eviction(self.state, self.config, evictee_id)

    def submit_final4_eviction(self, evictee_id: str) -> bool:
        return decisions.submit_final4_eviction(self.state, self.config, evictee_id)

    # ── Competitions ─────────────────────────────────────────

    def launch_competition(self, participant_ids: Optional[Sequence[str]] = None,
                           game_key: str = "") -> bool:
        return decisions.launch_competition(self.state, self.config, participant_ids, game_key)

    def complete_competition(self, human_scores: Optional[Mapping[str, float]] = None) -> Optional[str]:
        return decisions.complete_competition(self.state, self.config, human_scores)

    def apply_competition_winner(self, winner_id: str) -> bool:
        return decisions.apply_competition_winner(self.state, self.config, winner_id)

    # ── Battle Back ──────────────────────────────────────────

    def try_activate_battle_back(self) -> bool:
        """Evaluate the Battle Back roll for the latest eviction (one draw)."""
        if not can_roll_battle_back(self.state, self.config):
            return False
        return maybe_activate_battle_back(draw_context(self.state, self.config))

    def step_battle_back_vote(self) -> Optional[str]:
        return step_battle_back_vote(self.state)

    def complete_battle_back(self, winner_id: str) -> bool:
        return complete_battle_back(self.state, winner_id)

    def dismiss_battle_back(self) -> bool:
        return dismiss_battle_back(self.state)

    # ── Finale ───────────────────────────────────────────────

    def start_finale(self) -> bool:
        """Seat the jury. Only valid in ``jury``; idempotent."""
        state = self.state
        if state.phase is not Phase.JURY:
            logger.debug(f"start_finale ignored in {state.phase.value}")
            return False
        out = [state.get_player(pid) for pid in state.eviction_order]
        jurors = [p.id for p in out if p.status & StatusTag.JURY]
        pre_jury = [p.id for p in out if p.status & StatusTag.EVICTED]
        human = state.human_id()
        return self.finale.start(
            finalist_ids=state.alive_ids(),
            juror_ids=jurors,
            pre_jury_ids=pre_jury,
            seed=state.seed,
            human_ids=[human] if human else [],
        )

    def reveal_next_juror(self) -> Optional[str]:
        """Reveal one ballot; finalizes automatically after the last one."""
        juror = self.finale.reveal_next()
        if self.finale.state.is_active and not self.finale.state.is_complete and self.finale.all_revealed():
            self.finale.finalize()
            self.finalize_game()
        return juror

    def cast_juror_vote(self, juror_id: str, finalist_id: str) -> bool:
        return self.finale.cast_vote(juror_id, finalist_id)

    def human_juror_timeout(self) -> bool:
        return self.finale.apply_human_timeout()

    def finalize_finale(self) -> bool:
        if not self.finale.finalize():
            return False
        self.finalize_game()
        return True

    def skip_all_jurors(self) -> bool:
        if not self.finale.skip_all():
            return False
        self.finalize_game()
        return True

    def finalize_game(self) -> bool:
        """Assign final ranks from the finale result. Idempotent."""
        fs = self.finale.state
        if not fs.is_complete or not fs.winner_id:
            return False
        winner = self.state.get_player(fs.winner_id)
        if winner.final_rank == 1:
            return False
        assign_final_ranks(self.state, fs.winner_id, fs.runner_up_id)
        if fs.tie_break == "americas_vote":
            self.state.push("The jury is deadlocked. America's Vote decides the winner.")
        self.state.push(f"{winner.name} has won Season {self.state.season}!")
        return True

    # ── Seasons ──────────────────────────────────────────────

    def archive_season(self, summary_text: Optional[str] = None) -> Optional[SeasonArchive]:
        """Record the finished season. Requires a decided finale."""
        if not self.finale.state.is_complete:
            return None
        self.finalize_game()
        archive = build_season_archive(self.state, summary_text)
        add_season_archive(self.season_archives, archive)
        return archive

    def reset_game(self, seed: Optional[int] = None) -> None:
        """Start a fresh season with the same roster. Archives are kept."""
        next_season = self.state.season + 1
        self.state = self._new_state(self.state.seed if seed is None else seed, next_season)
        self.finale.reset()

    # ── Selectors ────────────────────────────────────────────

    def alive_players(self) -> List[PlayerSnapshot]:
        return snapshot.alive_players(self.state)

    def is_blocked_on_human(self) -> bool:
        return (
            snapshot.is_blocked_on_human(self.state)
            or self.finale.state.awaiting_human_juror_id is not None
        )

    def finale_snapshot(self) -> FinaleSnapshot:
        return self.finale.snapshot()

    def snapshot(self) -> GameSnapshot:
        return snapshot.build_game_snapshot(self.state)

    # ── Debug ────────────────────────────────────────────────

    def force_clear_blocks(self) -> None:
        debug.force_clear_blocks(self.state)

    def force_phase(self, phase: Phase) -> None:
        debug.force_phase(self.state, phase)

    def force_nominees(self, nominee_ids: Sequence[str]) -> None:
        debug.force_nominees(self.state, nominee_ids)

    def force_pov_winner(self, player_id: str) -> None:
        debug.force_pov_winner(self.state, player_id)

    def force_hoh(self, player_id: str) -> None:
        debug.force_hoh(self.state, player_id)

    def force_juror_vote(self, juror_id: str, finalist_id: str) -> bool:
        return self.finale.force_juror_vote(juror_id, finalist_id)

    def reroll_jury(self, seed: int) -> bool:
        return self.finale.reroll(seed)
