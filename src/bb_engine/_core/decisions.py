# Area: Core
"""
bb_engine._core.decisions — Human decision operations
=====================================================

Each operation resolves one pending decision. An operation that arrives
without its matching pending decision, or names an ineligible player,
is rejected: it returns False and leaves the state untouched.

Operations that need randomness (an AI replacement pick, the Battle
Back roll after a tie-break) advance the seed once. The rest leave it
unchanged.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from ..config import GameConfig
from .._shared.logging_formatters import log_context
from .competition import resolve_winner, simulate_ai_scores
from .context import draw_context
from .handlers.endgame import finish_final3_eviction, finish_final4_eviction
from .handlers.eviction import eligible_voter_ids, evict_player
from .handlers.veto import (
    add_replacement,
    apply_pov_winner,
    replacement_pool,
    require_replacement,
    save_nominee,
)
from .handlers.week import apply_hoh_winner, apply_nominations, hoh_eligible_ids, nomination_pool
from .state import (
    CompetitionRun,
    CompetitionSession,
    GameState,
    PendingDecision,
    Phase,
)
from .twist import can_roll_battle_back, maybe_activate_battle_back

logger = logging.getLogger("bb_engine.decisions")

COMPETITION_HISTORY_CAP = 50


def _reject(op: str, reason: str) -> bool:
    logger.debug(f"{op} rejected: {reason}")
    return False


# ── Nominations ──────────────────────────────────────────────


def submit_nominees(state: GameState, config: GameConfig, nominee_ids: Sequence[str]) -> bool:
    if not state.awaiting_nominations:
        return _reject("submit_nominees", "not awaiting nominations")
    ids = list(nominee_ids)
    pool = nomination_pool(state)
    if len(ids) != 2 or ids[0] == ids[1]:
        return _reject("submit_nominees", f"need two distinct nominees, got {ids}")
    if any(nid not in pool for nid in ids):
        return _reject("submit_nominees", f"ineligible nominee in {ids}")
    state.clear_block()
    apply_nominations(state, ids)
    return True


def select_first_nominee(state: GameState, config: GameConfig, nominee_id: str) -> bool:
    """First half of a two-step nomination."""
    if not state.awaiting_nominations:
        return _reject("select_first_nominee", "not awaiting nominations")
    if nominee_id not in nomination_pool(state):
        return _reject("select_first_nominee", f"{nominee_id} is not eligible")
    state.pending_nominee1_id = nominee_id
    return True


def submit_second_nominee(state: GameState, config: GameConfig, nominee_id: str) -> bool:
    first = state.pending_nominee1_id
    if not state.awaiting_nominations or first is None:
        return _reject("submit_second_nominee", "no first nominee selected")
    return submit_nominees(state, config, [first, nominee_id])


# ── Power of Veto ────────────────────────────────────────────


def submit_pov_decision(state: GameState, config: GameConfig, use_veto: bool) -> bool:
    if not state.awaiting_pov_decision or state.phase is Phase.FINAL4_EVICTION:
        return _reject("submit_pov_decision", "not awaiting a veto decision")
    holder = state.name_of(state.pov_winner_id)
    if not use_veto:
        state.clear_block()
        state.push(f"{holder} has decided NOT to use the Power of Veto.")
        return True
    state.block(PendingDecision.POV_SAVE_TARGET)
    state.push(f"{holder} has decided to use the Power of Veto.")
    return True


def submit_pov_save_target(state: GameState, config: GameConfig, nominee_id: str) -> bool:
    if not state.awaiting_pov_save_target:
        return _reject("submit_pov_save_target", "not awaiting a save target")
    if nominee_id not in state.nominee_ids:
        return _reject("submit_pov_save_target", f"{nominee_id} is not nominated")
    state.clear_block()
    save_nominee(state, nominee_id)
    if state.is_human(state.hoh_id):
        require_replacement(state, None)
    else:
        require_replacement(state, draw_context(state, config).rng)
    return True


def submit_replacement_nominee(state: GameState, config: GameConfig, replacement_id: str) -> bool:
    if not state.replacement_needed:
        return _reject("submit_replacement_nominee", "no replacement needed")
    if replacement_id not in replacement_pool(state):
        return _reject("submit_replacement_nominee", f"{replacement_id} is not eligible")
    state.clear_block()
    add_replacement(state, replacement_id)
    return True


# ── Eviction ─────────────────────────────────────────────────


def submit_human_vote(state: GameState, config: GameConfig, nominee_id: str) -> bool:
    if not state.awaiting_human_vote:
        return _reject("submit_human_vote", "not awaiting a vote")
    voter = state.human_id()
    if voter not in eligible_voter_ids(state):
        return _reject("submit_human_vote", f"{voter} may not vote")
    if nominee_id not in state.nominee_ids:
        return _reject("submit_human_vote", f"{nominee_id} is not nominated")
    state.votes[voter] = nominee_id
    state.clear_block()
    state.push(f"{state.name_of(voter)} has cast their vote.", "vote")
    return True


def submit_tie_break(state: GameState, config: GameConfig, nominee_id: str) -> bool:
    if not state.awaiting_tie_break:
        return _reject("submit_tie_break", "not awaiting a tie-break")
    if nominee_id not in state.tied_nominee_ids:
        return _reject("submit_tie_break", f"{nominee_id} is not tied")
    state.clear_block()
    state.push(
        f"{state.name_of(state.hoh_id)} breaks the tie and evicts {state.name_of(nominee_id)}.",
        "vote",
    )
    evict_player(state, config, nominee_id)
    if can_roll_battle_back(state, config):
        maybe_activate_battle_back(draw_context(state, config))
    state.set_phase(Phase.WEEK_END)
    return True


def submit_final3_eviction(state: GameState, config: GameConfig, evictee_id: str) -> bool:
    if not state.awaiting_final3_eviction:
        return _reject("submit_final3_eviction", "not awaiting a Final 3 eviction")
    if evictee_id not in state.nominee_ids:
        return _reject("submit_final3_eviction", f"{evictee_id} is not eligible")
    state.clear_block()
    finish_final3_eviction(state, config, evictee_id)
    state.set_phase(Phase.WEEK_END)
    return True


def submit_final4_eviction(state: GameState, config: GameConfig, evictee_id: str) -> bool:
    if state.phase is not Phase.FINAL4_EVICTION or not state.awaiting_pov_decision:
        return _reject("submit_final4_eviction", "not awaiting a Final 4 eviction")
    if evictee_id not in state.nominee_ids:
        return _reject("submit_final4_eviction", f"{evictee_id} is not nominated")
    state.clear_block()
    finish_final4_eviction(state, config, evictee_id)
    return True


# ── Competition sessions ─────────────────────────────────────

_COMP_PHASES = {
    Phase.HOH_COMP: ("hoh", Phase.HOH_RESULTS),
    Phase.POV_COMP: ("pov", Phase.POV_RESULTS),
}


def _competition_pool(state: GameState, kind: str):
    return hoh_eligible_ids(state) if kind == "hoh" else state.alive_ids()


def launch_competition(
    state: GameState,
    config: GameConfig,
    participant_ids: Optional[Sequence[str]] = None,
    game_key: str = "",
) -> bool:
    """Open an interactive competition for the current comp phase.

    AI scores are simulated up front so the host only supplies human
    scores on completion.
    """
    if state.phase not in _COMP_PHASES:
        return _reject("launch_competition", f"not a competition phase ({state.phase.value})")
    if state.pending is not None or state.battle_back.active or state.competition is not None:
        return _reject("launch_competition", "engine is busy")
    kind = _COMP_PHASES[state.phase][0]
    pool = _competition_pool(state, kind)
    ids = list(participant_ids) if participant_ids is not None else pool
    if not ids or any(pid not in pool for pid in ids):
        return _reject("launch_competition", f"ineligible participants {ids}")
    key = game_key or kind
    ai_ids = [pid for pid in ids if not state.is_human(pid)]
    state.competition = CompetitionSession(
        kind=kind,
        week=state.week,
        participant_ids=ids,
        ai_scores=simulate_ai_scores(state.seed, ai_ids, key),
        game_key=key,
    )
    logger.info(
        f"Launched {kind} competition '{key}' with {len(ids)} players",
        extra=log_context(state.week, state.phase.value),
    )
    return True


def complete_competition(
    state: GameState,
    config: GameConfig,
    human_scores: Optional[Mapping[str, float]] = None,
) -> Optional[str]:
    """Merge human scores, resolve the winner and apply it. Returns the winner."""
    session = state.competition
    if session is None:
        _reject("complete_competition", "no competition in progress")
        return None
    human_scores = human_scores or {}
    scores = dict(session.ai_scores)
    for pid in session.participant_ids:
        if state.is_human(pid):
            scores[pid] = float(human_scores.get(pid, 0))
    draw_context(state, config)
    winner = resolve_winner(session.participant_ids, scores)
    _record_run(state, session, scores, winner)
    _apply_comp_winner(state, session.kind, winner)
    return winner


def apply_competition_winner(state: GameState, config: GameConfig, winner_id: str) -> bool:
    """Apply a winner decided outside the engine."""
    if state.phase not in _COMP_PHASES or state.pending is not None or state.battle_back.active:
        return _reject("apply_competition_winner", "not in a competition phase")
    kind = _COMP_PHASES[state.phase][0]
    if winner_id not in _competition_pool(state, kind):
        return _reject("apply_competition_winner", f"{winner_id} is not eligible")
    draw_context(state, config)
    session = state.competition
    if session is not None:
        _record_run(state, session, dict(session.ai_scores), winner_id)
    _apply_comp_winner(state, kind, winner_id)
    return True


def _record_run(state: GameState, session: CompetitionSession, scores, winner_id: str) -> None:
    state.competition_history.append(CompetitionRun(
        kind=session.kind,
        week=session.week,
        participant_ids=list(session.participant_ids),
        scores=scores,
        winner_id=winner_id,
        game_key=session.game_key,
    ))
    del state.competition_history[:-COMPETITION_HISTORY_CAP]


def _apply_comp_winner(state: GameState, kind: str, winner_id: str) -> None:
    state.competition = None
    if kind == "hoh":
        state.set_phase(Phase.HOH_RESULTS)
        apply_hoh_winner(state, winner_id)
    else:
        state.set_phase(Phase.POV_RESULTS)
        apply_pov_winner(state, winner_id)
