# Area: Core
"""
bb_engine._core.router — Phase transitions
==========================================

Maps each phase to its successor and dispatches entry effects.

Every call to ``advance`` that is not a no-op advances the stored seed
exactly once and builds a fresh generator from the new seed for the
entry effect of the phase being entered.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict

from ..config import GameConfig
from .context import PhaseContext, draw_context
from .handlers import endgame, eviction, veto, week
from .state import GameState, Phase

logger = logging.getLogger("bb_engine.router")

CYCLE = [
    Phase.WEEK_START,
    Phase.HOH_COMP,
    Phase.HOH_RESULTS,
    Phase.SOCIAL_1,
    Phase.NOMINATIONS,
    Phase.NOMINATION_RESULTS,
    Phase.POV_COMP,
    Phase.POV_RESULTS,
    Phase.POV_CEREMONY,
    Phase.POV_CEREMONY_RESULTS,
    Phase.SOCIAL_2,
    Phase.LIVE_VOTE,
    Phase.EVICTION_RESULTS,
    Phase.WEEK_END,
]

# Successors for phases that do not depend on the cast size
NEXT_PHASE: Dict[Phase, Phase] = {
    **{CYCLE[i]: CYCLE[i + 1] for i in range(len(CYCLE) - 1)},
    Phase.FINAL4_EVICTION: Phase.FINAL3,
    Phase.FINAL3: Phase.FINAL3_COMP1,
    Phase.FINAL3_COMP1: Phase.FINAL3_COMP2,
    Phase.FINAL3_COMP2: Phase.FINAL3_COMP3,
    Phase.FINAL3_COMP3: Phase.FINAL3_DECISION,
    Phase.FINAL3_DECISION: Phase.WEEK_END,
}

ENTRY_EFFECTS: Dict[Phase, Callable[[PhaseContext], None]] = {
    Phase.WEEK_START: week.enter_week_start,
    Phase.HOH_COMP: week.enter_hoh_comp,
    Phase.HOH_RESULTS: week.enter_hoh_results,
    Phase.SOCIAL_1: week.enter_social,
    Phase.NOMINATIONS: week.enter_nominations,
    Phase.NOMINATION_RESULTS: week.enter_nomination_results,
    Phase.POV_COMP: veto.enter_pov_comp,
    Phase.POV_RESULTS: veto.enter_pov_results,
    Phase.POV_CEREMONY: veto.enter_pov_ceremony,
    Phase.POV_CEREMONY_RESULTS: veto.enter_pov_ceremony_results,
    Phase.SOCIAL_2: week.enter_social,
    Phase.LIVE_VOTE: eviction.enter_live_vote,
    Phase.EVICTION_RESULTS: eviction.enter_eviction_results,
    Phase.WEEK_END: week.enter_week_end,
    Phase.FINAL3: endgame.enter_final3,
    Phase.FINAL3_COMP1: endgame.enter_final3_comp1,
    Phase.FINAL3_COMP2: endgame.enter_final3_comp2,
    Phase.FINAL3_COMP3: endgame.enter_final3_comp3,
    Phase.FINAL3_DECISION: endgame.enter_final3_decision,
    Phase.JURY: week.enter_jury,
}


def next_phase(state: GameState) -> Phase:
    """Successor of the current phase, accounting for endgame jumps."""
    alive = len(state.alive_ids())
    if state.phase is Phase.WEEK_START and alive == 3:
        return Phase.FINAL3
    if state.phase is Phase.WEEK_END:
        return Phase.JURY if alive <= 2 else Phase.WEEK_START
    return NEXT_PHASE.get(state.phase, Phase.JURY)


def blocked_reason(state: GameState):
    """Why ``advance`` would be a no-op, or None."""
    if state.phase is Phase.JURY:
        return "jury"
    if state.pending is not None:
        return state.pending.value
    if state.battle_back.active:
        return "battle_back"
    return None


def advance(state: GameState, config: GameConfig) -> bool:
    """Move exactly one step. Returns False when nothing happened."""
    reason = blocked_reason(state)
    if reason is not None:
        logger.debug(f"advance() ignored in {state.phase.value}: {reason}")
        return False

    ctx = draw_context(state, config)

    if state.competition is not None:
        logger.info(
            f"Discarding pending {state.competition.kind} competition session; "
            "resolving by random pick"
        )
        state.competition = None

    if state.phase is Phase.FINAL4_EVICTION:
        endgame.run_final4_eviction(ctx)
        return True

    state.set_phase(next_phase(state))
    effect = ENTRY_EFFECTS.get(state.phase)
    if effect is not None:
        effect(ctx)
    return True
