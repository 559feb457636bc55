# Area: Core Handlers
"""
bb_engine._core.handlers.veto — Power of Veto entry effects
===========================================================

POV competition, the Final 4 bypass and the veto ceremony, including
automatic saves and replacement nominees.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..context import PhaseContext
from ..rng import DeterministicRNG, pick_one
from ..state import GameState, PendingDecision, Phase, StatusTag
from .week import run_competition

logger = logging.getLogger("bb_engine.phases")


def replacement_pool(state: GameState) -> List[str]:
    """Players who may replace a saved nominee."""
    excluded = {state.hoh_id, state.pov_winner_id, state.pov_saved_id, *state.nominee_ids}
    return [pid for pid in state.alive_ids() if pid not in excluded]


def apply_pov_winner(state: GameState, winner_id: str) -> None:
    for p in state.players:
        p.remove_tag(StatusTag.POV)
    winner = state.get_player(winner_id)
    state.pov_winner_id = winner_id
    winner.add_tag(StatusTag.POV)
    winner.stats.pov_wins += 1
    state.push(f"{winner.name} has won the Power of Veto!")
    _maybe_final4_bypass(state)


def _maybe_final4_bypass(state: GameState) -> None:
    """With four left the POV holder casts the sole vote to evict."""
    alive = state.alive_ids()
    if len(alive) != 4:
        return
    candidates = [pid for pid in alive if pid not in (state.hoh_id, state.pov_winner_id)]
    if len(candidates) == 2:
        for pid in state.nominee_ids:
            if pid not in candidates:
                state.get_player(pid).remove_tag(StatusTag.NOMINATED)
        for pid in candidates:
            p = state.get_player(pid)
            if pid not in state.nominee_ids:
                p.stats.times_nominated += 1
            p.add_tag(StatusTag.NOMINATED)
        state.nominee_ids = candidates
    else:
        state.push(
            f"Final 4 nominee check found {len(candidates)} candidates; "
            "keeping the original nominees.",
            "warning",
        )
    state.set_phase(Phase.FINAL4_EVICTION)
    names = " and ".join(state.name_of(pid) for pid in state.nominee_ids)
    state.push(
        f"Final 4: {state.name_of(state.pov_winner_id)} holds the sole vote to evict. "
        f"{names} are on the block."
    )


def save_nominee(state: GameState, nominee_id: str) -> None:
    state.pov_saved_id = nominee_id
    state.nominee_ids = [nid for nid in state.nominee_ids if nid != nominee_id]
    state.get_player(nominee_id).remove_tag(StatusTag.NOMINATED)
    state.push(
        f"{state.name_of(state.pov_winner_id)} has used the Power of Veto "
        f"to save {state.name_of(nominee_id)}."
    )


def add_replacement(state: GameState, replacement_id: str) -> None:
    p = state.get_player(replacement_id)
    state.nominee_ids = state.nominee_ids + [replacement_id]
    p.add_tag(StatusTag.NOMINATED)
    p.stats.times_nominated += 1
    state.push(f"{state.name_of(state.hoh_id)} has named {p.name} as the replacement nominee.")


def require_replacement(state: GameState, rng: Optional[DeterministicRNG]) -> None:
    """Block a human HOH for a replacement, or pick one for an AI HOH."""
    if state.is_human(state.hoh_id):
        state.block(PendingDecision.REPLACEMENT_NOMINEE)
        state.push(f"{state.name_of(state.hoh_id)} must name a replacement nominee.")
        return
    pool = replacement_pool(state)
    if not pool or rng is None:
        state.push("No eligible replacement nominee; the block stays short.", "warning")
        return
    add_replacement(state, pick_one(rng, pool))


# ── Entry effects ────────────────────────────────────────────


def enter_pov_comp(ctx: PhaseContext) -> None:
    ctx.state.push("The Power of Veto competition begins.")


def enter_pov_results(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = state.alive_ids()
    if not pool:
        state.push("No eligible players for the POV competition.", "warning")
        return
    apply_pov_winner(state, run_competition(ctx, pool, "pov"))


def enter_pov_ceremony(ctx: PhaseContext) -> None:
    ctx.state.push("The veto meeting is called to order.")


def enter_pov_ceremony_results(ctx: PhaseContext) -> None:
    state = ctx.state
    holder = state.pov_winner_id
    if holder is None:
        state.push("There is no veto holder this week.", "warning")
        return
    if holder in state.nominee_ids:
        save_nominee(state, holder)
        require_replacement(state, ctx.rng)
        return
    if state.is_human(holder):
        state.block(PendingDecision.POV_DECISION)
        state.push(f"{state.name_of(holder)} must decide whether to use the Power of Veto.")
        return
    state.push(f"{state.name_of(holder)} has decided NOT to use the Power of Veto.")
