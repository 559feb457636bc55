# Area: Core Handlers
"""
bb_engine._core.handlers.week — Weekly cycle entry effects
==========================================================

Week boundaries, the Head of Household competition, social phases and
nominations.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..competition import resolve_winner, simulate_ai_scores
from ..context import PhaseContext
from ..rng import pick_n
from ..state import GameState, PendingDecision, StatusTag

logger = logging.getLogger("bb_engine.phases")


def hoh_eligible_ids(state: GameState) -> List[str]:
    """Alive players minus the outgoing HOH, unless that empties the pool."""
    alive = state.alive_ids()
    pool = [pid for pid in alive if pid != state.prev_hoh_id]
    return pool or alive


def nomination_pool(state: GameState) -> List[str]:
    return [pid for pid in state.alive_ids() if pid != state.hoh_id]


def run_competition(ctx: PhaseContext, participant_ids: Sequence[str], game_key: str) -> str:
    """Resolve a competition nobody played interactively (one draw)."""
    scores = simulate_ai_scores(ctx.rng.next_uint32(), participant_ids, game_key)
    return resolve_winner(participant_ids, scores)


def apply_hoh_winner(state: GameState, winner_id: str) -> None:
    for p in state.players:
        p.remove_tag(StatusTag.HOH)
    winner = state.get_player(winner_id)
    state.hoh_id = winner_id
    winner.add_tag(StatusTag.HOH)
    winner.stats.hoh_wins += 1
    state.push(f"{winner.name} is the new Head of Household!")


def apply_nominations(state: GameState, nominee_ids: Sequence[str]) -> None:
    state.nominee_ids = list(nominee_ids)
    state.pending_nominee1_id = None
    for nid in nominee_ids:
        p = state.get_player(nid)
        p.add_tag(StatusTag.NOMINATED)
        p.stats.times_nominated += 1
    names = " and ".join(state.name_of(nid) for nid in nominee_ids)
    state.push(f"{state.name_of(state.hoh_id)} has nominated {names} for eviction.")


# ── Entry effects ────────────────────────────────────────────


def enter_week_start(ctx: PhaseContext) -> None:
    state = ctx.state
    state.week += 1
    state.prev_hoh_id = state.hoh_id
    state.clear_week_fields()
    state.push(f"Week {state.week} begins.")


def enter_hoh_comp(ctx: PhaseContext) -> None:
    ctx.state.push(f"The Week {ctx.state.week} Head of Household competition begins.")


def enter_hoh_results(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = hoh_eligible_ids(state)
    if not pool:
        state.push("No eligible players for the HOH competition.", "warning")
        return
    apply_hoh_winner(state, run_competition(ctx, pool, "hoh"))


def enter_social(ctx: PhaseContext) -> None:
    ctx.state.push("The houseguests mingle and talk strategy.", "social")


def enter_nominations(ctx: PhaseContext) -> None:
    ctx.state.push(f"{ctx.state.name_of(ctx.state.hoh_id)} is preparing the nomination ceremony.")


def enter_nomination_results(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = nomination_pool(state)
    if len(pool) < 2:
        state.push("Not enough eligible players for nominations.", "warning")
        return
    if state.is_human(state.hoh_id):
        state.block(PendingDecision.NOMINATIONS)
        state.push(f"{state.name_of(state.hoh_id)} must choose two nominees.")
        return
    apply_nominations(state, pick_n(ctx.rng, pool, 2))


def enter_week_end(ctx: PhaseContext) -> None:
    ctx.state.push(f"Week {ctx.state.week} comes to a close.")


def enter_jury(ctx: PhaseContext) -> None:
    state = ctx.state
    names = " and ".join(p.name for p in state.alive_players())
    state.push(f"The final two are {names}. The jury will now decide the winner.")
