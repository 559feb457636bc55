# Area: Core Handlers
"""
bb_engine._core.handlers.endgame — Final 4 and Final 3
======================================================

Off-cycle endgame phases.

Final 4: the sole POV holder hears pleas, then evicts one of the two
nominees. A human holder blocks until they choose.

Final 3: a three-part HOH competition. Part 1 is played by all three,
Part 2 by the two Part-1 losers, Part 3 by the two part winners. The
Final HOH then evicts one of the other two directly.
"""

from __future__ import annotations

import logging

from ..context import PhaseContext
from ..rng import DeterministicRNG, pick_one
from ..state import GameState, PendingDecision, Phase, StatusTag
from ..._finale.jury_utils import NOMINEE_PLEA_TEMPLATES, pick_phrase
from .eviction import evict_player
from .week import run_competition

logger = logging.getLogger("bb_engine.phases")


def _final4_holder(state: GameState):
    return state.pov_winner_id or state.hoh_id


def _final4_nominees(state: GameState):
    holder = _final4_holder(state)
    nominees = [nid for nid in state.nominee_ids if nid != holder]
    if nominees:
        return nominees
    fallback = [pid for pid in state.alive_ids() if pid not in (holder, state.hoh_id)]
    state.push("Final 4 has no nominees; every other houseguest is eligible.", "warning")
    return fallback


def run_final4_eviction(ctx: PhaseContext) -> None:
    """Leave ``final4_eviction``: pleas, then the POV holder's decision."""
    state = ctx.state
    holder = _final4_holder(state)
    nominees = _final4_nominees(state)
    state.nominee_ids = nominees
    state.push(f"{state.name_of(holder)} asks nominees for their pleas.")
    for idx, nid in enumerate(nominees):
        plea = pick_phrase(NOMINEE_PLEA_TEMPLATES, state.seed, idx)
        state.push(f'{state.name_of(nid)}: "{plea}"', "social")

    if state.is_human(holder):
        state.block(PendingDecision.POV_DECISION)
        state.push(f"{state.name_of(holder)} must decide who to evict.")
        return
    if not nominees:
        state.push("Nobody is eligible for eviction at Final 4.", "warning")
        return
    evictee = pick_one(ctx.rng, nominees)
    finish_final4_eviction(ctx.state, ctx.config, evictee)


def finish_final4_eviction(state: GameState, config, evictee_id: str) -> None:
    state.push(f"{state.name_of(_final4_holder(state))} has chosen to evict {state.name_of(evictee_id)}.")
    evict_player(state, config, evictee_id)
    state.set_phase(Phase.FINAL3)
    enter_final3_state(state)


def enter_final3_state(state: GameState) -> None:
    state.clear_week_fields()
    state.f3_part1_winner_id = None
    state.f3_part2_winner_id = None
    names = ", ".join(p.name for p in state.alive_players())
    state.push(f"Final 3: {names}.")


# ── Entry effects ────────────────────────────────────────────


def enter_final3(ctx: PhaseContext) -> None:
    enter_final3_state(ctx.state)


def enter_final3_comp1(ctx: PhaseContext) -> None:
    state = ctx.state
    state.prev_hoh_id = None
    state.push("The three-part HOH competition begins.")


def enter_final3_comp2(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = state.alive_ids()
    state.push("Part 1 is underway.")
    if not pool:
        state.push("Nobody is left to play Part 1.", "warning")
        return
    winner = run_competition(ctx, pool, "f3p1")
    state.f3_part1_winner_id = winner
    state.push(f"Part 1 result: {state.name_of(winner)} wins and advances to Part 3.")


def enter_final3_comp3(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = [pid for pid in state.alive_ids() if pid != state.f3_part1_winner_id]
    state.push("Part 2 is underway.")
    if not pool:
        state.push("Nobody is left to play Part 2.", "warning")
        return
    winner = run_competition(ctx, pool, "f3p2")
    state.f3_part2_winner_id = winner
    state.push(f"Part 2 result: {state.name_of(winner)} wins and advances to Part 3.")


def enter_final3_decision(ctx: PhaseContext) -> None:
    state = ctx.state
    pool = [pid for pid in (state.f3_part1_winner_id, state.f3_part2_winner_id) if pid]
    state.push("Part 3 is underway.")
    if not pool:
        state.push("No part winners; skipping the Final HOH decision.", "warning")
        return
    final_hoh = run_competition(ctx, pool, "f3p3")
    state.hoh_id = final_hoh
    hoh = state.get_player(final_hoh)
    hoh.add_tag(StatusTag.HOH)
    hoh.stats.hoh_wins += 1
    state.push(f"{hoh.name} is the Final Head of Household!")

    state.nominee_ids = [pid for pid in state.alive_ids() if pid != final_hoh]
    if state.is_human(final_hoh):
        state.block(PendingDecision.FINAL3_EVICTION)
        state.push(f"{hoh.name} must choose who to take to the Final 2.")
        return
    if not state.nominee_ids:
        return
    # Separate generator so the eviction does not reuse the Part 3 draw
    evictee = pick_one(DeterministicRNG((state.seed + 1) & 0xFFFFFFFF), state.nominee_ids)
    finish_final3_eviction(state, ctx.config, evictee)


def finish_final3_eviction(state: GameState, config, evictee_id: str) -> None:
    """Evict the Final HOH's pick. The phase is left to the caller."""
    state.push(f"{state.name_of(state.hoh_id)} has chosen to evict {state.name_of(evictee_id)}.")
    evict_player(state, config, evictee_id)
