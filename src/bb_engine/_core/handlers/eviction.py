# Area: Core Handlers
"""
bb_engine._core.handlers.eviction — Live vote and eviction
==========================================================

AI ballots, tallying, tie-breaks and the eviction itself, including jury
tiering. After a weekly eviction the Battle Back roll is evaluated.
"""

from __future__ import annotations

import logging
from typing import List

from ...config import GameConfig
from ..._finale.jury_utils import should_be_juror
from ..._shared.logging_formatters import log_context
from ..context import PhaseContext
from ..state import GameState, OUT_TAGS, PendingDecision, StatusTag
from ..tally import ai_eviction_vote, ai_tie_break, tally_votes
from ..twist import maybe_activate_battle_back

logger = logging.getLogger("bb_engine.phases")


def eligible_voter_ids(state: GameState) -> List[str]:
    return [
        pid for pid in state.alive_ids()
        if pid != state.hoh_id and pid not in state.nominee_ids
    ]


def evict_player(state: GameState, config: GameConfig, player_id: str) -> None:
    """Remove a player from the house, as evicted or as a juror."""
    player = state.get_player(player_id)
    out_count = sum(1 for p in state.players if p.status & OUT_TAGS)
    if should_be_juror(out_count, len(state.players), config.jury_size):
        player.status = StatusTag.JURY
    else:
        player.status = StatusTag.EVICTED
    state.eviction_order.append(player_id)
    state.nominee_ids = [nid for nid in state.nominee_ids if nid != player_id]
    state.votes = {}
    state.tied_nominee_ids = []
    state.push(f"{player.name} has been evicted from the house.")
    if player.status == StatusTag.JURY:
        state.push(f"{player.name} becomes a member of the jury.")
    logger.info(
        f"Evicted {player_id} as {player.status.name.lower()}",
        extra=log_context(state.week, state.phase.value),
    )


# ── Entry effects ────────────────────────────────────────────


def enter_live_vote(ctx: PhaseContext) -> None:
    state = ctx.state
    state.votes = {}
    if not state.nominee_ids:
        state.push("There are no nominees to vote on.", "warning")
        return
    human_voter = None
    for voter_id in eligible_voter_ids(state):
        if state.is_human(voter_id):
            human_voter = voter_id
            continue
        state.votes[voter_id] = ai_eviction_vote(voter_id, state.nominee_ids, state.seed)
    state.push("The live eviction vote is underway.", "vote")
    if human_voter is not None:
        state.block(PendingDecision.HUMAN_VOTE)
        state.push(f"{state.name_of(human_voter)} must cast a vote to evict.", "vote")


def enter_eviction_results(ctx: PhaseContext) -> None:
    state = ctx.state
    if len(state.alive_ids()) < 2:
        state.push("Fewer than two players remain; skipping eviction.", "warning")
        return
    if not state.nominee_ids:
        state.push("There are no nominees; nobody is evicted this week.", "warning")
        return

    result = tally_votes(state.nominee_ids, state.votes)
    state.vote_results = dict(result.counts)
    counts = "-".join(str(result.counts[nid]) for nid in sorted(
        state.nominee_ids, key=lambda nid: -result.counts[nid]))

    if result.evictee_id is not None:
        state.push(f"By a vote of {counts}, {state.name_of(result.evictee_id)} is evicted.", "vote")
        evict_player(state, ctx.config, result.evictee_id)
        maybe_activate_battle_back(ctx)
        return

    state.push(f"The vote is tied {counts}.", "vote")
    if state.is_human(state.hoh_id):
        state.tied_nominee_ids = list(result.max_ids)
        state.block(PendingDecision.TIE_BREAK)
        state.push(f"{state.name_of(state.hoh_id)} must break the tie.", "vote")
        return

    evictee = ai_tie_break(state.hoh_id, result.max_ids, state.seed)
    state.push(f"{state.name_of(state.hoh_id)} breaks the tie and evicts {state.name_of(evictee)}.", "vote")
    evict_player(state, ctx.config, evictee)
    maybe_activate_battle_back(ctx)
