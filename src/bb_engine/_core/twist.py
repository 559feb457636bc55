# Area: Core
"""
bb_engine._core.twist — Battle Back twist
=========================================

Optional mid-season interrupt that lets one juror re-enter the house.
While the twist is active ``advance()`` is blocked; it ends with either
``complete_battle_back`` (a winner returns) or ``dismiss_battle_back``.

The public vote is simulated step by step: every step drifts the vote
percentages and eliminates the lowest candidate, until one remains.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..config import GameConfig
from .._shared.logging_formatters import log_context
from .context import PhaseContext
from .rng import DeterministicRNG
from .state import GameState, Phase, StatusTag

logger = logging.getLogger("bb_engine.twist")

MIN_JURORS = 3
MIN_ACTIVE = 5
DRIFT_SALT = 0x5A7D3C1E
DRIFT = 5


def can_roll_battle_back(state: GameState, config: GameConfig) -> bool:
    """Whether the activation roll may be evaluated for the latest eviction."""
    bb = state.battle_back
    return (
        state.phase is Phase.EVICTION_RESULTS
        and config.enable_twists
        and not bb.used
        and not bb.active
        and len(state.juror_ids()) >= MIN_JURORS
        and len(state.alive_ids()) >= MIN_ACTIVE
        and bb.last_roll_eviction != len(state.eviction_order)
    )


def maybe_activate_battle_back(ctx: PhaseContext) -> bool:
    """Roll once for this eviction; activate on ``roll < chance / 100``."""
    state = ctx.state
    if not can_roll_battle_back(state, ctx.config):
        return False
    state.battle_back.last_roll_eviction = len(state.eviction_order)
    roll = ctx.rng.next_float()
    if roll >= ctx.config.battle_back_chance / 100:
        logger.debug(f"Battle Back roll {roll:.3f} missed ({ctx.config.battle_back_chance}%)")
        return False
    activate_battle_back(state, state.juror_ids())
    return True


def activate_battle_back(state: GameState, candidates: Sequence[str]) -> None:
    bb = state.battle_back
    bb.active = True
    bb.used = False
    bb.week_decided = state.week
    bb.candidates = list(candidates)
    bb.eliminated = []
    bb.winner_id = None
    bb.vote_seed = state.seed
    bb.vote_step = 0
    bb.votes = dict(zip(bb.candidates, random_percentages(DeterministicRNG(state.seed), len(bb.candidates))))
    state.push("Twist! The Battle Back is on: one juror can fight their way back into the house.", "twist")
    logger.info(
        f"Battle Back activated with {len(bb.candidates)} candidates",
        extra=log_context(state.week, state.phase.value),
    )


def complete_battle_back(state: GameState, winner_id: str) -> bool:
    bb = state.battle_back
    if not bb.active or winner_id not in bb.candidates:
        logger.debug(f"Rejected Battle Back completion for {winner_id}")
        return False
    player = state.get_player(winner_id)
    player.status = StatusTag.ACTIVE
    state.eviction_order = [pid for pid in state.eviction_order if pid != winner_id]
    bb.active = False
    bb.used = True
    bb.winner_id = winner_id
    state.push(f"{player.name} wins the Battle Back and returns to the house!", "twist")
    return True


def dismiss_battle_back(state: GameState) -> bool:
    bb = state.battle_back
    if not bb.active:
        return False
    bb.active = False
    bb.used = True
    state.push("The Battle Back has been called off. Nobody returns.", "twist")
    return True


# ── Public vote simulation ───────────────────────────────────


def to_int_percentages(values: Sequence[float]) -> List[int]:
    """Scale to non-negative integers summing to 100 (largest remainder)."""
    if not values:
        return []
    total = sum(values) or 1
    scaled = [v / total * 100 for v in values]
    floored = [int(v) for v in scaled]
    remainder = 100 - sum(floored)
    by_frac = sorted(range(len(scaled)), key=lambda i: scaled[i] - floored[i], reverse=True)
    for i in by_frac[:remainder]:
        floored[i] += 1
    return floored


def random_percentages(rng: DeterministicRNG, count: int) -> List[int]:
    if count == 0:
        return []
    if count == 1:
        return [100]
    return to_int_percentages([rng.next_float() + 0.1 for _ in range(count)])


def drift_percentages(current: Sequence[float], rng: DeterministicRNG, drift: float = DRIFT) -> List[int]:
    if len(current) <= 1:
        return list(current)
    deltas = [(rng.next_float() - 0.5) * drift * 2 for _ in current]
    return to_int_percentages([max(1, v + d) for v, d in zip(current, deltas)])


def step_battle_back_vote(state: GameState) -> Optional[str]:
    """Run one public-vote step and return the eliminated candidate.

    The step after which a single candidate remains completes the twist.
    """
    bb = state.battle_back
    if not bb.active:
        return None
    remaining = [cid for cid in bb.candidates if cid not in bb.eliminated]
    if len(remaining) <= 1:
        if remaining:
            complete_battle_back(state, remaining[0])
        return None

    bb.vote_step += 1
    rng = DeterministicRNG(((bb.vote_seed ^ DRIFT_SALT) + bb.vote_step) & 0xFFFFFFFF)
    pcts = drift_percentages([bb.votes.get(cid, 0) for cid in remaining], rng)

    lowest_idx = min(range(len(pcts)), key=lambda i: pcts[i])
    lowest_id = remaining[lowest_idx]
    freed = pcts[lowest_idx]
    survivors = [cid for i, cid in enumerate(remaining) if i != lowest_idx]
    kept = [p for i, p in enumerate(pcts) if i != lowest_idx]
    total = sum(kept) or 1
    bumped = to_int_percentages([p + p / total * freed for p in kept])

    votes: Dict[str, float] = {cid: 0 for cid in bb.eliminated}
    votes[lowest_id] = 0
    votes.update(zip(survivors, bumped))
    bb.votes = votes
    bb.eliminated.append(lowest_id)
    state.push(f"{state.name_of(lowest_id)} has the fewest votes and is out of the Battle Back.", "twist")

    if len(survivors) == 1:
        complete_battle_back(state, survivors[0])
    return lowest_id
