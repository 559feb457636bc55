# Area: Core
"""
bb_engine._core.competition — Competition winner resolution
===========================================================

Turns raw per-participant scores into a single winner. The host that
produced the scores is irrelevant here: human scores and pre-simulated
AI scores are merged before resolution.

Ties, including the case where everybody scored 0, are broken with a
generator seeded from an FNV-1a hash of the sorted tied ids plus the
score, so the same tied set always yields the same winner no matter
what order participants were listed in.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Sequence

from ..errors import EmptyParticipantsError
from .rng import DeterministicRNG, fnv1a32, hash_str, pick_one

logger = logging.getLogger("bb_engine.competition")


def tie_break_key(tied_ids: Sequence[str], score: float) -> str:
    """String hashed to seed a tie-break among ``tied_ids``."""
    return ",".join(sorted(tied_ids)) + "|" + _format_score(score)


def _format_score(score: float) -> str:
    if float(score).is_integer():
        return str(int(score))
    return repr(float(score))


def resolve_winner(participant_ids: Sequence[str], scores: Mapping[str, float]) -> str:
    """Return the winning participant id.

    Participants missing from ``scores`` are treated as scoring 0.

    Raises
    ------
    EmptyParticipantsError
        If ``participant_ids`` is empty.
    """
    if not participant_ids:
        raise EmptyParticipantsError("resolve_winner")

    best = max(float(scores.get(pid, 0)) for pid in participant_ids)
    tied = sorted(pid for pid in participant_ids if float(scores.get(pid, 0)) == best)
    if len(tied) == 1:
        return tied[0]

    rng = DeterministicRNG(fnv1a32(tie_break_key(tied, best)))
    winner = pick_one(rng, tied)
    logger.debug(f"Tie at {best} among {tied}; seeded draw picked {winner}")
    return winner


def simulate_ai_scores(seed: int, participant_ids: Sequence[str], game_key: str = "") -> Dict[str, float]:
    """Reproducible raw AI scores in [0, 100] for each participant.

    Each participant gets an independent generator derived from the seed
    and their id, so adding a participant does not change anyone else's
    score.
    """
    scores: Dict[str, float] = {}
    for pid in participant_ids:
        rng = DeterministicRNG((seed ^ hash_str(f"{game_key}:{pid}")) & 0xFFFFFFFF)
        # Two draws averaged: scores cluster around the middle
        raw = (rng.next_float() + rng.next_float()) / 2
        scores[pid] = round(raw * 100, 2)
    return scores

