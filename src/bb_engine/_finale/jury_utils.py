# Area: Finale
"""
bb_engine._finale.jury_utils — Jury composition and voting helpers
==================================================================

Pure functions shared by the eviction path (jury tiering) and the
finale (juror set, AI ballots, winner determination).
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from .._core.rng import DeterministicRNG, hash_str

# ── Jury composition ─────────────────────────────────────────


def non_jury_eviction_count(total_players: int, jury_size: int) -> int:
    """Number of evictees who leave before the jury starts.

    12 players with a jury of 7 gives 3 pre-jury evictions.
    """
    return max(0, total_players - 2 - jury_size)


def should_be_juror(eviction_index: int, total_players: int, jury_size: int) -> bool:
    """``eviction_index`` counts players already out when this one leaves."""
    return eviction_index >= non_jury_eviction_count(total_players, jury_size)


def ensure_odd_jurors(juror_ids: Sequence[str], pre_jury_ids: Sequence[str]) -> List[str]:
    """Append the most recent pre-jury evictee if the jury count is even.

    Both lists are ordered oldest first. Players already seated are
    skipped so a jury-return pick cannot be added twice.
    """
    jurors = list(juror_ids)
    if len(jurors) % 2 == 1:
        return jurors
    for pid in reversed(pre_jury_ids):
        if pid not in jurors:
            return jurors + [pid]
    return jurors


def jury_return_candidate(pre_jury_ids: Sequence[str]) -> Optional[str]:
    """Most recently evicted pre-jury player, or None."""
    return pre_jury_ids[-1] if pre_jury_ids else None


# ── Voting ───────────────────────────────────────────────────


def tally_jury_votes(votes: Mapping[str, str]) -> Dict[str, int]:
    tally: Dict[str, int] = {}
    for finalist_id in votes.values():
        tally[finalist_id] = tally.get(finalist_id, 0) + 1
    return tally


def is_jury_tie(tally: Mapping[str, int], finalist_ids: Sequence[str]) -> bool:
    if len(finalist_ids) < 2:
        return False
    a, b = finalist_ids[0], finalist_ids[1]
    return tally.get(a, 0) == tally.get(b, 0)


def determine_winner(tally: Mapping[str, int], finalist_ids: Sequence[str], seed: int) -> str:
    """Majority winner; an exact tie is a seeded 50/50 draw."""
    if len(finalist_ids) < 2:
        return finalist_ids[0] if finalist_ids else ""
    a, b = finalist_ids[0], finalist_ids[1]
    a_votes, b_votes = tally.get(a, 0), tally.get(b, 0)
    if a_votes != b_votes:
        return a if a_votes > b_votes else b
    return a if DeterministicRNG(seed).next_float() < 0.5 else b


def ai_juror_vote(juror_id: str, finalist_ids: Sequence[str], seed: int) -> str:
    """Ballot of an AI juror: seed XOR hash(juror id)."""
    if not finalist_ids:
        return ""
    rng = DeterministicRNG((seed ^ hash_str(juror_id)) & 0xFFFFFFFF)
    return finalist_ids[int(rng.next_float() * len(finalist_ids))]


# ── Phrase pools ─────────────────────────────────────────────

JURY_LOCKED_LINES = [
    "My vote goes to...",
    "I'm voting for...",
    "This season, my jury vote is for...",
    "After a lot of thought, my vote is for...",
    "The person I want to win this game is...",
    "I'm giving my vote to...",
]

NOMINEE_PLEA_TEMPLATES = [
    "Please keep me here. I haven't finished what I came to do.",
    "I've been loyal from day one and I'll have your back in the Final 3.",
    "You can trust me more than anyone else on this block. Let me stay.",
    "I've fought too hard to go home now. Give me the chance to prove myself.",
    "Everything I've done in this game has been for us. Don't send me home.",
]


def pick_phrase(pool: Sequence[str], seed: int, idx: int) -> str:
    rng = DeterministicRNG((seed ^ idx) & 0xFFFFFFFF)
    return pool[int(rng.next_float() * len(pool))]
