# Area: Core
"""
bb_engine._core.tally — Eviction vote counting
==============================================

Pure helpers for the live eviction vote: counting, AI ballot derivation
and the AI head-of-household tie-break.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence

from .rng import DeterministicRNG, fnv1a32, hash_str, pick_one


@dataclass
class TallyResult:
    """Per-nominee counts and the set of nominees at the maximum."""
    counts: Dict[str, int] = field(default_factory=dict)
    max_ids: List[str] = field(default_factory=list)
    max_count: int = 0

    @property
    def is_tie(self) -> bool:
        return len(self.max_ids) > 1

    @property
    def evictee_id(self):
        return self.max_ids[0] if len(self.max_ids) == 1 else None


def tally_votes(nominee_ids: Sequence[str], votes: Mapping[str, str]) -> TallyResult:
    """Count votes per nominee. Ballots for non-nominees are ignored."""
    counts = {nid: 0 for nid in nominee_ids}
    for target in votes.values():
        if target in counts:
            counts[target] += 1
    if not counts:
        return TallyResult()
    max_count = max(counts.values())
    max_ids = [nid for nid in nominee_ids if counts[nid] == max_count]
    return TallyResult(counts=counts, max_ids=max_ids, max_count=max_count)


def ai_eviction_vote(voter_id: str, nominee_ids: Sequence[str], seed: int) -> str:
    """Ballot of an AI voter, derived by XOR-ing the voter hash into the seed."""
    rng = DeterministicRNG((seed ^ hash_str(voter_id)) & 0xFFFFFFFF)
    return pick_one(rng, list(nominee_ids))


def ai_tie_break(hoh_id: str, tied_ids: Sequence[str], seed: int) -> str:
    """Tie-break pick of an AI head of household."""
    ordered = sorted(tied_ids)
    mixed = fnv1a32(",".join(ordered)) ^ seed ^ hash_str(hoh_id or "")
    return pick_one(DeterministicRNG(mixed & 0xFFFFFFFF), ordered)
