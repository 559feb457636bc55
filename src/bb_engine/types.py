"""
bb_engine.types — TypedDict schemas for snapshots and roster input
==================================================================

Documents the structure of the plain dictionaries the engine hands out
(snapshots) and accepts (roster entries). All keys use snake_case;
roster loading also accepts the camelCase ``isUser`` key.

Use __annotations__ to inspect fields:

    >>> PlayerSnapshot.__annotations__
    {'id': str, 'name': str, ...}
"""

from typing import Dict, List, Optional, TypedDict


# ============================================
# Roster input
# ============================================

class RosterEntry(TypedDict, total=False):
    """One houseguest as supplied by the roster loader."""
    id: str
    name: str
    avatar: str
    is_user: bool


# ============================================
# Game snapshot
# ============================================

class PlayerStatsSnapshot(TypedDict):
    hoh_wins: int
    pov_wins: int
    times_nominated: int


class PlayerSnapshot(TypedDict):
    """Serialized player.

    Fields
    ------
    status : str
        One of "active", "hoh", "pov", "nominated", "hoh+pov",
        "nominated+pov", "evicted", "jury".
    final_rank : Optional[int]
        1 for the winner, 2 for the runner-up, and so on. None until
        the season is finalized.
    """
    id: str
    name: str
    avatar: str
    is_user: bool
    status: str
    stats: PlayerStatsSnapshot
    final_rank: Optional[int]


class BattleBackSnapshot(TypedDict):
    active: bool
    used: bool
    week_decided: Optional[int]
    candidates: List[str]
    eliminated: List[str]
    votes: Dict[str, float]
    winner_id: Optional[str]


class NarrativeEventSnapshot(TypedDict):
    id: str
    text: str
    type: str          # game | social | vote | twist | warning | diary
    week: int
    phase: str


class GameSnapshot(TypedDict):
    """Read-only view of the whole season state."""
    season: int
    week: int
    phase: str
    seed: int
    hoh_id: Optional[str]
    prev_hoh_id: Optional[str]
    nominee_ids: List[str]
    pov_winner_id: Optional[str]
    pov_saved_id: Optional[str]
    votes: Dict[str, str]
    vote_results: Dict[str, int]
    pending: Optional[str]
    tied_nominee_ids: List[str]
    f3_part1_winner_id: Optional[str]
    f3_part2_winner_id: Optional[str]
    eviction_order: List[str]
    players: List[PlayerSnapshot]
    battle_back: BattleBackSnapshot
    narrative: List[NarrativeEventSnapshot]


# ============================================
# Finale snapshot
# ============================================

class JurorReveal(TypedDict):
    """One revealed jury ballot."""
    juror_id: str
    finalist_id: str
    line: str            # e.g., "My vote goes to..."


class FinaleSnapshot(TypedDict):
    """Read-only view of the jury vote."""
    is_active: bool
    has_started: bool
    is_complete: bool
    finalist_ids: List[str]
    juror_ids: List[str]
    reveal_order: List[str]
    revealed: List[JurorReveal]
    revealed_count: int
    awaiting_human_juror_id: Optional[str]
    tally: Dict[str, int]
    winner_id: Optional[str]
    runner_up_id: Optional[str]
    returned_juror_id: Optional[str]
    tie_break: Optional[str]     # None | "americas_vote" | "seeded_draw"
