# Area: Core
"""
bb_engine._core.snapshot — Read-only selectors
==============================================

Pure functions over a ``GameState``. Snapshots are plain dicts built
fresh on each call, so callers can never mutate engine state through
them.
"""

from typing import List

from ..types import GameSnapshot, PlayerSnapshot
from .state import GameState, Player, status_to_str


def alive_players(state: GameState) -> List[PlayerSnapshot]:
    return [player_snapshot(p) for p in state.alive_players()]


def is_blocked_on_human(state: GameState) -> bool:
    """True while a human decision is outstanding."""
    return state.pending is not None


def player_snapshot(player: Player) -> PlayerSnapshot:
    return {
        "id": player.id,
        "name": player.name,
        "avatar": player.avatar,
        "is_user": player.is_user,
        "status": status_to_str(player.status),
        "stats": {
            "hoh_wins": player.stats.hoh_wins,
            "pov_wins": player.stats.pov_wins,
            "times_nominated": player.stats.times_nominated,
        },
        "final_rank": player.final_rank,
    }


def build_game_snapshot(state: GameState) -> GameSnapshot:
    """Serializable view of the whole season."""
    bb = state.battle_back
    return {
        "season": state.season,
        "week": state.week,
        "phase": state.phase.value,
        "seed": state.seed,
        "hoh_id": state.hoh_id,
        "prev_hoh_id": state.prev_hoh_id,
        "nominee_ids": list(state.nominee_ids),
        "pov_winner_id": state.pov_winner_id,
        "pov_saved_id": state.pov_saved_id,
        "votes": dict(state.votes),
        "vote_results": dict(state.vote_results),
        "pending": state.pending.value if state.pending else None,
        "tied_nominee_ids": list(state.tied_nominee_ids),
        "f3_part1_winner_id": state.f3_part1_winner_id,
        "f3_part2_winner_id": state.f3_part2_winner_id,
        "eviction_order": list(state.eviction_order),
        "players": [player_snapshot(p) for p in state.players],
        "battle_back": {
            "active": bb.active,
            "used": bb.used,
            "week_decided": bb.week_decided,
            "candidates": list(bb.candidates),
            "eliminated": list(bb.eliminated),
            "votes": dict(bb.votes),
            "winner_id": bb.winner_id,
        },
        "narrative": state.narrative.to_list(),
    }
