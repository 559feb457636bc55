# Area: Finale
"""
bb_engine._finale.season_archive — Final placements and season archives
========================================================================

Assigns final ranks once the jury has decided and records a compact
summary of each completed season. At most ``ARCHIVE_CAP`` seasons are
kept, newest last.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, asdict
from typing import List, Optional

from .._core.state import GameState, StatusTag

logger = logging.getLogger("bb_engine.archive")

ARCHIVE_CAP = 50


@dataclass
class PlayerSeasonSummary:
    player_id: str
    display_name: str
    final_placement: Optional[int]   # None for pre-jury evictees
    comps_won: int = 0
    noms: int = 0
    is_evicted: bool = False


@dataclass
class SeasonArchive:
    season_index: int
    season_id: str
    player_summaries: List[PlayerSeasonSummary] = field(default_factory=list)
    winner_id: Optional[str] = None
    summary_text: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


def assign_final_ranks(state: GameState, winner_id: str, runner_up_id: Optional[str]) -> None:
    """Winner 1, runner-up 2, then evictees from last out to first out."""
    rank = 1
    state.get_player(winner_id).final_rank = rank
    if runner_up_id is not None:
        rank += 1
        state.get_player(runner_up_id).final_rank = rank
    for pid in reversed(state.eviction_order):
        p = state.get_player(pid)
        if p is None or p.is_alive or p.final_rank is not None:
            continue
        rank += 1
        p.final_rank = rank


def build_season_archive(state: GameState, summary_text: Optional[str] = None) -> SeasonArchive:
    summaries = []
    winner_id = None
    for p in state.players:
        pre_jury = bool(p.status & StatusTag.EVICTED)
        if p.final_rank == 1:
            winner_id = p.id
        summaries.append(PlayerSeasonSummary(
            player_id=p.id,
            display_name=p.name,
            final_placement=None if pre_jury else p.final_rank,
            comps_won=p.stats.hoh_wins + p.stats.pov_wins,
            noms=p.stats.times_nominated,
            is_evicted=not p.is_alive,
        ))
    return SeasonArchive(
        season_index=state.season,
        season_id=f"season-{state.season}-{state.seed:08x}",
        player_summaries=summaries,
        winner_id=winner_id,
        summary_text=summary_text,
    )


def add_season_archive(archives: List[SeasonArchive], archive: SeasonArchive) -> List[SeasonArchive]:
    """Append, keeping only the newest ``ARCHIVE_CAP`` entries."""
    archives.append(archive)
    del archives[:-ARCHIVE_CAP]
    logger.info(f"Archived season {archive.season_index} ({archive.season_id})")
    return archives
