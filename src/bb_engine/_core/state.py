# Area: Core
"""
bb_engine._core.state — Game state
==================================

Players, phases and the mutable season state owned by the engine.
Transition and decision functions mutate a ``GameState`` in place;
everything outside the package reads it through snapshots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, Flag
from typing import Dict, List, Optional

from .._shared.logging_formatters import log_context
from .._shared.narrative import NarrativeEvent, NarrativeLog

logger = logging.getLogger("bb_engine.state")


class StatusTag(Flag):
    """Tag set for a player's status. The empty set means active."""
    ACTIVE = 0
    HOH = 1
    POV = 2
    NOMINATED = 4
    EVICTED = 8
    JURY = 16


OUT_TAGS = StatusTag.EVICTED | StatusTag.JURY
WEEK_TAGS = StatusTag.HOH | StatusTag.POV | StatusTag.NOMINATED

_STATUS_STRINGS = {
    "active": StatusTag.ACTIVE,
    "hoh": StatusTag.HOH,
    "pov": StatusTag.POV,
    "nominated": StatusTag.NOMINATED,
    "hoh+pov": StatusTag.HOH | StatusTag.POV,
    "nominated+pov": StatusTag.NOMINATED | StatusTag.POV,
    "evicted": StatusTag.EVICTED,
    "jury": StatusTag.JURY,
}


def status_to_str(status: StatusTag) -> str:
    """Serialize a tag set to its compound string form."""
    if status & StatusTag.JURY:
        return "jury"
    if status & StatusTag.EVICTED:
        return "evicted"
    parts = []
    if status & StatusTag.HOH:
        parts.append("hoh")
    if status & StatusTag.NOMINATED:
        parts.append("nominated")
    if status & StatusTag.POV:
        parts.append("pov")
    return "+".join(parts) or "active"


def status_from_str(value: str) -> StatusTag:
    try:
        return _STATUS_STRINGS[value]
    except KeyError:
        raise ValueError(f"Unknown player status: {value!r}") from None


class Phase(Enum):
    """Engine phases. The first fourteen form the weekly cycle."""
    WEEK_START           = "week_start"
    HOH_COMP             = "hoh_comp"
    HOH_RESULTS          = "hoh_results"
    SOCIAL_1             = "social_1"
    NOMINATIONS          = "nominations"
    NOMINATION_RESULTS   = "nomination_results"
    POV_COMP             = "pov_comp"
    POV_RESULTS          = "pov_results"
    POV_CEREMONY         = "pov_ceremony"
    POV_CEREMONY_RESULTS = "pov_ceremony_results"
    SOCIAL_2             = "social_2"
    LIVE_VOTE            = "live_vote"
    EVICTION_RESULTS     = "eviction_results"
    WEEK_END             = "week_end"
    FINAL4_EVICTION      = "final4_eviction"
    FINAL3               = "final3"
    FINAL3_COMP1         = "final3_comp1"
    FINAL3_COMP2         = "final3_comp2"
    FINAL3_COMP3         = "final3_comp3"
    FINAL3_DECISION      = "final3_decision"
    JURY                 = "jury"


class PendingDecision(Enum):
    """What the engine is waiting for a human to decide."""
    NOMINATIONS         = "awaiting_nominations"
    POV_DECISION        = "awaiting_pov_decision"
    POV_SAVE_TARGET     = "awaiting_pov_save_target"
    HUMAN_VOTE          = "awaiting_human_vote"
    TIE_BREAK           = "awaiting_tie_break"
    FINAL3_EVICTION     = "awaiting_final3_eviction"
    REPLACEMENT_NOMINEE = "replacement_needed"


@dataclass
class PlayerStats:
    hoh_wins: int = 0
    pov_wins: int = 0
    times_nominated: int = 0


@dataclass
class Player:
    """One houseguest."""
    id: str
    name: str
    avatar: str = ""
    is_user: bool = False
    status: StatusTag = StatusTag.ACTIVE
    stats: PlayerStats = field(default_factory=PlayerStats)
    final_rank: Optional[int] = None

    @property
    def is_alive(self) -> bool:
        return not (self.status & OUT_TAGS)

    def add_tag(self, tag: StatusTag) -> None:
        self.status |= tag

    def remove_tag(self, tag: StatusTag) -> None:
        self.status &= ~tag


@dataclass
class BattleBackState:
    """Battle Back twist sub-state."""
    active: bool = False
    used: bool = False
    week_decided: Optional[int] = None
    candidates: List[str] = field(default_factory=list)
    eliminated: List[str] = field(default_factory=list)
    votes: Dict[str, float] = field(default_factory=dict)
    winner_id: Optional[str] = None
    vote_seed: int = 0
    vote_step: int = 0
    # eviction_order length at the last roll; one roll per eviction
    last_roll_eviction: Optional[int] = None


@dataclass
class CompetitionSession:
    """An in-flight competition launched by the host."""
    kind: str                     # "hoh" | "pov"
    week: int
    participant_ids: List[str]
    ai_scores: Dict[str, float] = field(default_factory=dict)
    game_key: str = ""


@dataclass
class CompetitionRun:
    """Completed competition, kept for telemetry."""
    kind: str
    week: int
    participant_ids: List[str]
    scores: Dict[str, float]
    winner_id: str
    game_key: str = ""


@dataclass
class GameState:
    """
    Full state of one season.

    Only transition and decision functions mutate it. ``pending`` holds
    at most one outstanding human decision.
    """
    players: List[Player] = field(default_factory=list)
    seed: int = 0
    season: int = 1
    week: int = 1
    phase: Phase = Phase.WEEK_START

    hoh_id: Optional[str] = None
    prev_hoh_id: Optional[str] = None
    nominee_ids: List[str] = field(default_factory=list)
    pending_nominee1_id: Optional[str] = None
    pov_winner_id: Optional[str] = None
    pov_saved_id: Optional[str] = None
    votes: Dict[str, str] = field(default_factory=dict)
    vote_results: Dict[str, int] = field(default_factory=dict)
    tied_nominee_ids: List[str] = field(default_factory=list)
    pending: Optional[PendingDecision] = None

    f3_part1_winner_id: Optional[str] = None
    f3_part2_winner_id: Optional[str] = None

    eviction_order: List[str] = field(default_factory=list)
    battle_back: BattleBackState = field(default_factory=BattleBackState)
    competition: Optional[CompetitionSession] = None
    competition_history: List[CompetitionRun] = field(default_factory=list)
    narrative: NarrativeLog = field(default_factory=NarrativeLog)
    season_archives: list = field(default_factory=list)

    # ── Lookups ──────────────────────────────────────────────

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def name_of(self, player_id: Optional[str]) -> str:
        p = self.get_player(player_id)
        return p.name if p else str(player_id)

    def alive_players(self) -> List[Player]:
        return [p for p in self.players if p.is_alive]

    def alive_ids(self) -> List[str]:
        return [p.id for p in self.players if p.is_alive]

    def juror_ids(self) -> List[str]:
        return [p.id for p in self.players if p.status & StatusTag.JURY]

    def is_human(self, player_id: Optional[str]) -> bool:
        p = self.get_player(player_id)
        return bool(p and p.is_user)

    def human_id(self) -> Optional[str]:
        for p in self.players:
            if p.is_user:
                return p.id
        return None

    # ── Pending decision flags ───────────────────────────────

    @property
    def awaiting_nominations(self) -> bool:
        return self.pending is PendingDecision.NOMINATIONS

    @property
    def awaiting_pov_decision(self) -> bool:
        return self.pending is PendingDecision.POV_DECISION

    @property
    def awaiting_pov_save_target(self) -> bool:
        return self.pending is PendingDecision.POV_SAVE_TARGET

    @property
    def awaiting_human_vote(self) -> bool:
        return self.pending is PendingDecision.HUMAN_VOTE

    @property
    def awaiting_tie_break(self) -> bool:
        return self.pending is PendingDecision.TIE_BREAK

    @property
    def awaiting_final3_eviction(self) -> bool:
        return self.pending is PendingDecision.FINAL3_EVICTION

    @property
    def replacement_needed(self) -> bool:
        return self.pending is PendingDecision.REPLACEMENT_NOMINEE

    # ── Mutation helpers ─────────────────────────────────────

    def set_phase(self, new_phase: Phase) -> None:
        logger.info(
            f"Phase: {self.phase.value} → {new_phase.value}",
            extra=log_context(self.week, self.phase.value),
        )
        self.phase = new_phase

    def block(self, decision: PendingDecision) -> None:
        if self.pending is not None and self.pending is not decision:
            logger.warning(
                f"Replacing pending decision {self.pending.value} with {decision.value}"
            )
        self.pending = decision

    def clear_block(self) -> None:
        self.pending = None

    def push(self, text: str, type: str = "game") -> NarrativeEvent:
        return self.narrative.push(text, type, week=self.week, phase=self.phase.value)

    def clear_week_fields(self) -> None:
        """Reset per-week fields and strip HOH/POV/nominee tags."""
        self.hoh_id = None
        self.nominee_ids = []
        self.pending_nominee1_id = None
        self.pov_winner_id = None
        self.pov_saved_id = None
        self.votes = {}
        self.vote_results = {}
        self.tied_nominee_ids = []
        self.pending = None
        for p in self.players:
            p.remove_tag(WEEK_TAGS)
