# Area: Finale
"""
bb_engine._finale.finale — Jury voting sub-machine
==================================================

Runs once per season, after the main engine reaches ``jury``.

Lifecycle:
    start()        -> juror set, reveal order, pre-computed AI ballots
    reveal_next()  -> one juror at a time, pausing on an un-voted human
    cast_vote()    -> a human juror's ballot
    finalize()     -> reveal the rest, tally, decide winner/runner-up
    skip_all()     -> fallback ballots for humans, then finalize

``start`` is guarded by ``has_started`` so repeated calls are harmless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..config import GameConfig
from ..types import FinaleSnapshot, JurorReveal
from .._core.rng import DeterministicRNG, shuffle
from .jury_utils import (
    JURY_LOCKED_LINES,
    ai_juror_vote,
    determine_winner,
    ensure_odd_jurors,
    is_jury_tie,
    jury_return_candidate,
    pick_phrase,
    tally_jury_votes,
)

logger = logging.getLogger("bb_engine.finale")


@dataclass
class FinaleState:
    """Jury vote state. Terminal once ``is_complete`` is True."""
    is_active: bool = False
    has_started: bool = False
    is_complete: bool = False
    finalist_ids: List[str] = field(default_factory=list)
    juror_ids: List[str] = field(default_factory=list)
    human_juror_ids: List[str] = field(default_factory=list)
    reveal_order: List[str] = field(default_factory=list)
    votes: Dict[str, str] = field(default_factory=dict)
    revealed_count: int = 0
    awaiting_human_juror_id: Optional[str] = None
    winner_id: Optional[str] = None
    runner_up_id: Optional[str] = None
    returned_juror_id: Optional[str] = None
    tie_break: Optional[str] = None
    seed: int = 0


class JuryVotingEngine:
    """Drives one ``FinaleState``."""

    def __init__(self, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.state = FinaleState()

    # ── Setup ────────────────────────────────────────────────

    def start(
        self,
        finalist_ids: Sequence[str],
        juror_ids: Sequence[str],
        pre_jury_ids: Sequence[str],
        seed: int,
        human_ids: Sequence[str] = (),
    ) -> bool:
        """Seat the jury and pre-compute AI ballots. No-op once started."""
        st = self.state
        if st.has_started:
            logger.debug("Finale already started; ignoring start()")
            return False

        jurors = list(juror_ids)
        returned = None
        if self.config.enable_jury_return:
            candidate = jury_return_candidate(pre_jury_ids)
            if candidate is not None and candidate not in jurors:
                jurors.append(candidate)
                returned = candidate
        jurors = ensure_odd_jurors(jurors, pre_jury_ids)

        st.is_active = True
        st.has_started = True
        st.is_complete = False
        st.finalist_ids = list(finalist_ids)
        st.juror_ids = jurors
        st.human_juror_ids = [j for j in jurors if j in set(human_ids)]
        st.reveal_order = shuffle(DeterministicRNG(seed), jurors)
        st.votes = {}
        st.revealed_count = 0
        st.awaiting_human_juror_id = None
        st.winner_id = None
        st.runner_up_id = None
        st.returned_juror_id = returned
        st.tie_break = None
        st.seed = seed
        self._fill_ai_votes(seed)

        logger.info(
            f"Finale started: {len(jurors)} jurors, finalists {st.finalist_ids}"
            + (f", {returned} returned to the jury" if returned else "")
        )
        return True

    def _fill_ai_votes(self, seed: int) -> None:
        st = self.state
        for juror in st.reveal_order:
            if juror in st.human_juror_ids:
                continue
            st.votes[juror] = ai_juror_vote(juror, st.finalist_ids, seed)

    def _in_play(self) -> bool:
        return self.state.is_active and not self.state.is_complete

    # ── Reveal / vote ────────────────────────────────────────

    def reveal_next(self) -> Optional[str]:
        """Reveal the next juror's ballot and return their id.

        Returns None when nothing was revealed: finale not running, all
        jurors already revealed, or the next juror is a human who has
        not voted yet (``awaiting_human_juror_id`` is set).
        """
        st = self.state
        if not self._in_play() or st.revealed_count >= len(st.reveal_order):
            return None
        juror = st.reveal_order[st.revealed_count]
        if juror not in st.votes:
            st.awaiting_human_juror_id = juror
            logger.info(f"Waiting for human juror {juror}")
            return None
        st.revealed_count += 1
        return juror

    def cast_vote(self, juror_id: str, finalist_id: str) -> bool:
        st = self.state
        if not self._in_play():
            return False
        if finalist_id not in st.finalist_ids or juror_id not in st.juror_ids:
            logger.debug(f"Rejected jury vote {juror_id} -> {finalist_id}")
            return False
        if juror_id in st.reveal_order[:st.revealed_count]:
            logger.debug(f"Juror {juror_id} was already revealed")
            return False
        st.votes[juror_id] = finalist_id
        if st.awaiting_human_juror_id == juror_id:
            st.awaiting_human_juror_id = None
            st.revealed_count += 1
        return True

    def fallback_vote(self, juror_id: str) -> str:
        """AI ballot used when a human juror does not vote."""
        return ai_juror_vote(juror_id, self.state.finalist_ids, self.state.seed)

    def apply_human_timeout(self) -> bool:
        """Cast the fallback ballot for the juror being waited on."""
        juror = self.state.awaiting_human_juror_id
        if juror is None:
            return False
        logger.info(f"Human juror {juror} timed out; using fallback ballot")
        return self.cast_vote(juror, self.fallback_vote(juror))

    def all_revealed(self) -> bool:
        st = self.state
        return st.revealed_count >= len(st.reveal_order) and st.awaiting_human_juror_id is None

    # ── Completion ───────────────────────────────────────────

    def finalize(self) -> bool:
        """Reveal every juror, tally, and declare winner and runner-up."""
        st = self.state
        if not self._in_play():
            return False
        missing = [j for j in st.reveal_order if j not in st.votes]
        for juror in missing:
            logger.warning(f"Juror {juror} never voted; using fallback ballot")
            st.votes[juror] = self.fallback_vote(juror)

        st.revealed_count = len(st.reveal_order)
        st.awaiting_human_juror_id = None
        tally = tally_jury_votes(st.votes)
        if is_jury_tie(tally, st.finalist_ids):
            st.tie_break = "americas_vote" if self.config.americas_vote_enabled else "seeded_draw"
        st.winner_id = determine_winner(tally, st.finalist_ids, st.seed)
        others = [f for f in st.finalist_ids if f != st.winner_id]
        st.runner_up_id = others[0] if others else None
        st.is_complete = True
        logger.info(f"Finale complete: winner {st.winner_id} ({tally})")
        return True

    def skip_all(self) -> bool:
        """Fill fallback ballots for un-voted humans, then finalize."""
        st = self.state
        if not self._in_play():
            return False
        for juror in st.human_juror_ids:
            if juror not in st.votes:
                st.votes[juror] = self.fallback_vote(juror)
        return self.finalize()

    # ── Debug / lifecycle ────────────────────────────────────

    def force_juror_vote(self, juror_id: str, finalist_id: str) -> bool:
        st = self.state
        if finalist_id not in st.finalist_ids:
            return False
        st.votes[juror_id] = finalist_id
        return True

    def reroll(self, seed: int) -> bool:
        """Re-shuffle the reveal order and AI ballots with a new seed."""
        st = self.state
        if not st.has_started or st.is_complete:
            return False
        st.seed = seed
        st.reveal_order = shuffle(DeterministicRNG(seed), st.juror_ids)
        self._fill_ai_votes(seed)
        st.revealed_count = 0
        st.awaiting_human_juror_id = None
        st.winner_id = None
        st.runner_up_id = None
        return True

    def dismiss(self) -> None:
        self.state.is_active = False

    def reset(self) -> None:
        self.state = FinaleState()

    # ── Views ────────────────────────────────────────────────

    def revealed_jurors(self) -> List[JurorReveal]:
        st = self.state
        return [
            {
                "juror_id": juror,
                "finalist_id": st.votes.get(juror, ""),
                "line": pick_phrase(JURY_LOCKED_LINES, st.seed, idx),
            }
            for idx, juror in enumerate(st.reveal_order[:st.revealed_count])
        ]

    def revealed_tally(self) -> Dict[str, int]:
        st = self.state
        counts = {f: 0 for f in st.finalist_ids}
        for juror in st.reveal_order[:st.revealed_count]:
            target = st.votes.get(juror)
            if target in counts:
                counts[target] += 1
        return counts

    def snapshot(self) -> FinaleSnapshot:
        st = self.state
        return {
            "is_active": st.is_active,
            "has_started": st.has_started,
            "is_complete": st.is_complete,
            "finalist_ids": list(st.finalist_ids),
            "juror_ids": list(st.juror_ids),
            "reveal_order": list(st.reveal_order),
            "revealed": self.revealed_jurors(),
            "revealed_count": st.revealed_count,
            "awaiting_human_juror_id": st.awaiting_human_juror_id,
            "tally": self.revealed_tally(),
            "winner_id": st.winner_id,
            "runner_up_id": st.runner_up_id,
            "returned_juror_id": st.returned_juror_id,
            "tie_break": st.tie_break,
        }
