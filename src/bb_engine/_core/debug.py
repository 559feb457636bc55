# Area: Core
"""
bb_engine._core.debug — Operator overrides
==========================================

Escape hatches for tooling and tests. None of these are part of normal
play and none of them touch the seed.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .state import GameState, Phase, StatusTag

logger = logging.getLogger("bb_engine.debug")


def force_clear_blocks(state: GameState) -> None:
    """Drop any pending decision and close an active Battle Back."""
    if state.pending is not None:
        logger.warning(f"Force-clearing pending decision {state.pending.value}")
    state.clear_block()
    state.tied_nominee_ids = []
    state.pending_nominee1_id = None
    if state.battle_back.active:
        state.battle_back.active = False
        state.battle_back.used = True


def force_phase(state: GameState, phase: Phase) -> None:
    logger.warning(f"Forcing phase {state.phase.value} → {phase.value}")
    state.phase = phase


def force_nominees(state: GameState, nominee_ids: Sequence[str]) -> None:
    for p in state.players:
        p.remove_tag(StatusTag.NOMINATED)
    state.nominee_ids = list(nominee_ids)
    for nid in nominee_ids:
        state.get_player(nid).add_tag(StatusTag.NOMINATED)


def force_pov_winner(state: GameState, player_id: str) -> None:
    for p in state.players:
        p.remove_tag(StatusTag.POV)
    state.pov_winner_id = player_id
    state.get_player(player_id).add_tag(StatusTag.POV)


def force_hoh(state: GameState, player_id: str) -> None:
    for p in state.players:
        p.remove_tag(StatusTag.HOH)
    state.hoh_id = player_id
    state.get_player(player_id).add_tag(StatusTag.HOH)
