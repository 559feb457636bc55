# Area: Core
"""
bb_engine._core.context — Transition context
============================================

Bundles what a transition or decision function needs: the state it
mutates, the configuration and the generator built for this step.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..config import GameConfig
from .rng import DeterministicRNG, next_seed
from .state import GameState


@dataclass
class PhaseContext:
    """Everything a transition function needs."""
    state: GameState
    config: GameConfig
    rng: DeterministicRNG


def draw_context(state: GameState, config: GameConfig) -> PhaseContext:
    """Advance the stored seed once and build a generator from the new value."""
    state.seed = next_seed(state.seed)
    return PhaseContext(state=state, config=config, rng=DeterministicRNG(state.seed))
