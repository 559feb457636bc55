"""
bb_engine — Deterministic elimination-competition game engine
=============================================================

Drives a multi-week Big Brother style season: Head of Household,
nominations, Power of Veto, live eviction, the Final 4 and Final 3
endgame, the optional Battle Back twist and the jury finale. Every
outcome is reproducible from the seed.

Quick Start:
    from bb_engine import AutoPilot, GameEngine

    engine = GameEngine(seed=7)
    AutoPilot(engine).play_season()

Driving it yourself:
    engine = GameEngine(seed=7)
    while engine.advance():
        ...
    if engine.state.awaiting_nominations:
        engine.submit_nominees(["p3", "p4"])
"""

from .autopilot import AutoPilot
from .config import GameConfig, load_config, validate_config
from .engine import GameEngine
from .errors import BBEngineError, ConfigError, EmptyParticipantsError
from .roster import default_roster, load_roster, players_from_dicts
from ._core.competition import resolve_winner, simulate_ai_scores
from ._core.rng import DeterministicRNG, next_seed, pick_n, pick_one
from ._core.state import GameState, PendingDecision, Phase, Player, StatusTag
from ._core.tally import TallyResult, tally_votes
from ._finale.finale import FinaleState, JuryVotingEngine
from ._finale.season_archive import PlayerSeasonSummary, SeasonArchive
from ._shared.logging_config import setup_logging
from .types import (
    FinaleSnapshot,
    GameSnapshot,
    JurorReveal,
    PlayerSnapshot,
    RosterEntry,
)

__all__ = [
    # Engine
    "GameEngine",
    "AutoPilot",
    "JuryVotingEngine",
    # State
    "GameState",
    "FinaleState",
    "Player",
    "Phase",
    "PendingDecision",
    "StatusTag",
    # Helpers
    "DeterministicRNG",
    "next_seed",
    "pick_one",
    "pick_n",
    "resolve_winner",
    "simulate_ai_scores",
    "tally_votes",
    "TallyResult",
    # Config / roster
    "GameConfig",
    "load_config",
    "validate_config",
    "default_roster",
    "load_roster",
    "players_from_dicts",
    "setup_logging",
    # Archives
    "SeasonArchive",
    "PlayerSeasonSummary",
    # Errors
    "BBEngineError",
    "ConfigError",
    "EmptyParticipantsError",
    # Types
    "GameSnapshot",
    "PlayerSnapshot",
    "FinaleSnapshot",
    "JurorReveal",
    "RosterEntry",
]

__version__ = "1.0.0"
