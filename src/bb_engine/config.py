# Area: Shared
"""
bb_engine.config — Game configuration
=====================================

Validated settings consumed by the engine. Values come from, in
increasing priority: model defaults, an optional JSON file, and the
environment (a local ``.env`` file is loaded first).

Environment overrides:
    BB_JURY_SIZE            -> jury_size
    BB_BATTLE_BACK_CHANCE   -> battle_back_chance
    BB_ENABLE_TWISTS        -> enable_twists
    BB_ENABLE_JURY_RETURN   -> enable_jury_return
    BB_AMERICAS_VOTE        -> americas_vote_enabled
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError


ENV_MAPPINGS = {
    "BB_JURY_SIZE": "jury_size",
    "BB_BATTLE_BACK_CHANCE": "battle_back_chance",
    "BB_ENABLE_TWISTS": "enable_twists",
    "BB_ENABLE_JURY_RETURN": "enable_jury_return",
    "BB_AMERICAS_VOTE": "americas_vote_enabled",
}


class GameConfig(BaseModel):
    """Named engine options. camelCase keys are accepted as aliases."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    jury_size: int = Field(default=7, ge=1, alias="jurySize")
    battle_back_chance: int = Field(default=30, ge=0, le=100, alias="battleBackChance")
    enable_twists: bool = Field(default=False, alias="enableTwists")
    enable_jury_return: bool = Field(default=False, alias="enableJuryReturn")
    americas_vote_enabled: bool = Field(default=False, alias="americasVoteEnabled")
    narrative_capacity: int = Field(default=50, ge=1, alias="narrativeCapacity")


def validate_config(data: Optional[Dict[str, Any]], source: Optional[str] = None) -> GameConfig:
    """Build a GameConfig, converting pydantic errors into ConfigError."""
    try:
        return GameConfig.model_validate(data or {})
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigError(source, errors) from e


def load_config(config_path: Optional[str] = None, use_env: bool = True) -> GameConfig:
    """Load config from a JSON file and the environment."""
    data: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            with open(path, encoding="utf-8") as f:
                data = json.load(f)

    # Normalize camelCase keys so environment overrides win over the file
    aliases = {f.alias: name for name, f in GameConfig.model_fields.items() if f.alias}
    data = {aliases.get(k, k): v for k, v in data.items()}

    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
        for env_key, config_key in ENV_MAPPINGS.items():
            if env_key in os.environ:
                data[config_key] = os.environ[env_key]

    return validate_config(data, source=config_path)
