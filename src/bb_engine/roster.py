# Area: Shared
"""
bb_engine.roster — Houseguest roster loading
============================================

Builds the initial ``Player`` list from a JSON file, a list of dicts,
or the built-in twelve-player cast.

Each entry needs ``id`` and ``name``; ``avatar`` and ``is_user``
(or ``isUser``) are optional. At most one player may be human.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from ._core.state import Player

DEFAULT_CAST = [
    ("p1", "Alex"), ("p2", "Blake"), ("p3", "Casey"), ("p4", "Dana"),
    ("p5", "Ellis"), ("p6", "Frankie"), ("p7", "Grace"), ("p8", "Harper"),
    ("p9", "Indigo"), ("p10", "Jordan"), ("p11", "Kai"), ("p12", "Logan"),
]


def default_roster(human_id: Optional[str] = "p1", size: int = 12) -> List[Player]:
    """The built-in cast, optionally trimmed to ``size`` players."""
    return [
        Player(id=pid, name=name, is_user=(pid == human_id))
        for pid, name in DEFAULT_CAST[:size]
    ]


class RosterPlayer(BaseModel):
    """One validated roster entry. ``isUser`` is accepted as an alias."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    avatar: str = ""
    is_user: bool = Field(default=False, alias="isUser")


def players_from_dicts(entries: Iterable[Any], source: Optional[str] = None) -> List[Player]:
    """Validate roster entries, collecting every problem before raising."""
    players: List[Player] = []
    errors: List[str] = []
    seen = set()
    for idx, entry in enumerate(entries):
        try:
            parsed = RosterPlayer.model_validate(entry)
        except ValidationError as e:
            errors.extend(
                f"entry {idx}: {'.'.join(str(p) for p in err['loc']) or 'entry'}: {err['msg']}"
                for err in e.errors()
            )
            continue
        if parsed.id in seen:
            errors.append(f"entry {idx}: duplicate id {parsed.id!r}")
            continue
        seen.add(parsed.id)
        players.append(Player(
            id=parsed.id,
            name=parsed.name,
            avatar=parsed.avatar,
            is_user=parsed.is_user,
        ))
    if sum(1 for p in players if p.is_user) > 1:
        errors.append("at most one player may be human")
    if len(players) < 2 and not errors:
        errors.append("a season needs at least two players")
    if errors:
        raise ConfigError(source or "roster", errors)
    return players


def load_roster(path: str) -> List[Player]:
    with open(Path(path), encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, Mapping):
        data = data.get("players", [])
    return players_from_dicts(data, source=path)
