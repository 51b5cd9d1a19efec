"""Player parsing and winner-identifier helpers.

Players arrive either as bare names (legacy data) or as ``{name, mobile}``
objects. Both are parsed into the tagged union :data:`Player` at the
boundary; everything past that point works with :class:`NamedPlayer`.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.errors import ValidationError

MIN_PLAYERS = 3
MAX_PLAYERS = 6
MOBILE_PATTERN = re.compile(r"^[0-9]{10,15}$")


@dataclass(frozen=True)
class LegacyName:
    name: str


@dataclass(frozen=True)
class NamedPlayer:
    name: str
    mobile: str

    @property
    def identifier(self) -> str:
        """Composite ``name_mobile`` id used to tell same-named players apart."""

        return f"{self.name}_{self.mobile}" if self.mobile else self.name

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "mobile": self.mobile}


Player = Union[LegacyName, NamedPlayer]


def parse_player(raw: Any, position: int) -> Player:
    """Parse one raw player; ``position`` is 1-based and used in messages."""

    if isinstance(raw, str):
        if not raw.strip():
            raise ValidationError(f"Player {position} name is required")
        return LegacyName(raw.strip())

    if isinstance(raw, dict):
        name = raw.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError(f"Player {position} name is required")
        mobile = raw.get("mobile")
        if not isinstance(mobile, str) or not mobile.strip():
            raise ValidationError(f"Player {position} mobile number is required")
        if not MOBILE_PATTERN.match(mobile.strip()):
            raise ValidationError(f"Player {position} mobile number must be 10-15 digits")
        return NamedPlayer(name.strip(), mobile.strip())

    raise ValidationError(f"Player {position} must be an object with name and mobile")


def normalize_player(player: Player) -> NamedPlayer:
    if isinstance(player, NamedPlayer):
        return player
    return NamedPlayer(player.name, "")


def validate_new_players(raw_players: Any) -> List[NamedPlayer]:
    """Validate the roster for a new game and return it in structured form.

    New games need a mobile number for every player, so bare legacy names are
    rejected here even though :func:`parse_player` understands them.
    """

    if not isinstance(raw_players, list):
        raise ValidationError("Players must be an array")
    if not MIN_PLAYERS <= len(raw_players) <= MAX_PLAYERS:
        raise ValidationError(f"Players must be between {MIN_PLAYERS} and {MAX_PLAYERS}")

    players: List[NamedPlayer] = []
    for position, raw in enumerate(raw_players, start=1):
        player = parse_player(raw, position)
        if isinstance(player, LegacyName):
            raise ValidationError(f"Player {position} mobile number is required")
        players.append(player)
    return players


def players_to_json(players: List[NamedPlayer]) -> str:
    return json.dumps([player.to_dict() for player in players])


def players_from_json(raw: Optional[str]) -> List[NamedPlayer]:
    """Read a stored roster, upgrading legacy bare names on the way out."""

    players: List[NamedPlayer] = []
    for item in json.loads(raw or "[]"):
        if isinstance(item, str):
            players.append(normalize_player(LegacyName(item)))
        elif isinstance(item, dict):
            players.append(NamedPlayer(str(item.get("name") or ""), str(item.get("mobile") or "")))
    return players


def parse_winner_identifier(identifier: str) -> Tuple[str, Optional[str]]:
    """Split ``"name_mobile"`` (or a bare legacy name) into name and mobile.

    Only the first underscore separates the two, so names that themselves
    contain underscores are not recoverable.
    """

    name, _, mobile = identifier.partition("_")
    return name, mobile or None


__all__ = [
    "LegacyName",
    "MAX_PLAYERS",
    "MIN_PLAYERS",
    "NamedPlayer",
    "Player",
    "normalize_player",
    "parse_player",
    "parse_winner_identifier",
    "players_from_json",
    "players_to_json",
    "validate_new_players",
]
