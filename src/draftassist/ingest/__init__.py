"""Input adapters that decode raw ESPN payloads."""

from .league import flatten_draft, flatten_teams, summarize_league
from .players import (
    PlayerEntry,
    RawPlayer,
    decode_entries,
    decode_entry,
    normalize_entry,
    normalize_player,
    normalize_players,
    position_breakdown,
)

__all__ = [
    "PlayerEntry",
    "RawPlayer",
    "decode_entries",
    "decode_entry",
    "flatten_draft",
    "flatten_teams",
    "normalize_entry",
    "normalize_player",
    "normalize_players",
    "position_breakdown",
    "summarize_league",
]
