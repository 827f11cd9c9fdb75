"""Lookup tables for ESPN team and position codes."""

from .reference import (
    FANTASY_POSITION_CODES,
    POSITION_NAMES,
    TEAM_ABBREVIATIONS,
    UNKNOWN_POSITION,
    UNKNOWN_TEAM,
    is_fantasy_position,
    position_name,
    slot_names,
    team_abbreviation,
)

__all__ = [
    "FANTASY_POSITION_CODES",
    "POSITION_NAMES",
    "TEAM_ABBREVIATIONS",
    "UNKNOWN_POSITION",
    "UNKNOWN_TEAM",
    "is_fantasy_position",
    "position_name",
    "slot_names",
    "team_abbreviation",
]
