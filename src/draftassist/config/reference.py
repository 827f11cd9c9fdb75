"""Static ESPN code tables for pro teams and roster positions."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Mapping


UNKNOWN_TEAM = "FA"
UNKNOWN_POSITION = "Unknown"

_TEAM_ABBREVIATIONS: Dict[int, str] = {
    1: "ATL",
    2: "BUF",
    3: "CHI",
    4: "CIN",
    5: "CLE",
    6: "DAL",
    7: "DEN",
    8: "DET",
    9: "GB",
    10: "TEN",
    11: "IND",
    12: "KC",
    13: "LV",
    14: "LAR",
    15: "MIA",
    16: "MIN",
    17: "NE",
    18: "NO",
    19: "NYG",
    20: "NYJ",
    21: "PHI",
    22: "ARI",
    23: "PIT",
    24: "LAC",
    25: "SF",
    26: "SEA",
    27: "TB",
    28: "WAS",
    29: "CAR",
    30: "JAX",
    33: "BAL",
    34: "HOU",
}

_POSITION_NAMES: Dict[int, str] = {
    1: "QB",
    2: "RB",
    3: "WR",
    4: "TE",
    5: "K",
    16: "D/ST",
    # Legacy codes still seen on older payloads.
    0: "QB",
    6: "TE",
    17: "K",
}

FANTASY_POSITION_CODES: FrozenSet[int] = frozenset({1, 2, 3, 4, 5, 16})


def team_abbreviation(code: int | None) -> str:
    """Three-letter abbreviation for an ESPN pro team id, ``FA`` when unknown."""

    if code is None:
        return UNKNOWN_TEAM
    return _TEAM_ABBREVIATIONS.get(code, UNKNOWN_TEAM)


def position_name(code: int | None) -> str:
    """Short roster position name for an ESPN position id, ``Unknown`` when unknown."""

    if code is None:
        return UNKNOWN_POSITION
    return _POSITION_NAMES.get(code, UNKNOWN_POSITION)


def is_fantasy_position(code: int | None) -> bool:
    return code in FANTASY_POSITION_CODES


def slot_names(codes: Iterable[int]) -> list[str]:
    """Map eligible slot codes to names, dropping the ones without a name."""

    names = (position_name(code) for code in codes)
    return [name for name in names if name != UNKNOWN_POSITION]


# Read-only views for callers that want the raw tables.
TEAM_ABBREVIATIONS: Mapping[int, str] = dict(_TEAM_ABBREVIATIONS)
POSITION_NAMES: Mapping[int, str] = dict(_POSITION_NAMES)
