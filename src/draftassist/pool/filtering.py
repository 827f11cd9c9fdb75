"""Relevance filtering and draft ordering for canonical player pools."""

from __future__ import annotations

from dataclasses import dataclass, replace
from statistics import fmean
from typing import Iterable, Mapping, Sequence

from draftassist.config import is_fantasy_position
from draftassist.models import CanonicalPlayer


MIN_NAME_LENGTH = 2


@dataclass(frozen=True)
class RankingCriteria:
    """Thresholds deciding which players are fantasy relevant.

    A player is kept when any signal holds: ownership above
    ``min_ownership``, an ADP inside ``(0, adp_ceiling)``, a positive
    projection, a rostered status, or (when enabled) the broader signals of
    any ownership at all or an ADP below ``loose_adp_ceiling``.
    """

    min_ownership: float = 1.0
    adp_ceiling: float = 400.0
    loose_adp_ceiling: float | None = 500.0
    count_any_ownership: bool = True
    limit: int | None = None


RELEVANCE_PRESETS: Mapping[str, RankingCriteria] = {
    "default": RankingCriteria(),
    "strict": RankingCriteria(
        min_ownership=5.0,
        adp_ceiling=300.0,
        loose_adp_ceiling=None,
        count_any_ownership=False,
    ),
}


def get_criteria(preset: str, **overrides: float | int | None) -> RankingCriteria:
    """Resolve a named preset, applying any non-``None`` overrides."""

    key = preset.lower()
    if key not in RELEVANCE_PRESETS:
        raise KeyError(f"Unknown relevance preset {preset!r}")
    changes = {name: value for name, value in overrides.items() if value is not None}
    return replace(RELEVANCE_PRESETS[key], **changes)


@dataclass(frozen=True)
class DataQuality:
    total_players: int
    players_with_real_adp: int
    players_with_real_projections: int
    average_adp: float
    average_projections: float


def is_eligible(player: CanonicalPlayer) -> bool:
    if len(player.name) < MIN_NAME_LENGTH:
        return False
    return is_fantasy_position(player.position_code)


def is_relevant(player: CanonicalPlayer, criteria: RankingCriteria) -> bool:
    adp = player.average_draft_position
    if player.ownership > criteria.min_ownership:
        return True
    if 0 < adp < criteria.adp_ceiling:
        return True
    if player.projected_points > 0:
        return True
    if player.is_rostered:
        return True
    if criteria.count_any_ownership and player.ownership > 0:
        return True
    return criteria.loose_adp_ceiling is not None and adp < criteria.loose_adp_ceiling


def _passes_criteria(player: CanonicalPlayer, criteria: RankingCriteria) -> bool:
    return is_eligible(player) and is_relevant(player, criteria)


def _sort_key(player: CanonicalPlayer) -> tuple[int, float, float, float]:
    # Real ADP first (ascending), then ownership and projection descending.
    if player.has_real_adp:
        return (0, player.average_draft_position, -player.ownership, -player.projected_points)
    return (1, 0.0, -player.ownership, -player.projected_points)


def rank_players(players: Iterable[CanonicalPlayer]) -> list[CanonicalPlayer]:
    """Stable draft ordering; equal keys keep their input order."""

    return sorted(players, key=_sort_key)


def rank_and_filter(
    players: Sequence[CanonicalPlayer],
    criteria: RankingCriteria | None = None,
) -> list[CanonicalPlayer]:
    criteria = criteria or RELEVANCE_PRESETS["default"]
    ranked = rank_players(player for player in players if _passes_criteria(player, criteria))
    limit = criteria.limit if criteria.limit is not None and criteria.limit > 0 else None
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def summarize_quality(players: Sequence[CanonicalPlayer]) -> DataQuality:
    with_adp = [player.average_draft_position for player in players if player.has_real_adp]
    with_projections = [player.projected_points for player in players if player.has_real_projections]
    return DataQuality(
        total_players=len(players),
        players_with_real_adp=len(with_adp),
        players_with_real_projections=len(with_projections),
        average_adp=fmean(with_adp) if with_adp else 0.0,
        average_projections=fmean(with_projections) if with_projections else 0.0,
    )


__all__ = [
    "DataQuality",
    "RELEVANCE_PRESETS",
    "RankingCriteria",
    "get_criteria",
    "is_eligible",
    "is_relevant",
    "rank_and_filter",
    "rank_players",
    "summarize_quality",
]
