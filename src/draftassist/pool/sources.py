"""Named ESPN player sources and the merge that builds one player pool."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, List, Literal, Mapping, Sequence

from draftassist.errors import NoDataError, UpstreamError
from draftassist.ingest.players import (
    PlayerEntry,
    decode_entries,
    normalize_players,
    projected_points,
)
from draftassist.models import CanonicalPlayer, DataSource
from draftassist.pool.filtering import RankingCriteria, rank_and_filter
from draftassist.session import LeagueContext
from draftassist.upstream import UpstreamClient, league_path, player_filter_header, players_path

if TYPE_CHECKING:
    from draftassist.config_loader import ProxySettings


logger = logging.getLogger(__name__)

DEFAULT_PLAYER_LIMIT = 2000
DEFAULT_SUFFICIENT_COUNT = 500
DEFAULT_PLAYER_TIMEOUT = 20.0


@dataclass(frozen=True)
class PlayerSource:
    """One way of asking ESPN for the player pool."""

    name: str
    origin: DataSource
    scope: Literal["league", "public"]
    views: tuple[str, ...]
    scoring_period_id: int | None = None
    authenticated: bool = True
    container: str | None = "players"

    def path(self, context: LeagueContext, season_id: int) -> str:
        if self.scope == "league":
            return league_path(season_id, context.league_id)
        return players_path(season_id)

    def params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"view": ",".join(self.views)}
        if self.scoring_period_id is not None:
            params["scoringPeriodId"] = self.scoring_period_id
        return params

    def extract(self, payload: Any) -> list[Any]:
        """Pull the raw record list out of a response body."""

        if self.container is None:
            return list(payload) if isinstance(payload, list) else []
        if isinstance(payload, Mapping):
            records = payload.get(self.container)
            return list(records) if isinstance(records, list) else []
        return []


LEAGUE_PLAYER_INFO = PlayerSource(
    name="league_player_info",
    origin="primary",
    scope="league",
    views=("kona_player_info",),
    scoring_period_id=0,
)

PUBLIC_PLAYER_LIST = PlayerSource(
    name="public_player_list",
    origin="fallback",
    scope="public",
    views=("players_wl",),
    authenticated=False,
    container=None,
)

DEFAULT_SOURCES: tuple[PlayerSource, ...] = (LEAGUE_PLAYER_INFO, PUBLIC_PLAYER_LIST)


@dataclass(frozen=True)
class SourceReport:
    name: str
    origin: DataSource
    status: Literal["ok", "failed", "skipped"]
    player_count: int = 0
    added: int = 0
    players_with_adp: int = 0
    players_with_projections: int = 0
    error: str | None = None

    @property
    def quality_score(self) -> tuple[int, int, int]:
        return (self.players_with_adp, self.players_with_projections, self.player_count)


@dataclass(frozen=True)
class PlayerPool:
    players: list[CanonicalPlayer]
    sources: list[SourceReport] = field(default_factory=list)
    merged_entries: int = 0


def merge_player_entries(
    primary: Sequence[PlayerEntry],
    secondary: Sequence[PlayerEntry],
    *,
    secondary_origin: DataSource = "fallback",
) -> list[PlayerEntry]:
    """Merge two entry lists by player id.

    Primary entries are kept as-is (first occurrence wins); secondary
    entries are appended only when their id is new, tagged with
    ``secondary_origin``. Entries without an id are dropped.
    """

    merged: list[PlayerEntry] = []
    seen: set[int] = set()
    for entry in primary:
        player_id = entry.player_id
        if player_id is None or player_id in seen:
            continue
        seen.add(player_id)
        merged.append(entry)
    for entry in secondary:
        player_id = entry.player_id
        if player_id is None or player_id in seen:
            continue
        seen.add(player_id)
        merged.append(entry.model_copy(update={"data_source": secondary_origin}))
    return merged


def _entry_quality(entries: Iterable[PlayerEntry], season_id: int) -> tuple[int, int]:
    with_adp = 0
    with_projections = 0
    for entry in entries:
        player = entry.player
        ownership = player.ownership
        if player.average_draft_position or (ownership and ownership.average_draft_position):
            with_adp += 1
        if projected_points(entry, season_id) > 0:
            with_projections += 1
    return with_adp, with_projections


async def fetch_source_entries(
    client: UpstreamClient,
    source: PlayerSource,
    context: LeagueContext,
    season_id: int,
    *,
    limit: int = DEFAULT_PLAYER_LIMIT,
    timeout: float | None = DEFAULT_PLAYER_TIMEOUT,
) -> list[PlayerEntry]:
    payload = await client.fetch(
        source.path(context, season_id),
        context,
        params=source.params(),
        headers=player_filter_header(limit),
        authenticated=source.authenticated,
        timeout=timeout,
    )
    entries = decode_entries(source.extract(payload))
    return [entry.model_copy(update={"data_source": source.origin}) for entry in entries]


async def collect_player_pool(
    client: UpstreamClient,
    context: LeagueContext,
    season_id: int,
    *,
    criteria: RankingCriteria | None = None,
    sources: Sequence[PlayerSource] = DEFAULT_SOURCES,
    limit: int = DEFAULT_PLAYER_LIMIT,
    sufficient_count: int = DEFAULT_SUFFICIENT_COUNT,
    timeout: float | None = DEFAULT_PLAYER_TIMEOUT,
) -> PlayerPool:
    """Walk ``sources`` in order until enough players are merged.

    A failing source is logged and reported but never aborts the walk;
    :class:`NoDataError` is raised only when no source produced a record.
    """

    merged: List[PlayerEntry] = []
    reports: List[SourceReport] = []

    for index, source in enumerate(sources):
        if index > 0 and len(merged) >= sufficient_count:
            reports.append(SourceReport(name=source.name, origin=source.origin, status="skipped"))
            continue
        if index > 0:
            logger.info(
                "Only %d players after %s; trying %s",
                len(merged),
                sources[index - 1].name,
                source.name,
            )
        try:
            entries = await fetch_source_entries(
                client, source, context, season_id, limit=limit, timeout=timeout
            )
        except UpstreamError as exc:
            logger.warning("Player source %s failed: %s", source.name, exc.message)
            reports.append(
                SourceReport(name=source.name, origin=source.origin, status="failed", error=exc.message)
            )
            continue

        before = len(merged)
        merged = merge_player_entries(merged, entries, secondary_origin=source.origin)
        with_adp, with_projections = _entry_quality(entries, season_id)
        reports.append(
            SourceReport(
                name=source.name,
                origin=source.origin,
                status="ok",
                player_count=len(entries),
                added=len(merged) - before,
                players_with_adp=with_adp,
                players_with_projections=with_projections,
            )
        )
        logger.info(
            "Player source %s returned %d players (%d new)",
            source.name,
            len(entries),
            len(merged) - before,
        )

    if not merged:
        failures = "; ".join(f"{r.name}: {r.error or 'no players'}" for r in reports)
        raise NoDataError(f"No players data retrieved from any source ({failures})")

    players = normalize_players(merged, season_id)
    ranked = rank_and_filter(players, criteria)
    logger.info("Processed %d fantasy players from %d merged entries", len(ranked), len(merged))
    return PlayerPool(players=ranked, sources=reports, merged_entries=len(merged))


def pool_options(settings: "ProxySettings") -> dict[str, Any]:
    """Keyword arguments for :func:`collect_player_pool` from settings."""

    return {
        "criteria": settings.ranking_criteria(),
        "limit": settings.player_limit,
        "sufficient_count": settings.sufficient_player_count,
        "timeout": settings.player_timeout,
    }


__all__ = [
    "DEFAULT_SOURCES",
    "LEAGUE_PLAYER_INFO",
    "PUBLIC_PLAYER_LIST",
    "PlayerPool",
    "PlayerSource",
    "SourceReport",
    "collect_player_pool",
    "fetch_source_entries",
    "merge_player_entries",
    "pool_options",
]
