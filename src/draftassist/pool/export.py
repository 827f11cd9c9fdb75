"""CSV export helpers for ranked player pools."""

from __future__ import annotations

import csv
from io import StringIO
from typing import Sequence

from draftassist.models import CanonicalPlayer


EXPORT_HEADERS: tuple[str, ...] = (
    "rank",
    "id",
    "name",
    "team",
    "position",
    "adp",
    "ownership",
    "percent_started",
    "projected_points",
    "tier",
    "eligible_positions",
    "availability_status",
    "injury_status",
    "has_real_adp",
    "has_real_projections",
    "data_source",
)


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def export_players_to_csv(players: Sequence[CanonicalPlayer]) -> str:
    """Render players, already in draft order, as CSV text."""

    buffer = StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for rank, player in enumerate(players, start=1):
        writer.writerow([
            rank,
            player.id,
            player.name,
            player.team,
            player.position,
            _format_number(player.average_draft_position),
            _format_number(player.ownership),
            _format_number(player.percent_started),
            _format_number(player.projected_points),
            player.tier,
            "/".join(player.eligible_positions),
            player.availability_status,
            player.injury_status,
            int(player.has_real_adp),
            int(player.has_real_projections),
            player.data_source,
        ])
    return buffer.getvalue()


__all__ = [
    "EXPORT_HEADERS",
    "export_players_to_csv",
]
