"""Domain models."""

from .base import CamelModel
from .league import (
    ConnectedTeam,
    DraftInfo,
    DraftPick,
    LeagueSummary,
    RosterEntry,
    TeamRecord,
    TeamSummary,
)
from .player import (
    REAL_ADP_CEILING,
    TIER_THRESHOLDS,
    UNKNOWN_ADP,
    CanonicalPlayer,
    DataSource,
    Tier,
    tier_for_adp,
)

__all__ = [
    "REAL_ADP_CEILING",
    "TIER_THRESHOLDS",
    "UNKNOWN_ADP",
    "CamelModel",
    "CanonicalPlayer",
    "ConnectedTeam",
    "DataSource",
    "DraftInfo",
    "DraftPick",
    "LeagueSummary",
    "RosterEntry",
    "TeamRecord",
    "TeamSummary",
    "Tier",
    "tier_for_adp",
]
