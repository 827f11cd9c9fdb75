"""Player pool utilities (source merging, ranking, export)."""

from .export import export_players_to_csv
from .filtering import (
    RELEVANCE_PRESETS,
    DataQuality,
    RankingCriteria,
    get_criteria,
    rank_and_filter,
    rank_players,
    summarize_quality,
)
from .sources import (
    DEFAULT_SOURCES,
    PlayerPool,
    PlayerSource,
    SourceReport,
    collect_player_pool,
    merge_player_entries,
    pool_options,
)

__all__ = [
    "DEFAULT_SOURCES",
    "RELEVANCE_PRESETS",
    "DataQuality",
    "PlayerPool",
    "PlayerSource",
    "RankingCriteria",
    "SourceReport",
    "collect_player_pool",
    "export_players_to_csv",
    "get_criteria",
    "merge_player_entries",
    "pool_options",
    "rank_and_filter",
    "rank_players",
    "summarize_quality",
]
