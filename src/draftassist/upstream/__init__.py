"""HTTP access to the ESPN fantasy API."""

from .client import (
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ESPN_API_ROOT,
    FILTER_HEADER,
    UpstreamClient,
    league_path,
    player_filter_header,
    players_path,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "DEFAULT_USER_AGENT",
    "ESPN_API_ROOT",
    "FILTER_HEADER",
    "UpstreamClient",
    "league_path",
    "player_filter_header",
    "players_path",
]
