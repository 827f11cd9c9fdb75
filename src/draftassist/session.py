"""Connected-league state shared by the request handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from draftassist.errors import NotConnectedError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    """ESPN session cookies for private leagues; forwarded verbatim."""

    espn_s2: str
    swid: str

    @classmethod
    def from_tokens(cls, espn_s2: str | None, swid: str | None) -> Optional["Credential"]:
        if not espn_s2 or not swid:
            return None
        return cls(espn_s2=espn_s2, swid=swid)

    def cookie_header(self) -> str:
        return f"espn_s2={self.espn_s2}; SWID={self.swid}"

    def __repr__(self) -> str:
        return "Credential(espn_s2='***', swid='***')"


@dataclass(frozen=True)
class LeagueContext:
    league_id: int
    season_id: int
    credential: Credential | None = None

    @property
    def is_private(self) -> bool:
        return self.credential is not None


class LeagueSession:
    """Holds the current league; replaced wholesale on every connect."""

    def __init__(self) -> None:
        self._context: LeagueContext | None = None

    @property
    def context(self) -> LeagueContext | None:
        return self._context

    @property
    def connected(self) -> bool:
        return self._context is not None

    @property
    def state(self) -> Literal["connected", "disconnected"]:
        return "connected" if self._context is not None else "disconnected"

    def connect(self, context: LeagueContext) -> LeagueContext:
        previous = self._context
        self._context = context
        if previous is not None and previous.league_id != context.league_id:
            logger.info("Switched league %s -> %s", previous.league_id, context.league_id)
        else:
            logger.info(
                "Connected to league %s season %s (%s)",
                context.league_id,
                context.season_id,
                "private" if context.is_private else "public",
            )
        return context

    def require(self) -> LeagueContext:
        if self._context is None:
            raise NotConnectedError()
        return self._context


__all__ = ["Credential", "LeagueContext", "LeagueSession"]
