"""Thin async transport for the ESPN fantasy football read API."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Mapping

import httpx

from draftassist.errors import UpstreamError
from draftassist.session import LeagueContext

if TYPE_CHECKING:
    from draftassist.config_loader import ProxySettings


logger = logging.getLogger(__name__)

ESPN_API_ROOT = "https://lm-api-reads.fantasy.espn.com/apis/v3/games/ffl"
# ESPN rejects requests carrying default client user agents.
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_TIMEOUT = 15.0
FILTER_HEADER = "X-Fantasy-Filter"


def league_path(season_id: int, league_id: int) -> str:
    return f"/seasons/{season_id}/segments/0/leagues/{league_id}"


def players_path(season_id: int) -> str:
    return f"/seasons/{season_id}/players"


def player_filter_header(limit: int) -> dict[str, str]:
    """Filter header asking for ``limit`` players, most-owned first."""

    payload = {
        "players": {
            "limit": limit,
            "sortPercOwned": {"sortPriority": 1, "sortAsc": False},
        }
    }
    return {FILTER_HEADER: json.dumps(payload)}


def _response_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class UpstreamClient:
    """Issues GET requests against the ESPN API root; no retries."""

    def __init__(
        self,
        api_root: str = ESPN_API_ROOT,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_root = api_root.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: "ProxySettings",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "UpstreamClient":
        return cls(
            settings.api_root,
            user_agent=settings.user_agent,
            timeout=settings.timeout,
            transport=transport,
        )

    def build_headers(
        self,
        context: LeagueContext | None,
        extra_headers: Mapping[str, str] | None = None,
        *,
        authenticated: bool = True,
    ) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if extra_headers:
            headers.update(extra_headers)
        if authenticated and context is not None and context.credential is not None:
            headers["Cookie"] = context.credential.cookie_header()
        return headers

    async def fetch(
        self,
        resource_path: str,
        context: LeagueContext | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        authenticated: bool = True,
        timeout: float | None = None,
    ) -> Any:
        """GET ``resource_path`` and return the decoded JSON body.

        Raises :class:`UpstreamError` on timeouts, transport failures,
        non-2xx responses and bodies that are not JSON.
        """

        url = f"{self.api_root}{resource_path}"
        request_headers = self.build_headers(context, headers, authenticated=authenticated)
        request_timeout = timeout if timeout is not None else self.timeout
        logger.info("Requesting %s params=%s", url, dict(params or {}))

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=request_timeout) as client:
                response = await client.get(url, params=params, headers=request_headers)
        except httpx.TimeoutException as exc:
            raise UpstreamError(
                f"ESPN request timed out after {request_timeout:g}s: {resource_path}",
                timed_out=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamError(f"ESPN request failed: {exc}") from exc

        if not response.is_success:
            body = _response_body(response)
            logger.error(
                "ESPN API error %s %s for %s", response.status_code, response.reason_phrase, url
            )
            if body is not None:
                logger.error("Error details: %s", body)
            raise UpstreamError(
                f"ESPN responded {response.status_code} for {resource_path}",
                status=response.status_code,
                body=body,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"ESPN returned a non-JSON body for {resource_path}",
                status=response.status_code,
                body=response.text,
            ) from exc
