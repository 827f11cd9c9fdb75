"""Exception types raised across the proxy."""

from __future__ import annotations

from typing import Any


class DraftAssistError(Exception):
    """Base class for errors that are reported back to API callers."""

    category = "error"
    status_code = 500
    summary: str | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamError(DraftAssistError):
    """Non-2xx response, timeout or transport failure from the ESPN API."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        body: Any = None,
        timed_out: bool = False,
    ):
        super().__init__(message)
        self.status = status
        self.body = body
        self.timed_out = timed_out

    @property
    def category(self) -> str:  # type: ignore[override]
        if self.timed_out:
            return "timeout"
        if self.status is None:
            return "transport"
        if self.status == 404:
            return "not_found"
        if self.status == 401:
            return "unauthorized"
        if 500 <= self.status < 600:
            return "server_error"
        return "other"

    def connect_message(self, league_id: int | str) -> str:
        """Human readable explanation for a failed league connect."""

        prefix = f"Failed to connect to ESPN League {league_id}."
        category = self.category
        if category == "not_found":
            return f"{prefix} League not found. Check your League ID."
        if category == "unauthorized":
            return f"{prefix} Access denied. For private leagues, verify your ESPN_S2 and SWID cookies."
        if category == "server_error":
            return f"{prefix} ESPN server error. Try again in a few minutes."
        return f"{prefix} Check your League ID and credentials."


class NotConnectedError(DraftAssistError):
    category = "not_connected"
    status_code = 400

    def __init__(self, message: str = "Must connect to league first"):
        super().__init__(message)


class NoDataError(DraftAssistError):
    """Every player source was exhausted without a usable record."""

    category = "no_data"
    summary = "Failed to fetch players from ESPN API"


class MalformedRecordError(DraftAssistError):
    """Raw upstream record without a usable player name or identity."""

    category = "malformed_record"
    status_code = 422


__all__ = [
    "DraftAssistError",
    "UpstreamError",
    "NotConnectedError",
    "NoDataError",
    "MalformedRecordError",
]
