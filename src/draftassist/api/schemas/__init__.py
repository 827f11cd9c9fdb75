"""Pydantic models for API I/O."""

from .league import (
    ConnectErrorResponse,
    ConnectRequest,
    ConnectResponse,
    HealthResponse,
)
from .player import (
    DataQualityResponse,
    DebugResponse,
    ErrorResponse,
    PlayerQualityResponse,
    ProbeEndpointResponse,
    SamplePlayerResponse,
    SourceReportResponse,
)

__all__ = [
    "ConnectErrorResponse",
    "ConnectRequest",
    "ConnectResponse",
    "DataQualityResponse",
    "DebugResponse",
    "ErrorResponse",
    "HealthResponse",
    "PlayerQualityResponse",
    "ProbeEndpointResponse",
    "SamplePlayerResponse",
    "SourceReportResponse",
]
