"""Load proxy settings from the environment or a JSON profile."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from draftassist.pool.filtering import RELEVANCE_PRESETS, RankingCriteria, get_criteria
from draftassist.pool.sources import (
    DEFAULT_PLAYER_LIMIT,
    DEFAULT_PLAYER_TIMEOUT,
    DEFAULT_SUFFICIENT_COUNT,
)
from draftassist.upstream import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ESPN_API_ROOT


logger = logging.getLogger(__name__)

ENV_PREFIX = "DRAFTASSIST_"


def _env_float(
    environ: Mapping[str, str],
    name: str,
    default: Optional[float],
    *,
    clamp_min: float | None = None,
) -> Optional[float]:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s%s: %s; using default %s", ENV_PREFIX, name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(environ: Mapping[str, str], name: str, default: int, *, min_value: int | None = None) -> int:
    raw = environ.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s%s: %s; using default %d", ENV_PREFIX, name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(ENV_PREFIX + name)
    return raw.strip() if raw and raw.strip() else default


@dataclass(frozen=True)
class ProxySettings:
    api_root: str = ESPN_API_ROOT
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT
    player_timeout: float = DEFAULT_PLAYER_TIMEOUT
    player_limit: int = DEFAULT_PLAYER_LIMIT
    sufficient_player_count: int = DEFAULT_SUFFICIENT_COUNT
    relevance_preset: str = "default"
    min_ownership: Optional[float] = None
    adp_ceiling: Optional[float] = None
    loose_adp_ceiling: Optional[float] = None

    def __post_init__(self) -> None:
        if self.relevance_preset.lower() not in RELEVANCE_PRESETS:
            raise ValueError(
                f"relevance_preset must be one of {sorted(RELEVANCE_PRESETS)}, got {self.relevance_preset!r}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ProxySettings":
        env = os.environ if environ is None else environ
        defaults = cls()
        preset = _env_str(env, "RELEVANCE", defaults.relevance_preset)
        if preset.lower() not in RELEVANCE_PRESETS:
            logger.warning("Unknown relevance preset %r; using %r", preset, defaults.relevance_preset)
            preset = defaults.relevance_preset
        return cls(
            api_root=_env_str(env, "API_ROOT", defaults.api_root),
            user_agent=_env_str(env, "USER_AGENT", defaults.user_agent),
            timeout=_env_float(env, "TIMEOUT", defaults.timeout, clamp_min=1.0),
            player_timeout=_env_float(env, "PLAYER_TIMEOUT", defaults.player_timeout, clamp_min=1.0),
            player_limit=_env_int(env, "PLAYER_LIMIT", defaults.player_limit, min_value=1),
            sufficient_player_count=_env_int(
                env, "SUFFICIENT_PLAYERS", defaults.sufficient_player_count, min_value=0
            ),
            relevance_preset=preset,
            min_ownership=_env_float(env, "MIN_OWNERSHIP", None),
            adp_ceiling=_env_float(env, "ADP_CEILING", None),
            loose_adp_ceiling=_env_float(env, "LOOSE_ADP_CEILING", None),
        )

    @classmethod
    def load(cls, path: Path) -> "ProxySettings":
        data = json.loads(path.read_text(encoding="utf-8"))
        known = {item.name for item in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    def save(self, path: Path) -> None:
        path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")

    def with_overrides(self, **changes: Any) -> "ProxySettings":
        return replace(self, **{key: value for key, value in changes.items() if value is not None})

    def ranking_criteria(self) -> RankingCriteria:
        return get_criteria(
            self.relevance_preset,
            min_ownership=self.min_ownership,
            adp_ceiling=self.adp_ceiling,
            loose_adp_ceiling=self.loose_adp_ceiling,
        )


__all__ = ["ENV_PREFIX", "ProxySettings"]
