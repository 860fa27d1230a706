"""Environment-driven settings for the query forge application."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from cisame_query.core import NOSKETCH_BASE_URL, QueryLimits

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(environ: Mapping[str, str], key: str, default: int, minimum: int = 1) -> int:
    raw = environ.get(key)
    if raw is None or not str(raw).strip():
        return default
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def _env_flag(environ: Mapping[str, str], key: str) -> bool:
    return str(environ.get(key, "")).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class QueryForgeSettings:
    base_url: str = NOSKETCH_BASE_URL
    query_limits: QueryLimits = field(default_factory=QueryLimits)
    log_level: Optional[str] = None
    share: bool = False
    server_name: str = "0.0.0.0"
    server_port: int = 7860

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "QueryForgeSettings":
        """Read ``CISAME_*`` variables; malformed values keep their defaults."""

        env = os.environ if environ is None else environ
        defaults = QueryLimits()
        return cls(
            base_url=str(env.get("CISAME_NOSKETCH_URL") or NOSKETCH_BASE_URL),
            query_limits=QueryLimits(
                max_word_length=_env_int(env, "CISAME_MAX_WORD_LENGTH", defaults.max_word_length),
                max_context_terms=_env_int(
                    env, "CISAME_MAX_CONTEXT_TERMS", defaults.max_context_terms
                ),
            ),
            log_level=env.get("CISAME_LOG_LEVEL") or None,
            share=_env_flag(env, "CISAME_SHARE"),
            server_name=str(env.get("CISAME_SERVER_NAME") or "0.0.0.0"),
            server_port=_env_int(env, "CISAME_SERVER_PORT", 7860),
        )


__all__ = ["QueryForgeSettings"]
