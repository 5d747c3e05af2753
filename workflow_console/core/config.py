"""Runtime settings resolved from environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "WORKFLOW_CONSOLE_"

_LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


@dataclass(frozen=True)
class ConsoleSettings:
    """Settings for the sidecar's server-side timeline views."""

    view_ttl_seconds: float = 1800.0
    max_views: int = 256
    log_level: str = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ConsoleSettings":
        env = os.environ if environ is None else environ
        defaults = cls()

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).lower()
        if log_level not in _LOG_LEVELS:
            logger.warning("Ignoring invalid %sLOG_LEVEL=%r", ENV_PREFIX, log_level)
            log_level = defaults.log_level

        return cls(
            view_ttl_seconds=_positive(env, "VIEW_TTL", float, defaults.view_ttl_seconds),
            max_views=_positive(env, "MAX_VIEWS", int, defaults.max_views),
            log_level=log_level,
        )


def _positive(env: Mapping[str, str], name: str, cast, default):
    """Read a positive number, falling back to the default on bad input."""
    raw = env.get(ENV_PREFIX + name)
    if raw is None or raw == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s%s=%r", ENV_PREFIX, name, raw)
        return default
    if value <= 0:
        logger.warning("Ignoring non-positive %s%s=%r", ENV_PREFIX, name, raw)
        return default
    return value
