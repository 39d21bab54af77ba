"""Runtime settings read from ``TERMEDIT_*`` environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .constants import DEFAULT_QUIT_TIMES, DEFAULT_STATUS_TIMEOUT, DEFAULT_TAB_STOP

ENV_PREFIX = "TERMEDIT_"

logger = logging.getLogger(__name__)


def _env(environ: Mapping[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    return environ.get(f"{ENV_PREFIX}{name}", default)


def _env_int(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = _env(environ, name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("ignoring %s%s=%r: not an integer", ENV_PREFIX, name, raw)
        return default
    if value < minimum:
        logger.warning("ignoring %s%s=%d: must be >= %d", ENV_PREFIX, name, value, minimum)
        return default
    return value


@dataclass(slots=True, frozen=True)
class Settings:
    tab_stop: int = DEFAULT_TAB_STOP
    quit_times: int = DEFAULT_QUIT_TIMES
    status_timeout: int = DEFAULT_STATUS_TIMEOUT
    log_file: str = ""
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            tab_stop=_env_int(env, "TAB_STOP", DEFAULT_TAB_STOP, 1),
            quit_times=_env_int(env, "QUIT_TIMES", DEFAULT_QUIT_TIMES, 0),
            status_timeout=_env_int(env, "STATUS_TIMEOUT", DEFAULT_STATUS_TIMEOUT, 0),
            log_file=_env(env, "LOG_FILE", "") or "",
            log_level=(_env(env, "LOG_LEVEL") or "INFO").upper(),
        )
