"""Runtime settings, read from the environment.

  ETAG_HOST       bind address             (default 0.0.0.0)
  ETAG_PORT       bind port                (default 8080)
  ETAG_LOG_LEVEL  uvicorn log level        (default info)
  ETAG_DEBUG      attach exception details to 500 responses (default off)

ETAG_DEBUG adds exception type and text to error bodies. This is useful for
local troubleshooting but leaks internals, so keep it off in production.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _truthy(value: str | None) -> bool:
    v = (value or "").strip().lower()
    return v in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    debug: bool = False


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        host=env.get("ETAG_HOST", "0.0.0.0"),
        port=int(env.get("ETAG_PORT", "8080")),
        log_level=env.get("ETAG_LOG_LEVEL", "info").lower(),
        debug=_truthy(env.get("ETAG_DEBUG")),
    )
