"""
Settings — environment-driven configuration
============================================
All tunables live in environment variables (optionally loaded from a
``.env`` file through python-dotenv) so neither the generator nor the test
harness needs a config file of its own.

    EXPRESSGEN_LOG_LEVEL            logging level name         (WARNING)
    EXPRESSGEN_APP_HOST             host generated apps bind   (127.0.0.1)
    EXPRESSGEN_APP_PORT             port generated apps bind   (3000)
    EXPRESSGEN_APP_TIMEOUT          start/stop bound, seconds  (10)
    EXPRESSGEN_GRACE_PERIOD         SIGTERM -> SIGKILL, secs   (5)
    EXPRESSGEN_NPM_INSTALL_TIMEOUT  npm install bound, seconds (300)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

_PREFIX = "EXPRESSGEN_"


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    app_host: str = "127.0.0.1"
    app_port: int = 3000
    app_timeout: float = 10.0
    grace_period: float = 5.0
    npm_install_timeout: float = 300.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from *environ* (default: ``os.environ`` after loading
        ``.env``). Unset or empty variables keep their defaults.

        Raises ValueError naming the variable when a number does not parse.
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        defaults = cls()
        return cls(
            log_level=_get(environ, "LOG_LEVEL", defaults.log_level).upper(),
            app_host=_get(environ, "APP_HOST", defaults.app_host),
            app_port=_get_number(environ, "APP_PORT", defaults.app_port, int),
            app_timeout=_get_number(environ, "APP_TIMEOUT", defaults.app_timeout, float),
            grace_period=_get_number(environ, "GRACE_PERIOD", defaults.grace_period, float),
            npm_install_timeout=_get_number(
                environ, "NPM_INSTALL_TIMEOUT", defaults.npm_install_timeout, float
            ),
        )


def _get(environ: Mapping[str, str], key: str, default: str) -> str:
    return environ.get(_PREFIX + key, "").strip() or default


def _get_number(environ, key, default, kind):
    raw = environ.get(_PREFIX + key, "").strip()
    if not raw:
        return default
    try:
        value = kind(raw)
    except ValueError:
        raise ValueError(f"{_PREFIX}{key} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{_PREFIX}{key} must not be negative, got {raw!r}")
    return value


def setup_logging(level: str = "WARNING") -> None:
    """Configure root logging on stderr; stdout is reserved for generator output."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,  # re-apply even if already configured
    )
