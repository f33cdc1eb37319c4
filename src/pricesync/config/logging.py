"""Logging configuration for the command line and other entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT: Final[str] = "%H:%M:%S"


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    level: int = logging.INFO
    # applies to sqlalchemy.engine, which echoes every statement at INFO
    sql_level: int = logging.WARNING


def _parse_level(name: str, value: str) -> int:
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise ConfigurationError(f"Invalid log level for {name}: {value!r}")
    return level


def get_logging_config(*, verbose: bool = False) -> LoggingConfig:
    """Read ``PRICESYNC_LOG_LEVEL`` and ``PRICESYNC_SQL_LOG_LEVEL``.

    ``verbose`` forces DEBUG on the root logger regardless of the environment.
    """

    level_name = optional_env_var("PRICESYNC_LOG_LEVEL")
    sql_level_name = optional_env_var("PRICESYNC_SQL_LOG_LEVEL")
    defaults = LoggingConfig()
    level = _parse_level("PRICESYNC_LOG_LEVEL", level_name) if level_name else defaults.level
    return LoggingConfig(
        level=logging.DEBUG if verbose else level,
        sql_level=(
            _parse_level("PRICESYNC_SQL_LOG_LEVEL", sql_level_name)
            if sql_level_name
            else defaults.sql_level
        ),
    )


def configure_logging(config: LoggingConfig | None = None, *, force: bool = False) -> None:
    """Initialise the root logger from ``config`` (environment defaults when omitted).

    Pass ``force=True`` to replace handlers installed by an earlier call.
    """

    resolved = config or get_logging_config()
    logging.basicConfig(
        level=resolved.level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        force=force,
    )
    logging.getLogger("sqlalchemy.engine").setLevel(resolved.sql_level)
