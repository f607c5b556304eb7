"""Stdlib logging setup for scripts.

Application code logs through logfire; this only configures the root
handler that scripts and third-party libraries write to.
"""

import logging
import sys

from newsboard.config import Settings

_NOISY_LOGGERS = ("sqlalchemy.pool", "sqlalchemy.engine", "asyncpg")


def setup_logging(settings: Settings) -> None:
    """Configure the root logger for the current environment."""
    if settings.debug:
        level = logging.DEBUG
    elif settings.environment == "production":
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    # Engine echo is opt-in through debug only
    noisy_level = logging.INFO if settings.debug else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)

    logging.getLogger("newsboard").setLevel(level)
    logging.getLogger(__name__).info(
        "Logging configured: environment=%s level=%s",
        settings.environment,
        logging.getLevelName(level),
    )


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under ``newsboard`` for script modules."""
    if not name.startswith("newsboard"):
        name = f"newsboard.{name}"
    return logging.getLogger(name)
