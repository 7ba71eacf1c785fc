"""Standard library logging for scripts and third-party libraries.

Application code logs through ``logfire`` directly. Records emitted via
``logging`` (uvicorn, alembic, the maintenance scripts) are forwarded to
Logfire so everything ends up in one place.
"""

import logging

import logfire

from margin.config import Settings

# Libraries that are chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "asyncpg", "uvicorn.access")


def setup_logging(settings: Settings) -> None:
    """Route stdlib logging into Logfire.

    Call after ``configure_logfire`` so the handler has somewhere to send
    records.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("margin").setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging routed to Logfire (environment=%s, level=%s)",
        settings.environment,
        logging.getLevelName(level),
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
