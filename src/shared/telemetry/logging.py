"""
Process-wide logging.

Modules log through ``get_logger(__name__)``; the entry points (API
lifespan, seed script) call ``setup_logging`` once at startup.
"""
import logging
import sys

from src.infrastructure.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Third-party loggers that are chatty at INFO
LIBRARY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "redis", "httpx", "httpcore")


def resolve_level(settings: Settings) -> int:
    """LOG_LEVEL when set, else DEBUG in debug mode, else INFO"""
    if settings.log_level:
        return logging.getLevelNamesMapping()[settings.log_level]
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging(settings: Settings | None = None) -> int:
    """
    Configure the root logger and quiet library loggers.

    Library loggers stay at WARNING unless the application itself runs at
    DEBUG. With ``database_echo`` on, SQLAlchemy keeps the level it set
    for echoing.

    Returns:
        The root level that was applied
    """
    settings = settings or get_settings()
    level = resolve_level(settings)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger().setLevel(level)

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        if settings.database_echo and name.startswith("sqlalchemy"):
            continue
        logging.getLogger(name).setLevel(library_level)
    return level


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
