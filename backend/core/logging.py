import logging

from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Driver chatter stays out of INFO logs; wallet and join events are logged by the services
QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


def setup_logging(settings: Settings) -> None:
    """Configure root, uvicorn and driver loggers from settings.log_level."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(logger_name).setLevel(level)
    for logger_name in QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))
