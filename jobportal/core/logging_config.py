import logging

from jobportal.core.config import get_settings


def configure_logging():
    """Configure basic structured logging for the application.

    Uses a simple format including level, module, and message. Safe to call
    more than once; handlers are only installed the first time.
    """
    if logging.getLogger().handlers:
        # Already configured (avoid duplicate handlers in reload / dev)
        return
    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    logging.basicConfig(level=get_settings().log_level.upper(), format=fmt)


def get_logger(name: str):
    configure_logging()
    return logging.getLogger(name)
