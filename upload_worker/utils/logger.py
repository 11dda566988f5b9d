import logging
import sys


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_LEVEL = logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.
    Each logger gets its own handler and no propagation to avoid duplicates.
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

        logger.setLevel(LOG_LEVEL)
        logger.addHandler(handler)
        # Prevent propagation to parent loggers to avoid duplicates
        logger.propagate = False

    return logger


def configure_logging(level: int | str = LOG_LEVEL):
    """
    Configure worker-wide logging to prevent duplicates.
    """
    global LOG_LEVEL
    LOG_LEVEL = logging.getLevelName(level) if isinstance(level, str) else level

    # pika logs every connection state change at INFO
    logging.getLogger("pika").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Remove any existing handlers from root logger
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Loggers created before configuration keep their own level otherwise
    for name, existing in logging.Logger.manager.loggerDict.items():
        if name.startswith("upload_worker") and isinstance(existing, logging.Logger):
            existing.setLevel(LOG_LEVEL)
