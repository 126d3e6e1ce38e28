import logging
import sys

from levelboard.config import settings

ROOT_LOGGER = "levelboard"


def setup_logging(level: str = None) -> logging.Logger:
    """Attach a stdout handler to the package logger (once)."""

    logger = logging.getLogger(ROOT_LOGGER)

    if logger.handlers:
        return logger

    if level is None:
        level = "DEBUG" if settings.DEBUG else settings.LOG_LEVEL
    logger.setLevel(level.upper())

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger
