"""
Logging configuration.

Log records go to stderr so they never mix with command output on stdout.

Environment variables:
- LEDGERBOOK_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
"""
import logging
import logging.config
import os

DEFAULT_LEVEL = "WARNING"


def get_logging_config(level: str) -> dict:
    """
    Get a dictConfig for the ledgerbook loggers.

    Args:
        level: Level name for the ledgerbook logger tree

    Returns:
        logging.config.dictConfig dict
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {
                "format": "[{asctime}] {levelname} {name} {message}",
                "style": "{",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "verbose",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "ledgerbook": {
                "handlers": ["console"],
                "level": level,
                "propagate": False,
            },
            "sqlalchemy.engine": {
                "handlers": ["console"],
                "level": "INFO" if level == "DEBUG" else "WARNING",
                "propagate": False,
            },
        },
    }


def configure_logging(verbose: bool = False) -> str:
    """
    Configure logging from LEDGERBOOK_LOG_LEVEL.

    Args:
        verbose: Force DEBUG regardless of the environment

    Returns:
        The level name applied
    """
    level = "DEBUG" if verbose else os.environ.get("LEDGERBOOK_LOG_LEVEL", DEFAULT_LEVEL).upper()
    if level not in logging.getLevelNamesMapping():
        level = DEFAULT_LEVEL
    logging.config.dictConfig(get_logging_config(level))
    return level
