"""
Goal: Set up loguru logging: stderr for the user, a rolling file for later.
stdout belongs to the command output, so no sink ever writes there.
"""

import sys
from pathlib import Path

from loguru import logger

from playing.settings import LOG_DIR

_SENSITIVE = ("token", "password", "secret", "code_verifier")


def _filter_sensitive_logs(record) -> bool:
    """Drop records that mention credentials."""
    message = record["message"].lower()
    return not any(keyword in message for keyword in _SENSITIVE)


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "WARNING",
        colorize=None,
        backtrace=False,
        diagnose=False,
        filter=_filter_sensitive_logs,
    )
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(Path(LOG_DIR) / "{time:YYYY-MM-DD}.log"),
            rotation="00:00",
            retention="14 days",
            level="DEBUG" if verbose else "INFO",
            backtrace=False,
            diagnose=False,
            filter=_filter_sensitive_logs,
        )
    except OSError:
        # A read-only home should not stop the CLI from working
        logger.warning("Cannot write logs under {}", LOG_DIR)
