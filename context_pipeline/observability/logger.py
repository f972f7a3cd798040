"""
Logger configuration.

Provides the process-wide logging setup used by the API and scripts.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """
    Configure Python logging with ISO timestamps.

    Args:
        level: Root log level name (e.g. "INFO", "DEBUG")
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level.upper())
    root_logger.addHandler(handler)

    # Provider SDKs and the DB driver log every request at INFO
    for noisy in ("httpx", "botocore", "urllib3", "sqlalchemy.engine", "google_genai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

