"""Logging setup for the adapter process."""

import logging
import sys

QUIET_LOGGERS = ("asyncio", "httpx", "httpcore", "botocore", "boto3", "urllib3")


def setup_logging(level: str = "INFO") -> None:
    """Log to stdout at ``level``; SDK and transport loggers stay at WARNING."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
