from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from alltheskills_core.config import LoggingConfig

_ROOT = "alltheskills"


class JSONLineFormatter(logging.Formatter):
    """One JSON object per record, for machine-readable stderr."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": record.created,
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(level: str = "WARNING", json_output: bool = False) -> logging.Logger:
    """Configure and return the root alltheskills logger.

    Idempotent: a second call returns the already configured logger
    untouched, so library code never stacks duplicate handlers.
    """
    logger = logging.getLogger(_ROOT)

    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler = logging.StreamHandler(sys.stderr)
    if json_output:
        handler.setFormatter(JSONLineFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        ))

    logger.addHandler(handler)
    return logger


def setup_from_config(config: LoggingConfig) -> logging.Logger:
    """Apply the ``[logging]`` table of alltheskills.toml."""
    return setup_logging(level=config.level, json_output=config.json)


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the alltheskills namespace."""
    return logging.getLogger(f"{_ROOT}.{name}")
