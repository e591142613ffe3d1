"""Logging setup for the ``market_heatmap`` logger tree.

The CSV reader warns about every row it skips and reports a bad header
before raising. The renderers log the computed layout at debug level and
each file they write at info level. The layout engine never logs. Nothing
is configured on import; the ``market-heatmap`` CLI calls ``setup_logging``
from its callback, with ``--json-logs`` switching stderr output to
python-json-logger records.
"""

import copy
import logging
import logging.config
from typing import Any, Dict

LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
        "console": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": "INFO",
            "formatter": "console",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "market_heatmap": {
            # Records reach the console through the root handler
            "level": "INFO",
            "propagate": True,
        },
    },
    "root": {
        "level": "WARNING",
        "handlers": ["console"],
    },
}


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Route package records to stderr.

    Parameters
    ----------
    json_output : bool
        Emit one JSON object per record instead of the console format.
    log_level : str
        Threshold for ``market_heatmap`` records, e.g. ``"DEBUG"`` to see
        layout and parse summaries. Other libraries stay at ``WARNING``.
    """
    config = copy.deepcopy(LOGGING_CONFIG)

    if json_output:
        config["handlers"]["console"]["formatter"] = "json"

    if log_level:
        level = log_level.upper()
        config["handlers"]["console"]["level"] = level
        config["loggers"]["market_heatmap"]["level"] = level

    logging.config.dictConfig(config)


def get_logger(name: str) -> logging.Logger:
    """Logger for a package module; pass ``__name__``."""
    return logging.getLogger(name)
