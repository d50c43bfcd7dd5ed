"""Logging configuration for PromptGate entrypoints.

Modules only ever call `logging.getLogger(__name__)`. The server and CLI call
`setup_logging` once at startup. `LOG_LEVEL` picks the level and
`LOG_FORMAT=json` switches to single-line JSON records for log aggregation.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the service name."""

    def __init__(self, service_name):
        super().__init__()
        self.service_name = service_name

    def format(self, record):
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(service_name: str, stream=None) -> logging.Logger:
    """Install a single root handler and return the `service_name` logger."""
    use_json = os.getenv("LOG_FORMAT", "").lower() == "json"
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JSONFormatter(service_name) if use_json else logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))
    return logging.getLogger(service_name)
