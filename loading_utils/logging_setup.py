"""
JSONL logging bootstrap for the loading-utils CLI.
Installs a single JSONL file sink on the root logger.
"""

import json
import logging
import os
from datetime import UTC
from datetime import datetime
from pathlib import Path

LOG_PATH_ENV = "LOADING_UTILS_LOG_PATH"
LOG_LEVEL_ENV = "LOADING_UTILS_LOG_LEVEL"


class JsonlHandler(logging.Handler):
    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def build_payload(self, record: logging.LogRecord) -> dict:
        payload = {
            "ts": datetime.now(UTC).isoformat(timespec="milliseconds"),
            "lvl": record.levelname,
            "schema": {"name": "loading-utils.log", "ver": "1.0.0"},
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = logging.Formatter().formatException(record.exc_info)
        return payload

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = json.dumps(self.build_payload(record), ensure_ascii=False, default=str)
            with self.path.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            self.handleError(record)


def init_json_logging(path: str | Path | None = None, level: str | None = None) -> JsonlHandler | None:
    """Install the JSONL sink on the root logger.

    Args:
        path: Log file path (defaults to $LOADING_UTILS_LOG_PATH)
        level: Level name (defaults to $LOADING_UTILS_LOG_LEVEL, then INFO)

    Returns:
        The installed handler, or None when no log path is configured
    """
    path = path or os.environ.get(LOG_PATH_ENV)
    if not path:
        return None
    level = (level or os.environ.get(LOG_LEVEL_ENV, "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level, logging.INFO))
    # Remove existing handlers of the same kind to avoid duplicates
    for h in list(root.handlers):
        if isinstance(h, JsonlHandler):
            root.removeHandler(h)
            h.close()
    handler = JsonlHandler(path)
    root.addHandler(handler)
    return handler
