"""Structured Logging: JSON log lines carrying workout/session/user context.

Invariants:
    - Every line has timestamp (record time, UTC), level, logger and message
    - Context passed through `extra=` is copied into the line when it is one of
      CONTEXT_KEYS; UUIDs and other non-JSON values are rendered with str()
    - setup_logging is idempotent: calling it again replaces its own handler
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_KEYS = (
    "workout_id", "session_id", "user_id", "exercise_id", "error_code",
    "path", "attempt", "input_tokens", "output_tokens",
)

HANDLER_NAME = "workout-api"
TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _jsonable(value):
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        line.update({
            key: _jsonable(record.__dict__[key])
            for key in CONTEXT_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install the application handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT),
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    # SQL echo only when explicitly debugging
    if root.level > logging.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
