import logging
import sys
import json
from typing import Any

# LogRecord attributes passed through "extra" that end up in the JSON line
_EXTRA_FIELDS = (
    "request_id",
    "path",
    "method",
    "status_code",
    "duration_ms",
    "operation",
    "upstream_status",
    "upstream_body",
)


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "funcName": record.funcName,
            "line": record.lineno,
        }

        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_obj[name] = value

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, default=str)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logger to output JSON to stdout.
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())

    # uvicorn installs its own handlers; keep a single one on root
    logger.handlers = []
    logger.addHandler(handler)

    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.access").propagate = True
