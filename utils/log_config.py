"""
Logging setup for the DHCP report server.
"""

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Optional

from config.environments import get_logging_config


TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, as_json: Optional[bool] = None) -> None:
    """
    Configure the root logger.

    Args:
        level: Log level name, LOG_LEVEL when omitted
        as_json: Emit JSON lines instead of text, LOG_FORMAT when omitted
    """
    config = get_logging_config()
    if level is None:
        level = config["level"]
    if as_json is None:
        as_json = config["format"] == "json"

    # MCP stdio transport owns stdout, so logs go to stderr
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {"()": JsonFormatter},
            "text": {"format": TEXT_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
                "level": level,
                "formatter": "json" if as_json else "text",
            },
        },
        "loggers": {
            "": {"handlers": ["console"], "level": level},
            # Transport logs every request at INFO
            "elastic_transport": {"level": "WARNING"},
        },
    })
