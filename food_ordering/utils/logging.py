# food_ordering/utils/logging.py
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from food_ordering.utils.settings import LOG_FORMAT, LOG_LEVEL


class JsonFormatter(logging.Formatter):
    """Jedna linia JSON na rekord, dla agregatorow logow."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__("[%(asctime)s] %(levelname)-8s %(name)s: %(message)s", "%H:%M:%S")


_configured = False


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """
    Konfiguracja root loggera, wolana raz przy starcie aplikacji.
    Kolejne wywolania tylko zmieniaja poziom.
    """
    global _configured

    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())

    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    if (fmt or LOG_FORMAT) == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter())

    root.addHandler(handler)

    # uvicorn ma wlasne handlery, nie dublujemy
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
