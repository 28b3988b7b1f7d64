import logging
import os
from typing import IO, Any, Optional, Sequence

LOG_LEVEL_ENV = "SS12000_LOG_LEVEL"
PACKAGE_LOGGER = "ss12000_client"

# Printed in this order after level/logger/event when present on the record.
LOG_EXTRA_FIELDS = (
    "request_id",
    "resource",
    "method",
    "url",
    "path",
    "status",
    "duration_ms",
    "modified",
    "deleted",
    "error",
)


class LogfmtFormatter(logging.Formatter):
    """
    logfmt lines: level=... logger=... event=... followed by the known
    request extras. Records without extras still format.
    """

    def __init__(self, fields: Sequence[str] = LOG_EXTRA_FIELDS):
        super().__init__()
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        kv = [f"level={record.levelname.lower()}", f"logger={record.name}"]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        kv.extend(
            f"{key}={self._fmt_val(getattr(record, key))}"
            for key in self.fields
            if getattr(record, key, None) is not None
        )

        if record.exc_info and record.exc_info[0] is not None:
            kv.append(f"exc_type={record.exc_info[0].__name__}")
        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        # Error bodies are multi-line; keep one record per line.
        s = str(val).replace("\\", "\\\\").replace("\n", "\\n").replace("\r", "\\r")
        if not s or any(c in s for c in ' ="'):
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: Optional[str] = None, *, stream: Optional[IO[str]] = None) -> None:
    """
    Attach a logfmt handler to the ss12000_client logger.

    The level defaults to SS12000_LOG_LEVEL, then INFO. Calling again replaces
    the handler installed earlier; handlers owned by the application are left
    alone.
    """
    level = level or os.getenv(LOG_LEVEL_ENV) or "INFO"
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        if isinstance(h.formatter, LogfmtFormatter):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(LogfmtFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = [
    "setup_logging",
    "LogfmtFormatter",
    "LOG_EXTRA_FIELDS",
    "LOG_LEVEL_ENV",
    "PACKAGE_LOGGER",
]
