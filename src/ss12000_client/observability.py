"""
Structured log events for the client and the webhook receiver.

Fields travel as LogRecord extras so LogfmtFormatter can print them as
key=value pairs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .outcome import Failure, Outcome

# Attribute names a bare LogRecord already carries; passing any of them as
# an extra makes logging raise KeyError.
RESERVED_LOG_KEYS = frozenset(
    vars(logging.LogRecord("", logging.NOTSET, "", 0, "", None, None))
) | {"message", "asctime"}

REQUEST_EVENT = "ss12000.request"
REQUEST_FAILED_EVENT = "ss12000.request_failed"


def _clean_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        k: v for k, v in fields.items() if k not in RESERVED_LOG_KEYS and v is not None
    }


def log_event(event: str, logger: logging.Logger | None = None, **fields: Any) -> None:
    """INFO-level event; None-valued and reserved fields are dropped."""
    log = logger or logging.getLogger("ss12000_client.observability")
    log.info(event, extra=_clean_fields(fields))


def log_request(
    log: logging.Logger,
    outcome: Outcome,
    *,
    method: str,
    url: str,
    duration_ms: int,
    resource: Optional[str] = None,
) -> None:
    """
    One DEBUG line per call; failures get an extra WARNING line
    carrying the error text.
    """
    fields = _clean_fields(
        {
            "resource": resource,
            "method": method,
            "url": url,
            "status": outcome.status_code,
            "duration_ms": duration_ms,
        }
    )
    log.debug(REQUEST_EVENT, extra=fields)
    if isinstance(outcome, Failure):
        log.warning(
            REQUEST_FAILED_EVENT, extra={**fields, "error": str(outcome.error)}
        )


__all__ = [
    "log_event",
    "log_request",
    "RESERVED_LOG_KEYS",
    "REQUEST_EVENT",
    "REQUEST_FAILED_EVENT",
]
