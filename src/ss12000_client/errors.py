from __future__ import annotations

from typing import Optional


class SS12000ClientError(Exception):
    """
    Base error for client failures.

    Every engine error carries the same diagnostic envelope:
    - status_code: HTTP status if a response was received
    - body: raw response text if it could be read
    - cause: underlying transport exception if any
    """

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        self.cause = cause


class ConfigurationError(SS12000ClientError, ValueError):
    """Invalid client construction, or use of a closed client."""


class TransportFailure(SS12000ClientError):
    """No HTTP response was obtained (DNS, TLS, connect, timeout, reset)."""


class HttpStatusError(SS12000ClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        body: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ):
        snippet = (body or "")[:200]
        message = f"{status_code} {method} {url}"
        if snippet:
            message = f"{message}: {snippet}"
        super().__init__(
            message,
            method=method,
            url=url,
            status_code=status_code,
            body=body,
            cause=cause,
        )


class DecodeError(SS12000ClientError):
    """A success response carried a body that is not valid JSON."""


__all__ = [
    "SS12000ClientError",
    "ConfigurationError",
    "TransportFailure",
    "HttpStatusError",
    "DecodeError",
]
