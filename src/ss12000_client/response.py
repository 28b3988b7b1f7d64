from __future__ import annotations

import logging
from typing import Optional

import httpx

from .errors import DecodeError, HttpStatusError, TransportFailure
from .outcome import Empty, Failure, JsonObject, Outcome, Success

log = logging.getLogger("ss12000_client.response")

BODY_SNIPPET_CHARS = 500


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


async def read_body_text(resp: httpx.Response) -> Optional[str]:
    """
    Best-effort body read for diagnostics.
    Returns None when the stream was already consumed or the connection dropped.
    """
    try:
        await resp.aread()
        return resp.text
    except (httpx.HTTPError, httpx.StreamError) as exc:
        log.debug(
            "ss12000.body_unreadable",
            extra={"status": resp.status_code, "error": str(exc)},
        )
        return None


async def normalize_response(resp: httpx.Response, *, method: str, url: str) -> Outcome:
    """
    Classify a raw response:
    - non-2xx -> Failure(HttpStatusError) with best-effort body text
    - 204 -> Empty
    - 2xx with JSON -> Success (objects decoded as JsonObject)
    - any other 2xx, including an empty body -> Failure(DecodeError)
    """
    status = resp.status_code

    if not is_success(status):
        body = await read_body_text(resp)
        return Failure(
            HttpStatusError(status_code=status, method=method, url=url, body=body)
        )

    if status == 204:
        return Empty(status_code=status)

    try:
        await resp.aread()
    except (httpx.HTTPError, httpx.StreamError) as exc:
        return Failure(
            TransportFailure(
                f"Failed reading response body from {method} {url}: {exc}",
                method=method,
                url=url,
                status_code=status,
                cause=exc,
            )
        )

    try:
        value = resp.json(object_hook=JsonObject)
    except ValueError as exc:
        snippet = (resp.text or "")[:BODY_SNIPPET_CHARS]
        return Failure(
            DecodeError(
                f"Expected JSON from {method} {url}, got non-JSON body snippet: "
                f"{snippet!r}",
                method=method,
                url=url,
                status_code=status,
                body=resp.text,
                cause=exc,
            )
        )

    return Success(value=value, status_code=status)


__all__ = ["normalize_response", "read_body_text", "is_success"]
