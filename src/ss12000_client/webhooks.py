"""
Minimal ASGI receiver for SS12000 change notifications.

The server POSTs {"modifiedEntities": [...], "deletedEntities": [...]} to the
subscription target; the handler is told which resource types changed and is
expected to fetch the changes itself (e.g. via meta.modified.after filters or
deleted_entities.list).
"""

from __future__ import annotations

import inspect
import json
import os
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from .observability import log_event

ERROR_PAYLOAD_TOO_LARGE = "payload_too_large"
ERROR_PARSE_ERROR = "parse_error"
ERROR_INVALID_NOTIFICATION = "invalid_notification"


class WebhookNotification(BaseModel):
    modified_entities: List[str] = Field(
        default_factory=list, alias="modifiedEntities"
    )
    deleted_entities: List[str] = Field(default_factory=list, alias="deletedEntities")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


NotificationHandler = Callable[[WebhookNotification], Union[Awaitable[Any], Any]]


@dataclass(frozen=True)
class WebhookConfig:
    path: str = "/ss12000-webhook"
    max_body_bytes: int = 1_000_000

    @classmethod
    def from_env(cls) -> "WebhookConfig":
        path = os.getenv("SS12000_WEBHOOK_PATH", "").strip() or cls.path
        if not path.startswith("/"):
            path = "/" + path
        raw = os.getenv("SS12000_WEBHOOK_MAX_BODY_BYTES", "").strip()
        max_body_bytes = int(raw.replace("_", "")) if raw else cls.max_body_bytes
        if max_body_bytes <= 0:
            raise ValueError("SS12000_WEBHOOK_MAX_BODY_BYTES must be greater than zero")
        return cls(path=path, max_body_bytes=max_body_bytes)


def _error(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse({"error": code, "message": message}, status_code=status_code)


def build_webhook_app(
    handler: NotificationHandler, config: Optional[WebhookConfig] = None
) -> Starlette:
    """Create a Starlette app that validates notifications and calls handler."""
    cfg = config or WebhookConfig()

    async def receive(request: Request) -> JSONResponse:
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        raw = await request.body()
        if len(raw) > cfg.max_body_bytes:
            return _error(413, ERROR_PAYLOAD_TOO_LARGE, "Notification body too large.")

        try:
            payload = json.loads(raw)
        except ValueError:
            return _error(400, ERROR_PARSE_ERROR, "Notification body is not JSON.")

        try:
            notification = WebhookNotification.model_validate(payload)
        except ValidationError as exc:
            return _error(400, ERROR_INVALID_NOTIFICATION, str(exc))

        log_event(
            "webhook_received",
            request_id=request_id,
            path=request.url.path,
            modified=",".join(notification.modified_entities),
            deleted=",".join(notification.deleted_entities),
        )

        result = handler(notification)
        if inspect.isawaitable(result):
            await result

        return JSONResponse({"status": "ok"})

    return Starlette(routes=[Route(cfg.path, receive, methods=["POST"])])


__all__ = [
    "WebhookNotification",
    "WebhookConfig",
    "NotificationHandler",
    "build_webhook_app",
    "ERROR_PAYLOAD_TOO_LARGE",
    "ERROR_PARSE_ERROR",
    "ERROR_INVALID_NOTIFICATION",
]
