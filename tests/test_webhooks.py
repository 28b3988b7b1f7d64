import logging

import pytest
from ss12000_client.webhooks import (
    ERROR_INVALID_NOTIFICATION,
    ERROR_PARSE_ERROR,
    ERROR_PAYLOAD_TOO_LARGE,
    WebhookConfig,
    WebhookNotification,
    build_webhook_app,
)
from starlette.testclient import TestClient


def test_notification_is_parsed_and_handled(caplog):
    received = []
    app = build_webhook_app(received.append)

    with (
        TestClient(app) as client,
        caplog.at_level(logging.INFO, logger="ss12000_client.observability"),
    ):
        resp = client.post(
            "/ss12000-webhook",
            json={"modifiedEntities": ["Person", "Group"], "deletedEntities": []},
        )

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert received == [
        WebhookNotification(modified_entities=["Person", "Group"], deleted_entities=[])
    ]
    record = next(r for r in caplog.records if r.getMessage() == "webhook_received")
    assert record.modified == "Person,Group"


def test_async_handler_is_awaited():
    received = []

    async def handler(notification):
        received.append(notification.deleted_entities)

    app = build_webhook_app(handler, WebhookConfig(path="/hooks"))
    with TestClient(app) as client:
        resp = client.post("/hooks", json={"deletedEntities": ["Activity"]})

    assert resp.status_code == 200
    assert received == [["Activity"]]


def test_invalid_json_is_rejected():
    app = build_webhook_app(lambda n: None)
    with TestClient(app) as client:
        resp = client.post(
            "/ss12000-webhook",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

    assert resp.status_code == 400
    assert resp.json()["error"] == ERROR_PARSE_ERROR


@pytest.mark.parametrize(
    "payload", [["Person"], {"modifiedEntities": "Person"}, {"deletedEntities": [1]}]
)
def test_wrong_shape_is_rejected(payload):
    app = build_webhook_app(lambda n: None)
    with TestClient(app) as client:
        resp = client.post("/ss12000-webhook", json=payload)

    assert resp.status_code == 400
    assert resp.json()["error"] == ERROR_INVALID_NOTIFICATION


def test_oversized_body_is_rejected():
    calls = []
    app = build_webhook_app(calls.append, WebhookConfig(max_body_bytes=10))
    with TestClient(app) as client:
        resp = client.post(
            "/ss12000-webhook", json={"modifiedEntities": ["Person"] * 10}
        )

    assert resp.status_code == 413
    assert resp.json()["error"] == ERROR_PAYLOAD_TOO_LARGE
    assert calls == []


def test_webhook_config_from_env(monkeypatch):
    monkeypatch.setenv("SS12000_WEBHOOK_PATH", "incoming")
    monkeypatch.setenv("SS12000_WEBHOOK_MAX_BODY_BYTES", "2048")

    cfg = WebhookConfig.from_env()

    assert cfg.path == "/incoming"
    assert cfg.max_body_bytes == 2048


def test_webhook_config_rejects_non_positive_limit(monkeypatch):
    monkeypatch.setenv("SS12000_WEBHOOK_MAX_BODY_BYTES", "0")
    with pytest.raises(ValueError):
        WebhookConfig.from_env()
