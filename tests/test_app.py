"""Tests for the Flask application factory."""

from pathlib import Path
import sys
import time

import pytest
from flask import Response
from slack_sdk.signature import SignatureVerifier

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover
    sys.path.insert(0, str(ROOT))

import app as app_module  # noqa: E402
from slack_issue_bridge import config  # noqa: E402


class DummyHandler:
    called = False

    def __init__(self, bolt_app):
        self.bolt_app = bolt_app

    def handle(self, _request):
        DummyHandler.called = True
        return Response('{"options": []}', status=200, content_type="application/json")


def _seed_env(monkeypatch):
    monkeypatch.setenv("SLACK_BOT_TOKEN", "token")
    monkeypatch.setenv("SLACK_SIGNING_SECRET", "secret")
    monkeypatch.setenv("GITHUB_BOT_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_ORG", "acme")
    config.get_settings.cache_clear()


def _signed_headers(secret: str, body: str, timestamp: str) -> dict[str, str]:
    signature = SignatureVerifier(secret).generate_signature(timestamp=timestamp, body=body)
    return {
        "X-Slack-Signature": signature,
        "X-Slack-Request-Timestamp": timestamp,
    }


@pytest.fixture
def flask_app(monkeypatch):
    _seed_env(monkeypatch)
    DummyHandler.called = False
    monkeypatch.setattr(app_module, "SlackRequestHandler", DummyHandler)
    yield app_module.create_app()
    config.get_settings.cache_clear()


def test_slack_events_route_returns_handler_response(flask_app):
    body = "{}"
    headers = _signed_headers("secret", body, str(int(time.time())))

    response = flask_app.test_client().post(
        "/slack/events",
        data=body,
        content_type="application/json",
        headers=headers,
    )

    assert response.status_code == 200
    assert response.get_json() == {"options": []}
    assert DummyHandler.called is True


def test_invalid_signature_returns_unauthorised(flask_app):
    response = flask_app.test_client().post(
        "/slack/events",
        data="{}",
        content_type="application/json",
        headers={
            "X-Slack-Signature": "v0=invalid",
            "X-Slack-Request-Timestamp": str(int(time.time())),
        },
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_signature"
    assert DummyHandler.called is False


def test_stale_timestamp_rejected(flask_app):
    body = "{}"
    headers = _signed_headers("secret", body, "100")

    response = flask_app.test_client().post(
        "/slack/events",
        data=body,
        content_type="application/json",
        headers=headers,
    )

    assert response.status_code == 401
    assert DummyHandler.called is False


def test_issue_listeners_are_registered(monkeypatch):
    _seed_env(monkeypatch)
    registered = {}
    monkeypatch.setattr(
        app_module,
        "SlackRequestHandler",
        lambda bolt_app: registered.setdefault("bolt_app", bolt_app),
    )

    app_module.create_app()

    bolt_app = registered["bolt_app"]
    assert len(bolt_app._listeners) == 3
    config.get_settings.cache_clear()


def test_explicit_settings_are_used_without_environment(monkeypatch):
    for var in ("SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET", "GITHUB_BOT_TOKEN", "GITHUB_ORG"):
        monkeypatch.delenv(var, raising=False)
    config.get_settings.cache_clear()
    settings = config.AppSettings.model_validate(
        {
            "SLACK_BOT_TOKEN": "token",
            "SLACK_SIGNING_SECRET": "secret",
            "GITHUB_BOT_TOKEN": "gh-token",
            "GITHUB_ORG": "acme",
        }
    )
    monkeypatch.setattr(app_module, "SlackRequestHandler", DummyHandler)

    flask_app = app_module.create_app(settings)

    assert flask_app.url_map.bind("localhost").match("/slack/events", method="POST")[0] == "slack_events"

    response = flask_app.test_client().get("/healthz")

    assert response.status_code == 200
    assert response.get_json()["config"] == "valid"
    assert response.get_json()["ok"] is True
