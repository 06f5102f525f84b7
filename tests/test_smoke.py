"""Smoke tests for the health endpoint."""

from importlib import reload
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:  # pragma: no cover - import-time guard
    sys.path.insert(0, str(ROOT))

import app as app_module  # noqa: E402
from slack_issue_bridge import config  # noqa: E402


def _seed_env(monkeypatch):
    monkeypatch.setenv("SLACK_BOT_TOKEN", "test-token")
    monkeypatch.setenv("SLACK_SIGNING_SECRET", "test-secret")
    monkeypatch.setenv("GITHUB_BOT_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_ORG", "acme")
    config.get_settings.cache_clear()


def test_health_endpoint_returns_ok(monkeypatch):
    _seed_env(monkeypatch)
    reload(app_module)

    flask_app = app_module.create_app()

    with flask_app.test_client() as client:
        response = client.get("/healthz")
        assert response.status_code == 200
        data = response.get_json()
        assert data["ok"] is True
        assert data["config"] == "valid"
        assert "version" in data
    config.get_settings.cache_clear()


def test_health_endpoint_reports_invalid_config(monkeypatch):
    _seed_env(monkeypatch)
    reload(app_module)
    flask_app = app_module.create_app()

    monkeypatch.delenv("GITHUB_ORG")
    config.get_settings.cache_clear()

    with flask_app.test_client() as client:
        response = client.get("/healthz")
        data = response.get_json()
        assert response.status_code == 503
        assert data["ok"] is False
        assert data["config"] == "invalid"
        assert "GITHUB_ORG" in data["config_error"]
    config.get_settings.cache_clear()
