"""Application entry point for the Slack issue bridge."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

from flask import Flask, jsonify, request
from slack_bolt import App as SlackApp
from slack_bolt.adapter.flask import SlackRequestHandler
from slack_sdk.signature import SignatureVerifier

from slack_issue_bridge.config import AppSettings, get_settings
from slack_issue_bridge.github_client import GitHubClient
from slack_issue_bridge.issues import (
    CREATE_ISSUE_CALLBACK_ID,
    ISSUE_MODAL_CALLBACK_ID,
    REPOSITORY_ACTION_ID,
    handle_create_issue_shortcut,
    handle_issue_submission,
    handle_repository_options,
)
from slack_issue_bridge.logging_config import configure_logging


def _create_bolt_app(settings: AppSettings) -> SlackApp:
    """Initialise the Slack Bolt application using validated settings."""

    return SlackApp(
        token=settings.bot_token,
        signing_secret=settings.signing_secret,
        token_verification_enabled=False,
    )


def _create_github_client(settings: AppSettings) -> GitHubClient:
    return GitHubClient(
        org=settings.github_org,
        token=settings.github_token,
        base_url=settings.github_api_url,
        timeout=settings.github_timeout,
    )


def _register_error_handlers(flask_app: Flask) -> None:
    """Register a JSON error handler that attaches a trace identifier."""

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def _register_issue_handlers(bolt_app: SlackApp, *, settings: AppSettings, github: GitHubClient) -> None:
    @bolt_app.shortcut(CREATE_ISSUE_CALLBACK_ID)
    def handle_create_issue(ack, body, client, logger):
        handle_create_issue_shortcut(
            ack=ack,
            body=body,
            client=client,
            logger=logger,
            settings=settings,
            github=github,
        )

    @bolt_app.view(ISSUE_MODAL_CALLBACK_ID)
    def handle_issue_modal(ack, body, client, logger):
        handle_issue_submission(ack=ack, body=body, client=client, logger=logger, github=github)

    @bolt_app.options(REPOSITORY_ACTION_ID)
    def handle_repository_query(ack, body, logger):
        handle_repository_options(ack=ack, body=body, logger=logger, github=github)


_LOGGING_CONFIGURED = False


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


def create_app(settings: AppSettings | None = None, github: GitHubClient | None = None) -> Flask:
    """Create and configure the Flask application.

    Settings are read from the environment once here and handed to the Slack
    listeners explicitly.
    """

    global _LOGGING_CONFIGURED

    # /healthz re-reads the environment only when settings were not injected.
    settings_injected = settings is not None
    settings = settings or get_settings()
    if not _LOGGING_CONFIGURED:
        configure_logging(settings.log_level, settings.log_format)
        _LOGGING_CONFIGURED = True

    github = github or _create_github_client(settings)
    bolt_app = _create_bolt_app(settings)
    _register_issue_handlers(bolt_app, settings=settings, github=github)
    handler = SlackRequestHandler(bolt_app)
    verifier = SignatureVerifier(signing_secret=settings.signing_secret)

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.logger.setLevel(settings.log_level)

    _register_error_handlers(flask_app)

    @flask_app.route("/slack/events", methods=["POST"])
    def slack_events():
        raw_body = request.get_data(as_text=True)
        if not verifier.is_valid_request(raw_body, dict(request.headers)):
            response = jsonify({"error": "invalid_signature"})
            response.status_code = 401
            return response

        # Bolt returns as soon as the listener acks and finishes the listener on
        # its own worker thread; option lists must travel back in this response.
        return handler.handle(request)

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")
        try:
            if not settings_injected:
                get_settings()
            health["config"] = "valid"
        except RuntimeError as exc:
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False

        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=get_settings().port)
