"""Slack listeners turning a message shortcut into a GitHub issue.

The flow spans two unrelated callbacks. The shortcut listener opens a modal and
stores a :class:`CorrelationToken` in its ``private_metadata``; the submission
listener decodes that token to know where to reply. Nothing is kept in memory
between the two.
"""

from __future__ import annotations

from typing import Any, Mapping
from uuid import uuid4

import structlog
from pydantic import ValidationError
from structlog.contextvars import bind_contextvars, unbind_contextvars

from slack_issue_bridge.background import run_async
from slack_issue_bridge.config import AppSettings
from slack_issue_bridge.errors import DecodeError, UpstreamCallError, ValidationGap
from slack_issue_bridge.github_client import GitHubClient
from slack_issue_bridge.slack_client import SlackClient

from .draft import build_issue_draft, suggest_title
from .messages import build_confirmation_text
from .modal import build_issue_modal, build_placeholder_view, build_repository_options
from .options import filter_repositories, resolve_default_repository
from .payloads import MessageShortcut, parse_issue_form, resolve_thread_anchor
from .token import CorrelationToken, decode_token, encode_token


def _log_upstream_failure(log, logger, event: str, message: str, exc: UpstreamCallError) -> None:
    log.error(event, operation=exc.operation, error=exc.error, status_code=exc.status_code)
    logger.error(
        message,
        extra={"operation": exc.operation, "error": exc.error, "status_code": exc.status_code},
    )


def handle_create_issue_shortcut(
    ack,
    body: Mapping[str, Any],
    client,
    logger,
    *,
    settings: AppSettings,
    github: GitHubClient,
) -> None:
    """Open the issue modal for the message the shortcut was used on.

    The trigger id expires within seconds, so an empty modal is opened while the
    permalink (and, if needed, the default repository) is resolved. The modal is
    then updated in place with the real form.
    """

    ack()
    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id)
    try:
        try:
            shortcut = MessageShortcut.model_validate(body)
        except ValidationError:
            log.error("issue_shortcut_invalid_payload")
            logger.error("Message shortcut payload is missing required fields")
            return

        log = log.bind(channel=shortcut.channel.id, message_ts=shortcut.message_ts)
        log.info("issue_shortcut_received")
        slack = SlackClient(client=client)

        permalink = run_async(
            slack.get_permalink,
            channel=shortcut.channel.id,
            message_ts=shortcut.message_ts,
        )
        default_repository = run_async(
            resolve_default_repository,
            settings.github_default_repo,
            github,
        )
        # The open call stays on the listener thread so a busy pool cannot delay
        # it past the trigger id's expiry.
        try:
            view_id = slack.open_view(trigger_id=shortcut.trigger_id, view=build_placeholder_view())
            log.info("issue_modal_opened", view_id=view_id)
            message_permalink = permalink.result()
        except UpstreamCallError as exc:
            _log_upstream_failure(log, logger, "issue_modal_failed", "Failed to open issue modal", exc)
            return

        token = CorrelationToken(
            channel=shortcut.channel,
            thread_ts=resolve_thread_anchor(shortcut.message),
            permalink=message_permalink,
        )
        try:
            private_metadata = encode_token(token)
        except ValueError as exc:
            log.error("correlation_token_too_large", error=str(exc))
            return

        view = build_issue_modal(
            private_metadata=private_metadata,
            title=suggest_title(shortcut.message.text),
            default_repository=default_repository.result(),
        )
        try:
            slack.update_view(view_id=view_id, view=view)
        except UpstreamCallError as exc:
            _log_upstream_failure(log, logger, "issue_modal_failed", "Failed to fill issue modal", exc)
            return
        log.info("issue_modal_filled", thread_ts=token.thread_ts)
    finally:
        unbind_contextvars("trace_id")


def handle_issue_submission(
    ack,
    body: Mapping[str, Any],
    client,
    logger,
    *,
    github: GitHubClient,
) -> None:
    """Create the GitHub issue and confirm it in the originating thread."""

    trace_id = str(uuid4())
    bind_contextvars(trace_id=trace_id)
    log = structlog.get_logger().bind(trace_id=trace_id)
    try:
        view = body.get("view") or {}
        try:
            form = parse_issue_form((view.get("state") or {}).get("values") or {})
        except ValidationGap as exc:
            log.info("issue_form_rejected", block_id=exc.block_id)
            ack({"response_action": "errors", "errors": {exc.block_id: exc.message}})
            return
        ack()

        try:
            token = decode_token(view.get("private_metadata"))
        except DecodeError as exc:
            # Without the token there is no channel to tell the user about it.
            log.error("correlation_token_invalid", error=str(exc))
            logger.error("Dropping issue submission with unreadable metadata")
            return

        log = log.bind(channel=token.channel.id, repository=form.repository)
        draft = build_issue_draft(form, token)
        try:
            issue = github.create_issue(
                repository=draft.repository,
                title=draft.title,
                body=draft.body,
            )
        except UpstreamCallError as exc:
            _log_upstream_failure(log, logger, "issue_create_failed", "Failed to create GitHub issue", exc)
            return
        log.info("issue_created", issue_number=issue.number)

        try:
            SlackClient(client=client).post_reply(
                channel=token.channel.id,
                thread_ts=token.thread_ts,
                text=build_confirmation_text(issue),
            )
        except UpstreamCallError as exc:
            _log_upstream_failure(
                log, logger, "issue_reply_failed", "Issue created but the Slack confirmation failed", exc
            )
            return
        log.info("issue_reply_posted", thread_ts=token.thread_ts)
    finally:
        unbind_contextvars("trace_id")


def handle_repository_options(ack, body: Mapping[str, Any], logger, *, github: GitHubClient) -> None:
    """Answer type-ahead queries from the repository selector.

    Every query lists the organisation's repositories again; there is no cache.
    """

    query = body.get("value") or ""
    log = structlog.get_logger().bind(query=query)
    try:
        repositories = github.list_repositories()
    except UpstreamCallError as exc:
        _log_upstream_failure(
            log, logger, "repository_options_failed", "Failed to list repositories for options", exc
        )
        ack(options=[])
        return
    matches = filter_repositories(repositories, query)
    log.info("repository_options_listed", total=len(repositories), matched=len(matches))
    ack(options=build_repository_options(matches))
