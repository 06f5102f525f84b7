"""Thin wrapper utilities around the Slack WebClient."""

from __future__ import annotations

from typing import Any, Callable, Mapping

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from .errors import UpstreamCallError


def _describe_slack_error(exc: SlackApiError) -> tuple[str, int | None]:
    response = getattr(exc, "response", None)
    if not response:
        return str(exc), None
    return response.get("error") or str(exc), getattr(response, "status_code", None)


class SlackClient:
    """Encapsulate Slack WebClient interactions for easier testing.

    Every call raises :class:`UpstreamCallError` instead of ``SlackApiError`` so
    listeners only deal with one failure type for Slack and GitHub alike.
    """

    def __init__(self, *, token: str | None = None, client: WebClient | None = None) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")
        self._client = client or WebClient(token=token)

    @property
    def client(self) -> WebClient:
        """Expose the underlying WebClient for advanced use cases."""

        return self._client

    def _call(self, operation: str, method: Callable[..., Any], **kwargs: Any) -> Mapping[str, Any]:
        try:
            return method(**kwargs)
        except SlackApiError as exc:
            error, status_code = _describe_slack_error(exc)
            raise UpstreamCallError(operation, error, status_code) from exc
        except OSError as exc:
            # urllib.error.URLError and socket timeouts from the HTTP transport
            raise UpstreamCallError(operation, exc.__class__.__name__) from exc

    def open_view(self, *, trigger_id: str, view: Mapping[str, Any]) -> str:
        """Open a modal and return its view id."""

        response = self._call("views_open", self._client.views_open, trigger_id=trigger_id, view=dict(view))
        view_id = (response.get("view") or {}).get("id")
        if not view_id:
            raise UpstreamCallError("views_open", "missing_view_id")
        return view_id

    def update_view(self, *, view_id: str, view: Mapping[str, Any]) -> Mapping[str, Any]:
        """Replace the content of an open modal."""

        return self._call("views_update", self._client.views_update, view_id=view_id, view=dict(view))

    def get_permalink(self, *, channel: str, message_ts: str) -> str:
        """Resolve the permalink of a message."""

        response = self._call(
            "chat_getPermalink",
            self._client.chat_getPermalink,
            channel=channel,
            message_ts=message_ts,
        )
        permalink = response.get("permalink")
        if not permalink:
            raise UpstreamCallError("chat_getPermalink", "missing_permalink")
        return permalink

    def post_reply(self, *, channel: str, thread_ts: str, text: str) -> Mapping[str, Any]:
        """Post a plain text reply into a thread."""

        return self._call(
            "chat_postMessage",
            self._client.chat_postMessage,
            channel=channel,
            thread_ts=thread_ts,
            text=text,
        )
