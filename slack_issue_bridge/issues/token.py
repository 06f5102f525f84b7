"""Correlation token carried in the modal's ``private_metadata``.

The shortcut listener and the submission listener receive unrelated HTTP
callbacks. Everything the submission needs from the shortcut (where to reply
and which message to link back to) travels inside the modal as this token, so
the server keeps no state between the two.

The token is correlation data only. It grants nothing: replies are posted with
the bot's own credentials to the channel the token names.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from slack_issue_bridge.errors import DecodeError


TOKEN_VERSION = 1
TOKEN_KIND = "create_issue"
# Slack rejects private_metadata longer than this.
MAX_TOKEN_LENGTH = 3000


class OriginChannel(BaseModel):
    """Channel the shortcut was triggered from."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str | None = None


class CorrelationToken(BaseModel):
    """State linking a message shortcut to the later modal submission."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: Literal[1] = Field(TOKEN_VERSION, alias="v")
    kind: Literal["create_issue"] = TOKEN_KIND
    channel: OriginChannel
    thread_ts: str = Field(..., min_length=1)
    permalink: str = Field(..., min_length=1)


def encode_token(token: CorrelationToken) -> str:
    """Serialise ``token`` into a compact string for ``private_metadata``."""

    encoded = token.model_dump_json(by_alias=True)
    if len(encoded) > MAX_TOKEN_LENGTH:
        raise ValueError(
            f"Correlation token is {len(encoded)} characters; the limit is {MAX_TOKEN_LENGTH}."
        )
    return encoded


def decode_token(raw: str | None) -> CorrelationToken:
    """Parse a token produced by :func:`encode_token`.

    Raises :class:`DecodeError` for empty, oversized, malformed or truncated input.
    """

    if not raw:
        raise DecodeError("Correlation token is missing.")
    if len(raw) > MAX_TOKEN_LENGTH:
        raise DecodeError("Correlation token exceeds the metadata size limit.")
    try:
        return CorrelationToken.model_validate_json(raw)
    except ValidationError as exc:
        raise DecodeError("Correlation token could not be decoded.") from exc
