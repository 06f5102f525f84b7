"""Typed views over the Slack payloads the issue listeners consume."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ValidationError

from slack_issue_bridge.errors import ValidationGap

from .modal import (
    BODY_ACTION_ID,
    BODY_BLOCK_ID,
    REPOSITORY_ACTION_ID,
    REPOSITORY_BLOCK_ID,
    TITLE_ACTION_ID,
    TITLE_BLOCK_ID,
)
from .token import OriginChannel


_REPOSITORY_NAME = re.compile(r"^[A-Za-z0-9._-]+$")


class ShortcutMessage(BaseModel):
    ts: str
    thread_ts: str | None = None
    text: str | None = None


class MessageShortcut(BaseModel):
    """The parts of a ``message_action`` payload used to open the issue modal."""

    trigger_id: str
    channel: OriginChannel
    message_ts: str
    message: ShortcutMessage


def resolve_thread_anchor(message: ShortcutMessage) -> str:
    """Replies to a threaded message go to the thread root, otherwise to the message."""

    return message.thread_ts or message.ts


class SelectedOption(BaseModel):
    value: str


class ElementState(BaseModel):
    """A single input element as reported in ``view.state.values``."""

    value: str | None = None
    selected_option: SelectedOption | None = None


class FormState(BaseModel):
    values: Dict[str, Dict[str, ElementState]]


@dataclass(frozen=True)
class IssueForm:
    """Validated values from the issue modal."""

    repository: str
    title: str
    body: str


def _element(state: FormState, block_id: str, action_id: str) -> ElementState:
    return state.values.get(block_id, {}).get(action_id) or ElementState()


def parse_issue_form(values: Mapping[str, Any]) -> IssueForm:
    """Validate the submitted modal state.

    Raises :class:`ValidationGap` naming the block to highlight in the modal.
    """

    try:
        state = FormState.model_validate({"values": values})
    except ValidationError as exc:
        raise ValidationGap(TITLE_BLOCK_ID, "The form could not be read. Please try again.") from exc

    selected = _element(state, REPOSITORY_BLOCK_ID, REPOSITORY_ACTION_ID).selected_option
    repository = (selected.value if selected else "").strip()
    if not repository:
        raise ValidationGap(REPOSITORY_BLOCK_ID, "Select a repository.")
    if not _REPOSITORY_NAME.match(repository):
        raise ValidationGap(REPOSITORY_BLOCK_ID, "Repository name is not valid.")

    title = (_element(state, TITLE_BLOCK_ID, TITLE_ACTION_ID).value or "").strip()
    if not title:
        raise ValidationGap(TITLE_BLOCK_ID, "Title is required.")
    if "\n" in title or "\r" in title:
        raise ValidationGap(TITLE_BLOCK_ID, "Title must be a single line.")

    body = _element(state, BODY_BLOCK_ID, BODY_ACTION_ID).value or ""
    return IssueForm(repository=repository, title=title, body=body)
