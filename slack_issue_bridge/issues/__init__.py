"""Message shortcut to GitHub issue flow."""

from .draft import IssueDraft, build_issue_draft, suggest_title
from .handlers import (
    handle_create_issue_shortcut,
    handle_issue_submission,
    handle_repository_options,
)
from .modal import (
    CREATE_ISSUE_CALLBACK_ID,
    ISSUE_MODAL_CALLBACK_ID,
    REPOSITORY_ACTION_ID,
    build_issue_modal,
    build_placeholder_view,
    build_repository_options,
)
from .options import filter_repositories, resolve_default_repository
from .payloads import IssueForm, MessageShortcut, parse_issue_form, resolve_thread_anchor
from .token import CorrelationToken, OriginChannel, decode_token, encode_token

__all__ = [
    "CREATE_ISSUE_CALLBACK_ID",
    "ISSUE_MODAL_CALLBACK_ID",
    "REPOSITORY_ACTION_ID",
    "CorrelationToken",
    "OriginChannel",
    "encode_token",
    "decode_token",
    "IssueDraft",
    "IssueForm",
    "MessageShortcut",
    "build_issue_draft",
    "build_issue_modal",
    "build_placeholder_view",
    "build_repository_options",
    "filter_repositories",
    "parse_issue_form",
    "resolve_default_repository",
    "resolve_thread_anchor",
    "suggest_title",
    "handle_create_issue_shortcut",
    "handle_issue_submission",
    "handle_repository_options",
]
