"""Block Kit builders for the create-issue modal."""

from __future__ import annotations

from typing import Dict, Iterable, List


CREATE_ISSUE_CALLBACK_ID = "create_github_issue"
ISSUE_MODAL_CALLBACK_ID = "create_github_issue_modal"

REPOSITORY_BLOCK_ID = "repo_name"
REPOSITORY_ACTION_ID = "repo_name"
TITLE_BLOCK_ID = "issue_title"
TITLE_ACTION_ID = "issue_title"
BODY_BLOCK_ID = "issue_body"
BODY_ACTION_ID = "issue_body"

MODAL_TITLE = "Create a GitHub issue"
MAX_ISSUE_TITLE_LENGTH = 256
MAX_OPTION_TEXT_LENGTH = 75
MAX_OPTIONS = 100


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _plain_text(text: str) -> Dict[str, object]:
    return {"type": "plain_text", "text": text}


def build_option(repository: str) -> Dict[str, object]:
    return {
        "text": _plain_text(_truncate(repository, MAX_OPTION_TEXT_LENGTH)),
        "value": repository,
    }


def build_repository_options(repositories: Iterable[str]) -> List[Dict[str, object]]:
    """Convert repository names to Slack options, keeping their order."""

    options: List[Dict[str, object]] = []
    for repository in repositories:
        if len(options) >= MAX_OPTIONS:
            break
        options.append(build_option(repository))
    return options


def build_placeholder_view() -> Dict[str, object]:
    """Empty modal opened straight away so the short-lived trigger id is not wasted."""

    return {
        "type": "modal",
        "callback_id": ISSUE_MODAL_CALLBACK_ID,
        "title": _plain_text(MODAL_TITLE),
        "submit": _plain_text("Submit"),
        "close": _plain_text("Cancel"),
        "blocks": [],
    }


def build_issue_modal(
    *,
    private_metadata: str,
    title: str,
    default_repository: str | None = None,
) -> Dict[str, object]:
    """Build the filled modal that replaces the placeholder."""

    repository_element: Dict[str, object] = {
        "type": "external_select",
        "action_id": REPOSITORY_ACTION_ID,
        "placeholder": _plain_text("Search repositories"),
        "min_query_length": 0,
    }
    if default_repository:
        repository_element["initial_option"] = build_option(default_repository)

    title_element: Dict[str, object] = {
        "type": "plain_text_input",
        "action_id": TITLE_ACTION_ID,
        "multiline": False,
        "max_length": MAX_ISSUE_TITLE_LENGTH,
    }
    if title:
        title_element["initial_value"] = title

    blocks: List[Dict[str, object]] = [
        {
            "type": "input",
            "block_id": REPOSITORY_BLOCK_ID,
            "label": _plain_text("Repository"),
            "element": repository_element,
        },
        {
            "type": "input",
            "block_id": TITLE_BLOCK_ID,
            "label": _plain_text("Title"),
            "element": title_element,
        },
        {
            "type": "input",
            "block_id": BODY_BLOCK_ID,
            "label": _plain_text("Description"),
            "optional": True,
            "element": {
                "type": "plain_text_input",
                "action_id": BODY_ACTION_ID,
                "multiline": True,
            },
        },
    ]
    view = build_placeholder_view()
    view["private_metadata"] = private_metadata
    view["blocks"] = blocks
    return view
