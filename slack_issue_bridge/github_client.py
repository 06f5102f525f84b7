"""Minimal GitHub REST client used to list repositories and open issues."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

import httpx

from .config import DEFAULT_GITHUB_API_URL
from .errors import UpstreamCallError


GITHUB_API_VERSION = "2022-11-28"
REPOSITORIES_PER_PAGE = 100
MAX_REPOSITORY_PAGES = 10


@dataclass(frozen=True)
class IssueReference:
    """Identity of an issue created on GitHub."""

    repository: str
    number: int
    html_url: str


class GitHubClient:
    """Synchronous wrapper around the GitHub REST API for a single organisation."""

    def __init__(
        self,
        *,
        org: str,
        token: str | None = None,
        base_url: str = DEFAULT_GITHUB_API_URL,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a GitHub token must be provided.")
        self._org = org
        self._client = client or httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": GITHUB_API_VERSION,
            },
        )

    @property
    def org(self) -> str:
        return self._org

    def _request(self, operation: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise UpstreamCallError(operation, f"http_{status_code}", status_code) from exc
        except httpx.HTTPError as exc:
            raise UpstreamCallError(operation, exc.__class__.__name__) from exc
        return response

    def list_repositories(self) -> List[str]:
        """Return repository names of the organisation in the order GitHub lists them."""

        names: List[str] = []
        url: str | None = f"/orgs/{self._org}/repos"
        params: dict[str, Any] | None = {"per_page": REPOSITORIES_PER_PAGE}
        pages = 0
        while url and pages < MAX_REPOSITORY_PAGES:
            response = self._request("list_repositories", "GET", url, params=params)
            try:
                names.extend(repo["name"] for repo in response.json())
            except (ValueError, TypeError, KeyError) as exc:
                raise UpstreamCallError("list_repositories", "invalid_response") from exc
            pages += 1
            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            # the next link already carries the query string
            params = None
        return names

    def create_issue(self, *, repository: str, title: str, body: str) -> IssueReference:
        """Create an issue in ``repository`` and return its number and URL."""

        response = self._request(
            "create_issue",
            "POST",
            f"/repos/{self._org}/{repository}/issues",
            json={"title": title, "body": body},
        )
        try:
            payload = response.json()
            return IssueReference(
                repository=repository,
                number=int(payload["number"]),
                html_url=str(payload["html_url"]),
            )
        except (ValueError, TypeError, KeyError) as exc:
            raise UpstreamCallError("create_issue", "invalid_response") from exc

    def close(self) -> None:
        self._client.close()
