"""GitHub REST API client."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from github_recap._version import version as __version__
from github_recap.config import Config, get_config
from github_recap.exceptions import AuthError, FetchError
from github_recap.models.activity import CommitCount, EventActivity, GitHubEvent
from github_recap.models.repository import Repository
from github_recap.models.user import UserProfile
from github_recap.utils.pagination import PageCursor, collect_pages, iter_pages

logger = logging.getLogger(__name__)

REPO_AFFILIATION = "owner,collaborator,organization_member"
HTTP_CONFLICT = 409  # GitHub's answer for the commits of an empty repository


def format_since(since: datetime) -> str:
    """Render a timestamp the way the ``since`` query parameter expects it."""
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    return since.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class GitHubRestClient:
    """Async client for GitHub REST API, authenticated with a bearer token."""

    def __init__(
        self,
        token: str,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.config = config or get_config()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests."""
        return {
            "Authorization": f"token {self.token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": f"github-recap/{__version__}",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.config.github_api_url,
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubRestClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @retry(
        retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
        stop=stop_after_attempt(3),
        wait=wait_fixed(0.5),
        reraise=True,
    )
    async def _send(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        client = await self._get_client()
        return await client.request(method, endpoint, params=params)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make an API request, retrying transient transport failures.

        Error statuses are returned as-is; see ``get`` for the raising variant.
        """
        try:
            return await self._send(method, endpoint, params)
        except httpx.RequestError as e:
            raise FetchError(f"Could not reach GitHub ({endpoint}): {e}") from e

    async def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Make a GET request and return the JSON body.

        Raises:
            AuthError: GitHub rejected the token (401)
            FetchError: Any other non-success status
        """
        response = await self._request("GET", endpoint, params)

        if response.status_code == 401:
            raise AuthError(response_body=_json_or_none(response))
        if not response.is_success:
            body = _json_or_none(response) or {}
            raise FetchError(
                f"GitHub API error {response.status_code} for {endpoint}: "
                f"{body.get('message', response.reason_phrase)}",
                status_code=response.status_code,
                response_body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise FetchError(
                f"Malformed response for {endpoint}",
                status_code=response.status_code,
            ) from e

    # Recap endpoints

    async def fetch_user(self) -> UserProfile:
        """Get the authenticated user's profile."""
        data = await self.get("/user")
        return UserProfile.from_api(data)

    async def fetch_all_repositories(self) -> list[Repository]:
        """Get every repository the user owns, collaborates on or sees via an org.

        Pages are read until an empty one comes back or ``max_repo_pages`` is
        reached; anything past the cap is left out.
        """
        per_page = self.config.per_page

        async def fetch_page(page: int) -> list[dict[str, Any]]:
            return await self.get(
                "/user/repos",
                params={
                    "per_page": per_page,
                    "page": page,
                    "affiliation": REPO_AFFILIATION,
                    "sort": "updated",
                },
            )

        items, cursor = await collect_pages(fetch_page, self.config.max_repo_pages)
        if cursor.capped:
            logger.debug(
                "Stopped listing repositories at the %d page cap", cursor.pages_fetched
            )
        logger.debug("Found %d repositories", len(items))
        return [Repository.from_api(r) for r in items]

    async def fetch_recent_events(self, login: str, since: datetime) -> EventActivity:
        """Count push commits since ``since`` in the user's public event stream.

        Any error status simply ends the walk.
        """
        if since.tzinfo is None:
            since = since.replace(tzinfo=timezone.utc)
        per_page = self.config.per_page
        cursor = PageCursor(max_pages=self.config.max_event_pages)
        activity = EventActivity()

        async def fetch_page(page: int) -> list[dict[str, Any]]:
            response = await self._request(
                "GET",
                f"/users/{login}/events",
                params={"per_page": per_page, "page": page},
            )
            if not response.is_success:
                logger.debug("Events page %d returned %d", page, response.status_code)
                return []
            try:
                return response.json()
            except ValueError:
                logger.debug("Events page %d was not JSON", page)
                return []

        async for items in iter_pages(fetch_page, cursor):
            for item in items:
                event = GitHubEvent.from_api(item)
                activity.events_scanned += 1
                if event.created_at >= since:
                    activity.push_commits += event.commit_count

        activity.pages_fetched = cursor.pages_fetched
        return activity

    async def fetch_commit_count(
        self,
        owner: str,
        repo: str,
        author: str,
        since: datetime,
    ) -> CommitCount:
        """Count commits by ``author`` in ``owner/repo`` since ``since``.

        A 409 means the repository has no history and counts as 0. Any other
        error stops the walk and the count read so far is returned, flagged
        incomplete.
        """
        per_page = self.config.per_page
        delay = self.config.commit_page_delay
        cursor = PageCursor(max_pages=self.config.max_commit_pages)
        count = 0

        async def fetch_page(page: int) -> list[dict[str, Any]]:
            response = await self._request(
                "GET",
                f"/repos/{owner}/{repo}/commits",
                params={
                    "author": author,
                    "since": format_since(since),
                    "per_page": per_page,
                    "page": page,
                },
            )
            # Small delay to avoid rate limits
            await asyncio.sleep(delay)

            if response.status_code == HTTP_CONFLICT:
                return []
            if not response.is_success:
                raise FetchError(
                    f"status {response.status_code} on page {page}",
                    status_code=response.status_code,
                )
            try:
                body = response.json()
            except ValueError as e:
                raise FetchError(f"malformed page {page}") from e
            if not isinstance(body, list):
                raise FetchError(f"unexpected body on page {page}")
            return body

        try:
            async for items in iter_pages(fetch_page, cursor):
                count += len(items)
        except FetchError as e:
            return CommitCount(repo=repo, count=count, complete=False, reason=str(e))

        if cursor.capped:
            return CommitCount(
                repo=repo,
                count=count,
                complete=False,
                reason=f"page cap of {cursor.max_pages} reached",
            )
        return CommitCount(repo=repo, count=count)


def _json_or_none(response: httpx.Response) -> Optional[dict]:
    if not response.content:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
