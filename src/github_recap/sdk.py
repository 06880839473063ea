"""GitHub Recap SDK - High-level API for building a user's year in review."""

import logging
from datetime import datetime, timezone

import httpx

from github_recap.aggregation import aggregate, year_start
from github_recap.config import Config, get_config
from github_recap.exceptions import GitHubRecapError, PartialDataWarning
from github_recap.models.activity import EventActivity
from github_recap.models.repository import Repository
from github_recap.models.stats import Recap
from github_recap.models.user import UserProfile
from github_recap.services.activity_collector import ActivityCollector
from github_recap.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class GitHubRecap:
    """High-level SDK for a GitHub "year in review".

    Example usage:
        ```python
        from github_recap import GitHubRecap

        async with GitHubRecap(token="gho_xxx") as client:
            recap = await client.build_recap()
            print(f"{recap.stats.total_commits} commits in {recap.stats.year}")
        ```

    Args:
        token: OAuth access token of the user being summarized
        config: Configuration (defaults to the global one)
        transport: Optional httpx transport, mostly for tests
    """

    def __init__(
        self,
        token: str,
        config: Config | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config or get_config()
        self._token = token
        self._transport = transport
        self._rest_client: GitHubRestClient | None = None
        self._initialized = False

    async def __aenter__(self) -> "GitHubRecap":
        """Async context manager entry."""
        await self._initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def _initialize(self) -> None:
        """Initialize clients."""
        if self._initialized:
            return

        self._rest_client = GitHubRestClient(
            self._token,
            config=self._config,
            transport=self._transport,
        )
        self._initialized = True
        logger.debug("GitHubRecap initialized")

    async def close(self) -> None:
        """Close all HTTP connections."""
        if self._rest_client:
            await self._rest_client.close()
        self._initialized = False
        logger.debug("GitHubRecap closed")

    def _ensure_initialized(self) -> None:
        """Ensure the client is initialized."""
        if not self._initialized:
            raise GitHubRecapError(
                "Client not initialized. Use 'async with GitHubRecap(...) as client:'"
            )

    def _collector(self) -> ActivityCollector:
        return ActivityCollector(
            self._rest_client,
            max_concurrency=self._config.max_concurrency,
        )

    async def get_profile(self) -> UserProfile:
        """Get the authenticated user's profile.

        Raises:
            AuthError: If the token is rejected
            FetchError: On any other failure
        """
        self._ensure_initialized()
        logger.info("Fetching user profile")
        return await self._rest_client.fetch_user()

    async def get_repositories(self) -> list[Repository]:
        """Get all repositories visible to the user (capped by config)."""
        self._ensure_initialized()
        logger.info("Fetching repositories")
        return await self._rest_client.fetch_all_repositories()

    async def get_event_activity(self, login: str, year: int) -> EventActivity | None:
        """Get the push-commit signal from the public event stream."""
        self._ensure_initialized()
        return await self._collector().collect_event_activity(login, year_start(year))

    async def get_commit_counts(
        self,
        repos: list[Repository],
        login: str,
        year: int,
    ) -> tuple[dict[str, int], list[PartialDataWarning]]:
        """Count the user's commits per repository since January 1st of ``year``."""
        self._ensure_initialized()
        return await self._collector().collect_commit_counts(
            repos, login, year_start(year)
        )

    async def build_recap(self, year: int | None = None) -> Recap:
        """Fetch everything and aggregate it into a Recap.

        Args:
            year: Calendar year to summarize (defaults to the current UTC year)

        Returns:
            Recap with the profile, aggregated stats and any partial-data warnings

        Raises:
            AuthError: If GitHub rejects the token
            FetchError: If the profile or repository listing cannot be fetched
        """
        self._ensure_initialized()
        year = year or datetime.now(timezone.utc).year

        profile = await self.get_profile()
        repos = await self.get_repositories()

        event_activity = await self.get_event_activity(profile.login, year)
        commit_counts, warnings = await self.get_commit_counts(
            repos, profile.login, year
        )

        stats = aggregate(repos, commit_counts, year)
        ActivityCollector.cross_check(event_activity, stats.total_commits)

        logger.info("Recap complete for %s", profile.login)

        return Recap(
            profile=profile,
            stats=stats,
            event_activity=event_activity,
            warnings=[str(w) for w in warnings],
            generated_at=datetime.now(timezone.utc),
        )
