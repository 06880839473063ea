"""Activity collector service: commit fan-out and the event-stream cross-check."""

import asyncio
import logging
from datetime import datetime

from github_recap.exceptions import GitHubRecapError, PartialDataWarning
from github_recap.models.activity import CommitCount, EventActivity
from github_recap.models.repository import Repository
from github_recap.services.github_rest_client import GitHubRestClient

logger = logging.getLogger(__name__)


class ActivityCollector:
    """Collects the user's commit activity for the recap year."""

    def __init__(
        self,
        rest_client: GitHubRestClient,
        max_concurrency: int | None = None,
    ):
        self.rest_client = rest_client
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def collect_event_activity(
        self,
        login: str,
        since: datetime,
    ) -> EventActivity | None:
        """Read push commits from the public event stream.

        The stream only reaches back a few months, so this is diagnostic.
        Failures are logged and yield None.
        """
        logger.debug("Fetching public events for %s", login)
        try:
            activity = await self.rest_client.fetch_recent_events(login, since)
        except GitHubRecapError as e:
            logger.warning("Failed to fetch events for %s: %s", login, e)
            return None

        logger.info(
            "Events API found %d commits in %d recent events",
            activity.push_commits,
            activity.events_scanned,
        )
        return activity

    async def _count_repo(
        self,
        repo: Repository,
        author: str,
        since: datetime,
    ) -> CommitCount:
        try:
            if self._semaphore is None:
                return await self.rest_client.fetch_commit_count(
                    repo.owner, repo.name, author, since
                )
            async with self._semaphore:
                return await self.rest_client.fetch_commit_count(
                    repo.owner, repo.name, author, since
                )
        except Exception as e:
            logger.exception("Counting commits in %s failed", repo.full_name or repo.name)
            return CommitCount(repo=repo.name, count=0, complete=False, reason=str(e))

    async def collect_commit_counts(
        self,
        repos: list[Repository],
        author: str,
        since: datetime,
    ) -> tuple[dict[str, int], list[PartialDataWarning]]:
        """Count ``author``'s commits in every repository concurrently.

        Each repository is paged on its own task and returns its own result;
        the results are reduced into one map once every task has settled.

        Args:
            repos: Repositories to count
            author: GitHub login the commits must be authored by
            since: Only commits after this timestamp

        Returns:
            (repository name -> commit count for repositories with commits,
            warnings for repositories whose count is incomplete)
        """
        logger.info("Fetching commits from %d repositories...", len(repos))

        results = await asyncio.gather(
            *(self._count_repo(repo, author, since) for repo in repos)
        )

        counts: dict[str, int] = {}
        warnings: list[PartialDataWarning] = []
        for result in results:
            if not result.complete:
                warning = PartialDataWarning(result.repo, result.count, result.reason or "")
                logger.warning("%s", warning)
                warnings.append(warning)
            if result.count > 0:
                # Same-named repositories under different owners share a slot
                counts[result.repo] = counts.get(result.repo, 0) + result.count
                logger.info("%s: %d commits", result.repo, result.count)

        logger.info("Total commits found from all repos: %d", sum(counts.values()))
        return counts, warnings

    @staticmethod
    def cross_check(event_activity: EventActivity | None, total_commits: int) -> None:
        """Log when the event stream saw more commits than the repository walk."""
        if event_activity is None:
            return
        if event_activity.push_commits > total_commits:
            logger.warning(
                "Event stream reports %d recent commits but repositories only %d; "
                "some repositories may be missing from the count",
                event_activity.push_commits,
                total_commits,
            )
