"""Aggregation of fetched repositories and commit counts into yearly stats.

Everything here is a pure computation over data that has already been
fetched. Ties (top language, most active repository) go to whichever
candidate was encountered first in input order; callers should not read
any further meaning into the winner.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone

from github_recap.models.repository import Repository
from github_recap.models.stats import NO_VALUE, AggregatedStats, LanguageCount


def year_start(year: int) -> datetime:
    """Midnight UTC on January 1st of ``year``."""
    return datetime(year, 1, 1, tzinfo=timezone.utc)


def tally_languages(repos: Iterable[Repository]) -> dict[str, int]:
    """Count repositories per primary language, one vote per repository."""
    counts: dict[str, int] = {}
    for repo in repos:
        if repo.language:
            counts[repo.language] = counts.get(repo.language, 0) + 1
    return counts


def _first_max(counts: Mapping[str, int]) -> str | None:
    best = None
    for key, value in counts.items():
        if best is None or value > counts[best]:
            best = key
    return best


def _created_since(repo: Repository, start: datetime) -> bool:
    created = repo.created_at
    if created is None:
        return False
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created >= start


def aggregate(
    repos: list[Repository],
    commit_counts: Mapping[str, int],
    year: int,
) -> AggregatedStats:
    """Compute the year-in-review stats.

    Args:
        repos: All fetched repositories
        commit_counts: Repository name -> commits authored in ``year``
        year: Calendar year being summarized

    Returns:
        AggregatedStats for ``year``
    """
    start = year_start(year)

    # Repositories without commits contribute nothing to the per-repo ranking
    active = {name: count for name, count in commit_counts.items() if count > 0}

    languages = tally_languages(repos)
    # sorted() is stable, so equal counts keep first-encountered order
    ranked = sorted(languages.items(), key=lambda item: item[1], reverse=True)

    most_active = _first_max(active)

    return AggregatedStats(
        year=year,
        total_repos=len(repos),
        repos_created_this_year=sum(1 for r in repos if _created_since(r, start)),
        total_commits=sum(active.values()),
        total_stars=sum(r.stargazers_count for r in repos),
        total_forks=sum(r.forks_count for r in repos),
        top_language=_first_max(languages) or NO_VALUE,
        top3_languages=[
            LanguageCount(language=lang, count=count) for lang, count in ranked[:3]
        ],
        most_active_repo=most_active or NO_VALUE,
        most_active_repo_commit_count=active[most_active] if most_active else 0,
        distinct_language_count=len(languages),
    )
