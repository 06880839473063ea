"""Year-in-review statistics models."""

from datetime import datetime

from pydantic import BaseModel, Field

from github_recap.models.activity import EventActivity
from github_recap.models.user import UserProfile

NO_VALUE = "None"


class LanguageCount(BaseModel):
    """Number of repositories whose primary language is ``language``."""

    language: str
    count: int


class AggregatedStats(BaseModel):
    """Summary statistics for one calendar year."""

    year: int
    total_repos: int = 0
    repos_created_this_year: int = 0
    total_commits: int = 0
    total_stars: int = 0
    total_forks: int = 0
    top_language: str = NO_VALUE
    top3_languages: list[LanguageCount] = Field(default_factory=list)
    most_active_repo: str = NO_VALUE
    most_active_repo_commit_count: int = 0
    distinct_language_count: int = 0


class Recap(BaseModel):
    """Everything the dashboard needs to render the results view."""

    profile: UserProfile
    stats: AggregatedStats
    event_activity: EventActivity | None = None
    warnings: list[str] = Field(default_factory=list)
    generated_at: datetime
