"""Data models for GitHub Recap."""

from github_recap.models.activity import (
    CommitCount,
    EventActivity,
    EventType,
    GitHubEvent,
)
from github_recap.models.repository import Repository
from github_recap.models.stats import AggregatedStats, LanguageCount, Recap
from github_recap.models.user import UserProfile

__all__ = [
    "UserProfile",
    "Repository",
    "GitHubEvent",
    "EventType",
    "EventActivity",
    "CommitCount",
    "LanguageCount",
    "AggregatedStats",
    "Recap",
]
