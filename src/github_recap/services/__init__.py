"""Services for GitHub data collection."""

from github_recap.services.activity_collector import ActivityCollector
from github_recap.services.github_rest_client import GitHubRestClient

__all__ = [
    "GitHubRestClient",
    "ActivityCollector",
]
