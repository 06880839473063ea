"""GitHub Recap - A year in review of a user's GitHub activity.

This SDK authenticates through GitHub's OAuth web flow and summarizes:
- Repositories owned, collaborated on, or visible through organizations
- Commits authored this year, per repository and in total
- Stars, forks, and the languages the repositories are written in

Example usage:
    ```python
    from github_recap import GitHubRecap

    async with GitHubRecap(token="gho_xxx") as client:
        recap = await client.build_recap()
        print(f"Top language: {recap.stats.top_language}")
    ```
"""

from github_recap._version import version as __version__
from github_recap.aggregation import aggregate
from github_recap.auth import CredentialStore, TokenExchangeClient
from github_recap.config import Config
from github_recap.dashboard import Dashboard, ViewState
from github_recap.exceptions import (
    AuthError,
    AuthExchangeError,
    FetchError,
    GitHubAPIError,
    GitHubRecapError,
    PartialDataWarning,
)
from github_recap.models import (
    AggregatedStats,
    CommitCount,
    EventActivity,
    GitHubEvent,
    LanguageCount,
    Recap,
    Repository,
    UserProfile,
)
from github_recap.sdk import GitHubRecap

__all__ = [
    # Main SDK class
    "GitHubRecap",
    "aggregate",
    # Session and presentation
    "CredentialStore",
    "TokenExchangeClient",
    "Dashboard",
    "ViewState",
    # Configuration
    "Config",
    # Exceptions
    "GitHubRecapError",
    "AuthExchangeError",
    "GitHubAPIError",
    "AuthError",
    "FetchError",
    "PartialDataWarning",
    # Models
    "UserProfile",
    "Repository",
    "GitHubEvent",
    "EventActivity",
    "CommitCount",
    "LanguageCount",
    "AggregatedStats",
    "Recap",
]
