"""Configuration management for GitHub Recap."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_CREDENTIALS_PATH = Path.home() / ".config" / "github-recap" / "credentials.json"


def _int_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class Config:
    """Application configuration."""

    # OAuth app
    client_id: str | None = None
    redirect_uri: str = "http://localhost:3000/"
    authorize_url: str = "https://github.com/login/oauth/authorize"
    oauth_scope: str = "repo read:user"
    token_exchange_url: str = "http://localhost:8000/api/github/token"

    github_api_url: str = "https://api.github.com"
    credentials_path: Path = field(default_factory=lambda: DEFAULT_CREDENTIALS_PATH)

    # Pagination (safety caps, not correctness bounds)
    per_page: int = 100
    max_repo_pages: int = 10
    max_event_pages: int = 10
    max_commit_pages: int = 30

    # Throttling
    commit_page_delay: float = 0.05  # seconds between commit pages
    max_concurrency: int | None = None  # repositories counted at once

    # Timeouts
    request_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        credentials = os.getenv("GITHUB_RECAP_CREDENTIALS")

        return cls(
            client_id=os.getenv("GITHUB_RECAP_CLIENT_ID"),
            redirect_uri=os.getenv("GITHUB_RECAP_REDIRECT_URI", "http://localhost:3000/"),
            token_exchange_url=os.getenv(
                "GITHUB_RECAP_TOKEN_EXCHANGE_URL",
                "http://localhost:8000/api/github/token",
            ),
            github_api_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
            credentials_path=Path(credentials).expanduser()
            if credentials
            else DEFAULT_CREDENTIALS_PATH,
            max_repo_pages=_int_env("GITHUB_RECAP_MAX_REPO_PAGES", 10),
            max_event_pages=_int_env("GITHUB_RECAP_MAX_EVENT_PAGES", 10),
            max_commit_pages=_int_env("GITHUB_RECAP_MAX_COMMIT_PAGES", 30),
        )

    @property
    def is_configured(self) -> bool:
        """Check if an OAuth client id is configured."""
        return bool(self.client_id)


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
