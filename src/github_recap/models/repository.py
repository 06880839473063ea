"""Repository data model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class Repository(BaseModel):
    """GitHub repository data."""

    name: str
    full_name: str = ""
    owner: str = ""
    stargazers_count: int = 0
    forks_count: int = 0
    language: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        """Create from GitHub REST API response."""
        full_name = data.get("full_name") or ""
        owner = (data.get("owner") or {}).get("login") or full_name.partition("/")[0]
        return cls(
            name=data.get("name", ""),
            full_name=full_name,
            owner=owner,
            stargazers_count=data.get("stargazers_count") or 0,
            forks_count=data.get("forks_count") or 0,
            language=data.get("language") or None,
            created_at=parse_datetime(data.get("created_at")),
        )


def parse_datetime(value: str | None) -> datetime | None:
    """Parse ISO datetime string."""
    if not value:
        return None
    try:
        # Handle ISO format with or without Z suffix
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
