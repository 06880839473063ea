"""User profile data model."""

from typing import Any

from pydantic import BaseModel


class UserProfile(BaseModel):
    """Authenticated GitHub user, fetched once per session."""

    login: str
    name: str | None = None
    avatar_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "UserProfile":
        """Create from GitHub REST API response."""
        return cls(
            login=data.get("login", ""),
            name=data.get("name"),
            avatar_url=data.get("avatar_url") or "",
        )

    @property
    def display_name(self) -> str:
        """Name to greet the user with, falling back to the login."""
        return self.name or self.login
