"""Activity and event data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from github_recap.models.repository import parse_datetime


class EventType(str, Enum):
    """GitHub event types the recap looks at."""

    PUSH = "PushEvent"
    OTHER = "Other"


class GitHubEvent(BaseModel):
    """GitHub event from Events API."""

    id: str
    type: str
    repo: str
    created_at: datetime
    payload: dict = Field(default_factory=dict)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "GitHubEvent":
        """Create from GitHub Events API response."""
        return cls(
            id=str(data.get("id", "")),
            type=data.get("type", ""),
            repo=(data.get("repo") or {}).get("name", ""),
            created_at=parse_datetime(data.get("created_at"))
            or datetime.now(timezone.utc),
            payload=data.get("payload") or {},
        )

    @property
    def event_type(self) -> EventType:
        """Get typed event type."""
        try:
            return EventType(self.type)
        except ValueError:
            return EventType.OTHER

    @property
    def commit_count(self) -> int:
        """Number of commits carried by a push, 0 for every other event."""
        if self.event_type is not EventType.PUSH:
            return 0
        return len(self.payload.get("commits") or [])


class EventActivity(BaseModel):
    """Commit volume seen in the public event stream.

    The stream only covers a short trailing window, so this is a sanity
    check next to the per-repository commit counts, never a total.
    """

    events_scanned: int = 0
    pages_fetched: int = 0
    push_commits: int = 0


class CommitCount(BaseModel):
    """Commits authored by the user in one repository since a point in time."""

    model_config = ConfigDict(frozen=True)

    repo: str
    count: int = 0
    complete: bool = True
    reason: str | None = None  # why the count is partial
