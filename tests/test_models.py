"""Tests for data models."""

from datetime import datetime, timezone

from github_recap.models.activity import CommitCount, EventType, GitHubEvent
from github_recap.models.repository import Repository
from github_recap.models.user import UserProfile


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_from_api(self):
        """Test creating UserProfile from API response."""
        api_data = {
            "login": "testuser",
            "name": "Test User",
            "avatar_url": "https://github.com/avatar.png",
            "public_repos": 10,
        }

        profile = UserProfile.from_api(api_data)

        assert profile.login == "testuser"
        assert profile.name == "Test User"
        assert profile.avatar_url == "https://github.com/avatar.png"
        assert profile.display_name == "Test User"

    def test_display_name_falls_back_to_login(self):
        """Test that users without a name are greeted by login."""
        profile = UserProfile.from_api({"login": "minimal", "avatar_url": None})

        assert profile.name is None
        assert profile.avatar_url == ""
        assert profile.display_name == "minimal"


class TestRepository:
    """Tests for Repository model."""

    def test_from_api(self):
        """Test creating Repository from API response."""
        api_data = {
            "name": "hello-world",
            "full_name": "octocat/hello-world",
            "owner": {"login": "octocat"},
            "language": "Go",
            "stargazers_count": 42,
            "forks_count": 7,
            "created_at": "2025-02-03T04:05:06Z",
        }

        repo = Repository.from_api(api_data)

        assert repo.name == "hello-world"
        assert repo.owner == "octocat"
        assert repo.language == "Go"
        assert repo.stargazers_count == 42
        assert repo.forks_count == 7
        assert repo.created_at == datetime(2025, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

    def test_from_api_missing_fields(self):
        """Test that missing counts default to zero and owner comes from full_name."""
        repo = Repository.from_api(
            {
                "name": "bare",
                "full_name": "someorg/bare",
                "language": "",
                "stargazers_count": None,
            }
        )

        assert repo.owner == "someorg"
        assert repo.language is None
        assert repo.stargazers_count == 0
        assert repo.forks_count == 0
        assert repo.created_at is None

    def test_invalid_created_at(self):
        """Test that an unparseable timestamp is dropped."""
        repo = Repository.from_api({"name": "x", "created_at": "not-a-date"})
        assert repo.created_at is None


class TestGitHubEvent:
    """Tests for GitHubEvent model."""

    def test_push_event_commit_count(self):
        """Test counting commits in a PushEvent payload."""
        event = GitHubEvent.from_api(
            {
                "id": 123,
                "type": "PushEvent",
                "repo": {"name": "octocat/hello-world"},
                "created_at": "2025-06-01T12:00:00Z",
                "payload": {"commits": [{"sha": "a"}, {"sha": "b"}]},
            }
        )

        assert event.id == "123"
        assert event.event_type == EventType.PUSH
        assert event.repo == "octocat/hello-world"
        assert event.commit_count == 2

    def test_other_events_have_no_commits(self):
        """Test that non-push events never count commits."""
        event = GitHubEvent.from_api(
            {
                "id": "1",
                "type": "WatchEvent",
                "created_at": "2025-06-01T12:00:00Z",
                "payload": {"commits": [{"sha": "a"}]},
            }
        )

        assert event.event_type == EventType.OTHER
        assert event.commit_count == 0


class TestCommitCount:
    """Tests for CommitCount model."""

    def test_defaults_to_complete(self):
        result = CommitCount(repo="a", count=3)
        assert result.complete is True
        assert result.reason is None
