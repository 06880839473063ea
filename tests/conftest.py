"""Pytest configuration and fixtures."""

import httpx
import pytest

from github_recap.config import Config, set_config

@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state before each test."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration with fast pagination and a temp credential file."""
    config = Config(
        client_id="test_client_id",
        redirect_uri="http://localhost:3000/",
        token_exchange_url="https://recap.example.com/api/github/token",
        github_api_url="https://api.github.com",
        credentials_path=tmp_path / "credentials.json",
        per_page=2,
        commit_page_delay=0,
    )
    set_config(config)
    return config


class FakeGitHub:
    """In-memory stand-in for the GitHub REST API, served via httpx.MockTransport.

    ``repo_pages``/``event_pages`` are lists of pages; ``commit_pages`` maps a
    repository name to its pages. A page may be an int instead of a list, in
    which case that status code is returned for it, or a ready-made
    ``httpx.Response``.
    """

    def __init__(self):
        self.user = {
            "login": "octocat",
            "name": "The Octocat",
            "avatar_url": "https://avatars.example.com/octocat.png",
        }
        self.user_status = 200
        self.repo_pages: list = []
        self.event_pages: list = []
        self.commit_pages: dict[str, list] = {}
        self.requests: list[httpx.Request] = []

    def add_repo(self, name, language=None, stars=0, forks=0, created_at=None, owner="octocat"):
        repo = {
            "name": name,
            "full_name": f"{owner}/{name}",
            "owner": {"login": owner},
            "language": language,
            "stargazers_count": stars,
            "forks_count": forks,
            "created_at": created_at or "2020-01-01T00:00:00Z",
        }
        if not self.repo_pages:
            self.repo_pages.append([])
        self.repo_pages[0].append(repo)
        return repo

    @staticmethod
    def _page(pages: list, request: httpx.Request) -> httpx.Response:
        page = int(request.url.params.get("page", "1"))
        if page > len(pages):
            return httpx.Response(200, json=[])
        content = pages[page - 1]
        if isinstance(content, httpx.Response):
            return content
        if isinstance(content, int):
            return httpx.Response(content, json={"message": "boom"})
        return httpx.Response(200, json=content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/user":
            if self.user_status != 200:
                return httpx.Response(self.user_status, json={"message": "Bad credentials"})
            return httpx.Response(200, json=self.user)
        if path == "/user/repos":
            return self._page(self.repo_pages, request)
        if path.startswith("/users/") and path.endswith("/events"):
            return self._page(self.event_pages, request)
        if path.startswith("/repos/") and path.endswith("/commits"):
            repo = path.split("/")[3]
            return self._page(self.commit_pages.get(repo, []), request)
        return httpx.Response(404, json={"message": "Not Found"})

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, suffix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]


def commits(n: int) -> list[dict]:
    """A page of ``n`` commit stubs."""
    return [{"sha": f"{i:040x}"} for i in range(n)]


@pytest.fixture
def fake_github():
    """A fresh fake GitHub API."""
    return FakeGitHub()
