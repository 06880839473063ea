"""Tests for the aggregation engine."""

from datetime import datetime, timezone

from github_recap.aggregation import aggregate, tally_languages, year_start
from github_recap.models.repository import Repository
from github_recap.models.stats import NO_VALUE

YEAR = 2025
THIS_YEAR = datetime(2025, 3, 1, tzinfo=timezone.utc)
LAST_YEAR = datetime(2024, 11, 1, tzinfo=timezone.utc)


def repo(name, language=None, stars=0, forks=0, created_at=LAST_YEAR):
    return Repository(
        name=name,
        full_name=f"octocat/{name}",
        owner="octocat",
        language=language,
        stargazers_count=stars,
        forks_count=forks,
        created_at=created_at,
    )


class TestAggregate:
    """Tests for aggregate()."""

    def test_two_go_repositories(self):
        """Test the basic scenario end to end."""
        repos = [
            repo("a", "Go", stars=5, forks=1, created_at=THIS_YEAR),
            repo("b", "Go", stars=2, forks=0, created_at=LAST_YEAR),
        ]

        stats = aggregate(repos, {"a": 10, "b": 3}, YEAR)

        assert stats.year == YEAR
        assert stats.total_repos == 2
        assert stats.repos_created_this_year == 1
        assert stats.total_commits == 13
        assert stats.total_stars == 7
        assert stats.total_forks == 1
        assert stats.top_language == "Go"
        assert stats.distinct_language_count == 1
        assert stats.most_active_repo == "a"
        assert stats.most_active_repo_commit_count == 10
        assert [(l.language, l.count) for l in stats.top3_languages] == [("Go", 2)]

    def test_empty_repository_list(self):
        """Test that no repositories yields sentinels and empty rankings."""
        stats = aggregate([], {}, YEAR)

        assert stats.total_repos == 0
        assert stats.total_commits == 0
        assert stats.top_language == NO_VALUE
        assert stats.top3_languages == []
        assert stats.most_active_repo == NO_VALUE
        assert stats.most_active_repo_commit_count == 0
        assert stats.distinct_language_count == 0

    def test_stars_and_forks_ignore_commit_activity(self):
        """Test that repositories without commits still count stars and forks."""
        repos = [repo("a", stars=3, forks=2), repo("b", stars=4, forks=5)]

        stats = aggregate(repos, {}, YEAR)

        assert stats.total_stars == 7
        assert stats.total_forks == 7
        assert stats.total_commits == 0
        assert stats.most_active_repo == NO_VALUE

    def test_zero_counts_are_dropped(self):
        """Test that repositories with zero commits never win most active."""
        stats = aggregate([repo("a"), repo("b")], {"a": 0, "b": 0}, YEAR)

        assert stats.total_commits == 0
        assert stats.most_active_repo == NO_VALUE

    def test_distinct_languages_skip_missing(self):
        """Test that repositories without a language are not tallied."""
        repos = [
            repo("a", "Python"),
            repo("b", None),
            repo("c", "Rust"),
            repo("d", "Python"),
            repo("e", ""),
        ]

        stats = aggregate(repos, {}, YEAR)

        assert stats.distinct_language_count == 2
        assert tally_languages(repos) == {"Python": 2, "Rust": 1}

    def test_top_three_languages_sorted_and_truncated(self):
        """Test ranking of languages by repository count."""
        repos = [
            repo("a", "C"),
            repo("b", "Go"),
            repo("c", "Go"),
            repo("d", "Rust"),
            repo("e", "Rust"),
            repo("f", "Rust"),
            repo("g", "Zig"),
        ]

        stats = aggregate(repos, {}, YEAR)

        assert stats.top_language == "Rust"
        assert [(l.language, l.count) for l in stats.top3_languages] == [
            ("Rust", 3),
            ("Go", 2),
            ("C", 1),
        ]

    def test_ties_keep_input_order(self):
        """Test that equal counts resolve to the first encountered candidate."""
        repos = [repo("a", "Ruby"), repo("b", "Elixir")]

        stats = aggregate(repos, {"b": 4, "a": 4}, YEAR)

        assert stats.top_language == "Ruby"
        assert stats.top3_languages[0].language == "Ruby"
        assert stats.most_active_repo == "b"

    def test_created_exactly_at_year_start_counts(self):
        """Test the inclusive January 1st boundary and naive timestamps."""
        repos = [
            repo("a", created_at=year_start(YEAR)),
            repo("b", created_at=datetime(2025, 1, 1)),
            repo("c", created_at=datetime(2024, 12, 31, 23, 59, tzinfo=timezone.utc)),
            repo("d", created_at=None),
        ]

        stats = aggregate(repos, {}, YEAR)

        assert stats.repos_created_this_year == 2

    def test_idempotent(self):
        """Test that the same input always produces the same output."""
        repos = [repo("a", "Go", stars=1), repo("b", "Python", forks=2)]
        counts = {"a": 2, "b": 5}

        assert aggregate(repos, counts, YEAR) == aggregate(repos, counts, YEAR)
