"""Output handlers for GitHub Recap."""

from github_recap.output.console import Console
from github_recap.output.json_writer import build_report, write_json_report

__all__ = [
    "build_report",
    "write_json_report",
    "Console",
]
