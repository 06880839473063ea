"""JSON output writer for recaps."""

import json
from pathlib import Path
from typing import Any

from github_recap.models.stats import Recap


def build_report(recap: Recap) -> dict[str, Any]:
    """Build a JSON-ready report from a recap."""
    stats = recap.stats
    report = {
        "username": recap.profile.login,
        "name": recap.profile.display_name,
        "avatar_url": recap.profile.avatar_url,
        "generated_at": recap.generated_at.isoformat(),
        "stats": stats.model_dump(),
        "warnings": list(recap.warnings),
    }
    if recap.event_activity is not None:
        report["event_activity"] = recap.event_activity.model_dump()
    return report


def write_json_report(report: dict[str, Any], output_path: Path) -> Path:
    """Write recap report to JSON file.

    Args:
        report: Report dictionary
        output_path: Output file path

    Returns:
        Path to written file
    """
    # Ensure parent directory exists
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Write JSON with pretty formatting
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False, default=str)

    return output_path
