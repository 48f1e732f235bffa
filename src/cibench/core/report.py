"""Render timing rows as a fixed-width table or JSON document."""

from typing import Any

from ..constants import COLUMN_WIDTHS, NO_DELTA, NOT_APPLICABLE, RULE_WIDTH
from ..models import Selection, TimingRow


def format_duration(seconds: int) -> str:
    """Format seconds as "<m>m <s>s", or "<s>s" under a minute."""
    if seconds >= 60:
        return f"{seconds // 60}m {seconds % 60}s"
    return f"{seconds}s"


def format_delta(delta: int | None) -> str:
    """Format a delta with an explicit sign; zero is "0s", absent is "-"."""
    if delta is None:
        return NO_DELTA
    if delta > 0:
        return f"+{format_duration(delta)}"
    if delta < 0:
        return f"-{format_duration(-delta)}"
    return "0s"


def _columns(*cells: str) -> str:
    fixed = "".join(
        f"{cell:<{width}} " for cell, width in zip(cells[:-1], COLUMN_WIDTHS, strict=True)
    )
    return fixed + cells[-1]


def format_row(row: TimingRow) -> str:
    """Render one table line."""
    duration = NOT_APPLICABLE if row.duration is None else format_duration(row.duration)
    return _columns(
        f"#{row.run_number}",
        row.short_sha,
        row.date.isoformat(),
        duration,
        format_delta(row.delta),
        row.message,
    )


def render_report(selection: Selection, pr_number: int, rows: list[TimingRow]) -> list[str]:
    """Render the full report as a list of lines."""
    if selection.step is None:
        title = f'Job: "{selection.job}" / Total time'
    else:
        title = f'Job: "{selection.job}" / Step: "{selection.step}"'
    return [
        title,
        f"PR #{pr_number} - {len(rows)} runs analyzed",
        "",
        _columns("Run", "Commit", "Date", "Duration", "Delta", "Message"),
        "─" * RULE_WIDTH,
        *(format_row(row) for row in rows),
    ]


def report_to_dict(
    repo: str, pr_number: int, selection: Selection, rows: list[TimingRow]
) -> dict[str, Any]:
    """Machine-readable form of the report for --json."""
    return {
        "repo": repo,
        "pr": pr_number,
        "workflow": selection.workflow,
        "job": selection.job,
        "step": selection.step,
        "total": selection.is_total,
        "runs": [
            {
                **row.model_dump(mode="json"),
                "duration_display": (
                    NOT_APPLICABLE if row.duration is None else format_duration(row.duration)
                ),
                "delta_display": format_delta(row.delta),
            }
            for row in rows
        ],
    }
