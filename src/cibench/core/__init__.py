"""Core logic for ci-bench.

This package contains the pipeline stages:
- fetcher: Pull request, run and job retrieval through gh
- selector: Workflow/job/step narrowing (interactive or preset)
- timing: Per-run duration and delta computation
- report: Table and JSON rendering
"""

from .fetcher import fetch_jobs, fetch_pr_runs, fetch_pull_request, fetch_runs
from .report import format_delta, format_duration, render_report, report_to_dict
from .selector import (
    Chooser,
    MenuOption,
    PresetChooser,
    SelectionKind,
    TerminalChooser,
    filter_steps,
    resolve_selection,
)
from .timing import build_rows, collect_timings, compute_duration, selected_duration

__all__ = [
    "Chooser",
    "MenuOption",
    "PresetChooser",
    "SelectionKind",
    "TerminalChooser",
    "build_rows",
    "collect_timings",
    "compute_duration",
    "fetch_jobs",
    "fetch_pr_runs",
    "fetch_pull_request",
    "fetch_runs",
    "filter_steps",
    "format_delta",
    "format_duration",
    "render_report",
    "report_to_dict",
    "resolve_selection",
    "selected_duration",
]
