"""Collect per-run durations of the selected job or step."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from ..constants import MESSAGE_MAX_LENGTH, SHORT_SHA_LENGTH
from ..models import Job, Selection, TimingRow, WorkflowRun
from ..services.github import GhError

logger = logging.getLogger(__name__)


def compute_duration(started_at: datetime | None, completed_at: datetime | None) -> int | None:
    """Elapsed whole seconds between two timestamps, None if either is missing."""
    if started_at is None or completed_at is None:
        return None
    return int((completed_at - started_at).total_seconds())


def selected_duration(jobs: list[Job], selection: Selection) -> int | None:
    """Duration of the selected job (or step within it), None if not applicable.

    Whole-job selections read the job's own timestamps and never look at
    steps, so a step named "total" cannot shadow them.
    """
    job = next((j for j in jobs if j.name == selection.job), None)
    if job is None:
        return None
    if selection.step is None:
        return compute_duration(job.started_at, job.completed_at)
    step = job.find_step(selection.step)
    if step is None:
        return None
    return compute_duration(step.started_at, step.completed_at)


def summarize_message(message: str) -> str:
    """First line of a commit message, truncated for the report."""
    lines = message.splitlines()
    return lines[0][:MESSAGE_MAX_LENGTH] if lines else ""


def build_rows(runs: list[WorkflowRun], durations: list[int | None]) -> list[TimingRow]:
    """Pair runs with durations and compute deltas.

    The delta baseline is the last valid duration seen, so a
    not-applicable row never breaks the comparison for the next one.
    """
    rows = []
    previous: int | None = None
    for run, duration in zip(runs, durations, strict=True):
        delta = None
        if duration is not None:
            if previous is not None:
                delta = duration - previous
            previous = duration
        rows.append(
            TimingRow(
                run_number=run.run_number,
                short_sha=run.head_sha[:SHORT_SHA_LENGTH],
                date=run.created_at.date(),
                duration=duration,
                delta=delta,
                message=summarize_message(run.message),
            )
        )
    return rows


def collect_timings(
    runs: list[WorkflowRun],
    selection: Selection,
    fetch_jobs: Callable[[int], list[Job]],
    concurrency: int = 1,
) -> list[TimingRow]:
    """Fetch every run's jobs and build the timing rows.

    Args:
        runs: Runs of the selected workflow
        selection: What to time
        fetch_jobs: Returns the jobs of a run, given its id
        concurrency: Maximum parallel fetches (1 = sequential)

    Returns:
        One row per run, in ascending run-number order
    """
    runs = sorted(runs, key=lambda run: run.run_number)

    def duration_for(run: WorkflowRun) -> int | None:
        try:
            jobs = fetch_jobs(run.id)
        except GhError as e:
            logger.debug(f"Run #{run.run_number}: could not fetch jobs: {e}")
            return None
        return selected_duration(jobs, selection)

    if concurrency > 1 and len(runs) > 1:
        with ThreadPoolExecutor(max_workers=concurrency) as executor:
            durations = list(executor.map(duration_for, runs))
    else:
        durations = [duration_for(run) for run in runs]

    return build_rows(runs, durations)
