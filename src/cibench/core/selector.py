"""Narrow fetched runs down to one workflow, job and step.

Choices are made through a ``Chooser``: ``TerminalChooser`` shows numbered
menus and reads the answer from the terminal, ``PresetChooser`` answers
from names given on the command line and validates them. Candidate jobs
and steps are sampled from the first and last run of the workflow, which
approximates what existed across the PR's lifetime without fetching the
jobs of every run.
"""

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import typer
from rich.console import Console

from ..constants import (
    HIDDEN_STEP_NAMES,
    HIDDEN_STEP_PREFIXES,
    TOTAL_STEP_KEYWORD,
    TOTAL_STEP_LABEL,
)
from ..errors import (
    InvalidSelectionError,
    NoJobsError,
    UnknownJobError,
    UnknownNameError,
    UnknownStepError,
    UnknownWorkflowError,
)
from ..models import Job, RunSet, Selection

logger = logging.getLogger(__name__)

_MENU_ANSWER_RE = re.compile(r"[0-9]+")


class SelectionKind(str, Enum):
    """The three successive choices that make up a Selection."""

    WORKFLOW = "workflow"
    JOB = "job"
    STEP = "step"


@dataclass(frozen=True)
class MenuOption:
    """One choosable entry. ``value=None`` is the whole-job option."""

    value: str | None
    label: str


class Chooser(Protocol):
    """Picks one of the presented options and returns its 0-based index."""

    def present_options(self, kind: SelectionKind, options: list[MenuOption]) -> int: ...


def parse_menu_choice(answer: str, count: int) -> int:
    """Convert a 1-indexed menu answer to a 0-based index.

    Raises:
        InvalidSelectionError: If the answer is not a number in 1..count
    """
    answer = answer.strip()
    if not _MENU_ANSWER_RE.fullmatch(answer):
        raise InvalidSelectionError(f"Invalid selection: {answer!r}")
    choice = int(answer)
    if choice < 1 or choice > count:
        raise InvalidSelectionError(f"Selection out of range: {choice} (expected 1-{count})")
    return choice - 1


class TerminalChooser:
    """Numbered-menu chooser reading answers from the terminal."""

    def __init__(
        self,
        console: Console,
        prompt: Callable[[str], str] | None = None,
    ) -> None:
        self.console = console
        self._prompt = prompt or (
            lambda text: typer.prompt(text, default="", show_default=False, err=True)
        )

    def present_options(self, kind: SelectionKind, options: list[MenuOption]) -> int:
        title = f"Available {kind.value}s:"
        self.console.print()
        self.console.print(title, markup=False, highlight=False)
        self.console.print("-" * len(title), markup=False, highlight=False)
        for n, option in enumerate(options, start=1):
            self.console.print(f"  {n}. {option.label}", markup=False, highlight=False)
        self.console.print()

        index = parse_menu_choice(
            self._prompt(f"Select a {kind.value} (1-{len(options)})"), len(options)
        )
        chosen = options[index]
        if chosen.value is None:
            logger.info("Selected: Total job time")
        else:
            logger.info(f"Selected {kind.value}: {chosen.value}")
        return index


_UNKNOWN_ERRORS: dict[SelectionKind, type[UnknownNameError]] = {
    SelectionKind.WORKFLOW: UnknownWorkflowError,
    SelectionKind.JOB: UnknownJobError,
    SelectionKind.STEP: UnknownStepError,
}


class PresetChooser:
    """Non-interactive chooser answering from pre-supplied names.

    For steps, the keyword "total" picks the whole-job option.
    """

    def __init__(self, workflow: str, job: str, step: str) -> None:
        self._presets = {
            SelectionKind.WORKFLOW: workflow,
            SelectionKind.JOB: job,
            SelectionKind.STEP: step,
        }

    def present_options(self, kind: SelectionKind, options: list[MenuOption]) -> int:
        wanted = self._presets[kind]
        target = None if kind is SelectionKind.STEP and wanted == TOTAL_STEP_KEYWORD else wanted
        for index, option in enumerate(options):
            if option.value == target:
                return index
        valid = [TOTAL_STEP_KEYWORD if o.value is None else o.value for o in options]
        raise _UNKNOWN_ERRORS[kind](wanted, valid)


def is_visible_step(name: str) -> bool:
    """Return False for platform bookkeeping steps (setup, teardown, checkout, cleanup)."""
    return name not in HIDDEN_STEP_NAMES and not name.startswith(HIDDEN_STEP_PREFIXES)


def filter_steps(names: Iterable[str]) -> list[str]:
    """Drop bookkeeping steps, keeping the order of the rest."""
    return [name for name in names if is_visible_step(name)]


def job_candidates(*job_lists: list[Job]) -> list[str]:
    """Sorted union of job names across the given job listings."""
    return sorted({job.name for jobs in job_lists for job in jobs})


def step_candidates(job_name: str, *job_lists: list[Job]) -> list[str]:
    """Sorted union of visible step names of ``job_name`` across the listings."""
    names: set[str] = set()
    for jobs in job_lists:
        for job in jobs:
            if job.name == job_name:
                names.update(step.name for step in job.steps)
    return sorted(filter_steps(names))


def resolve_selection(
    run_set: RunSet,
    chooser: Chooser,
    fetch_jobs: Callable[[int], list[Job]],
) -> Selection:
    """Choose workflow, job and step.

    Args:
        run_set: Runs found on the PR branch
        chooser: Source of the three choices
        fetch_jobs: Returns the jobs of a run, given its id

    Returns:
        The resolved Selection

    Raises:
        UnknownWorkflowError, UnknownJobError, UnknownStepError: From PresetChooser
        InvalidSelectionError: From TerminalChooser
        NoJobsError: If the sampled runs contain no jobs
    """
    counts = run_set.workflow_counts()
    workflows = run_set.workflow_names()
    workflow_options = [MenuOption(name, f"{name} ({counts[name]} runs)") for name in workflows]
    workflow = workflows[chooser.present_options(SelectionKind.WORKFLOW, workflow_options)]

    runs = run_set.runs_for(workflow)
    logger.info(f"Found {len(runs)} run(s) for workflow '{workflow}'")

    logger.info("Fetching job information...")
    first_jobs = fetch_jobs(runs[0].id)
    last_jobs = fetch_jobs(runs[-1].id) if len(runs) > 1 else first_jobs

    job_names = job_candidates(first_jobs, last_jobs)
    if not job_names:
        raise NoJobsError("No jobs found in workflow runs")
    job_options = [MenuOption(name, name) for name in job_names]
    job = job_names[chooser.present_options(SelectionKind.JOB, job_options)]

    step_options = [MenuOption(None, TOTAL_STEP_LABEL)] + [
        MenuOption(name, name) for name in step_candidates(job, first_jobs, last_jobs)
    ]
    step = step_options[chooser.present_options(SelectionKind.STEP, step_options)]

    return Selection(workflow=workflow, job=job, step=step.value)
