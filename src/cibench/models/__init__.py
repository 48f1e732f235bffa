"""Pydantic data models for ci-bench.

This package defines the data structures used throughout ci-bench for:
- GitHub API payloads (PullRequest, WorkflowRun, Job, JobStep)
- The set of runs found on a PR branch (RunSet)
- The user's narrowing choice (Selection)
- Rendered report rows (TimingRow)

API models ignore unknown fields, so they validate the raw JSON that
``gh api`` returns without pre-processing.

Example:
    >>> from cibench.models import JobStep
    >>> JobStep.model_validate({"name": "make", "started_at": None, "completed_at": None})
"""

from .github import HeadCommit, Job, JobStep, PullRequest, WorkflowRun
from .run_set import RunSet
from .selection import Selection
from .timing import TimingRow

__all__ = [
    "HeadCommit",
    "Job",
    "JobStep",
    "PullRequest",
    "RunSet",
    "Selection",
    "TimingRow",
    "WorkflowRun",
]
