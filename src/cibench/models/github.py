"""Models for GitHub Actions API payloads."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PullRequest(BaseModel):
    """Pull request head, as needed to find its workflow runs.

    Attributes:
        number: PR number
        head_ref: Name of the PR's head branch
        head_sha: Full SHA of the PR's head commit
    """

    model_config = ConfigDict(frozen=True)

    number: int
    head_ref: str
    head_sha: str

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequest":
        """Build from a ``/repos/{repo}/pulls/{n}`` response."""
        head = data.get("head") or {}
        return cls(number=data["number"], head_ref=head["ref"], head_sha=head["sha"])


class HeadCommit(BaseModel):
    """Commit that triggered a workflow run."""

    model_config = ConfigDict(frozen=True)

    message: str = ""


class WorkflowRun(BaseModel):
    """One execution of a workflow.

    Attributes:
        id: Run identifier, unique across the repository
        run_number: Per-workflow sequence number, used for ordering
        name: Workflow name (e.g., "CI")
        head_sha: Full SHA of the commit the run was triggered for
        created_at: Run creation time (UTC)
        head_commit: Triggering commit, absent for some event types
    """

    model_config = ConfigDict(frozen=True)

    id: int
    run_number: int
    name: str
    head_sha: str
    created_at: datetime
    head_commit: HeadCommit | None = None

    @property
    def message(self) -> str:
        """Commit message of the triggering commit, empty if unknown."""
        return self.head_commit.message if self.head_commit else ""


class JobStep(BaseModel):
    """Step within a job. Timestamps are None until the step has run."""

    model_config = ConfigDict(frozen=True)

    name: str
    started_at: datetime | None = None
    completed_at: datetime | None = None


class Job(BaseModel):
    """Job within a workflow run."""

    model_config = ConfigDict(frozen=True)

    name: str
    started_at: datetime | None = None
    completed_at: datetime | None = None
    steps: list[JobStep] = Field(default_factory=list)

    def find_step(self, name: str) -> JobStep | None:
        """Return the first step named exactly ``name``."""
        return next((s for s in self.steps if s.name == name), None)
