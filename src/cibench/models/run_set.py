"""Workflow runs found on a pull request branch."""

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field

from .github import WorkflowRun


class RunSet(BaseModel):
    """Deduplicated workflow runs of one branch, grouped by workflow name."""

    model_config = ConfigDict(frozen=True)

    runs: list[WorkflowRun] = Field(default_factory=list)

    @classmethod
    def from_runs(cls, runs: list[WorkflowRun]) -> "RunSet":
        """Build a RunSet, keeping the first occurrence of each run id."""
        unique: dict[int, WorkflowRun] = {}
        for run in runs:
            unique.setdefault(run.id, run)
        return cls(runs=list(unique.values()))

    def __len__(self) -> int:
        return len(self.runs)

    def workflow_names(self) -> list[str]:
        """Distinct workflow names, sorted."""
        return sorted({run.name for run in self.runs})

    def workflow_counts(self) -> dict[str, int]:
        """Number of runs per workflow name."""
        return dict(Counter(run.name for run in self.runs))

    def runs_for(self, workflow: str) -> list[WorkflowRun]:
        """Runs of ``workflow`` in ascending run-number order."""
        return sorted(
            (run for run in self.runs if run.name == workflow),
            key=lambda run: run.run_number,
        )
