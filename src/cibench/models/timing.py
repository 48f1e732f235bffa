"""Timing row model for the duration report."""

import datetime

from pydantic import BaseModel, ConfigDict, Field


class TimingRow(BaseModel):
    """Duration of the selected job or step in one run.

    Attributes:
        run_number: Workflow run number
        short_sha: Abbreviated head commit SHA
        date: Calendar date the run was created
        duration: Elapsed seconds, None when not applicable
        delta: Seconds relative to the nearest earlier valid duration,
            None for the first valid row and for not-applicable rows
        message: First line of the commit message, truncated
    """

    model_config = ConfigDict(frozen=True)

    run_number: int
    short_sha: str
    date: datetime.date
    duration: int | None = Field(default=None, description="Elapsed seconds")
    delta: int | None = Field(default=None, description="Change from previous valid duration")
    message: str = ""
