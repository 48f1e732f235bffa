"""Selection model: what to time across runs."""

from pydantic import BaseModel, ConfigDict


class Selection(BaseModel):
    """Workflow, job and step chosen for the report.

    ``step=None`` means whole-job duration. Keeping the sentinel out of the
    string domain means a step literally named "total" stays selectable.
    """

    model_config = ConfigDict(frozen=True)

    workflow: str
    job: str
    step: str | None = None

    @property
    def is_total(self) -> bool:
        """True when timing the whole job rather than a single step."""
        return self.step is None
