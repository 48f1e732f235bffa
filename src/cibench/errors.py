"""ci-bench errors."""


class CiBenchError(Exception):
    """Base exception for ci-bench failures."""


class ArgumentError(CiBenchError):
    """Raised when a command-line argument is malformed or missing."""


class DependencyMissingError(CiBenchError):
    """Raised when a required external tool is not installed."""


class AuthenticationRequiredError(CiBenchError):
    """Raised when GitHub authentication is missing and login failed."""


class NotFoundError(CiBenchError):
    """Raised when the pull request does not exist or access is denied."""


class NoRunsError(CiBenchError):
    """Raised when the PR branch has no workflow runs."""


class NoJobsError(CiBenchError):
    """Raised when the sampled runs of a workflow contain no jobs."""


class InvalidSelectionError(CiBenchError):
    """Raised when an interactive menu answer is non-numeric or out of range."""


class UnknownNameError(CiBenchError):
    """Raised when an explicitly requested name is not among the candidates.

    Attributes:
        name: The requested name
        options: Valid names the caller could have used
    """

    kind = "name"

    def __init__(self, name: str, options: list[str]) -> None:
        self.name = name
        self.options = list(options)
        super().__init__(f"{self.kind.capitalize()} not found: {name}")


class UnknownWorkflowError(UnknownNameError):
    """Raised when --workflow names a workflow with no runs on the branch."""

    kind = "workflow"


class UnknownJobError(UnknownNameError):
    """Raised when --job names a job absent from the sampled runs."""

    kind = "job"


class UnknownStepError(UnknownNameError):
    """Raised when --step names a step absent from the selected job."""

    kind = "step"
