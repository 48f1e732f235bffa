"""Fetch pull request, workflow run and job data from GitHub."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from ..constants import JOBS_PER_PAGE, RUNS_PER_PAGE
from ..errors import NoRunsError, NotFoundError
from ..models import Job, PullRequest, RunSet, WorkflowRun
from ..services.github import GhClient, GhError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_list(data: Any, key: str, model: type[ModelT], endpoint: str) -> list[ModelT]:
    """Validate the ``key`` list of a listing response.

    Raises:
        GhError: If the response is not an object or an item does not validate
    """
    if not isinstance(data, dict):
        raise GhError(f"Unexpected response from {endpoint}")
    try:
        return [model.model_validate(item) for item in data.get(key) or []]
    except (TypeError, ValidationError) as e:
        raise GhError(f"Unexpected response from {endpoint}") from e


def fetch_pull_request(client: GhClient, repo: str, pr_number: int) -> PullRequest:
    """Look up the head branch and SHA of a pull request.

    Raises:
        NotFoundError: If the PR does not exist or cannot be accessed
    """
    try:
        data = client.api(f"/repos/{repo}/pulls/{pr_number}")
    except GhError as e:
        raise NotFoundError(f"Pull request #{pr_number} not found in {repo}: {e}") from e
    try:
        return PullRequest.from_api(data)
    except (KeyError, TypeError, AttributeError, ValidationError) as e:
        raise NotFoundError(f"Unexpected response for pull request #{pr_number}") from e


def fetch_runs(
    client: GhClient,
    repo: str,
    branch: str,
    per_page: int = RUNS_PER_PAGE,
) -> RunSet:
    """List workflow runs triggered on ``branch``, deduplicated by run id.

    Raises:
        GhError: If the listing request fails or its response does not validate
    """
    branch_param = quote(branch, safe="")
    endpoint = f"/repos/{repo}/actions/runs?branch={branch_param}&per_page={per_page}"
    runs = _parse_list(client.api(endpoint), "workflow_runs", WorkflowRun, endpoint)
    return RunSet.from_runs(runs)


def fetch_pr_runs(
    client: GhClient,
    repo: str,
    pr_number: int,
    per_page: int = RUNS_PER_PAGE,
) -> tuple[PullRequest, RunSet]:
    """Resolve a PR's head branch and list the workflow runs on it.

    Args:
        client: GitHub CLI client
        repo: Repository in owner/repo form
        pr_number: Pull request number
        per_page: Maximum number of runs to fetch

    Returns:
        Tuple of (pull request, runs on its head branch)

    Raises:
        NotFoundError: If the PR does not exist or cannot be accessed
        NoRunsError: If the PR branch has no workflow runs
        GhError: If the run listing fails
    """
    logger.info(f"Fetching PR #{pr_number} details...")
    pr = fetch_pull_request(client, repo, pr_number)
    logger.info(f"PR branch: {pr.head_ref}")

    logger.info("Fetching workflow runs...")
    run_set = fetch_runs(client, repo, pr.head_ref, per_page=per_page)
    if not run_set.runs:
        raise NoRunsError(f"No workflow runs found for PR #{pr_number}")
    return pr, run_set


def fetch_jobs(client: GhClient, repo: str, run_id: int) -> list[Job]:
    """List the jobs (with their steps) of one workflow run.

    Raises:
        GhError: If the request fails or its response does not validate
    """
    endpoint = f"/repos/{repo}/actions/runs/{run_id}/jobs?per_page={JOBS_PER_PAGE}"
    return _parse_list(client.api(endpoint), "jobs", Job, endpoint)
