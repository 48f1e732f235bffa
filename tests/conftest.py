"""Shared test fixtures for ci-bench tests."""

import json
import subprocess
from collections.abc import Callable, Generator
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

REPO = "redis/redis"
BRANCH = "feature/faster-build"
BASE_TIME = datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC)


def iso(offset_seconds: int) -> str:
    """UTC ISO-8601 timestamp, offset from BASE_TIME, in GitHub's format."""
    return (BASE_TIME + timedelta(seconds=offset_seconds)).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_payload(
    run_id: int, run_number: int, name: str = "CI", message: str = "Commit message"
) -> dict[str, Any]:
    return {
        "id": run_id,
        "run_number": run_number,
        "name": name,
        "head_sha": f"{run_id:07d}abcdef0123456789",
        "created_at": iso(run_number * 3600),
        "head_commit": {"message": message},
        "status": "completed",
    }


def job_payload(name: str, make_seconds: int) -> dict[str, Any]:
    """A job whose "make" step takes make_seconds, wrapped in bookkeeping steps."""
    return {
        "name": name,
        "started_at": iso(0),
        "completed_at": iso(make_seconds + 30),
        "steps": [
            {"name": "Set up job", "started_at": iso(0), "completed_at": iso(5)},
            {"name": "Run actions/checkout@v4", "started_at": iso(5), "completed_at": iso(10)},
            {"name": "make", "started_at": iso(10), "completed_at": iso(10 + make_seconds)},
            {
                "name": "Post Run actions/checkout@v4",
                "started_at": iso(10 + make_seconds),
                "completed_at": iso(20 + make_seconds),
            },
            {
                "name": "Complete job",
                "started_at": iso(20 + make_seconds),
                "completed_at": iso(30 + make_seconds),
            },
        ],
    }


def runs_endpoint(branch: str = BRANCH) -> str:
    return f"/repos/{REPO}/actions/runs?branch={branch.replace('/', '%2F')}&per_page=100"


def jobs_endpoint(run_id: int) -> str:
    return f"/repos/{REPO}/actions/runs/{run_id}/jobs?per_page=100"


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI test runner with a wide terminal so Rich does not wrap."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def api_payloads() -> dict[str, Any]:
    """gh api responses for redis/redis PR 1234.

    Three CI runs whose "make" step takes 12m11s, 11m45s and 10m30s,
    plus one Lint run. Tests may edit the dict before invoking the CLI.
    """
    return {
        f"/repos/{REPO}/pulls/1234": {
            "number": 1234,
            "head": {"ref": BRANCH, "sha": "3333333abcdef0123456789"},
        },
        runs_endpoint(): {
            "total_count": 4,
            "workflow_runs": [
                run_payload(103, 12, message="Cache build artifacts\n\nLonger body"),
                run_payload(101, 10, message="Initial build change"),
                run_payload(201, 7, name="Lint", message="Initial build change"),
                run_payload(102, 11, message="Trim includes"),
            ],
        },
        jobs_endpoint(101): {"jobs": [job_payload("build", 731), job_payload("test", 100)]},
        jobs_endpoint(102): {"jobs": [job_payload("build", 705), job_payload("test", 100)]},
        jobs_endpoint(103): {"jobs": [job_payload("build", 630), job_payload("test", 90)]},
        jobs_endpoint(201): {"jobs": [job_payload("ruff", 20)]},
    }


@pytest.fixture
def fake_gh(
    api_payloads: dict[str, Any],
) -> Generator[Callable[..., subprocess.CompletedProcess[str]], None, None]:
    """Patch subprocess.run so gh answers from api_payloads.

    Unknown endpoints fail like gh does for a 404. The mock is yielded so
    tests can inspect calls.
    """

    def fake_run(cmd: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        args = cmd[1:]
        if args == ["--version"]:
            return subprocess.CompletedProcess(cmd, 0, stdout="gh version 2.50.0", stderr="")
        if args[:2] == ["auth", "status"]:
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="Logged in")
        if args[0] == "api" and args[1] in api_payloads:
            body = json.dumps(api_payloads[args[1]])
            return subprocess.CompletedProcess(cmd, 0, stdout=body, stderr="")
        return subprocess.CompletedProcess(
            cmd, 1, stdout="", stderr="gh: Not Found (HTTP 404)"
        )

    with patch("cibench.services.github.subprocess.run", side_effect=fake_run) as mock_run:
        yield mock_run
