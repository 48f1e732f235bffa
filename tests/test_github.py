"""Tests for the gh CLI client."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cibench.errors import AuthenticationRequiredError, DependencyMissingError
from cibench.services.github import GhClient, GhError


def completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


class TestApi:
    """Tests for GhClient.api."""

    def test_returns_parsed_json(self) -> None:
        with patch(
            "cibench.services.github.subprocess.run", return_value=completed(stdout='{"a": 1}')
        ) as mock_run:
            assert GhClient().api("/repos/o/r/pulls/1") == {"a": 1}

        assert mock_run.call_args[0][0] == ["gh", "api", "/repos/o/r/pulls/1"]

    def test_custom_exec_and_timeout(self) -> None:
        with patch(
            "cibench.services.github.subprocess.run", return_value=completed(stdout="[]")
        ) as mock_run:
            GhClient(exec_path="/opt/gh", timeout=30).api("/x")

        assert mock_run.call_args[0][0][0] == "/opt/gh"
        assert mock_run.call_args[1]["timeout"] == 30

    def test_no_timeout_by_default(self) -> None:
        with patch(
            "cibench.services.github.subprocess.run", return_value=completed(stdout="{}")
        ) as mock_run:
            GhClient().api("/x")

        assert mock_run.call_args[1]["timeout"] is None

    def test_failure_carries_http_status(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run",
                return_value=completed(returncode=1, stderr="gh: Not Found (HTTP 404)"),
            ),
            pytest.raises(GhError, match="Not Found") as exc_info,
        ):
            GhClient().api("/repos/o/r/pulls/9")
        assert exc_info.value.status == 404

    def test_failure_without_status(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run",
                return_value=completed(returncode=1, stderr="network unreachable"),
            ),
            pytest.raises(GhError) as exc_info,
        ):
            GhClient().api("/x")
        assert exc_info.value.status is None

    def test_invalid_json(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run", return_value=completed(stdout="<html>")
            ),
            pytest.raises(GhError, match="Invalid JSON"),
        ):
            GhClient().api("/x")

    def test_timeout(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run",
                side_effect=subprocess.TimeoutExpired(cmd="gh", timeout=5),
            ),
            pytest.raises(GhError, match="timed out after 5 seconds"),
        ):
            GhClient(timeout=5).api("/x")


class TestToolchain:
    """Tests for installation and authentication checks."""

    def test_missing_executable(self) -> None:
        with (
            patch("cibench.services.github.subprocess.run", side_effect=FileNotFoundError()),
            pytest.raises(DependencyMissingError, match="GitHub CLI"),
        ):
            GhClient().ensure_installed()

    def test_is_authenticated(self) -> None:
        with patch("cibench.services.github.subprocess.run", return_value=completed()):
            assert GhClient().is_authenticated() is True
        with patch("cibench.services.github.subprocess.run", return_value=completed(1)):
            assert GhClient().is_authenticated() is False

    def test_authenticated_skips_login(self) -> None:
        with patch(
            "cibench.services.github.subprocess.run", return_value=completed()
        ) as mock_run:
            GhClient().ensure_authenticated()

        assert mock_run.call_count == 1
        assert mock_run.call_args[0][0] == ["gh", "auth", "status"]

    def test_login_attempted_when_unauthenticated(self) -> None:
        results = [completed(1), completed(0), completed(0)]
        with patch(
            "cibench.services.github.subprocess.run", side_effect=results
        ) as mock_run:
            GhClient().ensure_authenticated()

        commands = [c[0][0] for c in mock_run.call_args_list]
        assert commands == [
            ["gh", "auth", "status"],
            ["gh", "auth", "login"],
            ["gh", "auth", "status"],
        ]

    def test_failed_login_is_fatal(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run", side_effect=[completed(1), completed(1)]
            ),
            pytest.raises(AuthenticationRequiredError, match="login failed"),
        ):
            GhClient().ensure_authenticated()

    def test_still_unauthenticated_after_login(self) -> None:
        with (
            patch(
                "cibench.services.github.subprocess.run",
                side_effect=[completed(1), completed(0), completed(1)],
            ),
            pytest.raises(AuthenticationRequiredError),
        ):
            GhClient().ensure_authenticated()
