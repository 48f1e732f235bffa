"""GitHub CLI integration for ci-bench."""

import json
import logging
import re
import subprocess
from typing import Any

from ..errors import AuthenticationRequiredError, DependencyMissingError

logger = logging.getLogger(__name__)

_HTTP_STATUS_RE = re.compile(r"HTTP (\d{3})")


class GhError(Exception):
    """gh invocation failed.

    Attributes:
        status: HTTP status reported by ``gh api``, if any
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class GhClient:
    """Thin wrapper around the ``gh`` executable.

    Args:
        exec_path: Path to gh executable
        timeout: Optional per-call timeout in seconds (None: wait indefinitely)
    """

    def __init__(self, exec_path: str = "gh", timeout: int | None = None) -> None:
        self.exec_path = exec_path
        self.timeout = timeout

    def _run(self, args: list[str]) -> subprocess.CompletedProcess[str]:
        cmd = [self.exec_path, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GhError(f"gh timed out after {self.timeout} seconds") from e
        except FileNotFoundError:
            raise DependencyMissingError(
                f"GitHub CLI ({self.exec_path}) is required but not installed"
            ) from None

    def ensure_installed(self) -> None:
        """Check that gh can be executed.

        Raises:
            DependencyMissingError: If the executable is not found
        """
        self._run(["--version"])

    def is_authenticated(self) -> bool:
        """Return True if ``gh auth status`` reports a logged-in account."""
        return self._run(["auth", "status"]).returncode == 0

    def login(self) -> None:
        """Run the interactive ``gh auth login`` flow on the current terminal.

        Raises:
            AuthenticationRequiredError: If login fails
        """
        try:
            result = subprocess.run([self.exec_path, "auth", "login"])
        except FileNotFoundError:
            raise DependencyMissingError(
                f"GitHub CLI ({self.exec_path}) is required but not installed"
            ) from None
        if result.returncode != 0:
            raise AuthenticationRequiredError("GitHub login failed")

    def ensure_authenticated(self) -> None:
        """Log in interactively if needed.

        Raises:
            AuthenticationRequiredError: If still unauthenticated after login
        """
        if self.is_authenticated():
            return
        logger.info("Not logged in to GitHub. Starting login...")
        self.login()
        if not self.is_authenticated():
            raise AuthenticationRequiredError("GitHub authentication required")

    def api(self, endpoint: str) -> Any:
        """Call ``gh api`` and return the parsed JSON response.

        Args:
            endpoint: API path, e.g. "/repos/owner/repo/pulls/1"

        Returns:
            Decoded JSON body

        Raises:
            GhError: If gh exits non-zero or returns invalid JSON
        """
        result = self._run(["api", endpoint])
        if result.returncode != 0:
            stderr = result.stderr.strip()
            match = _HTTP_STATUS_RE.search(stderr)
            raise GhError(
                f"gh api {endpoint} failed: {stderr or f'exit code {result.returncode}'}",
                status=int(match.group(1)) if match else None,
            )
        try:
            return json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise GhError(f"Invalid JSON from gh api {endpoint}: {e}") from e
