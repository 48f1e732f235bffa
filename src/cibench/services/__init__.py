"""External service integrations for ci-bench.

This package provides interfaces to external tools:
- github: GitHub REST API access through the gh CLI
"""

from .github import GhClient, GhError

__all__ = [
    "GhClient",
    "GhError",
]
