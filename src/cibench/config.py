"""Configuration management for ci-bench."""

import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .constants import RUNS_PER_PAGE
from .errors import ArgumentError

CONFIG_ENV_VAR = "CI_BENCH_CONFIG"


class GhConfig(BaseModel):
    """Configuration for the GitHub CLI integration."""

    exec: str = "gh"  # Path to gh executable
    timeout: int | None = Field(
        default=None, ge=1, description="Per-call timeout in seconds (None: no timeout)"
    )
    runs_per_page: int = Field(
        default=RUNS_PER_PAGE, ge=1, le=100, description="Workflow runs fetched per PR branch"
    )


class ReportConfig(BaseModel):
    """Configuration for timing collection."""

    concurrency: int = Field(default=1, ge=1, description="Parallel per-run job fetches")


class CiBenchConfig(BaseModel):
    """Root configuration for ci-bench."""

    gh: GhConfig = Field(default_factory=GhConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)


def default_config_path() -> Path:
    """Return the config path, honoring the CI_BENCH_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "ci-bench" / "config.toml"


def load_config(config_path: Path | None = None) -> CiBenchConfig:
    """Load config from a TOML file.

    Args:
        config_path: Path to config.toml (default: default_config_path())

    Returns:
        Loaded configuration, or defaults if the file doesn't exist

    Raises:
        ArgumentError: If the file is not valid TOML or fails validation
    """
    if config_path is None:
        config_path = default_config_path()
    if not config_path.exists():
        return CiBenchConfig()
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
        return CiBenchConfig.model_validate(data)
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        raise ArgumentError(f"Invalid config file {config_path}: {e}") from e
