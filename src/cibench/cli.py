"""ci-bench CLI: track GitHub Actions job/step durations across PR runs."""

import logging
import re
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from typer.core import TyperCommand

from cibench import __version__

from .config import load_config
from .core import (
    Chooser,
    PresetChooser,
    TerminalChooser,
    collect_timings,
    fetch_jobs,
    fetch_pr_runs,
    render_report,
    report_to_dict,
    resolve_selection,
)
from .errors import ArgumentError, CiBenchError, UnknownNameError
from .logging import configure_logging
from .models import Job
from .output import OutputContext
from .services import GhClient, GhError

logger = logging.getLogger(__name__)

_REPO_RE = re.compile(r"[^/]+/[^/]+")

# UsageError of whichever click build typer parses with (bundled or standalone).
_UsageError: type[Exception] = typer.BadParameter.__mro__[1]

EPILOG = """Examples:

  ci-bench --repo redis/redis --pr 1234 -i

  ci-bench --repo redis/redis --pr 1234 --workflow CI --job build --step make

  ci-bench --repo redis/redis --pr 1234 --workflow CI --job build --step total
"""


class CiBenchCommand(TyperCommand):
    """Command whose usage errors exit with status 1 instead of click's 2."""

    def make_context(
        self,
        info_name: str | None,
        args: list[str],
        parent: Any = None,
        **extra: Any,
    ) -> Any:
        try:
            return super().make_context(info_name, args, parent=parent, **extra)
        except _UsageError as e:
            e.exit_code = 1  # type: ignore[attr-defined]
            raise


def parse_repo(value: str) -> str:
    """Validate an owner/repo string.

    Raises:
        ArgumentError: If the value is not two non-empty segments split by one slash
    """
    if not _REPO_RE.fullmatch(value):
        raise ArgumentError("Invalid repo format. Expected: owner/repo")
    return value


def _repo_callback(value: str | None) -> str | None:
    if value is None:
        return value
    try:
        return parse_repo(value)
    except ArgumentError as e:
        raise typer.BadParameter(str(e)) from None


def _version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"ci-bench {__version__}")
        raise typer.Exit()


def make_chooser(
    console: Console,
    interactive: bool,
    workflow: str | None,
    job: str | None,
    step: str | None,
) -> Chooser:
    """Pick the selection strategy.

    Non-interactive mode needs all of workflow, job and step; anything
    less falls back to the interactive menus.
    """
    if not interactive and workflow and job and step:
        return PresetChooser(workflow, job, step)
    if not interactive and (workflow or job or step):
        logger.warning(
            "--workflow, --job and --step must all be given for non-interactive mode; "
            "ignoring them and prompting instead"
        )
    return TerminalChooser(console)


app = typer.Typer(
    name="ci-bench",
    help="Track GitHub Actions job/step durations across PR runs",
    add_completion=False,
)


@app.command(
    cls=CiBenchCommand,
    epilog=EPILOG,
    context_settings={"help_option_names": ["-h", "--help"]},
)
def main(
    repo: str = typer.Option(
        ...,
        "--repo",
        callback=_repo_callback,
        help="GitHub repository (e.g., facebook/react)",
    ),
    pr: int = typer.Option(..., "--pr", min=0, help="Pull request number"),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Interactive mode (prompt for workflow/job/step)",
    ),
    workflow: str | None = typer.Option(None, "--workflow", help='Workflow name (e.g., "CI")'),
    job: str | None = typer.Option(None, "--job", help='Job name (e.g., "test-ubuntu-latest")'),
    step: str | None = typer.Option(
        None, "--step", help='Step name, or "total" for total job time'
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        min=1,
        help="Parallel job fetches across runs (default: from config, 1)",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        exists=True,
        dir_okay=False,
        help="Config file (default: ~/.config/ci-bench/config.toml)",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in JSON format for automation",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v, -vv)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress progress output",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Analyze GitHub Actions CI runtimes across multiple PR runs.

    Tracks how code changes affect a specific job or step duration over time.
    """
    err_console = configure_logging(verbosity=verbose, quiet=quiet, no_color=no_color)
    ctx = OutputContext(
        console=Console(no_color=no_color),
        err_console=err_console,
        json_mode=json_output,
    )

    try:
        config = load_config(config_path)
        client = GhClient(exec_path=config.gh.exec, timeout=config.gh.timeout)
        client.ensure_installed()

        logger.info("Checking GitHub authentication...")
        client.ensure_authenticated()

        pull, run_set = fetch_pr_runs(client, repo, pr, per_page=config.gh.runs_per_page)

        def jobs_for(run_id: int) -> list[Job]:
            return fetch_jobs(client, repo, run_id)

        chooser = make_chooser(err_console, interactive, workflow, job, step)
        selection = resolve_selection(run_set, chooser, jobs_for)

        logger.info("Collecting timing data...")
        rows = collect_timings(
            run_set.runs_for(selection.workflow),
            selection,
            jobs_for,
            concurrency=concurrency or config.report.concurrency,
        )
    except UnknownNameError as e:
        ctx.hint(f"Available {e.kind}s: {', '.join(e.options)}")
        ctx.error(str(e))
        raise typer.Exit(1) from None
    except (CiBenchError, GhError) as e:
        ctx.error(str(e))
        raise typer.Exit(1) from None

    if ctx.json_mode:
        ctx.print_json(report_to_dict(repo, pull.number, selection, rows))
        return

    ctx.line()
    for line in render_report(selection, pull.number, rows):
        ctx.line(line)
    ctx.line()


if __name__ == "__main__":
    app()
