"""Output formatting for ci-bench."""

import json
from dataclasses import dataclass, field
from typing import Any

from rich.console import Console
from rich.markup import escape


@dataclass
class OutputContext:
    """Context for output formatting.

    Results go to ``console`` (stdout) so the report can be piped; menus
    and errors go to ``err_console``.
    """

    console: Console = field(default_factory=Console)
    err_console: Console = field(default_factory=lambda: Console(stderr=True))
    json_mode: bool = False

    def line(self, text: str = "") -> None:
        """Print a literal report line, without markup or wrapping."""
        if not self.json_mode:
            self.console.print(text, markup=False, highlight=False, soft_wrap=True, emoji=False)

    def print_json(self, data: dict[str, Any]) -> None:
        """Print JSON data."""
        if self.json_mode:
            print(json.dumps(data, indent=2, default=str))

    def error(self, message: str) -> None:
        """Print error on the error stream, in every output mode."""
        self.err_console.print(
            f"[red]Error: {escape(message)}[/red]", highlight=False, soft_wrap=True
        )

    def hint(self, message: str) -> None:
        """Print an auxiliary message on the error stream."""
        self.err_console.print(message, markup=False, highlight=False, soft_wrap=True)

