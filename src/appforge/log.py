"""Rich-backed logger producing the CLI's clack-style output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class Logger:
    """
    Thin wrapper around a Rich console.

    Core components take an optional ``Logger`` so the CLI, tests and library
    callers decide where output goes.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console(stderr=True)

    def info(self, message: str) -> None:
        self.console.print(f"[dim]│[/]  {escape(message)}")

    def detail(self, message: str) -> None:
        self.console.print(f"[dim]│    {escape(message)}[/]")

    def step(self, message: str) -> None:
        self.console.print(f"[bold green]◇[/]  {escape(message)}")

    def success(self, message: str) -> None:
        self.console.print(f"[bold cyan]●[/]  [green]{escape(message)}[/]")

    def warn(self, message: str) -> None:
        self.console.print(f"[bold yellow]▲[/]  [yellow]Warning:[/] {escape(message)}")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]Error:[/] {escape(message)}")


_default: Logger | None = None


def get_logger() -> Logger:
    """Return the process-wide default logger (writes to stderr)."""
    global _default
    if _default is None:
        _default = Logger()
    return _default
