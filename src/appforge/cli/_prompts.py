"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import sys
from typing import Any, TypeVar

from rich.console import Console
from rich.markup import escape
from simple_term_menu import TerminalMenu

from appforge.core.blueprints import Blueprint, validate_blueprint_name
from appforge.core.errors import ValidationError
from appforge.core.resolver import Question, QuestionKind

_console = Console()

T = TypeVar("T")


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _label(option: Any) -> str:
    return str(getattr(option, "label", option))


def _select(question: str, options: list[T], labels: list[str], default: int = 0) -> T:
    """Display a clack-style selection prompt and return the chosen option."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        cursor_index=default,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_index = menu.show()

    if raw_index is None:
        raise SystemExit(1)

    index: int = int(raw_index)
    selected = options[index]

    # Overwrite the ◆ question + │ bar that stayed on screen
    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i == index:
            _console.print(f"[dim]│[/]  [bold green]●[/] {lbl}")
        else:
            _console.print(f"[dim]│[/]    [dim s]{lbl}[/]")
    _print_bar()

    return selected


def _multi_select(
    question: str, options: list[T], labels: list[str], preselected: list[int]
) -> list[T]:
    """Display a clack-style checkbox prompt and return the chosen options in order."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        multi_select=True,
        multi_select_empty_ok=True,
        multi_select_select_on_accept=False,
        show_multi_select_hint=True,
        preselected_entries=preselected,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw = menu.show()

    if raw is None:
        raise SystemExit(1)

    chosen = sorted({raw} if isinstance(raw, int) else set(raw))

    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        mark = "[bold green]■[/]" if i in chosen else "[dim]□[/]"
        _console.print(f"[dim]│[/]  {mark} {lbl}")
    _print_bar()

    return [options[i] for i in chosen]


def _confirm(question: str, default: bool = True) -> bool:
    """Display a clack-style yes/no prompt."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    suffix = " [Y/n] " if default else " [y/N] "
    _console.print("[dim]│[/]  ", end="")
    answer = input(suffix).strip().lower()

    result = default if answer == "" else answer in ("y", "yes")

    display = "Yes" if result else "No"

    # Overwrite the ◆ question + │ bar + │ [Y/n] input line
    _clear_lines(3)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {display}")
    _print_bar()

    return result


def _text(question: str, default: str | None = None) -> str:
    """Display a clack-style free-text prompt. Empty input falls back to ``default``."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    hint = f" ({default}) " if default else " "
    _console.print("[dim]│[/]  ", end="")
    answer = input(hint).strip()
    if not answer and default:
        answer = default

    _clear_lines(3)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {escape(answer)}")
    _print_bar()

    return answer


def ask(question: Question, answers: Mapping[str, Any]) -> Any:
    """Prompt for one resolver question, using the widget that matches its kind."""
    default = question.default_for(answers)

    if question.kind == QuestionKind.CHOICE:
        options = list(question.options(answers))
        index = options.index(default) if default in options else 0
        return _select(question.message, options, [_label(o) for o in options], index)

    if question.kind == QuestionKind.MULTI_CHOICE:
        options = list(question.options(answers))
        defaults = set(default or ())
        preselected = [i for i, o in enumerate(options) if o in defaults]
        return _multi_select(question.message, options, [_label(o) for o in options], preselected)

    if question.kind == QuestionKind.BOOLEAN:
        return _confirm(question.message, default=bool(default))

    return _text(question.message, default)


def report_invalid(question: Question, error: ValidationError) -> None:
    """Show why an answer was rejected before the question is asked again."""
    report_invalid_message(f"{question.message}: {error}")


def show_answer(question: Question, value: Any) -> None:
    """Echo an answer supplied on the command line in the prompt style."""
    if isinstance(value, (list, tuple)):
        display = ", ".join(_label(v) for v in value) or "None"
    elif isinstance(value, bool):
        display = "Yes" if value else "No"
    else:
        display = _label(value)
    _console.print(f"[bold green]◇[/]  {question.message}")
    _console.print(f"[dim]│[/]  {escape(display)}")
    _print_bar()


def prompt_blueprint(blueprints: list[Blueprint]) -> Blueprint:
    """Prompt user to pick one of the saved blueprints."""
    labels = [f"{b.name} - {b.description}" if b.description else b.name for b in blueprints]
    return _select("Select a blueprint", blueprints, labels)


def prompt_use_blueprint() -> bool:
    return _confirm("Do you want to use a saved blueprint?", default=False)


def prompt_overwrite(path: Path) -> bool:
    return _confirm(f"Directory '{path}' already exists. Overwrite it?", default=False)


def prompt_save_blueprint() -> bool:
    return _confirm("Save this configuration as a blueprint?", default=False)


def prompt_blueprint_name(existing: list[str]) -> str:
    while True:
        try:
            return validate_blueprint_name(_text("Blueprint name"), existing)
        except ValidationError as e:
            report_invalid_message(str(e))


def prompt_description() -> str | None:
    return _text("Description (optional)") or None


def report_invalid_message(message: str) -> None:
    _console.print(f"[bold yellow]▲[/]  [yellow]{escape(message)}[/]")
    _print_bar()
