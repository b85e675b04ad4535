"""Typer CLI application for appforge."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from typer import Argument, Exit, Option, Typer

import appforge
from appforge.cli import _prompts
from appforge.cli._summary import print_blueprint, print_blueprints, print_summary
from appforge.core.blueprints import Blueprint, BlueprintStore, validate_blueprint_name
from appforge.core.config import ProjectConfig, validate_project_name
from appforge.core.errors import AppforgeError, NotFoundError, ValidationError
from appforge.core.materializer import Materializer
from appforge.core.planner import plan
from appforge.core.resolver import Resolver
from appforge.core.settings import OUTPUT_DIR_ENV, Settings
from appforge.core.types import ProjectType
from appforge.log import Logger

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


def _version_callback(value: bool) -> None:
    if value:
        _console.print(f"appforge {appforge.__version__}")
        raise Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        Option(
            "--version",
            "-V",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """appforge: scaffold web, mobile and backend TypeScript projects."""


@contextmanager
def _fatal_errors() -> Iterator[None]:
    """Turn any appforge error into a red message and exit code 1."""
    try:
        yield
    except AppforgeError as e:
        _console.print(f"[bold red]Error:[/] {escape(str(e))}")
        raise Exit(code=1) from None


def _settings(output: Path | None = None) -> Settings:
    settings = Settings.from_env()
    if output is not None:
        settings.output_root = output.expanduser()
    return settings


def _store(settings: Settings, initialize: bool = True) -> BlueprintStore:
    return BlueprintStore(settings.blueprint_file, Logger(_console), initialize=initialize)


def _resolve_interactively(
    resolver: Resolver,
    store: BlueprintStore,
    name: str | None,
    project_type: ProjectType | None,
) -> tuple[ProjectConfig, bool]:
    """Return the resolved config and whether it came from a saved blueprint."""
    if project_type is None:
        saved = store.load()
        if saved and _prompts.prompt_use_blueprint():
            return _from_blueprint(resolver, _prompts.prompt_blueprint(saved), name), True

    answers: dict[str, object] = {}
    if project_type is not None:
        answers = resolver.answer(answers, "project_type", project_type)
        _prompts.show_answer(resolver.question("project_type"), project_type)
    if name is not None:
        answers = resolver.answer(answers, "project_name", name)
        _prompts.show_answer(resolver.question("project_name"), name)

    return resolver.run(_prompts.ask, answers, on_invalid=_prompts.report_invalid), False


def _from_blueprint(resolver: Resolver, blueprint: Blueprint, name: str | None) -> ProjectConfig:
    _console.print(f"[bold green]◇[/]  Using blueprint [bold]{escape(blueprint.name)}[/]")
    _console.print("[dim]│[/]")
    if name is not None:
        return resolver.from_blueprint(blueprint, name)

    question = resolver.question("project_name")
    while True:
        try:
            return resolver.from_blueprint(blueprint, _prompts.ask(question, {}))
        except ValidationError as e:
            _prompts.report_invalid(question, e)


@app.command()
def create(
    name: Annotated[
        str | None, Argument(help="Name for the new project directory", show_default=False)
    ] = None,
    blueprint: Annotated[
        str | None,
        Option("--blueprint", "-b", help="Start from a saved blueprint", show_default=False),
    ] = None,
    project_type: Annotated[
        ProjectType | None,
        Option("--type", "-t", help="Project type", show_default=False),
    ] = None,
    output: Annotated[
        Path | None,
        Option(
            "--output",
            "-o",
            help="Directory the project is created in",
            envvar=OUTPUT_DIR_ENV,
            show_default=False,
        ),
    ] = None,
    dry_run: Annotated[
        bool, Option("--dry-run", "-n", help="Show what would be created without writing")
    ] = False,
    force: Annotated[
        bool, Option("--force", "-f", help="Write into an existing directory without asking")
    ] = False,
    save_as: Annotated[
        str | None,
        Option("--save-as", help="Save the configuration as a blueprint", show_default=False),
    ] = None,
    description: Annotated[
        str | None,
        Option("--description", help="Description for --save-as", show_default=False),
    ] = None,
) -> None:
    """Create a new project."""
    with _fatal_errors():
        settings = _settings(output)
        log = Logger(_console)
        # a preview must not create the blueprint document either
        store = _store(settings, initialize=not dry_run)

        # Header
        _console.print()
        _console.print(f"[bold cyan]●[/]  appforge v{appforge.__version__}")
        _console.print("[dim]│[/]")

        if save_as is not None:
            save_as = validate_blueprint_name(save_as, store.names())

        allow_existing = force or dry_run
        if name is not None:
            target = settings.output_root / validate_project_name(name)
            if target.exists() and not allow_existing:
                if not _prompts.prompt_overwrite(target):
                    _console.print("[bold red]Error:[/] Aborted, directory already exists.")
                    raise Exit(code=1)
                allow_existing = True

        resolver = Resolver(settings.output_root, settings.auth_coupling, allow_existing)

        if blueprint is not None:
            found = store.get_by_name(blueprint)
            if found is None:
                raise NotFoundError(blueprint)
            config = _from_blueprint(resolver, found, name)
            from_saved = True
        else:
            config, from_saved = _resolve_interactively(resolver, store, name, project_type)

        print_summary(_console, config)

        project_dir = settings.output_root / config.name
        verb = "Previewing" if dry_run else "Creating"
        _console.print(f"[bold green]◇[/]  {verb} {escape(str(project_dir))}/...")

        materializer = Materializer(log)
        materializer.create_project_root(project_dir, dry_run=dry_run, allow_existing=allow_existing)
        operations = materializer.materialize(plan(config), project_dir, config, dry_run=dry_run)
        _console.print("[dim]│[/]")

        if not dry_run:
            if save_as is None and not from_saved and _prompts.prompt_save_blueprint():
                save_as = _prompts.prompt_blueprint_name(store.names())
                description = _prompts.prompt_description()
            if save_as is not None:
                store.save(Blueprint.capture(save_as, config.renamed(""), description))
                log.success(f"Blueprint '{save_as}' saved to {settings.blueprint_file}")

        if dry_run:
            _console.print(
                f"[bold cyan]●[/]  Dry run: {len(operations)} entries planned, nothing written."
            )
        else:
            _console.print(f"[bold cyan]●[/]  Done! cd {escape(str(project_dir))} && npm install")
        _console.print()


@app.command("list-blueprints")
def list_blueprints() -> None:
    """List saved blueprints."""
    with _fatal_errors():
        blueprints = _store(_settings()).load()
        if not blueprints:
            _console.print("[bold yellow]▲[/]  No saved blueprints found.")
            return
        print_blueprints(_console, blueprints)


@app.command("show-blueprint")
def show_blueprint(
    name: Annotated[str, Argument(help="Blueprint to show")],
) -> None:
    """Show the configuration stored in a blueprint."""
    with _fatal_errors():
        found = _store(_settings()).get_by_name(name)
        if found is None:
            raise NotFoundError(name)
        print_blueprint(_console, found)


@app.command("delete-blueprint")
def delete_blueprint(
    name: Annotated[str, Argument(help="Blueprint to delete")],
) -> None:
    """Delete a saved blueprint."""
    with _fatal_errors():
        _store(_settings()).delete(name)
        _console.print(f"[bold cyan]●[/]  Blueprint '{escape(name)}' deleted.")


@app.command("export-blueprints")
def export_blueprints(
    path: Annotated[Path, Argument(help="File to write the blueprints to")],
) -> None:
    """Export all blueprints to a JSON file."""
    with _fatal_errors():
        count = _store(_settings()).export_all(path)
        _console.print(f"[bold cyan]●[/]  Exported {count} blueprint(s) to {escape(str(path))}.")


@app.command("import-blueprints")
def import_blueprints(
    path: Annotated[Path, Argument(help="JSON file to read blueprints from")],
    overwrite: Annotated[
        bool, Option("--overwrite", help="Replace blueprints that already exist")
    ] = False,
) -> None:
    """Import blueprints from a JSON file."""
    with _fatal_errors():
        count = _store(_settings()).import_all(path, overwrite=overwrite)
        _console.print(f"[bold cyan]●[/]  Imported {count} blueprint(s) from {escape(str(path))}.")
