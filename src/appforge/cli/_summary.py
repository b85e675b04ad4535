"""Console rendering of configurations and blueprints."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from appforge.core.blueprints import Blueprint
from appforge.core.config import ProjectConfig
from appforge.core.types import Feature, ProjectType, StateManagement


def _mark(enabled: bool) -> str:
    return "[green]✓[/]" if enabled else "[red]✗[/]"


def print_summary(console: Console, config: ProjectConfig) -> None:
    """Print the configuration about to be generated."""
    features = config.features
    console.print("[bold cyan]◆[/]  Project configuration")
    console.print(f"[dim]│[/]  Type: [green]{config.type.label}[/]")
    if config.name:
        console.print(f"[dim]│[/]  Name: [green]{escape(config.name)}[/]")
    console.print("[dim]│[/]")

    for f in Feature:
        console.print(f"[dim]│[/]  {_mark(getattr(features, f.attr))} {f.label}")
    if config.type != ProjectType.BACKEND:
        console.print(f"[dim]│[/]  {_mark(config.theme_toggle)} Theme Toggle")
        if config.state_management != StateManagement.NONE:
            console.print(f"[dim]│[/]  State management: [yellow]{config.state_management.label}[/]")

    if config.type == ProjectType.BACKEND or features.authentication or features.crud_setup:
        backend = config.backend
        console.print("[dim]│[/]")
        console.print(f"[dim]│[/]  API type: [yellow]{config.api_type.label}[/]")
        console.print(f"[dim]│[/]  Database: [blue]{backend.database.label}[/]")
        if features.authentication or config.type == ProjectType.BACKEND:
            console.print(f"[dim]│[/]  {_mark(backend.jwt_setup)} JWT Authentication")
            console.print(f"[dim]│[/]  {_mark(backend.role_based_auth)} Role-based Authorization")
        console.print(f"[dim]│[/]  {_mark(backend.api_versioning)} API Versioning")
    console.print("[dim]│[/]")


def print_blueprints(console: Console, blueprints: list[Blueprint]) -> None:
    console.print()
    console.print("[bold cyan]◆[/]  Saved blueprints")
    console.print("[dim]│[/]")
    for b in blueprints:
        created = b.created_at.strftime("%Y-%m-%d %H:%M")
        console.print(
            f"[dim]│[/]  [bold cyan]{escape(b.name):<22}[/] [bold]{b.config.type.label}[/]"
            f" [dim]{created}[/]"
        )
        if b.description:
            console.print(f"[dim]│[/]  {' ' * 22} [dim]{escape(b.description)}[/]")
        console.print("[dim]│[/]")
    console.print()


def print_blueprint(console: Console, blueprint: Blueprint) -> None:
    console.print()
    console.print(f"[bold cyan]●[/]  Blueprint [bold]{escape(blueprint.name)}[/]")
    if blueprint.description:
        console.print(f"[dim]│[/]  {escape(blueprint.description)}")
    console.print(f"[dim]│[/]  Created: {blueprint.created_at.isoformat()}")
    console.print("[dim]│[/]")
    print_summary(console, blueprint.config)
