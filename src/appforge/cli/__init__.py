"""Command-line interface for appforge."""

from appforge.cli.app import app

__all__ = ["app"]
