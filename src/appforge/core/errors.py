"""Exception hierarchy shared by the scaffolding core."""

from __future__ import annotations

from pathlib import Path


class AppforgeError(Exception):
    """Base class for every error raised by appforge."""


class ValidationError(AppforgeError, ValueError):
    """A project or blueprint name (or other answer) was rejected. Recoverable."""


class ConflictError(AppforgeError, FileExistsError):
    """The destination directory already exists."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Directory '{path}' already exists.")
        self.path = path


class NotFoundError(AppforgeError, LookupError):
    """A named blueprint does not exist in the store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Blueprint '{name}' not found.")
        self.name = name


class StoreCorruption(AppforgeError):
    """The blueprint document could not be read or decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not read blueprints from '{path}': {reason}")
        self.path = path
        self.reason = reason


class IOFailure(AppforgeError, OSError):
    """A filesystem write failed. Carries the offending path."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"Failed to write '{path}': {cause.strerror or cause}")
        self.path = path
        self.cause = cause

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownTemplateId(AppforgeError, LookupError):
    """A template key outside the known set was requested."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown template id {key!r}.")
        self.key = key
