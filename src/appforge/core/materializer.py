"""Filesystem materializer: writes a rendered ``ScaffoldPlan`` under a project root."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from appforge.core.config import ProjectConfig
from appforge.core.errors import ConflictError, IOFailure
from appforge.core.planner import ScaffoldPlan
from appforge.core.templates import render_plan
from appforge.log import Logger, get_logger


class Action(str, Enum):
    CREATE_ROOT = "create-root"
    CREATE_DIR = "create-dir"
    WRITE_FILE = "write-file"


@dataclass(frozen=True)
class Operation:
    """
    One filesystem step, performed or (on a dry run) only announced.

    Attributes:
        action: What kind of step this is.
        path: Absolute target path.
        dry_run: True when nothing was written.
    """

    action: Action
    path: Path
    dry_run: bool = False


class Materializer:
    """Create project roots and write planned directories and files."""

    def __init__(self, log: Logger | None = None) -> None:
        self.log = log or get_logger()

    def create_project_root(
        self, path: Path, dry_run: bool = False, allow_existing: bool = False
    ) -> Operation:
        """
        Create the project directory.

        Raises ``ConflictError`` when ``path`` already exists, unless
        ``allow_existing`` is set or this is a dry run. The check happens
        before anything is written.
        """
        if path.exists() and not dry_run and not allow_existing:
            raise ConflictError(path)

        if dry_run:
            self.log.detail(f"[dry-run] would create {path}/")
        else:
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise IOFailure(path, e) from e
        return Operation(Action.CREATE_ROOT, path, dry_run)

    def materialize(
        self,
        plan: ScaffoldPlan,
        root: Path,
        config: ProjectConfig,
        dry_run: bool = False,
    ) -> list[Operation]:
        """
        Create every planned directory, then render and write every planned file.

        Existing files are overwritten. A failing write aborts the run with
        ``IOFailure``; files already written stay on disk.
        """
        rendered = render_plan(plan, config)
        operations: list[Operation] = []

        for rel in plan.directories:
            target = root / rel
            if dry_run:
                self.log.detail(f"[dry-run] would create {rel}/")
            else:
                _mkdir(target)
                self.log.info(f"{rel}/")
            operations.append(Operation(Action.CREATE_DIR, target, dry_run))

        for rel, content in rendered.items():
            target = root / rel
            if dry_run:
                self.log.detail(f"[dry-run] would write {rel}")
            else:
                _mkdir(target.parent)
                try:
                    target.write_text(content, encoding="utf-8")
                except OSError as e:
                    raise IOFailure(target, e) from e
                self.log.info(rel)
            operations.append(Operation(Action.WRITE_FILE, target, dry_run))

        return operations


def _mkdir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IOFailure(path, e) from e
