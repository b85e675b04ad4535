"""Persistent store of named configuration snapshots ("blueprints").

All blueprints live in one JSON document: an ordered list of records shaped
like::

    {
      "name": "api-starter",
      "description": "Express + Mongo with JWT",
      "config": {"type": "backend", "features": {...}, "backend": {...}, ...},
      "createdAt": "2026-01-01T12:00:00+00:00"
    }

Every operation reads and rewrites the whole document. There is no locking:
two processes writing at the same time can lose updates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
import json
from pathlib import Path
from typing import Any

from appforge.core.config import ProjectConfig
from appforge.core.errors import IOFailure, NotFoundError, StoreCorruption, ValidationError
from appforge.log import Logger, get_logger

_REQUIRED_KEYS = ("name", "config", "createdAt")


@dataclass(kw_only=True)
class Blueprint:
    """
    A named, persisted ``ProjectConfig`` without its project name.

    Attributes:
        name: Unique key within the store.
        config: Configuration snapshot. Its ``name`` is ignored on save.
        created_at: Creation timestamp (UTC).
        description: Optional free text shown in listings.
    """

    name: str
    config: ProjectConfig
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    description: str | None = None

    @classmethod
    def capture(
        cls, name: str, config: ProjectConfig, description: str | None = None
    ) -> Blueprint:
        return cls(name=name, config=config, description=description or None)

    def to_project(self, name: str) -> ProjectConfig:
        """Rebuild a project configuration under a freshly supplied name."""
        return self.config.renamed(name)

    def to_dict(self) -> dict[str, Any]:
        record: dict[str, Any] = {"name": self.name}
        if self.description:
            record["description"] = self.description
        record["config"] = self.config.to_dict()
        record["createdAt"] = self.created_at.isoformat()
        return record

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> Blueprint:
        """Decode one record. Raises ``ValueError`` for anything that is not a valid record."""
        if not isinstance(record, dict) or not all(record.get(k) for k in _REQUIRED_KEYS):
            raise ValueError("blueprint record requires name, config and createdAt")
        if not isinstance(record["config"], dict):
            raise ValueError("blueprint config must be an object")
        try:
            return cls(
                name=str(record["name"]),
                config=ProjectConfig.from_dict(record["config"], name=""),
                created_at=_parse_timestamp(str(record["createdAt"])),
                description=record.get("description") or None,
            )
        except (TypeError, AttributeError) as exc:
            raise ValueError(f"malformed blueprint record: {exc}") from exc


def _parse_timestamp(value: str) -> datetime:
    # JavaScript's toISOString() ends in "Z"
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def validate_blueprint_name(name: str, existing: list[str]) -> str:
    """Return the trimmed name, or raise ``ValidationError`` if empty or taken."""
    name = name.strip() if name else ""
    if not name:
        raise ValidationError("Blueprint name cannot be empty.")
    if name in existing:
        raise ValidationError(f"A blueprint named '{name}' already exists.")
    return name


class BlueprintStore:
    """
    CRUD repository over a single blueprint document.

    Args:
        path: Location of the JSON document.
        log: Receives warnings about unreadable documents and skipped records.
        initialize: Create the document on first read. With ``False`` a missing
            document reads as empty and nothing is written until a mutation.
    """

    def __init__(self, path: Path, log: Logger | None = None, initialize: bool = True) -> None:
        self.path = path
        self.log = log if log is not None else get_logger()
        self.initialize = initialize

    def ensure_store(self) -> None:
        """Create the directory and an empty document if absent. Never raises."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            if not self.path.exists():
                self.path.write_text("[]\n", encoding="utf-8")
        except OSError as exc:
            self.log.warn(f"Could not initialize blueprint store at {self.path}: {exc}")

    def load(self) -> list[Blueprint]:
        """
        Return every blueprint in insertion order.

        An unparseable document reads as empty. Records that cannot be decoded are
        skipped with a warning.
        """
        if self.initialize:
            self.ensure_store()
        elif not self.path.exists():
            return []
        try:
            return self._read()
        except StoreCorruption as exc:
            self.log.warn(str(exc))
            return []

    def save(self, blueprint: Blueprint) -> None:
        """Append ``blueprint``. The caller is responsible for name uniqueness."""
        blueprints = self.load()
        blueprints.append(blueprint)
        self._write(blueprints)

    def get_by_name(self, name: str) -> Blueprint | None:
        return next((bp for bp in self.load() if bp.name == name), None)

    def names(self) -> list[str]:
        return [bp.name for bp in self.load()]

    def update(self, name: str, blueprint: Blueprint) -> None:
        blueprints = self.load()
        for i, bp in enumerate(blueprints):
            if bp.name == name:
                blueprints[i] = blueprint
                self._write(blueprints)
                return
        raise NotFoundError(name)

    def delete(self, name: str) -> None:
        blueprints = self.load()
        remaining = [bp for bp in blueprints if bp.name != name]
        if len(remaining) == len(blueprints):
            raise NotFoundError(name)
        self._write(remaining)

    def export_all(self, path: Path) -> int:
        """Write every blueprint to ``path``. Returns the number exported."""
        blueprints = self.load()
        _dump(path, blueprints)
        return len(blueprints)

    def import_all(self, path: Path, overwrite: bool = False) -> int:
        """
        Merge blueprints from ``path`` into the store.

        Records missing ``name``, ``config`` or ``createdAt`` are skipped. Existing
        names are replaced in place only when ``overwrite`` is true.

        Returns:
            Number of records actually added or replaced.
        """
        incoming = _read_records(path)
        blueprints = self.load()
        index = {bp.name: i for i, bp in enumerate(blueprints)}
        imported = 0

        for record in incoming:
            try:
                blueprint = Blueprint.from_dict(record)
            except ValueError as exc:
                self.log.warn(f"Skipping blueprint {_record_name(record)}: {exc}")
                continue

            position = index.get(blueprint.name)
            if position is None:
                index[blueprint.name] = len(blueprints)
                blueprints.append(blueprint)
                imported += 1
            elif overwrite:
                blueprints[position] = blueprint
                imported += 1

        if imported:
            self._write(blueprints)
        return imported

    def _read(self) -> list[Blueprint]:
        blueprints = []
        for record in _read_records(self.path):
            try:
                blueprints.append(Blueprint.from_dict(record))
            except ValueError as exc:
                self.log.warn(f"Skipping blueprint {_record_name(record)} in {self.path}: {exc}")
        return blueprints

    def _write(self, blueprints: list[Blueprint]) -> None:
        _dump(self.path, blueprints)


def _record_name(record: Any) -> str:
    name = record.get("name") if isinstance(record, dict) else None
    return repr(name) if name else "without a name"


def _read_records(path: Path) -> list[Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise StoreCorruption(path, str(exc)) from exc
    if not isinstance(data, list):
        raise StoreCorruption(path, "top-level value is not a list")
    return data


def _dump(path: Path, blueprints: list[Blueprint]) -> None:
    payload = json.dumps([bp.to_dict() for bp in blueprints], indent=2, ensure_ascii=False)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise IOFailure(path, exc) from exc
