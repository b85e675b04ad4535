"""Shared fixtures for the appforge test suite."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from rich.console import Console

from appforge.core.blueprints import BlueprintStore
from appforge.core.config import BackendConfig, Features, ProjectConfig
from appforge.core.types import ApiType, Database, ProjectType, StateManagement
from appforge.log import Logger


@pytest.fixture
def log_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def log(log_output: io.StringIO) -> Logger:
    return Logger(Console(file=log_output, width=200))


@pytest.fixture
def store(tmp_path: Path, log: Logger) -> BlueprintStore:
    return BlueprintStore(tmp_path / "store" / "blueprints.json", log)


@pytest.fixture
def web_config() -> ProjectConfig:
    return ProjectConfig(
        type=ProjectType.WEB,
        name="web-app",
        features=Features(authentication=True, user_profiles=True, responsive_layout=True),
        state_management=StateManagement.REDUX,
        theme_toggle=True,
    )


@pytest.fixture
def backend_config() -> ProjectConfig:
    return ProjectConfig(
        type=ProjectType.BACKEND,
        name="api",
        features=Features(authentication=True, crud_setup=True),
        api_type=ApiType.REST,
        backend=BackendConfig(
            database=Database.POSTGRES,
            role_based_auth=True,
            jwt_setup=True,
            api_versioning=True,
        ),
    )


@pytest.fixture
def mobile_config() -> ProjectConfig:
    return ProjectConfig(
        type=ProjectType.MOBILE,
        name="mobile-app",
        features=Features(authentication=True, user_settings=True, crud_setup=True),
        state_management=StateManagement.CONTEXT,
    )


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a temporary blueprint document and output root."""
    monkeypatch.setenv("APPFORGE_BLUEPRINTS", str(tmp_path / "blueprints.json"))
    monkeypatch.setenv("APPFORGE_OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.delenv("APPFORGE_AUTH_COUPLING", raising=False)
    return tmp_path
