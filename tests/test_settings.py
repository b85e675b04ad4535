"""Unit tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from appforge.core.errors import ValidationError
from appforge.core.settings import (
    AUTH_COUPLING_ENV,
    BLUEPRINTS_ENV,
    OUTPUT_DIR_ENV,
    AuthCoupling,
    Settings,
    default_blueprint_file,
    default_output_root,
)


class TestSettingsFromEnv:
    def test_defaults(self) -> None:
        settings = Settings.from_env({})
        assert settings.output_root == default_output_root()
        assert settings.blueprint_file == default_blueprint_file()
        assert settings.auth_coupling is AuthCoupling.INDEPENDENT

    def test_default_locations_are_under_home(self) -> None:
        assert default_output_root() == Path.home() / "dev" / "templates"
        assert default_blueprint_file() == Path.home() / ".appforge" / "blueprints.json"

    def test_overrides(self, tmp_path: Path) -> None:
        settings = Settings.from_env(
            {
                OUTPUT_DIR_ENV: str(tmp_path / "out"),
                BLUEPRINTS_ENV: str(tmp_path / "bp.json"),
                AUTH_COUPLING_ENV: "COUPLED",
            }
        )
        assert settings.output_root == tmp_path / "out"
        assert settings.blueprint_file == tmp_path / "bp.json"
        assert settings.auth_coupling is AuthCoupling.COUPLED

    def test_empty_values_are_ignored(self) -> None:
        settings = Settings.from_env({OUTPUT_DIR_ENV: ""})
        assert settings.output_root == default_output_root()

    def test_tilde_is_expanded(self) -> None:
        settings = Settings.from_env({OUTPUT_DIR_ENV: "~/projects"})
        assert settings.output_root == Path.home() / "projects"

    def test_invalid_coupling(self) -> None:
        with pytest.raises(ValidationError, match=AUTH_COUPLING_ENV):
            Settings.from_env({AUTH_COUPLING_ENV: "sometimes"})

    def test_reads_process_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(OUTPUT_DIR_ENV, str(tmp_path))
        assert Settings.from_env().output_root == tmp_path
