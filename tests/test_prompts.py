"""Unit tests for interactive prompt functions."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest

from appforge.cli._prompts import (
    ask,
    prompt_blueprint,
    prompt_blueprint_name,
    prompt_description,
    prompt_overwrite,
    prompt_save_blueprint,
    report_invalid,
)
from appforge.core.blueprints import Blueprint
from appforge.core.config import ProjectConfig
from appforge.core.errors import ValidationError
from appforge.core.resolver import default_questions
from appforge.core.types import Feature, ProjectType, StateManagement

QUESTIONS = {q.key: q for q in default_questions()}


class TestAskChoice:
    @patch("appforge.cli._prompts.TerminalMenu")
    def test_returns_selected_option(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = 2  # backend

        result = ask(QUESTIONS["project_type"], {})
        assert result is ProjectType.BACKEND

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_cursor_starts_on_default(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = 0

        ask(QUESTIONS["state_management"], {"project_type": ProjectType.WEB})
        assert mock_menu_cls.call_args.kwargs["cursor_index"] == 0

        mock_menu_cls.return_value.show.return_value = 1
        assert (
            ask(QUESTIONS["state_management"], {"project_type": ProjectType.WEB})
            is StateManagement.CONTEXT
        )

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_exit_on_none(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = None

        with pytest.raises(SystemExit):
            ask(QUESTIONS["project_type"], {})


class TestAskMultiChoice:
    @patch("appforge.cli._prompts.TerminalMenu")
    def test_returns_selected_options(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = (4, 0)

        result = ask(QUESTIONS["features"], {"project_type": ProjectType.WEB})
        assert result == [Feature.AUTHENTICATION, Feature.CRUD_SETUP]

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_single_index(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = 1

        result = ask(QUESTIONS["features"], {"project_type": ProjectType.BACKEND})
        assert result == [Feature.CRUD_SETUP]

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_preselects_defaults(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = ()

        assert ask(QUESTIONS["features"], {"project_type": ProjectType.BACKEND}) == []
        assert mock_menu_cls.call_args.kwargs["preselected_entries"] == [0]

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_exit_on_none(self, mock_menu_cls: MagicMock) -> None:
        mock_menu_cls.return_value.show.return_value = None

        with pytest.raises(SystemExit):
            ask(QUESTIONS["features"], {"project_type": ProjectType.WEB})


class TestAskBoolean:
    @patch("builtins.input", return_value="")
    def test_default(self, mock_input: MagicMock) -> None:
        answers = {"project_type": ProjectType.BACKEND}
        assert ask(QUESTIONS["backend.jwt_setup"], answers) is True
        assert ask(QUESTIONS["backend.api_versioning"], answers) is False

    @patch("builtins.input", return_value="y")
    def test_explicit_yes(self, mock_input: MagicMock) -> None:
        assert ask(QUESTIONS["theme_toggle"], {"project_type": ProjectType.WEB}) is True
        mock_input.assert_called_once()

    @patch("builtins.input", return_value="no")
    def test_explicit_no(self, mock_input: MagicMock) -> None:
        result = ask(QUESTIONS["backend.jwt_setup"], {"project_type": ProjectType.BACKEND})
        assert result is False


class TestAskText:
    @patch("builtins.input", return_value="  my-app  ")
    def test_strips_input(self, mock_input: MagicMock) -> None:
        assert ask(QUESTIONS["project_name"], {}) == "my-app"

    @patch("builtins.input", return_value="")
    def test_empty_input(self, mock_input: MagicMock) -> None:
        assert ask(QUESTIONS["project_name"], {}) == ""


class TestBlueprintPrompts:
    @pytest.fixture
    def blueprints(self, web_config: ProjectConfig) -> list[Blueprint]:
        created = datetime(2026, 1, 1, tzinfo=UTC)
        return [
            Blueprint(name="first", config=web_config, created_at=created),
            Blueprint(name="second", config=web_config, created_at=created, description="Mine"),
        ]

    @patch("appforge.cli._prompts.TerminalMenu")
    def test_prompt_blueprint(
        self, mock_menu_cls: MagicMock, blueprints: list[Blueprint]
    ) -> None:
        mock_menu_cls.return_value.show.return_value = 1

        assert prompt_blueprint(blueprints) is blueprints[1]
        assert mock_menu_cls.call_args.args[0] == ["first", "second - Mine"]

    @patch("builtins.input", side_effect=["", "taken", " fresh "])
    def test_blueprint_name_asks_again_until_valid(self, mock_input: MagicMock) -> None:
        assert prompt_blueprint_name(["taken"]) == "fresh"
        assert mock_input.call_count == 3

    @patch("builtins.input", return_value="")
    def test_empty_description_is_none(self, mock_input: MagicMock) -> None:
        assert prompt_description() is None

    @patch("builtins.input", return_value="")
    def test_confirmations_default_to_no(self, mock_input: MagicMock, tmp_path) -> None:
        assert prompt_overwrite(tmp_path) is False
        assert prompt_save_blueprint() is False


class TestReportInvalid:
    def test_names_the_question(self, capsys: pytest.CaptureFixture[str]) -> None:
        report_invalid(QUESTIONS["project_name"], ValidationError("Project name cannot be empty."))

        output = capsys.readouterr().out
        assert "Project name:" in output
        assert "cannot be empty" in output
