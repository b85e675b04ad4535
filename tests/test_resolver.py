"""Unit tests for the configuration resolver."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from appforge.core.blueprints import Blueprint
from appforge.core.config import ProjectConfig
from appforge.core.errors import ValidationError
from appforge.core.resolver import Question, QuestionKind, Resolver, default_questions
from appforge.core.settings import AuthCoupling
from appforge.core.types import ApiType, Database, Feature, ProjectType, StateManagement


def _scripted(replies: Mapping[str, Any]):
    """Build an ``ask`` callback answering from ``replies`` and recording the order."""
    asked: list[str] = []

    def ask(question: Question, answers: Mapping[str, Any]) -> Any:
        asked.append(question.key)
        return replies[question.key]

    ask.asked = asked  # type: ignore[attr-defined]
    return ask


@pytest.fixture
def resolver(tmp_path: Path) -> Resolver:
    return Resolver(tmp_path)


class TestGraph:
    def test_default_graph_keys(self) -> None:
        keys = [q.key for q in default_questions()]
        assert keys == [
            "project_type",
            "project_name",
            "features",
            "state_management",
            "theme_toggle",
            "api_type",
            "backend.database",
            "backend.role_based_auth",
            "backend.jwt_setup",
            "backend.api_versioning",
        ]

    def test_dependency_declared_later_is_rejected(self, tmp_path: Path) -> None:
        questions = [
            Question(key="a", message="A", kind=QuestionKind.BOOLEAN, depends_on=("b",)),
            Question(key="b", message="B", kind=QuestionKind.BOOLEAN),
        ]
        with pytest.raises(ValueError, match="declared before"):
            Resolver(tmp_path, questions=questions)

    def test_duplicate_keys_are_rejected(self, tmp_path: Path) -> None:
        questions = [
            Question(key="a", message="A", kind=QuestionKind.BOOLEAN),
            Question(key="a", message="A again", kind=QuestionKind.BOOLEAN),
        ]
        with pytest.raises(ValueError, match="Duplicate"):
            Resolver(tmp_path, questions=questions)


class TestAnswer:
    def test_returns_new_mapping(self, resolver: Resolver) -> None:
        answers: dict[str, Any] = {}
        updated = resolver.answer(answers, "project_type", "backend")
        assert updated == {"project_type": ProjectType.BACKEND}
        assert answers == {}

    def test_rejects_unknown_choice(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError, match="not a valid choice"):
            resolver.answer({}, "project_type", "desktop")

    @pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("N", False), (True, True)])
    def test_boolean_coercion(self, resolver: Resolver, raw: Any, expected: bool) -> None:
        answers = {"project_type": ProjectType.WEB}
        assert resolver.answer(answers, "theme_toggle", raw)["theme_toggle"] is expected

    def test_boolean_rejects_garbage(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError):
            resolver.answer({}, "theme_toggle", "perhaps")

    def test_multi_choice_keeps_declaration_order(self, resolver: Resolver) -> None:
        answers = {"project_type": ProjectType.WEB}
        result = resolver.answer(answers, "features", ["crudSetup", Feature.AUTHENTICATION])
        assert result["features"] == (Feature.AUTHENTICATION, Feature.CRUD_SETUP)

    def test_multi_choice_respects_type_specific_choices(self, resolver: Resolver) -> None:
        answers = {"project_type": ProjectType.BACKEND}
        with pytest.raises(ValidationError):
            resolver.answer(answers, "features", ["responsiveLayout"])

    def test_multi_choice_rejects_plain_string(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError):
            resolver.answer({"project_type": ProjectType.WEB}, "features", "authentication")

    def test_project_name_is_validated(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError):
            resolver.answer({}, "project_name", "bad/name")

    def test_project_name_collision(self, tmp_path: Path) -> None:
        (tmp_path / "taken").mkdir()
        with pytest.raises(ValidationError, match="already exists"):
            Resolver(tmp_path).answer({}, "project_name", "taken")
        allowed = Resolver(tmp_path, allow_existing=True).answer({}, "project_name", "taken")
        assert allowed["project_name"] == "taken"

    def test_unknown_key(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError):
            resolver.answer({}, "colour", "blue")


class TestVisibility:
    def test_web_without_backend_features_skips_backend_questions(
        self, resolver: Resolver
    ) -> None:
        ask = _scripted(
            {
                "project_type": "web",
                "project_name": "site",
                "features": ["responsiveLayout"],
                "state_management": "none",
                "theme_toggle": False,
            }
        )
        config = resolver.run(ask)

        assert ask.asked == [  # type: ignore[attr-defined]
            "project_type",
            "project_name",
            "features",
            "state_management",
            "theme_toggle",
        ]
        assert config.api_type == ApiType.REST
        assert config.backend.database == Database.MONGODB
        assert not config.backend.jwt_setup

    def test_backend_skips_frontend_questions(self, resolver: Resolver) -> None:
        ask = _scripted(
            {
                "project_type": "backend",
                "project_name": "api",
                "features": ["authentication", "crudSetup"],
                "api_type": "graphql",
                "backend.database": "mysql",
                "backend.role_based_auth": True,
                "backend.jwt_setup": True,
                "backend.api_versioning": True,
            }
        )
        config = resolver.run(ask)

        assert "state_management" not in ask.asked  # type: ignore[attr-defined]
        assert "theme_toggle" not in ask.asked  # type: ignore[attr-defined]
        assert config == ProjectConfig.from_dict(
            {
                "type": "backend",
                "features": {"authentication": True, "crudSetup": True},
                "apiType": "graphql",
                "backend": {
                    "database": "mysql",
                    "roleBasedAuth": True,
                    "jwtSetup": True,
                    "apiVersioning": True,
                },
            },
            name="api",
        )

    def test_crud_shows_backend_questions_but_not_auth_ones(self, resolver: Resolver) -> None:
        answers = {
            "project_type": ProjectType.MOBILE,
            "project_name": "m",
            "features": (Feature.CRUD_SETUP,),
            "state_management": StateManagement.CONTEXT,
            "theme_toggle": False,
            "api_type": ApiType.REST,
            "backend.database": Database.MONGODB,
        }
        assert resolver.next_question(answers).key == "backend.api_versioning"  # type: ignore[union-attr]

    @pytest.mark.parametrize(
        ("coupling", "asked"),
        [(AuthCoupling.INDEPENDENT, True), (AuthCoupling.COUPLED, False)],
    )
    def test_auth_coupling_policy(
        self, tmp_path: Path, coupling: AuthCoupling, asked: bool
    ) -> None:
        resolver = Resolver(tmp_path, coupling)
        answers = {
            "project_type": ProjectType.BACKEND,
            "project_name": "api",
            "features": (Feature.CRUD_SETUP,),
            "api_type": ApiType.REST,
            "backend.database": Database.MONGODB,
        }
        expected = "backend.role_based_auth" if asked else "backend.api_versioning"
        assert resolver.next_question(answers).key == expected  # type: ignore[union-attr]

    def test_hidden_answers_are_ignored_by_build(self, resolver: Resolver) -> None:
        answers = {
            "project_type": ProjectType.BACKEND,
            "project_name": "api",
            "features": (),
            "state_management": StateManagement.REDUX,
            "theme_toggle": True,
            "api_type": ApiType.REST,
            "backend.database": Database.POSTGRES,
            "backend.role_based_auth": False,
            "backend.jwt_setup": False,
            "backend.api_versioning": False,
        }
        config = resolver.build(answers)
        assert config.state_management == StateManagement.NONE
        assert not config.theme_toggle
        assert config.backend.database == Database.POSTGRES


class TestRun:
    def test_invalid_answer_is_reported_and_asked_again(self, resolver: Resolver) -> None:
        replies = {
            "project_type": "web",
            "features": [],
            "state_management": "redux",
            "theme_toggle": "no",
        }
        names = iter(["bad/name", "CON", "good-name"])

        def ask(question: Question, answers: Mapping[str, Any]) -> Any:
            if question.key == "project_name":
                return next(names)
            return replies[question.key]

        rejected: list[str] = []
        config = resolver.run(ask, on_invalid=lambda q, e: rejected.append(q.key))

        assert config.name == "good-name"
        assert rejected == ["project_name", "project_name"]

    def test_invalid_answer_without_handler_propagates(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError):
            resolver.run(lambda q, a: "desktop")

    def test_seeded_answers_are_not_asked(self, resolver: Resolver) -> None:
        ask = _scripted({"features": [], "state_management": "context", "theme_toggle": True})
        seeded = {"project_type": ProjectType.MOBILE, "project_name": "m"}

        config = resolver.run(ask, seeded)

        assert ask.asked == ["features", "state_management", "theme_toggle"]  # type: ignore[attr-defined]
        assert config.type == ProjectType.MOBILE
        assert config.theme_toggle

    def test_build_incomplete_raises(self, resolver: Resolver) -> None:
        with pytest.raises(ValidationError, match="project_type"):
            resolver.build({})

    def test_is_complete(self, resolver: Resolver) -> None:
        assert not resolver.is_complete({})


class TestFromBlueprint:
    @pytest.fixture
    def blueprint(self, backend_config: ProjectConfig) -> Blueprint:
        return Blueprint(
            name="api-starter",
            config=backend_config.renamed(""),
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

    def test_only_name_is_resolved(
        self, resolver: Resolver, blueprint: Blueprint, backend_config: ProjectConfig
    ) -> None:
        config = resolver.from_blueprint(blueprint, "billing")
        assert config == backend_config.renamed("billing")

    def test_name_collision(self, tmp_path: Path, blueprint: Blueprint) -> None:
        (tmp_path / "billing").mkdir()
        with pytest.raises(ValidationError):
            Resolver(tmp_path).from_blueprint(blueprint, "billing")

    def test_invalid_name(self, resolver: Resolver, blueprint: Blueprint) -> None:
        with pytest.raises(ValidationError):
            resolver.from_blueprint(blueprint, "")
