"""Configuration resolver: a graph of typed questions that yields a ``ProjectConfig``.

Questions are plain data. ``Resolver`` decides which one to ask next from the
answers collected so far and validates each answer; the caller owns all I/O
through the ``ask`` callback passed to ``Resolver.run``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from appforge.core.blueprints import Blueprint
from appforge.core.config import BackendConfig, Features, ProjectConfig, validate_project_name
from appforge.core.errors import ValidationError
from appforge.core.settings import AuthCoupling
from appforge.core.types import ApiType, Database, Feature, ProjectType, StateManagement

Answers = Mapping[str, Any]

_TRUE = frozenset({"y", "yes", "true", "1"})
_FALSE = frozenset({"n", "no", "false", "0"})


class QuestionKind(str, Enum):
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"
    BOOLEAN = "boolean"
    TEXT = "text"


@dataclass(frozen=True, kw_only=True)
class Question:
    """
    One node of the question graph.

    Attributes:
        key: Answer key. Dotted keys (``backend.database``) map to nested config.
        message: Prompt text.
        kind: Input kind, which also fixes how raw answers are coerced.
        choices: Allowed values, or a callable computing them from earlier answers.
        default: Default value, or a callable computing it from earlier answers.
        visible_if: Predicate over earlier answers. Hidden questions are skipped.
        depends_on: Keys that must be answered before this question is asked.
        validate: Extra check on the coerced value. Raises ``ValidationError``.
    """

    key: str
    message: str
    kind: QuestionKind
    choices: tuple[Any, ...] | Callable[[Answers], tuple[Any, ...]] = ()
    default: Any = None
    visible_if: Callable[[Answers], bool] | None = None
    depends_on: tuple[str, ...] = ()
    validate: Callable[[Any], Any] | None = None

    def options(self, answers: Answers) -> tuple[Any, ...]:
        return self.choices(answers) if callable(self.choices) else self.choices

    def default_for(self, answers: Answers) -> Any:
        return self.default(answers) if callable(self.default) else self.default

    def is_visible(self, answers: Answers) -> bool:
        return self.visible_if is None or self.visible_if(answers)

    def coerce(self, value: Any, answers: Answers) -> Any:
        """Turn a raw answer into a typed value, or raise ``ValidationError``."""
        if self.kind == QuestionKind.CHOICE:
            result = self._pick(value, answers)
        elif self.kind == QuestionKind.MULTI_CHOICE:
            if isinstance(value, str) or not isinstance(value, Iterable):
                raise ValidationError(f"{self.message} expects a list of choices.")
            picked = {self._pick(v, answers) for v in value}
            result = tuple(o for o in self.options(answers) if o in picked)
        elif self.kind == QuestionKind.BOOLEAN:
            result = _to_bool(value)
        else:
            result = "" if value is None else str(value)

        if self.validate is not None:
            result = self.validate(result)
        return result

    def _pick(self, value: Any, answers: Answers) -> Any:
        options = self.options(answers)
        for option in options:
            if value == option or value == getattr(option, "value", option):
                return option
        valid = ", ".join(str(getattr(o, "value", o)) for o in options)
        raise ValidationError(f"{value!r} is not a valid choice (expected one of {valid}).")


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValidationError(f"{value!r} is not a yes/no answer.")


# --- visibility predicates ---


def _is_frontend(answers: Answers) -> bool:
    return answers.get("project_type") in (ProjectType.WEB, ProjectType.MOBILE)


def _has(answers: Answers, feature: Feature) -> bool:
    return feature in answers.get("features", ())


def _needs_backend(answers: Answers) -> bool:
    return (
        answers.get("project_type") == ProjectType.BACKEND
        or _has(answers, Feature.AUTHENTICATION)
        or _has(answers, Feature.CRUD_SETUP)
    )


def _auth_questions_visible(coupling: AuthCoupling) -> Callable[[Answers], bool]:
    def visible(answers: Answers) -> bool:
        if _has(answers, Feature.AUTHENTICATION):
            return True
        return coupling == AuthCoupling.INDEPENDENT and (
            answers.get("project_type") == ProjectType.BACKEND
        )

    return visible


def _feature_choices(answers: Answers) -> tuple[Feature, ...]:
    if answers.get("project_type") == ProjectType.BACKEND:
        return (Feature.AUTHENTICATION, Feature.CRUD_SETUP)
    return tuple(Feature)


def _feature_defaults(answers: Answers) -> tuple[Feature, ...]:
    if answers.get("project_type") == ProjectType.BACKEND:
        return (Feature.AUTHENTICATION,)
    return (Feature.RESPONSIVE_LAYOUT,)


def default_questions(
    validate_name: Callable[[Any], Any] | None = None,
    coupling: AuthCoupling = AuthCoupling.INDEPENDENT,
) -> list[Question]:
    """The question graph used by ``appforge create``."""
    auth_visible = _auth_questions_visible(coupling)
    return [
        Question(
            key="project_type",
            message="What type of project do you want to create?",
            kind=QuestionKind.CHOICE,
            choices=tuple(ProjectType),
            default=ProjectType.WEB,
        ),
        Question(
            key="project_name",
            message="Project name",
            kind=QuestionKind.TEXT,
            validate=validate_name or validate_project_name,
        ),
        Question(
            key="features",
            message="Select features to include",
            kind=QuestionKind.MULTI_CHOICE,
            choices=_feature_choices,
            default=_feature_defaults,
            depends_on=("project_type",),
        ),
        Question(
            key="state_management",
            message="Select state management solution",
            kind=QuestionKind.CHOICE,
            choices=tuple(StateManagement),
            default=StateManagement.REDUX,
            visible_if=_is_frontend,
            depends_on=("project_type",),
        ),
        Question(
            key="theme_toggle",
            message="Include light/dark theme toggle?",
            kind=QuestionKind.BOOLEAN,
            default=False,
            visible_if=_is_frontend,
            depends_on=("project_type",),
        ),
        Question(
            key="api_type",
            message="Select API type",
            kind=QuestionKind.CHOICE,
            choices=tuple(ApiType),
            default=ApiType.REST,
            visible_if=_needs_backend,
            depends_on=("project_type", "features"),
        ),
        Question(
            key="backend.database",
            message="Select database",
            kind=QuestionKind.CHOICE,
            choices=tuple(Database),
            default=Database.MONGODB,
            visible_if=_needs_backend,
            depends_on=("project_type", "features"),
        ),
        Question(
            key="backend.role_based_auth",
            message="Include role-based authorization?",
            kind=QuestionKind.BOOLEAN,
            default=False,
            visible_if=auth_visible,
            depends_on=("project_type", "features"),
        ),
        Question(
            key="backend.jwt_setup",
            message="Set up JWT authentication?",
            kind=QuestionKind.BOOLEAN,
            default=True,
            visible_if=auth_visible,
            depends_on=("project_type", "features"),
        ),
        Question(
            key="backend.api_versioning",
            message="Include API versioning?",
            kind=QuestionKind.BOOLEAN,
            default=False,
            visible_if=_needs_backend,
            depends_on=("project_type", "features"),
        ),
    ]


def _check_acyclic(questions: list[Question]) -> None:
    seen: set[str] = set()
    for q in questions:
        if q.key in seen:
            raise ValueError(f"Duplicate question key {q.key!r}.")
        missing = [d for d in q.depends_on if d not in seen]
        if missing:
            raise ValueError(
                f"Question {q.key!r} depends on {', '.join(missing)}, "
                "which must be declared before it."
            )
        seen.add(q.key)


class Resolver:
    """
    Walks the question graph and builds a ``ProjectConfig``.

    Args:
        output_root: Directory new projects are created in. Used to reject
            project names that collide with an existing directory.
        coupling: Visibility policy for the role-based-auth and JWT questions.
        allow_existing: Accept names of existing directories (``--force`` or
            after the user confirmed overwriting).
        questions: Custom graph. Defaults to ``default_questions``.
    """

    def __init__(
        self,
        output_root: Path,
        coupling: AuthCoupling = AuthCoupling.INDEPENDENT,
        allow_existing: bool = False,
        questions: list[Question] | None = None,
    ) -> None:
        self.output_root = output_root
        self.allow_existing = allow_existing
        self.questions = (
            questions
            if questions is not None
            else default_questions(self.validate_name, coupling)
        )
        _check_acyclic(self.questions)
        self._by_key = {q.key: q for q in self.questions}

    def validate_name(self, name: Any) -> str:
        name = validate_project_name(str(name) if name is not None else "")
        if not self.allow_existing and (self.output_root / name).exists():
            raise ValidationError(f"Directory '{self.output_root / name}' already exists.")
        return name

    def question(self, key: str) -> Question:
        return self._by_key[key]

    def next_question(self, answers: Answers) -> Question | None:
        """Return the first visible unanswered question, or ``None`` when done."""
        for q in self.questions:
            if q.key not in answers and q.is_visible(answers):
                return q
        return None

    def answer(self, answers: Answers, key: str, value: Any) -> dict[str, Any]:
        """Validate ``value`` for ``key`` and return a new answers dict including it."""
        q = self._by_key.get(key)
        if q is None:
            raise ValidationError(f"Unknown question {key!r}.")
        return {**answers, key: q.coerce(value, answers)}

    def is_complete(self, answers: Answers) -> bool:
        return self.next_question(answers) is None

    def build(self, answers: Answers) -> ProjectConfig:
        """
        Assemble the config. Answers to questions that are hidden (for example
        after ``project_type`` changed) are ignored and the field keeps its default.
        """
        pending = self.next_question(answers)
        if pending is not None:
            raise ValidationError(f"Question {pending.key!r} has not been answered.")

        def get(key: str, fallback: Any) -> Any:
            q = self._by_key.get(key)
            if q is None or key not in answers or not q.is_visible(answers):
                return fallback
            return answers[key]

        defaults = BackendConfig()
        return ProjectConfig(
            type=answers["project_type"],
            name=answers["project_name"],
            features=Features.of(get("features", ())),
            state_management=get("state_management", StateManagement.NONE),
            theme_toggle=get("theme_toggle", False),
            api_type=get("api_type", ApiType.REST),
            backend=BackendConfig(
                database=get("backend.database", defaults.database),
                role_based_auth=get("backend.role_based_auth", False),
                jwt_setup=get("backend.jwt_setup", False),
                api_versioning=get("backend.api_versioning", False),
            ),
        )

    def run(
        self,
        ask: Callable[[Question, Answers], Any],
        answers: Answers | None = None,
        on_invalid: Callable[[Question, ValidationError], None] | None = None,
    ) -> ProjectConfig:
        """
        Ask every visible question in order and build the config.

        ``answers`` pre-seeds already known values (they are not re-validated).
        Invalid answers are passed to ``on_invalid`` and the question is asked
        again; without ``on_invalid`` the ``ValidationError`` propagates.
        """
        current: dict[str, Any] = dict(answers or {})
        while (q := self.next_question(current)) is not None:
            raw = ask(q, current)
            try:
                current = self.answer(current, q.key, raw)
            except ValidationError as e:
                if on_invalid is None:
                    raise
                on_invalid(q, e)
        return self.build(current)

    def from_blueprint(self, blueprint: Blueprint, name: str) -> ProjectConfig:
        """Skip the graph: only the project name is validated and applied."""
        return blueprint.to_project(self.validate_name(name))
