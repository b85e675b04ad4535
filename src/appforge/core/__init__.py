"""Core scaffolding building blocks."""

from appforge.core.blueprints import Blueprint, BlueprintStore, validate_blueprint_name
from appforge.core.config import BackendConfig, Features, ProjectConfig, validate_project_name
from appforge.core.errors import (
    AppforgeError,
    ConflictError,
    IOFailure,
    NotFoundError,
    StoreCorruption,
    UnknownTemplateId,
    ValidationError,
)
from appforge.core.materializer import Action, Materializer, Operation
from appforge.core.planner import ScaffoldPlan, plan
from appforge.core.resolver import Question, QuestionKind, Resolver, default_questions
from appforge.core.settings import AuthCoupling, Settings
from appforge.core.templates import render, render_key, render_plan
from appforge.core.types import (
    ApiType,
    Database,
    Feature,
    ProjectType,
    StateManagement,
    TemplateId,
)

__all__ = [
    "Action",
    "ApiType",
    "AppforgeError",
    "AuthCoupling",
    "BackendConfig",
    "Blueprint",
    "BlueprintStore",
    "ConflictError",
    "Database",
    "Feature",
    "Features",
    "IOFailure",
    "Materializer",
    "NotFoundError",
    "Operation",
    "ProjectConfig",
    "ProjectType",
    "Question",
    "QuestionKind",
    "Resolver",
    "ScaffoldPlan",
    "Settings",
    "StateManagement",
    "StoreCorruption",
    "TemplateId",
    "UnknownTemplateId",
    "ValidationError",
    "default_questions",
    "plan",
    "render",
    "render_key",
    "render_plan",
    "validate_blueprint_name",
    "validate_project_name",
]
