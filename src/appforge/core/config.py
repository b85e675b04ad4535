"""Configuration dataclasses describing one project to scaffold."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
import re
from typing import Any, TypeVar

from appforge.core.errors import ValidationError
from appforge.core.types import ApiType, Database, Feature, ProjectType, StateManagement

E = TypeVar("E", bound=Enum)

MAX_NAME_LENGTH = 214

_INVALID_NAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

_RESERVED_NAMES = frozenset(
    ["CON", "PRN", "AUX", "NUL"]
    + [f"COM{i}" for i in range(1, 10)]
    + [f"LPT{i}" for i in range(1, 10)]
)

# Spellings written by older releases.
_LEGACY_VALUES: dict[str, str] = {
    "postgresql": Database.POSTGRES.value,
}


@dataclass(kw_only=True)
class Features:
    """
    Optional feature flags.

    Attributes:
        authentication: User login, registration and authorization.
        user_profiles: Profile pages. Accepted without ``authentication``.
        user_settings: Preference pages. Accepted without ``authentication``.
        responsive_layout: Responsive stylesheet for web projects.
        crud_setup: Data feature directories and services.
    """

    authentication: bool = False
    user_profiles: bool = False
    user_settings: bool = False
    responsive_layout: bool = False
    crud_setup: bool = False

    def enabled(self) -> list[Feature]:
        return [f for f in Feature if getattr(self, f.attr)]

    @classmethod
    def of(cls, features: set[Feature] | list[Feature]) -> Features:
        return cls(**{f.attr: True for f in features})


@dataclass(kw_only=True)
class BackendConfig:
    """
    Server-side choices. Consumed only for ``web`` and ``backend`` projects.

    Attributes:
        database: Database driver and connection settings to generate.
        role_based_auth: Adds role middleware / guards.
        jwt_setup: Adds JWT dependencies and verification code.
        api_versioning: Mounts routes under a versioned path.
    """

    database: Database = Database.MONGODB
    role_based_auth: bool = False
    jwt_setup: bool = False
    api_versioning: bool = False


@dataclass(kw_only=True)
class ProjectConfig:
    """
    Fully resolved set of choices describing one project.

    Attributes:
        type: Project type selecting the base skeleton.
        name: Directory name of the generated project.
        features: Enabled optional features.
        state_management: Client state solution (ignored for backend projects).
        theme_toggle: Light/dark theme toggle (web only, see planner).
        api_type: REST or GraphQL.
        backend: Server-side settings.
    """

    type: ProjectType
    name: str
    features: Features = field(default_factory=Features)
    state_management: StateManagement = StateManagement.NONE
    theme_toggle: bool = False
    api_type: ApiType = ApiType.REST
    backend: BackendConfig = field(default_factory=BackendConfig)

    @property
    def uses_backend(self) -> bool:
        """Whether ``backend.*`` settings are consumed for this project type."""
        return self.type in (ProjectType.WEB, ProjectType.BACKEND)

    def renamed(self, name: str) -> ProjectConfig:
        return replace(self, name=name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the blueprint document shape (without ``name``)."""
        return {
            "type": self.type.value,
            "features": {f.value: getattr(self.features, f.attr) for f in Feature},
            "stateManagement": self.state_management.value,
            "themeToggle": self.theme_toggle,
            "apiType": self.api_type.value,
            "backend": {
                "database": self.backend.database.value,
                "roleBasedAuth": self.backend.role_based_auth,
                "jwtSetup": self.backend.jwt_setup,
                "apiVersioning": self.backend.api_versioning,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, name: str) -> ProjectConfig:
        """
        Build a config from a blueprint document record.

        Missing keys take defaults and unrecognized enum values fall back to the
        field default, so documents written by other versions still plan. Older
        releases stored ``projectType`` and a list of enabled feature names.
        """
        features = _feature_flags(data.get("features"))
        backend = data.get("backend")
        if not isinstance(backend, Mapping):
            backend = {}
        return cls(
            type=_coerce(ProjectType, data.get("type", data.get("projectType")), ProjectType.WEB),
            name=name,
            features=Features(
                **{f.attr: bool(features.get(f.value, False)) for f in Feature}
            ),
            state_management=_coerce(
                StateManagement, data.get("stateManagement"), StateManagement.NONE
            ),
            theme_toggle=bool(data.get("themeToggle", False)),
            api_type=_coerce(ApiType, data.get("apiType"), ApiType.REST),
            backend=BackendConfig(
                database=_coerce(Database, backend.get("database"), Database.MONGODB),
                role_based_auth=bool(backend.get("roleBasedAuth", False)),
                jwt_setup=bool(backend.get("jwtSetup", False)),
                api_versioning=bool(backend.get("apiVersioning", False)),
            ),
        )


def _feature_flags(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    if isinstance(value, (list, tuple)):
        return {v: True for v in value if isinstance(v, str)}
    return {}


def _coerce(enum: type[E], value: Any, default: E) -> E:
    if isinstance(value, str):
        value = _LEGACY_VALUES.get(value, value)
    try:
        return enum(value)
    except (ValueError, TypeError):
        return default


def validate_project_name(name: str) -> str:
    """Return ``name`` unchanged, or raise ``ValidationError`` if it is not filesystem-safe."""
    if not name or not name.strip():
        raise ValidationError("Project name cannot be empty.")
    if _INVALID_NAME_CHARS.search(name):
        raise ValidationError("Project name contains invalid characters.")
    if name != name.strip() or name.startswith(".") or name.endswith("."):
        raise ValidationError("Project name cannot start or end with a dot or space.")
    if name.upper() in _RESERVED_NAMES:
        raise ValidationError(f"'{name}' is a reserved name and cannot be used.")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"Project name is too long (max {MAX_NAME_LENGTH} characters).")
    return name
