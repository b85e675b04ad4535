"""Scaffold planner: turns a ``ProjectConfig`` into the list of paths to create."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from appforge.core.config import ProjectConfig
from appforge.core.types import ApiType, ProjectType, StateManagement, TemplateId


@dataclass(frozen=True)
class ScaffoldPlan:
    """
    Everything a project needs on disk, before any rendering happens.

    Attributes:
        directories: Relative POSIX paths, parents before children, no duplicates.
        files: Relative POSIX path to the template that produces its content.
    """

    directories: tuple[str, ...] = ()
    files: dict[str, TemplateId] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.directories) + len(self.files)


_COMMON_DIRS = ("src", "docs")

_COMMON_FILES: dict[str, TemplateId] = {
    "README.md": TemplateId.README,
    ".gitignore": TemplateId.GITIGNORE,
    ".env": TemplateId.ENV,
    ".env.example": TemplateId.ENV_EXAMPLE,
    "prettier.config.js": TemplateId.PRETTIER_CONFIG,
    ".eslintrc.json": TemplateId.ESLINT_CONFIG,
    "package.json": TemplateId.PACKAGE_JSON,
    "tsconfig.json": TemplateId.TSCONFIG,
}

_SKELETON_DIRS: dict[ProjectType, tuple[str, ...]] = {
    ProjectType.WEB: (
        "public",
        "src/app",
        "src/features",
        "src/features/home",
        "src/shared",
        "src/lib",
        "src/assets",
        "src/assets/images",
        "src/assets/styles",
    ),
    ProjectType.MOBILE: (
        "assets",
        "assets/images",
        "assets/fonts",
        "assets/icons",
        "src/app",
        "src/components",
        "src/features",
        "src/navigation",
        "src/lib",
    ),
    ProjectType.BACKEND: (
        "src/config",
        "src/controllers",
        "src/middleware",
        "src/models",
        "src/routes",
        "src/services",
        "src/utils",
        "tests",
    ),
}

_SKELETON_FILES: dict[ProjectType, dict[str, TemplateId]] = {
    ProjectType.WEB: {
        "index.html": TemplateId.WEB_HTML,
        "vite.config.ts": TemplateId.VITE_CONFIG,
        "src/index.tsx": TemplateId.WEB_INDEX,
        "src/app/App.tsx": TemplateId.WEB_APP,
        "src/index.css": TemplateId.WEB_CSS,
        "src/shared/Layout.tsx": TemplateId.WEB_LAYOUT,
        "src/shared/Navbar.tsx": TemplateId.WEB_NAVBAR,
        "src/features/home/Home.tsx": TemplateId.WEB_HOME,
    },
    ProjectType.MOBILE: {
        "App.tsx": TemplateId.MOBILE_APP,
        "app.json": TemplateId.MOBILE_APP_JSON,
        "babel.config.js": TemplateId.MOBILE_BABEL_CONFIG,
        "src/navigation/AppNavigator.tsx": TemplateId.MOBILE_NAVIGATOR,
    },
    ProjectType.BACKEND: {
        "src/index.ts": TemplateId.SERVER_ENTRY,
        "src/config/index.ts": TemplateId.BACKEND_CONFIG,
        "src/config/database.ts": TemplateId.DATABASE_CONFIG,
        "src/routes/index.ts": TemplateId.ROUTES_INDEX,
    },
}

_FRONTEND = (ProjectType.WEB, ProjectType.MOBILE)


class _PlanBuilder:
    def __init__(self) -> None:
        self.directories: dict[str, None] = {}
        self.files: dict[str, TemplateId] = {}

    def dirs(self, *paths: str) -> None:
        for path in paths:
            self.directories.setdefault(path, None)

    def file(self, path: str, template_id: TemplateId) -> None:
        self.files[path] = template_id

    def build(self) -> ScaffoldPlan:
        return ScaffoldPlan(directories=tuple(self.directories), files=dict(self.files))


def _state_store(config: ProjectConfig, b: _PlanBuilder) -> None:
    if config.type not in _FRONTEND:
        return
    if config.state_management == StateManagement.REDUX:
        b.file("src/lib/store.ts", TemplateId.REDUX_STORE)
    elif config.state_management == StateManagement.CONTEXT:
        b.file("src/lib/AppContext.tsx", TemplateId.APP_CONTEXT)


def _authentication(config: ProjectConfig, b: _PlanBuilder) -> None:
    if not config.features.authentication:
        return

    if config.type in _FRONTEND:
        b.dirs("src/features/auth", "src/features/auth/components", "src/features/auth/services")
        b.file("src/features/auth/services/authService.ts", TemplateId.AUTH_SERVICE)
        if config.type == ProjectType.WEB:
            b.file("src/features/auth/components/LoginForm.tsx", TemplateId.LOGIN_FORM)
            if config.backend.role_based_auth:
                b.file("src/features/auth/components/RoleGuard.tsx", TemplateId.ROLE_GUARD)
        else:
            b.file("src/features/auth/LoginScreen.tsx", TemplateId.LOGIN_SCREEN)
        # exactly one auth state file, chosen by the state management strategy
        if config.state_management == StateManagement.REDUX:
            b.file("src/features/auth/authSlice.ts", TemplateId.AUTH_SLICE)
        elif config.state_management == StateManagement.CONTEXT:
            b.file("src/features/auth/AuthContext.tsx", TemplateId.AUTH_CONTEXT)

    elif config.type == ProjectType.BACKEND:
        b.file("src/middleware/auth.middleware.ts", TemplateId.AUTH_MIDDLEWARE)
        b.file("src/controllers/auth.controller.ts", TemplateId.AUTH_CONTROLLER)
        b.file("src/routes/auth.routes.ts", TemplateId.AUTH_ROUTES)
        b.file("src/models/user.model.ts", TemplateId.USER_MODEL)


def _role_based_auth(config: ProjectConfig, b: _PlanBuilder) -> None:
    if config.type == ProjectType.BACKEND and config.backend.role_based_auth:
        b.file("src/middleware/role.middleware.ts", TemplateId.ROLE_MIDDLEWARE)


def _profiles_and_settings(config: ProjectConfig, b: _PlanBuilder) -> None:
    features = config.features
    if config.type == ProjectType.WEB:
        if features.user_profiles:
            b.dirs("src/features/profiles", "src/features/profiles/components")
            b.file("src/features/profiles/components/Profile.tsx", TemplateId.PROFILE_PAGE)
        if features.user_settings:
            b.dirs("src/features/settings", "src/features/settings/components")
            b.file("src/features/settings/components/Settings.tsx", TemplateId.SETTINGS_PAGE)
    elif config.type == ProjectType.MOBILE:
        if features.user_profiles:
            b.dirs("src/features/profiles")
            b.file("src/features/profiles/ProfileScreen.tsx", TemplateId.PROFILE_SCREEN)
        if features.user_settings:
            b.dirs("src/features/settings")
            b.file("src/features/settings/SettingsScreen.tsx", TemplateId.SETTINGS_SCREEN)


def _responsive_layout(config: ProjectConfig, b: _PlanBuilder) -> None:
    if config.type == ProjectType.WEB and config.features.responsive_layout:
        b.file("src/assets/styles/responsive.css", TemplateId.RESPONSIVE_CSS)


def _theme_toggle(config: ProjectConfig, b: _PlanBuilder) -> None:
    # TODO: mobile projects accept theme_toggle but get no theme provider yet.
    if config.type == ProjectType.WEB and config.theme_toggle:
        b.file("src/lib/theme.tsx", TemplateId.THEME_TOGGLE)


def _api_versioning(config: ProjectConfig, b: _PlanBuilder) -> None:
    if config.type == ProjectType.BACKEND and config.backend.api_versioning:
        b.dirs("src/routes/v1")
        b.file("src/routes/v1/index.ts", TemplateId.ROUTES_V1_INDEX)


def _graphql(config: ProjectConfig, b: _PlanBuilder) -> None:
    if config.type == ProjectType.BACKEND and config.api_type == ApiType.GRAPHQL:
        b.dirs("src/graphql")
        b.file("src/graphql/schema.ts", TemplateId.GRAPHQL_SCHEMA)
        b.file("src/graphql/resolvers.ts", TemplateId.GRAPHQL_RESOLVERS)


def _crud(config: ProjectConfig, b: _PlanBuilder) -> None:
    if not config.features.crud_setup:
        return

    if config.type in _FRONTEND:
        b.dirs("src/features/data", "src/features/data/services")
        if config.type == ProjectType.WEB:
            b.dirs("src/features/data/components")
            if config.api_type == ApiType.GRAPHQL:
                b.file("src/lib/graphqlClient.ts", TemplateId.GRAPHQL_CLIENT)
            else:
                b.file("src/lib/apiClient.ts", TemplateId.API_CLIENT)
        b.file("src/features/data/services/dataService.ts", TemplateId.DATA_SERVICE)

    elif config.type == ProjectType.BACKEND:
        routes_dir = "src/routes/v1" if config.backend.api_versioning else "src/routes"
        b.file("src/models/item.model.ts", TemplateId.ITEM_MODEL)
        b.file("src/controllers/item.controller.ts", TemplateId.ITEM_CONTROLLER)
        b.file(f"{routes_dir}/item.routes.ts", TemplateId.ITEM_ROUTES)


_RULES: tuple[Callable[[ProjectConfig, _PlanBuilder], None], ...] = (
    _state_store,
    _authentication,
    _role_based_auth,
    _profiles_and_settings,
    _responsive_layout,
    _theme_toggle,
    _api_versioning,
    _graphql,
    _crud,
)


def plan(config: ProjectConfig) -> ScaffoldPlan:
    """
    Compute the scaffold for ``config``.

    The base skeleton for the project type comes first, then each feature rule
    in a fixed order. Repeated directories keep their first position; a later
    rule writing the same file path replaces the earlier template. Planning is
    pure and never raises.
    """
    b = _PlanBuilder()
    b.dirs(*_COMMON_DIRS)
    for path, template_id in _COMMON_FILES.items():
        b.file(path, template_id)

    b.dirs(*_SKELETON_DIRS.get(config.type, ()))
    for path, template_id in _SKELETON_FILES.get(config.type, {}).items():
        b.file(path, template_id)

    for rule in _RULES:
        rule(config, b)

    return b.build()
