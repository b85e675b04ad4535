"""Unit tests for the scaffold planner."""

from __future__ import annotations

from dataclasses import replace
import itertools

import pytest

from appforge.core.config import BackendConfig, Features, ProjectConfig
from appforge.core.planner import ScaffoldPlan, plan
from appforge.core.types import ApiType, Database, ProjectType, StateManagement, TemplateId

COMMON_FILES = {
    "README.md",
    ".gitignore",
    ".env",
    ".env.example",
    "prettier.config.js",
    ".eslintrc.json",
    "package.json",
    "tsconfig.json",
}


def _all_configs() -> list[ProjectConfig]:
    configs = []
    for project_type, state, api, auth, crud, versioning, roles in itertools.product(
        ProjectType,
        StateManagement,
        ApiType,
        [True, False],
        [True, False],
        [True, False],
        [True, False],
    ):
        configs.append(
            ProjectConfig(
                type=project_type,
                name="p",
                features=Features(
                    authentication=auth,
                    crud_setup=crud,
                    user_profiles=True,
                    user_settings=True,
                    responsive_layout=True,
                ),
                state_management=state,
                theme_toggle=True,
                api_type=api,
                backend=BackendConfig(role_based_auth=roles, api_versioning=versioning),
            )
        )
    return configs


class TestBaseSkeleton:
    @pytest.mark.parametrize("project_type", list(ProjectType))
    def test_common_entries(self, project_type: ProjectType) -> None:
        result = plan(ProjectConfig(type=project_type, name="p"))
        assert COMMON_FILES <= set(result.files)
        assert result.directories[:2] == ("src", "docs")

    def test_web_skeleton(self) -> None:
        result = plan(ProjectConfig(type=ProjectType.WEB, name="p"))
        assert result.files["src/app/App.tsx"] is TemplateId.WEB_APP
        assert result.files["index.html"] is TemplateId.WEB_HTML
        assert "src/assets/styles" in result.directories

    def test_mobile_skeleton(self) -> None:
        result = plan(ProjectConfig(type=ProjectType.MOBILE, name="p"))
        assert result.files["App.tsx"] is TemplateId.MOBILE_APP
        assert result.files["src/navigation/AppNavigator.tsx"] is TemplateId.MOBILE_NAVIGATOR
        assert "assets/fonts" in result.directories

    def test_backend_skeleton(self) -> None:
        result = plan(ProjectConfig(type=ProjectType.BACKEND, name="p"))
        assert result.files["src/index.ts"] is TemplateId.SERVER_ENTRY
        assert result.files["src/routes/index.ts"] is TemplateId.ROUTES_INDEX
        assert "tests" in result.directories


class TestScenarios:
    def test_backend_with_versioning(self) -> None:
        config = ProjectConfig(
            type=ProjectType.BACKEND,
            name="api",
            features=Features(authentication=True, crud_setup=True),
            backend=BackendConfig(jwt_setup=True, api_versioning=True),
        )
        result = plan(config)

        assert "src/routes/v1" in result.directories
        assert result.files["src/routes/v1/index.ts"] is TemplateId.ROUTES_V1_INDEX
        assert result.files["src/routes/v1/item.routes.ts"] is TemplateId.ITEM_ROUTES
        assert "src/routes/item.routes.ts" not in result.files
        assert result.files["src/middleware/auth.middleware.ts"] is TemplateId.AUTH_MIDDLEWARE

    def test_web_without_state_management(self) -> None:
        config = ProjectConfig(
            type=ProjectType.WEB,
            name="site",
            features=Features(authentication=True),
            state_management=StateManagement.NONE,
        )
        result = plan(config)

        assert "src/lib/store.ts" not in result.files
        assert "src/lib/AppContext.tsx" not in result.files
        assert "src/features/auth/authSlice.ts" not in result.files
        assert "src/features/auth/AuthContext.tsx" not in result.files
        assert result.files["src/features/auth/components/LoginForm.tsx"] is TemplateId.LOGIN_FORM

    @pytest.mark.parametrize(
        ("state", "expected", "absent"),
        [
            (StateManagement.REDUX, "authSlice.ts", "AuthContext.tsx"),
            (StateManagement.CONTEXT, "AuthContext.tsx", "authSlice.ts"),
        ],
    )
    @pytest.mark.parametrize("project_type", [ProjectType.WEB, ProjectType.MOBILE])
    def test_auth_state_file_is_exclusive(
        self, project_type: ProjectType, state: StateManagement, expected: str, absent: str
    ) -> None:
        config = ProjectConfig(
            type=project_type,
            name="p",
            features=Features(authentication=True),
            state_management=state,
        )
        result = plan(config)
        assert f"src/features/auth/{expected}" in result.files
        assert f"src/features/auth/{absent}" not in result.files

    def test_role_guard_requires_role_based_auth(self, web_config: ProjectConfig) -> None:
        guarded = replace(web_config, backend=BackendConfig(role_based_auth=True))
        assert "src/features/auth/components/RoleGuard.tsx" in plan(guarded).files
        assert "src/features/auth/components/RoleGuard.tsx" not in plan(web_config).files

    def test_backend_role_middleware_is_independent_of_authentication(self) -> None:
        config = ProjectConfig(
            type=ProjectType.BACKEND,
            name="p",
            backend=BackendConfig(role_based_auth=True),
        )
        result = plan(config)
        assert result.files["src/middleware/role.middleware.ts"] is TemplateId.ROLE_MIDDLEWARE
        assert "src/middleware/auth.middleware.ts" not in result.files

    def test_backend_graphql(self) -> None:
        config = ProjectConfig(type=ProjectType.BACKEND, name="p", api_type=ApiType.GRAPHQL)
        result = plan(config)
        assert "src/graphql" in result.directories
        assert result.files["src/graphql/schema.ts"] is TemplateId.GRAPHQL_SCHEMA
        assert result.files["src/graphql/resolvers.ts"] is TemplateId.GRAPHQL_RESOLVERS

    @pytest.mark.parametrize(
        ("api_type", "client", "template_id"),
        [
            (ApiType.REST, "src/lib/apiClient.ts", TemplateId.API_CLIENT),
            (ApiType.GRAPHQL, "src/lib/graphqlClient.ts", TemplateId.GRAPHQL_CLIENT),
        ],
    )
    def test_web_crud_client(self, api_type: ApiType, client: str, template_id: TemplateId) -> None:
        config = ProjectConfig(
            type=ProjectType.WEB,
            name="p",
            features=Features(crud_setup=True),
            api_type=api_type,
        )
        result = plan(config)
        assert result.files[client] is template_id
        assert "src/features/data/components" in result.directories
        assert "src/features/data/services/dataService.ts" in result.files

    def test_mobile_crud_has_no_components_dir(self, mobile_config: ProjectConfig) -> None:
        result = plan(mobile_config)
        assert "src/features/data/services" in result.directories
        assert "src/features/data/components" not in result.directories
        assert "src/lib/apiClient.ts" not in result.files

    def test_mobile_screens(self, mobile_config: ProjectConfig) -> None:
        result = plan(mobile_config)
        assert result.files["src/features/auth/LoginScreen.tsx"] is TemplateId.LOGIN_SCREEN
        assert result.files["src/features/settings/SettingsScreen.tsx"] is TemplateId.SETTINGS_SCREEN
        assert "src/features/profiles/ProfileScreen.tsx" not in result.files

    def test_theme_toggle_is_web_only(self, mobile_config: ProjectConfig) -> None:
        web = ProjectConfig(type=ProjectType.WEB, name="p", theme_toggle=True)
        mobile = replace(mobile_config, theme_toggle=True)
        assert plan(web).files["src/lib/theme.tsx"] is TemplateId.THEME_TOGGLE
        assert "src/lib/theme.tsx" not in plan(mobile).files

    def test_mobile_ignores_backend_settings(self, mobile_config: ProjectConfig) -> None:
        with_backend = replace(
            mobile_config,
            backend=BackendConfig(
                database=Database.MYSQL, role_based_auth=True, api_versioning=True
            ),
        )
        assert plan(with_backend) == plan(mobile_config)


class TestPlanProperties:
    def test_deterministic(self, web_config: ProjectConfig) -> None:
        assert plan(web_config) == plan(web_config)

    @pytest.mark.parametrize("config", _all_configs())
    def test_directories_are_unique_and_cover_every_file(self, config: ProjectConfig) -> None:
        result = plan(config)
        assert len(result.directories) == len(set(result.directories))
        dirs = set(result.directories)
        for path in result.files:
            parent = path.rpartition("/")[0]
            assert not parent or parent in dirs, path

    def test_unknown_type_plans_common_files_only(self) -> None:
        config = ProjectConfig(type="desktop", name="p")  # type: ignore[arg-type]
        result = plan(config)
        assert set(result.files) == COMMON_FILES
        assert result.directories == ("src", "docs")

    def test_plan_length_counts_entries(self) -> None:
        result = ScaffoldPlan(directories=("a", "b"), files={"c": TemplateId.README})
        assert len(result) == 3
