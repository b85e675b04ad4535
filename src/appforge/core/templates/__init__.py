"""Template renderer: maps each ``TemplateId`` to the text of one generated file."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from appforge.core.config import ProjectConfig
from appforge.core.errors import UnknownTemplateId
from appforge.core.templates import _backend, _common, _frontend, _mobile, _web
from appforge.core.types import TemplateId
from appforge.log import Logger, get_logger

if TYPE_CHECKING:
    from appforge.core.planner import ScaffoldPlan

Renderer = Callable[[ProjectConfig], str]

_RENDERERS: dict[TemplateId, Renderer] = {
    # common
    TemplateId.README: _common.readme,
    TemplateId.GITIGNORE: _common.gitignore,
    TemplateId.ENV: _common.env_file,
    TemplateId.ENV_EXAMPLE: _common.env_example_file,
    TemplateId.PRETTIER_CONFIG: _common.prettier_config,
    TemplateId.ESLINT_CONFIG: _common.eslint_config,
    TemplateId.PACKAGE_JSON: _common.package_json,
    TemplateId.TSCONFIG: _common.tsconfig,
    # web
    TemplateId.WEB_HTML: _web.index_html,
    TemplateId.VITE_CONFIG: _web.vite_config,
    TemplateId.WEB_INDEX: _web.index_tsx,
    TemplateId.WEB_APP: _web.app_tsx,
    TemplateId.WEB_CSS: _web.index_css,
    TemplateId.WEB_LAYOUT: _web.layout_tsx,
    TemplateId.WEB_NAVBAR: _web.navbar_tsx,
    TemplateId.WEB_HOME: _web.home_tsx,
    TemplateId.RESPONSIVE_CSS: _web.responsive_css,
    TemplateId.THEME_TOGGLE: _web.theme_tsx,
    TemplateId.LOGIN_FORM: _web.login_form_tsx,
    TemplateId.ROLE_GUARD: _web.role_guard_tsx,
    TemplateId.PROFILE_PAGE: _web.profile_tsx,
    TemplateId.SETTINGS_PAGE: _web.settings_tsx,
    TemplateId.API_CLIENT: _web.api_client_ts,
    TemplateId.GRAPHQL_CLIENT: _web.graphql_client_ts,
    # web + mobile
    TemplateId.REDUX_STORE: _frontend.redux_store,
    TemplateId.APP_CONTEXT: _frontend.app_context,
    TemplateId.AUTH_SLICE: _frontend.auth_slice,
    TemplateId.AUTH_CONTEXT: _frontend.auth_context,
    TemplateId.AUTH_SERVICE: _frontend.auth_service,
    TemplateId.DATA_SERVICE: _frontend.data_service,
    # mobile
    TemplateId.MOBILE_APP: _mobile.app_tsx,
    TemplateId.MOBILE_APP_JSON: _mobile.app_json,
    TemplateId.MOBILE_BABEL_CONFIG: _mobile.babel_config,
    TemplateId.MOBILE_NAVIGATOR: _mobile.navigator_tsx,
    TemplateId.LOGIN_SCREEN: _mobile.login_screen_tsx,
    TemplateId.PROFILE_SCREEN: _mobile.profile_screen_tsx,
    TemplateId.SETTINGS_SCREEN: _mobile.settings_screen_tsx,
    # backend
    TemplateId.SERVER_ENTRY: _backend.server_entry,
    TemplateId.BACKEND_CONFIG: _backend.backend_config,
    TemplateId.DATABASE_CONFIG: _backend.database_config,
    TemplateId.ROUTES_INDEX: _backend.routes_index,
    TemplateId.ROUTES_V1_INDEX: _backend.routes_v1_index,
    TemplateId.AUTH_MIDDLEWARE: _backend.auth_middleware,
    TemplateId.ROLE_MIDDLEWARE: _backend.role_middleware,
    TemplateId.AUTH_CONTROLLER: _backend.auth_controller,
    TemplateId.AUTH_ROUTES: _backend.auth_routes,
    TemplateId.USER_MODEL: _backend.user_model,
    TemplateId.GRAPHQL_SCHEMA: _backend.graphql_schema,
    TemplateId.GRAPHQL_RESOLVERS: _backend.graphql_resolvers,
    TemplateId.ITEM_MODEL: _backend.item_model,
    TemplateId.ITEM_CONTROLLER: _backend.item_controller,
    TemplateId.ITEM_ROUTES: _backend.item_routes,
}


def render(template_id: TemplateId, config: ProjectConfig) -> str:
    """Render one template. Pure: the same inputs always produce the same text."""
    return _RENDERERS[template_id](config)


def render_key(key: str, config: ProjectConfig, log: Logger | None = None) -> str:
    """
    Render a template given its string key.

    Keys outside ``TemplateId`` do not abort a run: a warning is logged and an
    empty string is returned.
    """
    try:
        template_id = TemplateId(key)
    except ValueError:
        (log or get_logger()).warn(str(UnknownTemplateId(key)))
        return ""
    return render(template_id, config)


def render_plan(plan: ScaffoldPlan, config: ProjectConfig) -> dict[str, str]:
    """Render every file in ``plan``, keyed by its relative path."""
    return {path: render(template_id, config) for path, template_id in plan.files.items()}


__all__ = [
    "Renderer",
    "render",
    "render_key",
    "render_plan",
]
