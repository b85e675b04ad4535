"""Enums describing the choices a project configuration is made of."""

from __future__ import annotations

from enum import Enum


class ProjectType(str, Enum):
    """Kind of project to scaffold."""

    WEB = "web"
    MOBILE = "mobile"
    BACKEND = "backend"

    @property
    def label(self) -> str:
        labels: dict[ProjectType, str] = {
            ProjectType.WEB: "Web (React + Vite)",
            ProjectType.MOBILE: "Mobile (Expo + React Native)",
            ProjectType.BACKEND: "Backend (Express + TypeScript)",
        }
        return labels[self]


class StateManagement(str, Enum):
    """Client-side state management solution."""

    REDUX = "redux"
    CONTEXT = "context"
    NONE = "none"

    @property
    def label(self) -> str:
        labels: dict[StateManagement, str] = {
            StateManagement.REDUX: "Redux (with Redux Toolkit)",
            StateManagement.CONTEXT: "React Context API",
            StateManagement.NONE: "None",
        }
        return labels[self]


class ApiType(str, Enum):
    """API style exposed or consumed by the project."""

    REST = "rest"
    GRAPHQL = "graphql"

    @property
    def label(self) -> str:
        labels: dict[ApiType, str] = {
            ApiType.REST: "REST API",
            ApiType.GRAPHQL: "GraphQL",
        }
        return labels[self]


class Database(str, Enum):
    """Database backing the server side."""

    MONGODB = "mongodb"
    POSTGRES = "postgres"
    MYSQL = "mysql"

    @property
    def label(self) -> str:
        labels: dict[Database, str] = {
            Database.MONGODB: "MongoDB",
            Database.POSTGRES: "PostgreSQL",
            Database.MYSQL: "MySQL",
        }
        return labels[self]


class Feature(str, Enum):
    """Optional feature flags. Values are the keys used in blueprint documents."""

    AUTHENTICATION = "authentication"
    USER_PROFILES = "userProfiles"
    USER_SETTINGS = "userSettings"
    RESPONSIVE_LAYOUT = "responsiveLayout"
    CRUD_SETUP = "crudSetup"

    @property
    def label(self) -> str:
        labels: dict[Feature, str] = {
            Feature.AUTHENTICATION: "Authentication",
            Feature.USER_PROFILES: "User Profiles",
            Feature.USER_SETTINGS: "User Settings",
            Feature.RESPONSIVE_LAYOUT: "Responsive Layout",
            Feature.CRUD_SETUP: "CRUD Operations",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[Feature, str] = {
            Feature.AUTHENTICATION: "User login, registration, and authorization",
            Feature.USER_PROFILES: "User profile creation and management",
            Feature.USER_SETTINGS: "Customizable user preferences",
            Feature.RESPONSIVE_LAYOUT: "Layout adapts to different screen sizes",
            Feature.CRUD_SETUP: "Create, read, update, delete operations",
        }
        return descriptions[self]

    @property
    def attr(self) -> str:
        """Attribute name on :class:`appforge.core.config.Features`."""
        attrs: dict[Feature, str] = {
            Feature.AUTHENTICATION: "authentication",
            Feature.USER_PROFILES: "user_profiles",
            Feature.USER_SETTINGS: "user_settings",
            Feature.RESPONSIVE_LAYOUT: "responsive_layout",
            Feature.CRUD_SETUP: "crud_setup",
        }
        return attrs[self]


class TemplateId(str, Enum):
    """Closed set of template identifiers a scaffold plan can reference."""

    # Shared by every project type
    README = "readme"
    GITIGNORE = "gitignore"
    ENV = "env"
    ENV_EXAMPLE = "env-example"
    PRETTIER_CONFIG = "prettier-config"
    ESLINT_CONFIG = "eslint-config"
    PACKAGE_JSON = "package-json"
    TSCONFIG = "tsconfig"

    # Web
    WEB_HTML = "web-html"
    VITE_CONFIG = "vite-config"
    WEB_INDEX = "web-index"
    WEB_APP = "web-app"
    WEB_CSS = "web-css"
    WEB_LAYOUT = "web-layout"
    WEB_NAVBAR = "web-navbar"
    WEB_HOME = "web-home"
    RESPONSIVE_CSS = "responsive-css"
    THEME_TOGGLE = "theme-toggle"
    LOGIN_FORM = "login-form"
    ROLE_GUARD = "role-guard"
    PROFILE_PAGE = "profile-page"
    SETTINGS_PAGE = "settings-page"
    API_CLIENT = "api-client"
    GRAPHQL_CLIENT = "graphql-client"

    # Web and mobile
    REDUX_STORE = "redux-store"
    APP_CONTEXT = "app-context"
    AUTH_SLICE = "auth-slice"
    AUTH_CONTEXT = "auth-context"
    AUTH_SERVICE = "auth-service"
    DATA_SERVICE = "data-service"

    # Mobile
    MOBILE_APP = "mobile-app"
    MOBILE_APP_JSON = "mobile-app-json"
    MOBILE_BABEL_CONFIG = "mobile-babel-config"
    MOBILE_NAVIGATOR = "mobile-navigator"
    LOGIN_SCREEN = "login-screen"
    PROFILE_SCREEN = "profile-screen"
    SETTINGS_SCREEN = "settings-screen"

    # Backend
    SERVER_ENTRY = "server-entry"
    BACKEND_CONFIG = "backend-config"
    DATABASE_CONFIG = "database-config"
    ROUTES_INDEX = "routes-index"
    ROUTES_V1_INDEX = "routes-v1-index"
    AUTH_MIDDLEWARE = "auth-middleware"
    ROLE_MIDDLEWARE = "role-middleware"
    AUTH_CONTROLLER = "auth-controller"
    AUTH_ROUTES = "auth-routes"
    USER_MODEL = "user-model"
    GRAPHQL_SCHEMA = "graphql-schema"
    GRAPHQL_RESOLVERS = "graphql-resolvers"
    ITEM_MODEL = "item-model"
    ITEM_CONTROLLER = "item-controller"
    ITEM_ROUTES = "item-routes"
