"""Files shared by every project type: manifest, env files, tooling config."""

from __future__ import annotations

import json
import re
from typing import Any

from appforge.core.config import ProjectConfig
from appforge.core.types import ApiType, Database, ProjectType, StateManagement

# Development-only default. Never copy it into a deployed environment.
DEV_JWT_SECRET = "insecure-dev-secret-change-me"

SECRET_PLACEHOLDER = "<your-jwt-secret>"
PASSWORD_PLACEHOLDER = "<your-database-password>"

_COMMON_DEV_DEPS: dict[str, str] = {
    "typescript": "^4.9.5",
    "prettier": "^2.8.7",
    "eslint": "^8.39.0",
    "@typescript-eslint/parser": "^5.59.0",
    "@typescript-eslint/eslint-plugin": "^5.59.0",
}

_WEB_DEPS: dict[str, str] = {
    "react": "^18.2.0",
    "react-dom": "^18.2.0",
    "react-router-dom": "^6.10.0",
}

_WEB_DEV_DEPS: dict[str, str] = {
    "vite": "^4.3.0",
    "@vitejs/plugin-react": "^4.0.0",
    "@types/react": "^18.0.28",
    "@types/react-dom": "^18.0.11",
}

_MOBILE_DEPS: dict[str, str] = {
    "expo": "~48.0.15",
    "expo-status-bar": "~1.4.4",
    "react": "18.2.0",
    "react-native": "0.71.7",
    "@react-navigation/native": "^6.1.6",
    "@react-navigation/native-stack": "^6.9.12",
    "react-native-screens": "~3.20.0",
    "react-native-safe-area-context": "4.5.0",
}

_MOBILE_DEV_DEPS: dict[str, str] = {
    "@babel/core": "^7.20.0",
    "@types/react": "~18.0.27",
}

_BACKEND_DEPS: dict[str, str] = {
    "express": "^4.18.2",
    "cors": "^2.8.5",
    "helmet": "^6.1.5",
    "dotenv": "^16.0.3",
}

_BACKEND_DEV_DEPS: dict[str, str] = {
    "@types/express": "^4.17.17",
    "@types/cors": "^2.8.13",
    "@types/node": "^18.16.0",
    "ts-node-dev": "^2.0.0",
}

_BACKEND_AUTH_DEPS: dict[str, str] = {
    "bcryptjs": "^2.4.3",
    "passport": "^0.6.0",
    "passport-jwt": "^4.0.1",
}

_BACKEND_AUTH_DEV_DEPS: dict[str, str] = {
    "@types/bcryptjs": "^2.4.2",
    "@types/passport": "^1.0.12",
    "@types/passport-jwt": "^3.0.8",
}

_DATABASE_DEPS: dict[Database, dict[str, str]] = {
    Database.MONGODB: {"mongoose": "^7.1.0"},
    Database.POSTGRES: {"pg": "^8.10.0"},
    Database.MYSQL: {"mysql2": "^3.3.0"},
}

_DATABASE_DEV_DEPS: dict[Database, dict[str, str]] = {
    Database.POSTGRES: {"@types/pg": "^8.6.6"},
}

_REDUX_DEPS: dict[str, str] = {
    "@reduxjs/toolkit": "^1.9.5",
    "react-redux": "^8.0.5",
}

_SCRIPTS: dict[ProjectType, dict[str, str]] = {
    ProjectType.WEB: {
        "dev": "vite",
        "build": "tsc && vite build",
        "start": "vite preview",
    },
    ProjectType.MOBILE: {
        "dev": "expo start",
        "build": "expo export",
        "start": "expo start",
        "android": "expo start --android",
        "ios": "expo start --ios",
    },
    ProjectType.BACKEND: {
        "dev": "ts-node-dev --respawn src/index.ts",
        "build": "tsc",
        "start": "node dist/index.js",
    },
}


def package_name(name: str) -> str:
    """npm-compatible package name derived from the project name."""
    slug = re.sub(r"[^a-z0-9._-]+", "-", name.lower()).strip("-._")
    return slug or "app"


def database_name(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")
    return slug or "app"


def _json(value: Any) -> str:
    return json.dumps(value, indent=2) + "\n"


def _dependencies(config: ProjectConfig) -> tuple[dict[str, str], dict[str, str]]:
    deps: dict[str, str] = {}
    dev_deps: dict[str, str] = dict(_COMMON_DEV_DEPS)
    frontend = config.type in (ProjectType.WEB, ProjectType.MOBILE)

    if config.type == ProjectType.WEB:
        deps |= _WEB_DEPS
        dev_deps |= _WEB_DEV_DEPS
    elif config.type == ProjectType.MOBILE:
        deps |= _MOBILE_DEPS
        dev_deps |= _MOBILE_DEV_DEPS
    elif config.type == ProjectType.BACKEND:
        deps |= _BACKEND_DEPS
        dev_deps |= _BACKEND_DEV_DEPS
        deps |= _DATABASE_DEPS[config.backend.database]
        dev_deps |= _DATABASE_DEV_DEPS.get(config.backend.database, {})

    if config.features.authentication:
        if config.type == ProjectType.BACKEND:
            deps |= _BACKEND_AUTH_DEPS
            dev_deps |= _BACKEND_AUTH_DEV_DEPS
        else:
            deps["axios"] = "^1.3.6"

    if config.backend.jwt_setup and config.type == ProjectType.BACKEND:
        deps["jsonwebtoken"] = "^9.0.0"
        dev_deps["@types/jsonwebtoken"] = "^9.0.1"
    elif config.backend.jwt_setup and config.type == ProjectType.WEB:
        deps["jwt-decode"] = "^3.1.2"

    if config.api_type == ApiType.GRAPHQL:
        if config.type == ProjectType.BACKEND:
            deps["@apollo/server"] = "^4.7.0"
            deps["graphql"] = "^16.6.0"
        elif config.type == ProjectType.WEB and config.features.crud_setup:
            deps["@apollo/client"] = "^3.7.14"
            deps["graphql"] = "^16.6.0"
    elif config.type == ProjectType.WEB and config.features.crud_setup:
        deps["axios"] = "^1.3.6"

    if frontend and config.state_management == StateManagement.REDUX:
        deps |= _REDUX_DEPS

    return dict(sorted(deps.items())), dict(sorted(dev_deps.items()))


def package_json(config: ProjectConfig) -> str:
    """Generate package.json. Dependency and script lists derive only from config flags."""
    deps, dev_deps = _dependencies(config)
    scripts = dict(_SCRIPTS.get(config.type, {}))
    scripts["lint"] = "eslint . --ext .ts,.tsx"
    scripts["format"] = 'prettier --write "**/*.{js,ts,tsx,json,md}"'

    manifest: dict[str, Any] = {
        "name": package_name(config.name),
        "version": "0.1.0",
        "private": True,
    }
    if config.type == ProjectType.MOBILE:
        manifest["main"] = "node_modules/expo/AppEntry.js"
    manifest["scripts"] = scripts
    manifest["dependencies"] = deps
    manifest["devDependencies"] = dev_deps
    return _json(manifest)


def readme(config: ProjectConfig) -> str:
    enabled = [f.label for f in config.features.enabled()]
    if config.theme_toggle:
        enabled.append("Theme Toggle")
    features = "\n".join(f"- {label}" for label in enabled) or "- None"

    stack = [f"- Type: {config.type.label}"]
    if config.type != ProjectType.BACKEND:
        stack.append(f"- State management: {config.state_management.label}")
    stack.append(f"- API: {config.api_type.label}")
    if config.uses_backend:
        stack.append(f"- Database: {config.backend.database.label}")
    stack_str = "\n".join(stack)

    return f"""\
# {config.name}

Generated with appforge.

## Stack

{stack_str}

## Features

{features}

## Getting Started

### Installation

```bash
npm install
```

### Development

```bash
npm run dev
```

### Environment

Copy `.env.example` to `.env` and fill in the placeholders. The generated
`.env` contains development-only defaults and must not be used in production.
"""


def gitignore(config: ProjectConfig) -> str:
    content = """\
# Dependencies
node_modules/
.pnp/
.pnp.js

# Build outputs
dist/
build/
out/

# Testing
coverage/

# Environment variables
.env
.env.local
.env.development.local
.env.test.local
.env.production.local

# Logs
logs/
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# Editor directories and files
.idea/
.vscode/*
!.vscode/extensions.json
!.vscode/settings.json
*.suo
*.sw?

# OS files
.DS_Store
Thumbs.db

# Debug
.eslintcache
*.tsbuildinfo
"""
    if config.type == ProjectType.WEB:
        content += """
# Web
.vite/
.cache/
"""
    elif config.type == ProjectType.MOBILE:
        content += """
# Mobile
.expo/
web-build/
*.jks
*.p8
*.p12
*.key
*.mobileprovision
"""
    return content


def _env(config: ProjectConfig, example: bool) -> str:
    secret = SECRET_PLACEHOLDER if example else DEV_JWT_SECRET
    password = PASSWORD_PLACEHOLDER
    db = database_name(config.name)
    lines = [
        "# Server Configuration",
        "PORT=3000",
        "NODE_ENV=development",
        "",
    ]

    if config.uses_backend:
        lines.append("# Database")
        database = config.backend.database
        if database == Database.MONGODB:
            lines.append(f"MONGODB_URI=mongodb://localhost:27017/{db}")
        elif database == Database.POSTGRES:
            lines += [
                "POSTGRES_HOST=localhost",
                "POSTGRES_PORT=5432",
                f"POSTGRES_DB={db}",
                "POSTGRES_USER=postgres",
                f"POSTGRES_PASSWORD={password if example else 'postgres'}",
            ]
        elif database == Database.MYSQL:
            lines += [
                "MYSQL_HOST=localhost",
                "MYSQL_PORT=3306",
                f"MYSQL_DATABASE={db}",
                "MYSQL_USER=root",
                f"MYSQL_PASSWORD={password if example else 'mysql'}",
            ]
        lines.append("")

    if config.features.authentication:
        lines.append("# Authentication")
        if not example:
            lines.append("# Development only: replace before deploying anywhere.")
        lines += [
            f"JWT_SECRET={secret}",
            "JWT_ACCESS_EXPIRATION_MINUTES=30",
            "JWT_REFRESH_EXPIRATION_DAYS=30",
            "",
        ]

    if config.type in (ProjectType.WEB, ProjectType.MOBILE):
        base = "/api/v1" if config.uses_backend and config.backend.api_versioning else "/api"
        lines += [
            "# API Configuration",
            f"API_URL=http://localhost:3000{base}",
            "API_TIMEOUT=30000",
            "",
        ]

    lines += ["# Feature Flags", "ENABLE_LOGGING=true"]
    if config.features.authentication:
        lines.append("ENABLE_AUTH=true")
    if config.features.crud_setup:
        lines.append("ENABLE_CRUD_API=true")
    lines.append("")

    lines += [
        "# For Production/Staging (examples)",
        "# PORT=8080",
        f"# API_URL=https://api.{package_name(config.name)}.com",
    ]
    if config.features.authentication:
        lines.append(f"# JWT_SECRET={SECRET_PLACEHOLDER}")
    return "\n".join(lines) + "\n"


def env_file(config: ProjectConfig) -> str:
    return _env(config, example=False)


def env_example_file(config: ProjectConfig) -> str:
    return _env(config, example=True)


def prettier_config(config: ProjectConfig) -> str:
    quote = "true" if config.type == ProjectType.WEB else "false"
    return f"""\
module.exports = {{
  semi: true,
  singleQuote: {quote},
  trailingComma: 'es5',
  printWidth: 80,
  tabWidth: 2,
  useTabs: false,
  bracketSpacing: true,
  arrowParens: 'avoid',
  endOfLine: 'lf',
  overrides: [
    {{ files: '*.md', options: {{ tabWidth: 2 }} }},
    {{ files: '*.json', options: {{ printWidth: 200 }} }},
  ],
}};
"""


def eslint_config(config: ProjectConfig) -> str:
    env: dict[str, bool] = {"es2021": True}
    extends = ["eslint:recommended", "plugin:@typescript-eslint/recommended"]
    if config.type == ProjectType.BACKEND:
        env["node"] = True
    else:
        env["browser"] = True

    return _json(
        {
            "root": True,
            "env": env,
            "parser": "@typescript-eslint/parser",
            "parserOptions": {"ecmaVersion": "latest", "sourceType": "module"},
            "plugins": ["@typescript-eslint"],
            "extends": extends,
            "ignorePatterns": ["dist", "build", "node_modules"],
        }
    )


def tsconfig(config: ProjectConfig) -> str:
    options: dict[str, Any] = {
        "target": "es2018",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
        "forceConsistentCasingInFileNames": True,
    }
    include = ["src"]
    if config.type == ProjectType.BACKEND:
        options |= {"module": "commonjs", "outDir": "dist", "rootDir": "src"}
    elif config.type == ProjectType.WEB:
        options |= {
            "module": "esnext",
            "moduleResolution": "node",
            "jsx": "react-jsx",
            "lib": ["dom", "dom.iterable", "esnext"],
            "noEmit": True,
        }
    else:
        options |= {"module": "esnext", "jsx": "react-native", "noEmit": True}
        include = ["App.tsx", "src"]
    return _json({"compilerOptions": options, "include": include})
