"""Path and policy configuration handed to each component."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
import os
from pathlib import Path

from appforge.core.errors import ValidationError

OUTPUT_DIR_ENV = "APPFORGE_OUTPUT_DIR"
BLUEPRINTS_ENV = "APPFORGE_BLUEPRINTS"
AUTH_COUPLING_ENV = "APPFORGE_AUTH_COUPLING"


class AuthCoupling(str, Enum):
    """How the backend auth questions relate to the authentication feature."""

    INDEPENDENT = "independent"
    COUPLED = "coupled"


def default_blueprint_file() -> Path:
    return Path.home() / ".appforge" / "blueprints.json"


def default_output_root() -> Path:
    return Path.home() / "dev" / "templates"


@dataclass(kw_only=True)
class Settings:
    """
    Explicit locations and policies used by one invocation.

    Attributes:
        blueprint_file: JSON document holding all blueprints.
        output_root: Directory new projects are created in.
        auth_coupling: Visibility policy for ``roleBasedAuth``/``jwtSetup``.
    """

    blueprint_file: Path = field(default_factory=default_blueprint_file)
    output_root: Path = field(default_factory=default_output_root)
    auth_coupling: AuthCoupling = AuthCoupling.INDEPENDENT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        settings = cls()
        if value := env.get(OUTPUT_DIR_ENV):
            settings.output_root = Path(value).expanduser()
        if value := env.get(BLUEPRINTS_ENV):
            settings.blueprint_file = Path(value).expanduser()
        if value := env.get(AUTH_COUPLING_ENV):
            try:
                settings.auth_coupling = AuthCoupling(value.lower())
            except ValueError:
                valid = ", ".join(c.value for c in AuthCoupling)
                raise ValidationError(
                    f"{AUTH_COUPLING_ENV} must be one of {valid}, got {value!r}."
                ) from None
        return settings
