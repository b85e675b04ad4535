"""appforge: configuration-driven project scaffolding."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("appforge")
except PackageNotFoundError:
    __version__ = "0.0.0"
