"""Version information for famlyeml."""

import importlib.metadata

__all__ = ["VERSION", "format_version_string"]

try:
    VERSION = importlib.metadata.version("famlyeml")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout without an install
    VERSION = "0.1.0-dev"


def format_version_string() -> str:
    """Version banner printed by ``famlyeml version`` and the help text."""
    if VERSION.endswith("-dev"):
        return f"famlyeml v{VERSION} (source checkout)"
    return f"famlyeml v{VERSION}"
