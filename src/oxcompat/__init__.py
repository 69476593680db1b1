"""oxcompat: compatibility checking and migration planning for OxideKit components."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("oxcompat")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from oxcompat.api import (
    check_component,
    check_manifest,
    check_upgrade,
    plan_migration,
    ComponentReport,
    MigrationPathResult,
)
from oxcompat.codes import ComponentType, CompatibilityLevel
from oxcompat.kernel.errors import ManifestParseError, OxCompatError, VersionParseError

__all__ = [
    "__version__",
    "check_component",
    "check_manifest",
    "check_upgrade",
    "plan_migration",
    "ComponentReport",
    "MigrationPathResult",
    "ComponentType",
    "CompatibilityLevel",
    "ManifestParseError",
    "OxCompatError",
    "VersionParseError",
]
