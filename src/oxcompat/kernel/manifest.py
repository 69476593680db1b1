"""Component manifests (``oxide.toml``) parsed into pydantic models.

Example::

    [package]
    name = "my-theme"
    version = "1.0.0"
    type = "theme"

    [compatibility]
    oxidekit = ">=0.5.0"

    [dependencies.plugins]
    icons = "^1.0.0"
    charts = { version = "^2.1", optional = true }

Every failure (bad TOML, missing or mistyped fields, unparseable version
strings) surfaces as a single ManifestParseError.
"""

import tomllib
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from oxcompat.codes import ComponentType
from .component import ComponentDependency, ComponentVersion
from .errors import ManifestParseError, VersionParseError
from .versioning import parse_requirement, parse_version


class PackageInfo(BaseModel):
    """The ``[package]`` table."""
    name: str
    version: str
    description: str = ""
    component_type: ComponentType = Field(..., alias="type")
    authors: List[str] = Field(default_factory=list)
    license: Optional[str] = None
    repository: Optional[str] = None

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class CompatibilitySpec(BaseModel):
    """The ``[compatibility]`` table."""
    oxidekit: str = "*"  # Core runtime requirement
    rust: Optional[str] = None  # Minimum Rust toolchain, informational

    model_config = ConfigDict(extra="ignore")


class DependencyEntry(BaseModel):
    """Detailed dependency record: ``{ version = "...", optional = true }``."""
    version: str
    optional: bool = False
    features: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


# A dependency is either a bare requirement string or a detailed record
DependencyValue = Union[str, DependencyEntry]


def dependency_version(entry: DependencyValue) -> str:
    return entry if isinstance(entry, str) else entry.version


def dependency_is_optional(entry: DependencyValue) -> bool:
    return False if isinstance(entry, str) else entry.optional


class DependencySpec(BaseModel):
    """The ``[dependencies]`` table, split by component kind."""
    plugins: Dict[str, DependencyValue] = Field(default_factory=dict)
    themes: Dict[str, DependencyValue] = Field(default_factory=dict)

    model_config = ConfigDict(extra="ignore")


class ComponentManifest(BaseModel):
    """A parsed component manifest."""
    package: PackageInfo
    compatibility: CompatibilitySpec = Field(default_factory=CompatibilitySpec)
    dependencies: DependencySpec = Field(default_factory=DependencySpec)

    model_config = ConfigDict(extra="ignore")

    def to_component(self) -> ComponentVersion:
        """Build the ComponentVersion this manifest describes.

        Dependencies are ordered plugins first, then themes, each in manifest
        order.
        """
        try:
            component = ComponentVersion(
                name=self.package.name,
                component_type=self.package.component_type,
                version=parse_version(self.package.version),
                core_requirement=parse_requirement(self.compatibility.oxidekit),
            )
            for kind, entries in (
                (ComponentType.PLUGIN, self.dependencies.plugins),
                (ComponentType.THEME, self.dependencies.themes),
            ):
                for name, entry in entries.items():
                    component.add_dependency(ComponentDependency(
                        name=name,
                        component_type=kind,
                        version_req=parse_requirement(dependency_version(entry)),
                        optional=dependency_is_optional(entry),
                    ))
        except VersionParseError as exc:
            raise ManifestParseError(str(exc)) from exc
        return component


def parse_manifest(text: str) -> ComponentManifest:
    """Parse manifest TOML text. Raises ManifestParseError on any failure."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestParseError(str(exc)) from exc

    try:
        return ComponentManifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestParseError(str(exc)) from exc
