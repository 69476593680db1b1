"""Component model: one versioned artifact and the peers it requires."""

from typing import List

from packaging.version import Version
from pydantic import BaseModel, ConfigDict, Field

from oxcompat.codes import ComponentType
from .versioning import SemVer, VersionReq, parse_version


class ComponentDependency(BaseModel):
    """A dependency on another component, identified by (name, component_type)."""
    name: str
    component_type: ComponentType
    version_req: VersionReq
    optional: bool = False  # Optional dependencies are skipped by required-dependency checks

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def required(cls, name: str, component_type: ComponentType, version_req) -> "ComponentDependency":
        return cls(name=name, component_type=component_type, version_req=version_req, optional=False)

    @classmethod
    def optional_dependency(cls, name: str, component_type: ComponentType, version_req) -> "ComponentDependency":
        return cls(name=name, component_type=component_type, version_req=version_req, optional=True)


class ComponentVersion(BaseModel):
    """A versioned component (core runtime, plugin, theme or starter).

    Lookups identify a component by (name, component_type). Nothing here
    enforces a single version per identity; a catalog may list several.
    """
    name: str
    component_type: ComponentType
    version: SemVer
    core_requirement: VersionReq = Field(default_factory=VersionReq.any)
    dependencies: List[ComponentDependency] = Field(
        default_factory=list,
        description="Ordered dependency list; check results follow this order",
    )

    model_config = ConfigDict(extra="forbid")

    @property
    def identity(self) -> tuple[str, ComponentType]:
        return (self.name, self.component_type)

    def add_dependency(self, dependency: ComponentDependency) -> None:
        """Append a dependency (order is preserved)."""
        self.dependencies.append(dependency)

    def is_compatible_with_core(self, core_version: Version) -> bool:
        return self.core_requirement.matches(parse_version(core_version))
