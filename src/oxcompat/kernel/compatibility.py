"""Compatibility decisions for ecosystem components.

A checker is bound to one reference version (the installed core runtime) and
answers three questions:

1. Does a component's core requirement accept the reference version?
2. Are a component's required dependencies present in a catalog, at
   acceptable versions?
3. Is moving from one version of a component to another safe?

Every outcome is returned as data. Nothing here raises for an incompatible
or unsafe result; callers decide whether to block or warn.
"""

import logging
from typing import List, Optional, Sequence

from packaging.version import Version
from pydantic import BaseModel, Field, model_validator

from oxcompat.codes import CompatibilityLevel
from oxcompat._internal.reporting.text import render_upgrade_report
from .component import ComponentDependency, ComponentVersion
from .versioning import SENTINEL_VERSION, SemVer, VersionReq, parse_version

logger = logging.getLogger(__name__)

DEFAULT_RUNTIME_NAME = "OxideKit"


class CompatibilityResult(BaseModel):
    """Outcome of one compatibility decision."""
    compatible: bool
    level: CompatibilityLevel
    component: str  # Name of the component (or dependency) being checked
    version: SemVer  # Version of that component
    required: VersionReq  # Requirement that was evaluated
    actual: SemVer  # Version the requirement was evaluated against
    explanation: str
    suggestion: Optional[str] = None

    @classmethod
    def full(cls, component: str, version: Version, required: VersionReq, actual: Version) -> "CompatibilityResult":
        return cls(
            compatible=True,
            level=CompatibilityLevel.FULL,
            component=component,
            version=version,
            required=required,
            actual=actual,
            explanation="Versions are compatible",
            suggestion=None,
        )

    @classmethod
    def incompatible(
        cls,
        component: str,
        version: Version,
        required: VersionReq,
        actual: Version,
        explanation: str,
        suggestion: Optional[str] = None,
    ) -> "CompatibilityResult":
        return cls(
            compatible=False,
            level=CompatibilityLevel.NONE,
            component=component,
            version=version,
            required=required,
            actual=actual,
            explanation=explanation,
            suggestion=suggestion,
        )

    def summary(self) -> str:
        """One-line form, e.g. ``"icons 1.2.0: compatible"``."""
        return f"{self.component} {self.version}: {self.level}"


class UpgradeAnalysis(BaseModel):
    """Result of comparing two versions of the same component.

    ``safe`` always equals ``not blocking_issues``; use add_blocking_issue()
    to record a blocker so both stay in step.
    """
    safe: bool = True
    warnings: List[str] = Field(default_factory=list)  # Non-blocking
    blocking_issues: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_safe_matches_blockers(self):
        """Reject a result whose safe flag disagrees with its blocking issues."""
        if self.safe == bool(self.blocking_issues):
            raise ValueError(
                f"safe={self.safe} is inconsistent with {len(self.blocking_issues)} blocking issue(s)"
            )
        return self

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_blocking_issue(self, issue: str) -> None:
        self.blocking_issues.append(issue)
        self.safe = False

    def to_report(self) -> str:
        """Human-readable report (see _internal.reporting.text)."""
        return render_upgrade_report(self)


class CompatibilityChecker:
    """Checks components against an installed core runtime version."""

    def __init__(self, core_version, runtime_name: str = DEFAULT_RUNTIME_NAME):
        self.core_version: Version = parse_version(core_version)
        self.runtime_name = runtime_name

    def check_component(self, component: ComponentVersion) -> CompatibilityResult:
        """Check a component's core requirement against the installed core."""
        if component.core_requirement.matches(self.core_version):
            return CompatibilityResult.full(
                component.name,
                component.version,
                component.core_requirement,
                self.core_version,
            )

        logger.debug(
            "%s %s rejects core %s (requires %s)",
            component.component_type, component.name, self.core_version, component.core_requirement,
        )
        return CompatibilityResult.incompatible(
            component.name,
            component.version,
            component.core_requirement,
            self.core_version,
            explanation=(
                f"{component.component_type} {component.name} requires {self.runtime_name} "
                f"{component.core_requirement}, but {self.core_version} is installed"
            ),
            suggestion=self.suggest_fix(component),
        )

    def suggest_fix(self, component: ComponentVersion) -> Optional[str]:
        """Suggest a way out of a core mismatch, if the requirement's bounds show one.

        Upgrading the core wins when the requirement's minimum is above the
        installed core; otherwise an older component release is suggested
        when the requirement's maximum is at or below it. Requirements that
        fail for any other reason get no suggestion.
        """
        minimum = component.core_requirement.minimum_version()
        if minimum is not None and minimum > self.core_version:
            return f"Upgrade {self.runtime_name} core to version {minimum} or higher"

        maximum = component.core_requirement.maximum_version()
        if maximum is not None and maximum <= self.core_version:
            return (
                f"Use an older version of {component.name} compatible with "
                f"{self.runtime_name} {self.core_version}"
            )

        return None

    def check_dependencies(
        self,
        component: ComponentVersion,
        available: Sequence[ComponentVersion],
    ) -> List[CompatibilityResult]:
        """Check each required dependency against the available catalog.

        Results follow ``component.dependencies`` order. Optional dependencies
        produce no result at all. The first catalog entry with a matching
        (name, component_type) is used.
        """
        results: List[CompatibilityResult] = []

        for dep in component.dependencies:
            if dep.optional:
                continue

            found = _find_component(available, dep)
            if found is None:
                logger.debug("%s: required %s '%s' is not installed", component.name, dep.component_type, dep.name)
                results.append(CompatibilityResult.incompatible(
                    dep.name,
                    SENTINEL_VERSION,
                    dep.version_req,
                    SENTINEL_VERSION,
                    explanation=f"Required {dep.component_type} '{dep.name}' is not installed",
                    suggestion=f"Install {dep.name} version {dep.version_req}",
                ))
            elif dep.version_req.matches(found.version):
                results.append(CompatibilityResult.full(
                    dep.name,
                    found.version,
                    dep.version_req,
                    found.version,
                ))
            else:
                logger.debug("%s: %s %s does not satisfy %s", component.name, dep.name, found.version, dep.version_req)
                results.append(CompatibilityResult.incompatible(
                    dep.name,
                    found.version,
                    dep.version_req,
                    found.version,
                    explanation=(
                        f"{component.name} requires {dep.name} {dep.version_req}, "
                        f"but {found.version} is available"
                    ),
                    suggestion=f"Install {dep.name} version {dep.version_req}",
                ))

        return results

    def check_upgrade_safety(self, from_component: ComponentVersion, to_component: ComponentVersion) -> UpgradeAnalysis:
        """Diff two versions of a component for upgrade safety.

        Rules fire independently:
        - a major version bump is a warning;
        - a changed core requirement that rejects the installed core blocks;
        - a dependency whose requirement changed, or a new required
          dependency, is a warning. Removed or unchanged dependencies are
          not reported.
        """
        analysis = UpgradeAnalysis()

        if to_component.version.major > from_component.version.major:
            analysis.add_warning(
                f"Major version upgrade from {from_component.version} to {to_component.version} "
                "may include breaking changes"
            )

        if (to_component.core_requirement != from_component.core_requirement
                and not to_component.core_requirement.matches(self.core_version)):
            analysis.add_blocking_issue(
                f"New version requires {self.runtime_name} {to_component.core_requirement}, "
                f"but {self.core_version} is installed"
            )

        for new_dep in to_component.dependencies:
            old_dep = next((d for d in from_component.dependencies if d.name == new_dep.name), None)
            if old_dep is None:
                if not new_dep.optional:
                    analysis.add_warning(f"New required dependency: {new_dep.name} {new_dep.version_req}")
            elif old_dep.version_req != new_dep.version_req:
                analysis.add_warning(
                    f"Dependency '{new_dep.name}' requirement changed from "
                    f"{old_dep.version_req} to {new_dep.version_req}"
                )

        return analysis


def _find_component(available: Sequence[ComponentVersion], dep: ComponentDependency) -> Optional[ComponentVersion]:
    for candidate in available:
        if candidate.name == dep.name and candidate.component_type == dep.component_type:
            return candidate
    return None
