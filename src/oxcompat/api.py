"""Public API for the oxcompat package.

High-level functions that return complete, structured results. Inputs may
be kernel models or plain dicts (as loaded from JSON); versions may be
strings. Tools and UIs should use these functions instead of importing from
_internal.
"""

from typing import Dict, List, Optional, Sequence, Union

from packaging.version import Version
from pydantic import BaseModel, Field

from oxcompat.kernel.compatibility import (
    DEFAULT_RUNTIME_NAME,
    CompatibilityChecker,
    CompatibilityResult,
    UpgradeAnalysis,
)
from oxcompat.kernel.component import ComponentVersion
from oxcompat.kernel.manifest import parse_manifest
from oxcompat.kernel.migration import MigrationGuide
from oxcompat.kernel.planner import MigrationPlan
from oxcompat.kernel.versioning import SemVer
from oxcompat._internal.reporting.text import render_results

ComponentInput = Union[ComponentVersion, Dict]
GuideInput = Union[MigrationGuide, Dict]
VersionInput = Union[Version, str]


class ComponentReport(BaseModel):
    """Stable result model for a component check."""
    component: str
    compatible: bool  # Core check and every required dependency passed
    core: CompatibilityResult
    dependencies: List[CompatibilityResult] = Field(default_factory=list)  # Required deps, declaration order
    suggestions: List[str] = Field(default_factory=list)  # Deduplicated, first-seen order

    def to_text(self) -> str:
        verdict = "compatible" if self.compatible else "incompatible"
        header = f"{self.component}: {verdict}"
        return header + "\n" + render_results([self.core] + self.dependencies)


class MigrationHop(BaseModel):
    """One guide on a migration path."""
    from_version: SemVer
    to_version: SemVer
    title: str
    steps: int
    estimated_time: Optional[int] = None


class MigrationPathResult(BaseModel):
    """Stable result model for migration planning."""
    found: bool
    from_version: SemVer
    to_version: SemVer
    hops: List[MigrationHop] = Field(default_factory=list)
    total_steps: int = 0
    total_time: Optional[int] = None  # None when any hop has no estimate
    markdown: str


def _load_component(component: ComponentInput) -> ComponentVersion:
    if isinstance(component, ComponentVersion):
        return component
    return ComponentVersion.model_validate(component)


def _load_guide(guide: GuideInput) -> MigrationGuide:
    if isinstance(guide, MigrationGuide):
        return guide
    return MigrationGuide.model_validate(guide)


def _collect_suggestions(results: Sequence[CompatibilityResult]) -> List[str]:
    suggestions: List[str] = []
    for result in results:
        if result.suggestion and result.suggestion not in suggestions:
            suggestions.append(result.suggestion)
    return suggestions


def check_component(
    component: ComponentInput,
    core_version: VersionInput,
    available: Optional[Sequence[ComponentInput]] = None,
    runtime_name: Optional[str] = None,
) -> ComponentReport:
    """
    Check a component against the installed core and, if a catalog is
    given, its required dependencies.
    """
    loaded = _load_component(component)
    catalog = [_load_component(c) for c in (available or [])]
    checker = CompatibilityChecker(core_version, runtime_name=runtime_name or DEFAULT_RUNTIME_NAME)

    core_result = checker.check_component(loaded)
    dependency_results = checker.check_dependencies(loaded, catalog) if available is not None else []
    all_results = [core_result] + dependency_results

    return ComponentReport(
        component=loaded.name,
        compatible=all(r.compatible for r in all_results),
        core=core_result,
        dependencies=dependency_results,
        suggestions=_collect_suggestions(all_results),
    )


def check_manifest(
    manifest_text: str,
    core_version: VersionInput,
    available: Optional[Sequence[ComponentInput]] = None,
    runtime_name: Optional[str] = None,
) -> ComponentReport:
    """
    Parse manifest TOML and check the component it describes.

    Raises ManifestParseError if the manifest cannot be parsed.
    """
    component = parse_manifest(manifest_text).to_component()
    return check_component(component, core_version, available=available, runtime_name=runtime_name)


def check_upgrade(
    from_component: ComponentInput,
    to_component: ComponentInput,
    core_version: VersionInput,
    runtime_name: Optional[str] = None,
) -> UpgradeAnalysis:
    """
    Analyze whether upgrading a component from one version to another is safe.
    """
    checker = CompatibilityChecker(core_version, runtime_name=runtime_name or DEFAULT_RUNTIME_NAME)
    return checker.check_upgrade_safety(_load_component(from_component), _load_component(to_component))


def plan_migration(
    guides: Sequence[GuideInput],
    from_version: VersionInput,
    to_version: VersionInput,
) -> MigrationPathResult:
    """
    Chain the given guides into a migration path and summarize it.
    """
    plan = MigrationPlan([_load_guide(g) for g in guides])
    path = plan.find_path(from_version, to_version)

    hops = [
        MigrationHop(
            from_version=guide.from_version,
            to_version=guide.to_version,
            title=guide.title,
            steps=guide.step_count(),
            estimated_time=guide.estimated_time,
        )
        for guide in path
    ]

    return MigrationPathResult(
        found=bool(path),
        from_version=from_version,
        to_version=to_version,
        hops=hops,
        total_steps=plan.total_steps(path),
        total_time=plan.total_time(path) if path else None,
        markdown=plan.path_to_markdown(path),
    )
