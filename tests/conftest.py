"""Pytest configuration and shared fixtures.

No sys.path hacks - tests should import from installed oxcompat package.
"""

import pytest

from oxcompat.kernel.component import ComponentDependency, ComponentVersion
from oxcompat.kernel.migration import (
    CodeExample,
    MigrationGuide,
    MigrationStep,
    Resource,
    TroubleshootingEntry,
)


def make_guide(from_version, to_version, title=None, steps=0, estimated_time=None):
    """Build a bare guide with ``steps`` placeholder steps."""
    guide = MigrationGuide(
        from_version=from_version,
        to_version=to_version,
        title=title or f"{from_version} -> {to_version}",
        summary=f"Move from {from_version} to {to_version}",
        estimated_time=estimated_time,
    )
    for i in range(steps):
        guide.add_step(MigrationStep(title=f"Step {i + 1}"))
    return guide


@pytest.fixture
def sample_guide():
    """A fully populated 0.5 -> 0.6 guide."""
    guide = MigrationGuide(
        from_version="0.5.0",
        to_version="0.6.0",
        title="OxideKit 0.5 to 0.6 Migration",
        summary="This guide covers the migration from version 0.5 to 0.6",
        estimated_time=30,
    )
    guide.add_prerequisite("Backup your project")
    guide.add_prerequisite("Update Rust to 1.75+")

    step1 = MigrationStep(
        title="Update dependencies",
        description="Update your Cargo.toml to use the new version",
        category="dependencies",
    )
    step1.add_action('Change oxide-kit = "0.5" to oxide-kit = "0.6"')
    step1.add_action("Run cargo update")
    guide.add_step(step1)

    step2 = MigrationStep(
        title="Update API calls",
        description="Some APIs have changed in this version",
        code_example=CodeExample.rust(
            "// New API\nwidget.draw(ctx);",
            before="// Old API\nwidget.render(ctx);",
        ),
    )
    step2.add_warning("The render() method is completely removed")
    guide.add_step(step2)

    guide.add_verification("Run cargo build")
    guide.add_verification("Run cargo test")

    entry = TroubleshootingEntry(
        problem="Compilation error about missing render method",
        solution="Replace all .render() calls with .draw()",
    )
    entry.add_error_message("error[E0599]: no method named render found")
    guide.add_troubleshooting(entry)

    guide.add_resource(Resource(
        title="Full Changelog",
        url="https://docs.oxidekit.com/changelog/0.6",
        description="Everything that changed",
    ))
    return guide


@pytest.fixture
def plugin():
    """my-plugin 1.0.0 requiring core >=0.5.0, <1.0.0."""
    return ComponentVersion(
        name="my-plugin",
        component_type="plugin",
        version="1.0.0",
        core_requirement=">=0.5.0,<1.0.0",
    )


@pytest.fixture
def app_with_dependencies():
    """A starter with required, optional and missing dependencies."""
    component = ComponentVersion(
        name="my-app",
        component_type="starter",
        version="0.3.0",
        core_requirement=">=0.5.0",
    )
    component.add_dependency(ComponentDependency.required("icons", "plugin", "^1.0.0"))
    component.add_dependency(ComponentDependency.optional_dependency("charts", "plugin", "^2.0.0"))
    component.add_dependency(ComponentDependency.required("fonts", "theme", "^2.0.0"))
    component.add_dependency(ComponentDependency.required("router", "plugin", ">=0.1.0"))
    return component


@pytest.fixture
def guide_factory():
    """Factory for bare guides: guide_factory("1.0.0", "2.0.0", steps=2)."""
    return make_guide
