"""Tests for the high-level public API."""

import pytest

from oxcompat.api import (
    ComponentReport,
    MigrationPathResult,
    check_component,
    check_manifest,
    check_upgrade,
    plan_migration,
)
from oxcompat.kernel.compatibility import UpgradeAnalysis
from oxcompat.kernel.errors import ManifestParseError
from oxcompat.kernel.status import MigrationStatus

PLUGIN = {
    "name": "my-plugin",
    "component_type": "plugin",
    "version": "1.0.0",
    "core_requirement": ">=0.5.0,<1.0.0",
    "dependencies": [
        {"name": "icons", "component_type": "plugin", "version_req": "^1.0.0"},
        {"name": "charts", "component_type": "plugin", "version_req": "^2.0.0", "optional": True},
    ],
}

CATALOG = [
    {"name": "icons", "component_type": "plugin", "version": "1.3.0"},
]


def test_check_component_from_dicts():
    report = check_component(PLUGIN, "0.8.0", available=CATALOG)

    assert isinstance(report, ComponentReport)
    assert report.compatible is True
    assert report.core.compatible is True
    assert [d.component for d in report.dependencies] == ["icons"]
    assert report.suggestions == []


def test_check_component_without_catalog_skips_dependencies():
    report = check_component(PLUGIN, "0.8.0")
    assert report.dependencies == []
    assert report.compatible is True


def test_incompatible_report_collects_suggestions():
    report = check_component(PLUGIN, "1.0.0", available=[])

    assert report.compatible is False
    assert report.suggestions == [
        "Use an older version of my-plugin compatible with OxideKit 1.0.0",
        "Install icons version ^1.0.0",
    ]
    text = report.to_text()
    assert text.startswith("my-plugin: incompatible\n")
    assert "- my-plugin 1.0.0: incompatible" in text
    assert "  Suggestion: Install icons version ^1.0.0" in text


def test_check_manifest():
    manifest = (
        '[package]\nname = "my-theme"\nversion = "1.0.0"\ntype = "theme"\n'
        '[compatibility]\noxidekit = ">=0.5.0"\n'
        '[dependencies.plugins]\nicons = "^1.0.0"\n'
    )
    report = check_manifest(manifest, "0.8.0", available=CATALOG)

    assert report.component == "my-theme"
    assert report.compatible is True


def test_check_manifest_propagates_parse_errors():
    with pytest.raises(ManifestParseError):
        check_manifest("not toml [", "0.8.0")


def test_check_upgrade():
    to_version = dict(PLUGIN, version="2.0.0", core_requirement=">=0.9.0")
    analysis = check_upgrade(PLUGIN, to_version, "0.8.0")

    assert analysis.safe is False
    assert len(analysis.warnings) == 1
    assert analysis.blocking_issues == ["New version requires OxideKit >=0.9.0, but 0.8.0 is installed"]


def test_plan_migration():
    guides = [
        {"from_version": "1.0.0", "to_version": "1.5.0", "title": "A", "summary": "a", "estimated_time": 10,
         "steps": [{"title": "one"}, {"title": "two"}]},
        {"from_version": "1.5.0", "to_version": "2.0.0", "title": "B", "summary": "b", "estimated_time": 20,
         "steps": [{"title": "three"}]},
    ]
    result = plan_migration(guides, "1.0.0", "2.0.0")

    assert isinstance(result, MigrationPathResult)
    assert result.found is True
    assert [h.title for h in result.hops] == ["A", "B"]
    assert result.total_steps == 3
    assert result.total_time == 30
    assert result.markdown.startswith("# Migration Path: 1.0.0 -> 2.0.0")
    assert result.model_dump(mode="json")["hops"][0]["from_version"] == "1.0.0"


def test_plan_migration_not_found():
    result = plan_migration([], "1.0.0", "2.0.0")

    assert result.found is False
    assert result.hops == []
    assert result.total_steps == 0
    assert result.total_time is None
    assert result.markdown == "No migration path found."


@pytest.mark.parametrize("model", [ComponentReport, UpgradeAnalysis, MigrationPathResult, MigrationStatus])
def test_result_models_have_json_schema(model):
    """Test that result models export a JSON schema with versions as strings."""
    schema = model.model_json_schema()
    assert schema["type"] == "object"


def test_version_fields_are_strings_in_json_schema():
    schema = ComponentReport.model_json_schema()
    result_props = schema["$defs"]["CompatibilityResult"]["properties"]

    assert result_props["version"]["type"] == "string"
    assert result_props["required"]["type"] == "string"
    assert result_props["actual"]["type"] == "string"
