"""Render migration guides and migration paths as Markdown (internal)."""

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from oxcompat.kernel.migration import CodeExample, MigrationGuide, MigrationStep, TroubleshootingEntry

NO_PATH_MESSAGE = "No migration path found."


def _checklist(items: Sequence[str]) -> List[str]:
    return [f"- [ ] {item}" for item in items]


def _fence(language: str, code: str) -> List[str]:
    return [f"```{language}", code, "```", ""]


def _render_code_example(example: "CodeExample") -> List[str]:
    if example.before is None:
        return ["**Example:**", ""] + _fence(example.language, example.code)
    return (
        ["**Before:**", ""] + _fence(example.language, example.before)
        + ["**After:**", ""] + _fence(example.language, example.code)
    )


def _render_step(number: int, step: "MigrationStep") -> List[str]:
    heading = f"### Step {number}: {step.title}"
    if step.optional:
        heading += " (optional)"
    lines = [heading, ""]

    if step.category:
        lines.extend([f"*Category: {step.category}*", ""])

    if step.description:
        lines.extend([step.description, ""])

    if step.actions:
        lines.extend(_checklist(step.actions))
        lines.append("")

    if step.code_example is not None:
        lines.extend(_render_code_example(step.code_example))

    if step.warnings:
        lines.append("> **Warnings:**")
        lines.extend(f"> - {warning}" for warning in step.warnings)
        lines.append("")

    return lines


def _render_troubleshooting(entry: "TroubleshootingEntry") -> List[str]:
    lines = [f"### {entry.problem}", ""]
    if entry.error_messages:
        lines.append("Error messages:")
        lines.extend(f"- `{message}`" for message in entry.error_messages)
        lines.append("")
    lines.extend([f"**Solution:** {entry.solution}", ""])
    return lines


def render_guide(guide: "MigrationGuide") -> str:
    """Render one guide.

    Section order is fixed: title, overview, prerequisites, steps,
    verification, troubleshooting, resources. Sections backed by an empty
    list are left out entirely.
    """
    lines = [
        f"# {guide.title}",
        "",
        f"**Migration:** {guide.from_version} -> {guide.to_version}",
        "",
    ]
    if guide.estimated_time is not None:
        lines.extend([f"**Estimated time:** {guide.estimated_time} minutes", ""])

    lines.extend(["## Overview", "", guide.summary, ""])

    if guide.prerequisites:
        lines.extend(["## Prerequisites", ""])
        lines.extend(_checklist(guide.prerequisites))
        lines.append("")

    if guide.steps:
        lines.extend(["## Migration Steps", ""])
        for index, step in enumerate(guide.steps):
            lines.extend(_render_step(index + 1, step))

    if guide.verification:
        lines.extend(["## Verification", "", "After completing the migration, verify:", ""])
        lines.extend(_checklist(guide.verification))
        lines.append("")

    if guide.troubleshooting:
        lines.extend(["## Troubleshooting", ""])
        for entry in guide.troubleshooting:
            lines.extend(_render_troubleshooting(entry))

    if guide.resources:
        lines.extend(["## Resources", ""])
        for resource in guide.resources:
            link = f"- [{resource.title}]({resource.url})"
            if resource.description:
                link += f" - {resource.description}"
            lines.append(link)
        lines.append("")

    return "\n".join(lines)


def render_path(path: Sequence["MigrationGuide"]) -> str:
    """Render a multi-hop migration: an overview list, then every guide."""
    if not path:
        return NO_PATH_MESSAGE

    first, last = path[0], path[-1]
    lines = [
        f"# Migration Path: {first.from_version} -> {last.to_version}",
        "",
        f"This migration consists of {len(path)} step(s):",
        "",
    ]
    for index, guide in enumerate(path):
        lines.append(f"{index + 1}. {guide.from_version} -> {guide.to_version}: {guide.title}")
    lines.extend(["", "---", ""])

    for index, guide in enumerate(path):
        lines.extend([f"# Part {index + 1}: {guide.title}", ""])
        lines.append(render_guide(guide))
        lines.extend(["---", ""])

    return "\n".join(lines)
