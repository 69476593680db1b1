"""Plain-text reports for compatibility results (internal)."""

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from oxcompat.kernel.compatibility import CompatibilityResult, UpgradeAnalysis


def render_upgrade_report(analysis: "UpgradeAnalysis") -> str:
    """Render an upgrade analysis: verdict, blocking issues, then warnings."""
    lines: List[str] = []

    if analysis.safe:
        lines.append("Upgrade is safe to proceed.")
    else:
        lines.append("Upgrade is BLOCKED due to compatibility issues:")
        lines.extend(f"  - {issue}" for issue in analysis.blocking_issues)

    if analysis.warnings:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"  - {warning}" for warning in analysis.warnings)

    return "\n".join(lines) + "\n"


def render_results(results: Sequence["CompatibilityResult"]) -> str:
    """Render check results, one summary line each, with explanation and suggestion."""
    lines: List[str] = []
    for result in results:
        lines.append(f"- {result.summary()}")
        if not result.compatible:
            lines.append(f"  {result.explanation}")
            if result.suggestion:
                lines.append(f"  Suggestion: {result.suggestion}")
    return "\n".join(lines)
