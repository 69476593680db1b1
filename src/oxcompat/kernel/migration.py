"""Migration guides: structured instructions for moving between two versions.

Guides are built by appending prerequisites, steps, verification checks,
troubleshooting entries and resources. Append order is preserved and is
the order in which everything renders.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from oxcompat._internal.reporting.markdown import render_guide
from .versioning import SemVer


class CodeExample(BaseModel):
    """A code sample attached to a step, optionally with the code it replaces."""
    language: str  # Fence tag: rust, toml, json, ...
    code: str
    before: Optional[str] = None  # Previous code, rendered as a before/after comparison

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def rust(cls, code: str, before: Optional[str] = None) -> "CodeExample":
        return cls(language="rust", code=code, before=before)

    @classmethod
    def toml(cls, code: str, before: Optional[str] = None) -> "CodeExample":
        return cls(language="toml", code=code, before=before)


class TroubleshootingEntry(BaseModel):
    """A known problem and its solution."""
    problem: str
    solution: str
    error_messages: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def add_error_message(self, message: str) -> None:
        self.error_messages.append(message)


class Resource(BaseModel):
    """A link to further reading."""
    title: str
    url: str
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class MigrationStep(BaseModel):
    """One step of a migration guide."""
    title: str
    description: Optional[str] = None
    actions: List[str] = Field(default_factory=list)
    code_example: Optional[CodeExample] = None
    warnings: List[str] = Field(default_factory=list)
    optional: bool = False
    category: Optional[str] = None  # e.g. "api", "config", "dependencies"

    model_config = ConfigDict(extra="forbid")

    def add_action(self, action: str) -> None:
        self.actions.append(action)

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class MigrationGuide(BaseModel):
    """Instructions for migrating a component from one version to another."""
    from_version: SemVer
    to_version: SemVer
    title: str
    summary: str
    estimated_time: Optional[int] = Field(None, description="Estimated minutes to complete")
    prerequisites: List[str] = Field(default_factory=list)
    steps: List[MigrationStep] = Field(default_factory=list)
    verification: List[str] = Field(default_factory=list)
    troubleshooting: List[TroubleshootingEntry] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @field_validator("estimated_time")
    @classmethod
    def validate_estimated_time(cls, v: Optional[int]) -> Optional[int]:
        """Estimated time is a non-negative number of minutes."""
        if v is not None and v < 0:
            raise ValueError(f"estimated_time must be >= 0 minutes, got {v}")
        return v

    def add_prerequisite(self, prerequisite: str) -> None:
        self.prerequisites.append(prerequisite)

    def add_step(self, step: MigrationStep) -> None:
        self.steps.append(step)

    def add_verification(self, check: str) -> None:
        self.verification.append(check)

    def add_troubleshooting(self, entry: TroubleshootingEntry) -> None:
        self.troubleshooting.append(entry)

    def add_resource(self, resource: Resource) -> None:
        self.resources.append(resource)

    def step_count(self) -> int:
        return len(self.steps)

    def completion_percentage(self, completed_count: int) -> float:
        """Percentage of steps completed.

        A guide without steps is 100% complete. ``completed_count`` is not
        clamped; values outside ``[0, step_count]`` give percentages outside
        ``[0, 100]``.
        """
        if not self.steps:
            return 100.0
        return completed_count / len(self.steps) * 100.0

    def to_markdown(self) -> str:
        """Render the guide as Markdown (deterministic; empty sections omitted)."""
        return render_guide(self)
