"""Track a user's progress through one migration guide."""

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .migration import MigrationGuide
from .versioning import SemVer


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MigrationStatus(BaseModel):
    """Progress snapshot for one guide.

    Title and version bounds are copied when the status is created; editing
    the guide afterwards does not change them. Persisting a status is up to
    the caller (it round-trips through model_dump_json / model_validate_json).
    Not thread-safe: one status per session, or an external lock.
    """
    guide_title: str
    from_version: SemVer
    to_version: SemVer
    completed_steps: List[int] = Field(default_factory=list)  # Ascending, no duplicates
    notes: Dict[int, str] = Field(default_factory=dict)
    started_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @field_validator("completed_steps")
    @classmethod
    def validate_completed_steps(cls, v: List[int]) -> List[int]:
        """Completed indices are stored ascending without duplicates."""
        return sorted(set(v))

    @classmethod
    def for_guide(cls, guide: MigrationGuide) -> "MigrationStatus":
        now = _utc_now()
        return cls(
            guide_title=guide.title,
            from_version=guide.from_version,
            to_version=guide.to_version,
            started_at=now,
            updated_at=now,
        )

    def complete_step(self, step_index: int) -> None:
        """Mark a step done. Completing a step twice is a no-op (apart from the timestamp)."""
        if step_index not in self.completed_steps:
            self.completed_steps.append(step_index)
            self.completed_steps.sort()
        self.updated_at = _utc_now()

    def add_note(self, step_index: int, note: str) -> None:
        """Attach a note to a step; a later note replaces an earlier one."""
        self.notes[step_index] = note
        self.updated_at = _utc_now()

    def is_complete(self, total_steps: int) -> bool:
        """True when every index in ``[0, total_steps)`` has been completed.

        Completed indices outside that range do not count toward completion.
        """
        completed = set(self.completed_steps)
        return all(index in completed for index in range(total_steps))

    def next_step(self, total_steps: int) -> Optional[int]:
        """First index in ``[0, total_steps)`` not yet completed."""
        completed = set(self.completed_steps)
        for index in range(total_steps):
            if index not in completed:
                return index
        return None
