"""Tests for migration progress tracking."""

from packaging.version import Version

from oxcompat.kernel.status import MigrationStatus


def test_status_snapshots_guide(sample_guide):
    """Test that later edits to the guide do not reach an existing status."""
    status = MigrationStatus.for_guide(sample_guide)
    sample_guide.title = "Renamed"
    sample_guide.to_version = Version("0.7.0")

    assert status.guide_title == "OxideKit 0.5 to 0.6 Migration"
    assert status.from_version == Version("0.5.0")
    assert status.to_version == Version("0.6.0")
    assert status.completed_steps == []
    assert status.started_at == status.updated_at


def test_progress_through_guide(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    total = sample_guide.step_count()

    assert not status.is_complete(total)
    assert status.next_step(total) == 0

    status.complete_step(0)
    assert status.next_step(total) == 1

    status.complete_step(1)
    assert status.is_complete(total)
    assert status.next_step(total) is None


def test_completed_steps_are_sorted_and_deduplicated(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    for index in [2, 0, 2, 1, 0]:
        status.complete_step(index)
    assert status.completed_steps == [0, 1, 2]


def test_three_distinct_steps_complete_three_step_guide(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    for index in [0, 1, 2]:
        status.complete_step(index)
    assert status.is_complete(3)


def test_repeating_one_step_does_not_complete(sample_guide):
    """Test that completing step 0 three times does not report a 3-step guide done."""
    status = MigrationStatus.for_guide(sample_guide)
    for _ in range(3):
        status.complete_step(0)

    assert status.completed_steps == [0]
    assert not status.is_complete(3)


def test_out_of_range_indices_do_not_count(sample_guide):
    """Test that completion needs every index in range, not just enough indices."""
    status = MigrationStatus.for_guide(sample_guide)
    for index in [0, 1, 7]:
        status.complete_step(index)

    assert len(status.completed_steps) == 3
    assert not status.is_complete(3)
    assert status.next_step(3) == 2


def test_zero_step_guide_is_complete(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    assert status.is_complete(0)
    assert status.next_step(0) is None


def test_notes_last_write_wins(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    status.add_note(1, "first try failed")
    status.add_note(1, "fixed by clearing cache")
    status.add_note(0, "done")

    assert status.notes == {1: "fixed by clearing cache", 0: "done"}


def test_mutations_touch_updated_at(sample_guide):
    status = MigrationStatus.for_guide(sample_guide)
    started = status.started_at

    status.complete_step(0)
    after_step = status.updated_at
    assert after_step >= started

    status.add_note(0, "ok")
    assert status.updated_at >= after_step
    assert status.started_at == started


def test_status_round_trips_through_json(sample_guide):
    """Test that a caller can persist and restore a status."""
    status = MigrationStatus.for_guide(sample_guide)
    status.complete_step(1)
    status.add_note(1, "watch out")

    restored = MigrationStatus.model_validate_json(status.model_dump_json())

    assert restored == status
    assert restored.notes == {1: "watch out"}
    assert restored.next_step(2) == 0


def test_loaded_completed_steps_are_normalized():
    """Test that validating stored data keeps completed steps ascending and unique."""
    status = MigrationStatus.model_validate({
        "guide_title": "Upgrade",
        "from_version": "0.5.0",
        "to_version": "0.6.0",
        "completed_steps": [2, 0, 2],
    })

    assert status.completed_steps == [0, 2]
    assert status.next_step(3) == 1
