"""
DayNotes Client: Panel State Tests
====================================

What:  Pure state transitions of the Notes Panel. No I/O.
"""

import pytest
from pydantic import ValidationError

from daynotes.client.state import (
    COMPLETED,
    DEFAULT_TIME,
    PENDING,
    TIME_OPTIONS,
    NoteDraft,
    PanelNote,
    PanelState,
    display_notes,
    toggled_status,
)


def note(note_id, time="00:00", content="x", status=PENDING):
    return PanelNote(id=note_id, time=time, content=content, status=status)


class TestOrderingAndOptions:

    def test_display_order_is_by_time_label(self):
        notes = [note("a", time="09:00"), note("b", time="02:00")]

        assert [n.time for n in display_notes(notes)] == ["02:00", "09:00"]

    def test_equal_times_keep_arrival_order(self):
        notes = [note("first", time="10:00"), note("second", time="10:00"), note("early", time="01:00")]

        assert [n.id for n in display_notes(notes)] == ["early", "first", "second"]

    def test_time_options_are_the_24_hours(self):
        assert len(TIME_OPTIONS) == 24
        assert TIME_OPTIONS[0] == "00:00"
        assert TIME_OPTIONS[9] == "09:00"
        assert TIME_OPTIONS[-1] == "23:00"

    def test_toggled_status(self):
        assert toggled_status(PENDING) == COMPLETED
        assert toggled_status(COMPLETED) == PENDING


class TestPanelNote:

    def test_payload_keeps_server_fields_in_camel_case(self):
        server_note = PanelNote.model_validate({
            "id": "n1",
            "date": "2024-01-15",
            "time": "09:00",
            "content": "Stand-up",
            "status": "pending",
            "userId": "u1",
        })

        assert server_note.to_payload() == {
            "id": "n1",
            "date": "2024-01-15",
            "time": "09:00",
            "content": "Stand-up",
            "status": "pending",
            "userId": "u1",
        }

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError):
            PanelNote(id="n1", time="00:00", content="x", status="archived")

    def test_notes_are_immutable(self):
        with pytest.raises(ValidationError):
            note("n1").content = "changed"


class TestPanelState:

    def test_initial_state(self):
        state = PanelState()

        assert state.notes == ()
        assert state.editing is None
        assert state.draft == NoteDraft(content="", time=DEFAULT_TIME, status=PENDING)

    def test_transitions_return_new_snapshots(self):
        before = PanelState()

        after = before.with_added(note("n1"))

        assert before.notes == ()
        assert [n.id for n in after.notes] == ["n1"]

    def test_remove_drops_only_matching_id(self):
        state = PanelState().with_notes([note("n1"), note("n2"), note("n3")])

        assert [n.id for n in state.with_removed("n2").notes] == ["n1", "n3"]

    def test_with_status_touches_one_note(self):
        state = PanelState().with_notes([note("n1"), note("n2")])

        updated = state.with_status("n2", COMPLETED)

        assert [n.status for n in updated.notes] == [PENDING, COMPLETED]

    def test_editing_is_exclusive(self):
        state = PanelState().with_notes([note("n1"), note("n2")])

        state = state.start_editing(state.notes[0]).edit(content="unsaved")
        state = state.start_editing(state.notes[1])

        assert state.is_editing("n2")
        assert not state.is_editing("n1")
        assert state.editing.content == "x"

    def test_edit_without_editing_is_a_no_op(self):
        state = PanelState()

        assert state.edit(content="ignored") is state

    def test_edit_changes_only_the_edit_buffer(self):
        state = PanelState().with_notes([note("n1", content="old")])

        state = state.start_editing(state.notes[0]).edit(content="new", time="14:00")

        assert state.editing.content == "new"
        assert state.editing.time == "14:00"
        assert state.notes[0].content == "old"

    def test_draft_reset(self):
        state = PanelState().with_draft(content="Gym", time="18:00")

        assert state.draft.content == "Gym"
        assert state.with_reset_draft().draft == NoteDraft()
