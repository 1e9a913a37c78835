import pytest
from pydantic import ValidationError

from glucoview.models.enums import DoseKind
from glucoview.models.forecast import CarbEvent, InsulinEvent
from glucoview.models.notes import GlucoseNote, events_from_notes


def test_note_with_carbs_and_insulin(reference_time):
    note = GlucoseNote(id="n1", timestamp=reference_time, carbs=45, insulin=4.5, meal="Lunch", comment="pasta")
    carb, insulin = note.to_events()

    assert isinstance(carb, CarbEvent)
    assert carb.carbs_grams == 45
    assert carb.meal_label == "Lunch"
    assert carb.comment == "pasta"
    assert isinstance(insulin, InsulinEvent)
    assert insulin.units_delivered == 4.5
    assert insulin.dose_kind == DoseKind.BOLUS
    assert insulin.timestamp == reference_time


def test_empty_note_yields_no_events(reference_time):
    assert GlucoseNote(timestamp=reference_time, glucose_value=6.2).to_events() == []


def test_custom_meal_label(reference_time):
    note = GlucoseNote(timestamp=reference_time, carbs=20, meal="Brunch")
    assert note.to_events()[0].meal_label == "Brunch"


def test_events_from_notes(reference_time):
    notes = [
        GlucoseNote(timestamp=reference_time, carbs=20),
        GlucoseNote(timestamp=reference_time, insulin=2),
        GlucoseNote(timestamp=reference_time, carbs=10, insulin=1),
    ]
    events = events_from_notes(notes)
    assert [e.kind for e in events] == ["carbs", "insulin", "carbs", "insulin"]


def test_naive_note_timestamp_is_utc(reference_time):
    note = GlucoseNote(timestamp=reference_time.replace(tzinfo=None), carbs=5)
    assert note.to_events()[0].timestamp == reference_time


def test_detailed_input_fills_missing_comment(reference_time):
    note = GlucoseNote(timestamp=reference_time, carbs=70, insulin=7, detailed_input="50g soup 20g bread 7u")
    carb, insulin = note.to_events()

    assert carb.comment == "50g soup 20g bread 7u"
    assert insulin.comment == "50g soup 20g bread 7u"


def test_comment_wins_over_detailed_input(reference_time):
    note = GlucoseNote(timestamp=reference_time, carbs=20, comment="toast", detailed_input="20g bread")
    assert note.to_events()[0].comment == "toast"


def test_note_rejects_non_finite_values(reference_time):
    with pytest.raises(ValidationError):
        GlucoseNote(timestamp=reference_time, glucose_value=float("inf"))
