import pytest

from glucoview.models.enums import GlucoseStatus
from glucoview.utils.glucose import glucose_status, to_mgdl, to_mmol


def test_unit_conversion():
    assert to_mmol(180) == 10.0
    assert to_mmol(100) == 5.6
    assert to_mgdl(5.5) == 99.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (3.8, GlucoseStatus.LOW),
        (3.9, GlucoseStatus.NORMAL),
        (9.9, GlucoseStatus.NORMAL),
        (10.0, GlucoseStatus.HIGH),
        (13.9, GlucoseStatus.CRITICAL),
    ],
)
def test_glucose_status(value, expected):
    assert glucose_status(value) == expected
