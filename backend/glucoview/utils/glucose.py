from glucoview.models.enums import GlucoseStatus

MGDL_PER_MMOL = 18

# mmol/L
LOW_THRESHOLD = 3.9
NORMAL_THRESHOLD = 10.0
HIGH_THRESHOLD = 13.9


def to_mmol(mgdl: float) -> float:
    return round(mgdl / MGDL_PER_MMOL, 1)


def to_mgdl(mmol: float) -> float:
    return float(round(mmol * MGDL_PER_MMOL))


def glucose_status(
    value_mmol: float,
    low: float = LOW_THRESHOLD,
    normal: float = NORMAL_THRESHOLD,
    high: float = HIGH_THRESHOLD,
) -> GlucoseStatus:
    if value_mmol < low:
        return GlucoseStatus.LOW
    if value_mmol < normal:
        return GlucoseStatus.NORMAL
    if value_mmol < high:
        return GlucoseStatus.HIGH
    return GlucoseStatus.CRITICAL
