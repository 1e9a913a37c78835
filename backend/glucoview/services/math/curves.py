import math

# Carbohydrate mass halves every 45 minutes
CARB_HALF_LIFE_HOURS = 0.75
# Below this many grams a meal no longer counts
CARB_NOISE_FLOOR_G = 0.1

CONFIDENCE_START = 0.9
CONFIDENCE_DECAY_PER_HOUR = 0.3
CONFIDENCE_FLOOR = 0.1


class CarbCurves:
    """
    Exponential (half-life) carbohydrate decay.
    Times are hours since the meal.
    """

    @staticmethod
    def remaining_fraction(t_hours: float, half_life_hours: float = CARB_HALF_LIFE_HOURS) -> float:
        if t_hours <= 0: return 1.0
        return math.pow(0.5, t_hours / half_life_hours)

    @staticmethod
    def remaining_grams(grams: float, t_hours: float, half_life_hours: float = CARB_HALF_LIFE_HOURS) -> float:
        if grams <= 0: return 0.0
        return max(0.0, grams * CarbCurves.remaining_fraction(t_hours, half_life_hours))

    @staticmethod
    def glucose_contribution(grams: float, t_hours: float, carb_glucose_ratio: float) -> float:
        # Meal has not happened yet at this instant
        if grams <= 0 or t_hours <= 0: return 0.0
        remaining = CarbCurves.remaining_grams(grams, t_hours)
        if remaining < CARB_NOISE_FLOOR_G: return 0.0
        return max(0.0, remaining * carb_glucose_ratio)

    @staticmethod
    def hours_to_zero(grams: float, half_life_hours: float = CARB_HALF_LIFE_HOURS) -> float:
        if grams <= CARB_NOISE_FLOOR_G: return 0.0
        return max(0.0, half_life_hours * math.log2(grams / CARB_NOISE_FLOOR_G))


class InsulinCurves:
    """
    Bilinear activity (rise to peak, linear fall to end of action) normalised to
    a peak of 1.0. Times are hours since the dose.
    """

    @staticmethod
    def bilinear_activity(t_hours: float, peak_hours: float, duration_hours: float) -> float:
        if t_hours <= 0 or t_hours > duration_hours: return 0.0
        if t_hours <= peak_hours:
            activity = t_hours / peak_hours
        else:
            activity = 1.0 - (t_hours - peak_hours) / (duration_hours - peak_hours)
        return max(0.0, min(1.0, activity))

    @staticmethod
    def glucose_contribution(units: float, t_hours: float, isf: float, peak_hours: float, duration_hours: float) -> float:
        if units <= 0: return 0.0
        activity = InsulinCurves.bilinear_activity(t_hours, peak_hours, duration_hours)
        if activity == 0.0: return 0.0
        return -units * isf * activity

    @staticmethod
    def rise_decay_on_board(t_min: float, peak_min: float, duration_min: float, decay_rate: float) -> float:
        """
        Fraction of a dose counted on board: linear rise until peak, then
        exponential decay. Zero before the dose and after the action duration.
        """
        if t_min < 0 or t_min > duration_min: return 0.0
        if t_min <= peak_min:
            return t_min / peak_min if peak_min > 0 else 1.0
        tail = duration_min - peak_min
        if tail <= 0: return 0.0
        return math.exp(-decay_rate * (t_min - peak_min) / tail)

    @staticmethod
    def half_life_remaining(units: float, t_min: float, half_life_min: float) -> float:
        if t_min <= 0: return units
        return max(0.0, units * math.pow(0.5, t_min / half_life_min))


class ConfidenceCurve:
    @staticmethod
    def at(hours_from_now: float) -> float:
        hours = max(0.0, hours_from_now)
        return max(CONFIDENCE_FLOOR, CONFIDENCE_START * math.exp(-CONFIDENCE_DECAY_PER_HOUR * hours))
