"""Daily calorie estimate using the Mifflin-St Jeor equation."""

import math

from diet_planner.domain.patient import ActivityLevel, Patient

DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 170.0
DEFAULT_AGE_YEARS = 30.0

MALE_OFFSET = 5.0
FEMALE_OFFSET = -161.0

DEFAULT_ACTIVITY_MULTIPLIER = 1.375
ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
}


def basal_metabolic_rate(
    weight: object, height: object, age: object, sex: object
) -> float:
    """Return BMR in kcal/day, falling back to defaults for unusable inputs."""
    weight_kg = _positive_number(weight, DEFAULT_WEIGHT_KG)
    height_cm = _positive_number(height, DEFAULT_HEIGHT_CM)
    age_years = _positive_number(age, DEFAULT_AGE_YEARS)
    offset = MALE_OFFSET if _is_male(sex) else FEMALE_OFFSET
    return 10 * weight_kg + 6.25 * height_cm - 5 * age_years + offset


def activity_multiplier(activity_level: object) -> float:
    """Return the TDEE multiplier for an activity level."""
    return ACTIVITY_MULTIPLIERS.get(str(activity_level), DEFAULT_ACTIVITY_MULTIPLIER)


def estimate_daily_calories(
    weight: object,
    height: object,
    age: object,
    sex: object,
    activity_level: object,
) -> int:
    """Estimate the daily calorie target. Always returns a positive integer."""
    total = basal_metabolic_rate(weight, height, age, sex) * activity_multiplier(
        activity_level
    )
    return max(1, math.floor(total + 0.5))


def estimate_for_patient(patient: Patient) -> int:
    """Estimate the daily calorie target for a form patient record."""
    return estimate_daily_calories(
        weight=patient.weight,
        height=patient.height,
        age=patient.age,
        sex=patient.sex,
        activity_level=patient.activity_level,
    )


def _positive_number(value: object, fallback: float) -> float:
    if isinstance(value, bool) or value is None:
        return fallback
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number) or number <= 0:
        return fallback
    return number


def _is_male(sex: object) -> bool:
    return str(sex or "").strip().lower() in {"male", "m"}
