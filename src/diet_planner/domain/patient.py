"""Patient metadata captured by the intake form."""

from enum import StrEnum

from pydantic import BaseModel


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "Sedentary"
    LIGHTLY_ACTIVE = "Lightly active"
    ACTIVE = "Active"
    VERY_ACTIVE = "Very Active"


class DietaryPreference(StrEnum):
    """Dietary preference offered by the form."""

    NO_PREFERENCE = "No preference"
    VEGETARIAN = "Vegetarian"
    EGGETARIAN = "Eggetarian"
    NON_VEGETARIAN = "Non-vegetarian"
    VEGAN = "Vegan"
    JAIN = "Jain"


class Patient(BaseModel):
    """Patient record as typed into the form.

    Numeric fields stay as raw strings; only the calorie estimator parses them.
    """

    name: str = ""
    age: str = ""
    sex: str = "Male"
    weight: str = ""
    height: str = ""
    activity_level: ActivityLevel = ActivityLevel.SEDENTARY
    allergies: str = ""
    dietary_preference: DietaryPreference = DietaryPreference.VEGETARIAN
    notes: str = ""
