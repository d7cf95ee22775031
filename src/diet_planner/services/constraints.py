"""Diet constraints derived from the patient record."""

from diet_planner.domain.contracts import DietConstraints
from diet_planner.domain.patient import Patient
from diet_planner.services.calories import estimate_for_patient


def parse_exclusions(raw: str | None) -> list[str]:
    """Split comma-separated allergies into a trimmed exclusion list."""
    if not raw:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def build_constraints(patient: Patient) -> DietConstraints:
    """Build generation constraints for a patient."""
    return DietConstraints(
        calorie_target=estimate_for_patient(patient),
        exclude=parse_exclusions(patient.allergies),
        preferences=patient.dietary_preference.value,
    )
