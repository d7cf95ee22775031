"""Pydantic models for the workspace API."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel

from diet_planner.domain.patient import ActivityLevel, DietaryPreference, Patient
from diet_planner.domain.workspace import WorkspaceRecord
from diet_planner.services.calories import estimate_for_patient


class PatientUpdate(BaseModel):
    """Partial patient update; omitted fields keep their value."""

    name: str | None = None
    age: str | None = None
    sex: str | None = None
    weight: str | None = None
    height: str | None = None
    activity_level: ActivityLevel | None = None
    allergies: str | None = None
    dietary_preference: DietaryPreference | None = None
    notes: str | None = None


class StagedFileView(BaseModel):
    """Staged file metadata, without content."""

    filename: str
    content_type: str
    size: int


class WorkspaceView(BaseModel):
    """Workspace state as rendered by the form."""

    id: UUID
    patient: Patient
    files: list[StagedFileView]
    extracted_text: str | None
    diet_result: dict[str, Any] | None
    is_processing: bool
    error: str | None
    calorie_estimate: int

    @classmethod
    def from_record(cls, workspace: WorkspaceRecord) -> "WorkspaceView":
        return cls(
            id=workspace.id,
            patient=workspace.patient,
            files=[
                StagedFileView(
                    filename=staged.filename,
                    content_type=staged.content_type,
                    size=staged.size,
                )
                for staged in workspace.files
            ],
            extracted_text=workspace.extracted_text,
            diet_result=workspace.diet_result,
            is_processing=workspace.is_processing,
            error=workspace.error,
            calorie_estimate=estimate_for_patient(workspace.patient),
        )
