"""Wire models for the extraction and diet-generation services."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExtractionFindings(BaseModel):
    """Structured findings returned alongside the OCR text."""

    model_config = ConfigDict(extra="allow")

    labs: list[Any] = Field(default_factory=list)
    meds: list[Any] = Field(default_factory=list)
    diagnosis: list[Any] = Field(default_factory=list)


class ExtractionResponse(BaseModel):
    """Response body of POST /api/extract."""

    model_config = ConfigDict(extra="allow")

    raw_text: str | None = None
    findings: ExtractionFindings | None = None


class DietConstraints(BaseModel):
    """Constraints derived from the patient record."""

    calorie_target: int
    exclude: list[str] = Field(default_factory=list)
    preferences: str = ""


class DietRequest(BaseModel):
    """Request body of POST /api/generate-diet."""

    patient: dict[str, Any]
    extracted_text: str | None
    constraints: DietConstraints
