"""Workspace state machine for the extract and generate flows."""

import fnmatch
import json
import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

import httpx
from pydantic import ValidationError

from diet_planner.adapters.diet_client import DietClient
from diet_planner.adapters.extraction_client import ExtractionClient
from diet_planner.config import DEFAULT_ACCEPTED_TYPES
from diet_planner.domain.contracts import DietRequest, ExtractionResponse
from diet_planner.domain.patient import Patient
from diet_planner.domain.workspace import StagedFile, WorkspaceRecord
from diet_planner.services.constraints import build_constraints

logger = logging.getLogger(__name__)

NO_FILES_ERROR = "Please upload at least one prescription/report file."
EXTRACTION_FAILED = "Extraction failed"
GENERATION_FAILED = "Diet generation failed"


class WorkspaceNotFoundError(LookupError):
    """Raised when a workspace id is unknown or has expired."""

    def __init__(self, workspace_id: UUID) -> None:
        super().__init__(f"Workspace {workspace_id} not found")
        self.workspace_id = workspace_id


class WorkspaceBusyError(RuntimeError):
    """Raised when an action is requested while another is in flight."""

    def __init__(self, workspace_id: UUID) -> None:
        super().__init__(f"Workspace {workspace_id} is already processing")
        self.workspace_id = workspace_id


class WorkspaceRepository(Protocol):
    """Storage interface for transient workspaces."""

    def create(self) -> WorkspaceRecord:
        """Create and return an empty workspace."""

    def get(self, workspace_id: UUID) -> WorkspaceRecord | None:
        """Return a workspace by id, if present."""

    def save(self, workspace: WorkspaceRecord) -> None:
        """Store the given workspace state."""

    def delete(self, workspace_id: UUID) -> None:
        """Discard a workspace."""


@dataclass
class WorkspaceService:
    """Drives one intake form through upload, extraction and generation."""

    repository: WorkspaceRepository
    extraction_client: ExtractionClient
    diet_client: DietClient
    accepted_types: tuple[str, ...] = DEFAULT_ACCEPTED_TYPES

    def create_workspace(self) -> WorkspaceRecord:
        """Open a fresh workspace."""
        return self.repository.create()

    def get_workspace(self, workspace_id: UUID) -> WorkspaceRecord:
        """Return the workspace or raise WorkspaceNotFoundError."""
        workspace = self.repository.get(workspace_id)
        if workspace is None:
            raise WorkspaceNotFoundError(workspace_id)
        return workspace

    def discard_workspace(self, workspace_id: UUID) -> None:
        """Drop all state held for a workspace."""
        self.get_workspace(workspace_id)
        self.repository.delete(workspace_id)

    def update_patient(
        self, workspace_id: UUID, changes: dict[str, object]
    ) -> WorkspaceRecord:
        """Apply a partial update to the patient record."""
        workspace = self.get_workspace(workspace_id)
        patient = Patient.model_validate(
            {**workspace.patient.model_dump(), **changes}
        )
        return self._save(workspace, patient=patient)

    def stage_files(
        self, workspace_id: UUID, files: list[StagedFile]
    ) -> WorkspaceRecord:
        """Replace the staged file set, rejecting unsupported types."""
        workspace = self.get_workspace(workspace_id)
        for staged in files:
            if not self._is_accepted(staged.content_type):
                return self._save(
                    workspace,
                    error=(
                        f"Unsupported file type for {staged.filename}: "
                        f"{staged.content_type or 'unknown'}."
                    ),
                )
        return self._save(workspace, files=tuple(files), error=None)

    async def extract(self, workspace_id: UUID) -> WorkspaceRecord:
        """Send staged files and patient data to the extraction service."""
        workspace = self.get_workspace(workspace_id)
        if workspace.is_processing:
            raise WorkspaceBusyError(workspace_id)
        if not workspace.files:
            return self._save(workspace, error=NO_FILES_ERROR)

        workspace = self._save(workspace, is_processing=True, error=None)
        try:
            payload = await self.extraction_client.extract(
                files=list(workspace.files),
                patient=workspace.patient.model_dump(mode="json"),
            )
            response = ExtractionResponse.model_validate(payload)
        except Exception as exc:
            logger.exception(
                "Extraction request failed",
                extra={"workspace_id": str(workspace_id)},
            )
            return self._finish(
                workspace_id, error=f"{EXTRACTION_FAILED}: {_describe_failure(exc)}"
            )
        except BaseException:
            self._release(workspace_id)
            raise
        logger.info(
            "Extraction completed",
            extra={"workspace_id": str(workspace_id), "files": len(workspace.files)},
        )
        return self._finish(workspace_id, extracted_text=_display_text(response))

    async def generate_diet(self, workspace_id: UUID) -> WorkspaceRecord:
        """Request a diet plan for the patient and the extracted text."""
        workspace = self.get_workspace(workspace_id)
        if workspace.is_processing:
            raise WorkspaceBusyError(workspace_id)

        workspace = self._save(workspace, is_processing=True, error=None)
        request = DietRequest(
            patient=workspace.patient.model_dump(mode="json"),
            extracted_text=workspace.extracted_text,
            constraints=build_constraints(workspace.patient),
        )
        try:
            result = await self.diet_client.generate(request.model_dump(mode="json"))
            if not isinstance(result, dict):
                raise TypeError("diet service returned a non-object response")
        except Exception as exc:
            logger.exception(
                "Diet generation request failed",
                extra={"workspace_id": str(workspace_id)},
            )
            return self._finish(
                workspace_id, error=f"{GENERATION_FAILED}: {_describe_failure(exc)}"
            )
        except BaseException:
            self._release(workspace_id)
            raise
        return self._finish(workspace_id, diet_result=result)

    def _is_accepted(self, content_type: str) -> bool:
        value = (content_type or "").split(";", maxsplit=1)[0].strip().lower()
        return any(fnmatch.fnmatchcase(value, pattern) for pattern in self.accepted_types)

    def _finish(self, workspace_id: UUID, **changes: object) -> WorkspaceRecord:
        # Re-read: the patient may have been edited while the request was out.
        # A workspace discarded mid-request drops the result and raises not found.
        workspace = self.get_workspace(workspace_id)
        return self._save(workspace, is_processing=False, **changes)

    def _release(self, workspace_id: UUID) -> None:
        workspace = self.repository.get(workspace_id)
        if workspace is not None:
            self._save(workspace, is_processing=False)

    def _save(self, workspace: WorkspaceRecord, **changes: object) -> WorkspaceRecord:
        updated = replace(workspace, updated_at=datetime.now(tz=UTC), **changes)
        self.repository.save(updated)
        return updated


def _display_text(response: ExtractionResponse) -> str:
    """Return OCR text, or pretty-printed findings when no text came back."""
    if response.raw_text:
        return response.raw_text
    if response.findings is not None:
        return json.dumps(response.findings.model_dump(mode="json"), indent=2)
    return ""


def _describe_failure(exc: Exception) -> str:
    """Turn an upstream failure into a short human-readable detail."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        return f"{response.status_code} {response.reason_phrase}".strip()
    if isinstance(exc, httpx.TimeoutException):
        return "the service did not respond in time"
    if isinstance(exc, httpx.RequestError):
        return f"could not reach the service ({type(exc).__name__})"
    if isinstance(exc, ValidationError | TypeError):
        return "unexpected response format"
    if isinstance(exc, ValueError):
        return "response was not valid JSON"
    detail = str(exc).strip()
    return detail or type(exc).__name__
