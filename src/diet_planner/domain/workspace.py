"""Domain models for intake workspaces."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from diet_planner.domain.patient import Patient


@dataclass(frozen=True)
class StagedFile:
    """A prescription or report file selected for extraction."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class WorkspaceRecord:
    """Transient state of one open intake form."""

    id: UUID
    patient: Patient = field(default_factory=Patient)
    files: tuple[StagedFile, ...] = ()
    extracted_text: str | None = None
    diet_result: dict[str, object] | None = None
    is_processing: bool = False
    error: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
