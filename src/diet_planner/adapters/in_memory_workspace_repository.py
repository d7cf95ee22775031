"""Process-local workspace storage."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from diet_planner.domain.workspace import WorkspaceRecord
from diet_planner.services.workspaces import WorkspaceRepository


@dataclass
class InMemoryWorkspaceRepository(WorkspaceRepository):
    """Keeps workspaces in memory and drops them after a period of inactivity."""

    ttl_seconds: int
    _workspaces: dict[UUID, WorkspaceRecord] = field(default_factory=dict)

    def create(self) -> WorkspaceRecord:
        self.purge_expired()
        workspace = WorkspaceRecord(id=uuid4())
        self._workspaces[workspace.id] = workspace
        return workspace

    def get(self, workspace_id: UUID) -> WorkspaceRecord | None:
        workspace = self._workspaces.get(workspace_id)
        if workspace is None:
            return None
        if self._is_expired(workspace, datetime.now(tz=UTC)):
            self._workspaces.pop(workspace_id, None)
            return None
        return workspace

    def save(self, workspace: WorkspaceRecord) -> None:
        self._workspaces[workspace.id] = workspace

    def delete(self, workspace_id: UUID) -> None:
        self._workspaces.pop(workspace_id, None)

    def purge_expired(self) -> int:
        """Remove idle workspaces and return how many were dropped."""
        now = datetime.now(tz=UTC)
        expired = [
            workspace_id
            for workspace_id, workspace in self._workspaces.items()
            if self._is_expired(workspace, now)
        ]
        for workspace_id in expired:
            del self._workspaces[workspace_id]
        return len(expired)

    def _is_expired(self, workspace: WorkspaceRecord, now: datetime) -> bool:
        # In-flight requests keep their workspace alive.
        if workspace.is_processing:
            return False
        return now - workspace.updated_at >= timedelta(seconds=self.ttl_seconds)
