"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from diet_planner.adapters.diet_client import DietClient, HttpxDietClient
from diet_planner.adapters.extraction_client import (
    ExtractionClient,
    HttpxExtractionClient,
)
from diet_planner.adapters.in_memory_workspace_repository import (
    InMemoryWorkspaceRepository,
)
from diet_planner.config import Settings, parse_accepted_types
from diet_planner.services.workspaces import WorkspaceService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    extraction_client: ExtractionClient
    diet_client: DietClient
    workspace_service: WorkspaceService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    extraction_client = HttpxExtractionClient.create(
        base_url=resolved_settings.upstream_base_url,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    diet_client = HttpxDietClient.create(
        base_url=resolved_settings.upstream_base_url,
        timeout=resolved_settings.upstream_timeout_seconds,
    )
    workspace_service = WorkspaceService(
        repository=InMemoryWorkspaceRepository(
            ttl_seconds=resolved_settings.workspace_ttl_seconds
        ),
        extraction_client=extraction_client,
        diet_client=diet_client,
        accepted_types=parse_accepted_types(resolved_settings.accepted_file_types),
    )

    async def close_resources() -> None:
        await extraction_client.close()
        await diet_client.close()

    return AppContainer(
        settings=resolved_settings,
        extraction_client=extraction_client,
        diet_client=diet_client,
        workspace_service=workspace_service,
        close_resources=close_resources,
    )
