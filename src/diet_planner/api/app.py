"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, File, Request, UploadFile, status
from fastapi.responses import JSONResponse

from diet_planner.api.models import PatientUpdate, WorkspaceView
from diet_planner.api.page import router as page_router
from diet_planner.app_logging import configure_logging
from diet_planner.containers import AppContainer
from diet_planner.domain.workspace import StagedFile
from diet_planner.services.workspaces import (
    WorkspaceBusyError,
    WorkspaceNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Using upstream services at %s", container.settings.upstream_base_url
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(page_router)

    @app.exception_handler(WorkspaceNotFoundError)
    async def workspace_not_found(
        request: Request, exc: WorkspaceNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Workspace not found. Reload the page to start over."},
        )

    @app.exception_handler(WorkspaceBusyError)
    async def workspace_busy(request: Request, exc: WorkspaceBusyError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": "Another request is still processing."},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/workspaces", status_code=status.HTTP_201_CREATED)
    async def create_workspace(request: Request) -> WorkspaceView:
        """Open a new intake form."""
        service = _container(request).workspace_service
        return WorkspaceView.from_record(service.create_workspace())

    @app.get("/workspaces/{workspace_id}")
    async def get_workspace(workspace_id: UUID, request: Request) -> WorkspaceView:
        """Return the current form state."""
        service = _container(request).workspace_service
        return WorkspaceView.from_record(service.get_workspace(workspace_id))

    @app.delete("/workspaces/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def discard_workspace(workspace_id: UUID, request: Request) -> None:
        """Throw away the form state."""
        _container(request).workspace_service.discard_workspace(workspace_id)

    @app.patch("/workspaces/{workspace_id}/patient")
    async def update_patient(
        workspace_id: UUID, update: PatientUpdate, request: Request
    ) -> WorkspaceView:
        """Update one or more patient fields."""
        service = _container(request).workspace_service
        workspace = service.update_patient(
            workspace_id, update.model_dump(exclude_none=True)
        )
        return WorkspaceView.from_record(workspace)

    @app.put("/workspaces/{workspace_id}/files")
    async def stage_files(
        workspace_id: UUID,
        request: Request,
        files: list[UploadFile] = File(default=[]),  # noqa: B008
    ) -> WorkspaceView:
        """Replace the staged prescription/report files."""
        service = _container(request).workspace_service
        staged = [
            StagedFile(
                filename=upload.filename or f"file{index}",
                content_type=upload.content_type or "application/octet-stream",
                content=await upload.read(),
            )
            for index, upload in enumerate(files)
        ]
        return WorkspaceView.from_record(service.stage_files(workspace_id, staged))

    @app.post("/workspaces/{workspace_id}/extract")
    async def extract(workspace_id: UUID, request: Request) -> WorkspaceView:
        """Run OCR/structured extraction on the staged files."""
        service = _container(request).workspace_service
        return WorkspaceView.from_record(await service.extract(workspace_id))

    @app.post("/workspaces/{workspace_id}/generate-diet")
    async def generate_diet(workspace_id: UUID, request: Request) -> WorkspaceView:
        """Generate a diet plan from the patient and extracted text."""
        service = _container(request).workspace_service
        return WorkspaceView.from_record(await service.generate_diet(workspace_id))

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container
