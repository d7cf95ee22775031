"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from diet_planner.adapters.diet_client import DietClient
from diet_planner.adapters.extraction_client import ExtractionClient
from diet_planner.adapters.in_memory_workspace_repository import (
    InMemoryWorkspaceRepository,
)
from diet_planner.config import Settings
from diet_planner.containers import AppContainer
from diet_planner.domain.workspace import StagedFile
from diet_planner.services.workspaces import WorkspaceService


@dataclass
class FakeExtractionClient(ExtractionClient):
    """Fake extraction client that records submissions."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "raw_text": "Tab Metformin 500mg BD\nHbA1c 7.8%",
            "findings": {
                "labs": [{"name": "HbA1c", "value": "7.8%"}],
                "meds": ["Metformin 500mg"],
                "diagnosis": ["Type 2 diabetes"],
            },
        }
    )
    error: BaseException | None = None
    calls: list[tuple[list[StagedFile], dict[str, object]]] = field(
        default_factory=list
    )

    async def extract(
        self, files: list[StagedFile], patient: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((files, patient))
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeDietClient(DietClient):
    """Fake diet client that records generation requests."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "diet_chart_markdown": "## Breakfast\n- Oats upma",
            "diet_chart_html": "<h2>Breakfast</h2><ul><li>Oats upma</li></ul>",
            "structured": {"meals": [{"slot": "breakfast", "items": ["Oats upma"]}]},
        }
    )
    error: BaseException | None = None
    requests: list[dict[str, object]] = field(default_factory=list)

    async def generate(self, payload: dict[str, object]) -> dict[str, object]:
        self.requests.append(payload)
        if self.error is not None:
            raise self.error
        return self.payload


def prescription_file(name: str = "rx.png") -> StagedFile:
    return StagedFile(filename=name, content_type="image/png", content=b"\x89PNG..")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        upstream_base_url="http://upstream.test",
        upstream_timeout_seconds=None,
        accepted_file_types=None,
        workspace_ttl_seconds=3600,
        environment="test",
    )


@pytest.fixture
def extraction_client() -> FakeExtractionClient:
    return FakeExtractionClient()


@pytest.fixture
def diet_client() -> FakeDietClient:
    return FakeDietClient()


@pytest.fixture
def workspace_service(
    extraction_client: FakeExtractionClient, diet_client: FakeDietClient
) -> WorkspaceService:
    return WorkspaceService(
        repository=InMemoryWorkspaceRepository(ttl_seconds=3600),
        extraction_client=extraction_client,
        diet_client=diet_client,
    )


@pytest.fixture
def container(
    settings: Settings,
    extraction_client: FakeExtractionClient,
    diet_client: FakeDietClient,
    workspace_service: WorkspaceService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        extraction_client=extraction_client,
        diet_client=diet_client,
        workspace_service=workspace_service,
        close_resources=close_resources,
    )
