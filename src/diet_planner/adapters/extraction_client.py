"""Client for the prescription/report extraction service."""

import json
from dataclasses import dataclass
from typing import Protocol

import httpx

from diet_planner.domain.workspace import StagedFile


class ExtractionClient(Protocol):
    """Interface for OCR and structured extraction."""

    async def extract(
        self, files: list[StagedFile], patient: dict[str, object]
    ) -> dict[str, object]:
        """Submit files with patient data and return raw API data."""


@dataclass
class HttpxExtractionClient(ExtractionClient):
    """HTTPX-backed extraction client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float | None = None

    @classmethod
    def create(
        cls, base_url: str, timeout: float | None = None
    ) -> "HttpxExtractionClient":
        """Create an extraction client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def extract(
        self, files: list[StagedFile], patient: dict[str, object]
    ) -> dict[str, object]:
        """POST files as file0..fileN plus the patient JSON string."""
        url = f"{self.base_url}/api/extract"
        parts = [
            (f"file{index}", (staged.filename, staged.content, staged.content_type))
            for index, staged in enumerate(files)
        ]
        response = await self.http_client.post(
            url,
            files=parts,
            data={"patient": json.dumps(patient)},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
