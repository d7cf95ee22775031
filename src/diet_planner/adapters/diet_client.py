"""Client for the diet-plan generation service."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class DietClient(Protocol):
    """Interface for diet-plan generation."""

    async def generate(self, payload: dict[str, object]) -> dict[str, object]:
        """Submit a generation request and return the opaque result."""


@dataclass
class HttpxDietClient(DietClient):
    """HTTPX-backed diet generation client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout: float | None = None

    @classmethod
    def create(cls, base_url: str, timeout: float | None = None) -> "HttpxDietClient":
        """Create a diet client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout=timeout,
        )

    async def generate(self, payload: dict[str, object]) -> dict[str, object]:
        """POST the generation request as JSON."""
        url = f"{self.base_url}/api/generate-diet"
        response = await self.http_client.post(url, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
