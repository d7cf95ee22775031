"""Tests for container wiring."""

import asyncio

from diet_planner.config import Settings
from diet_planner.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.workspace_service is not None
    assert container.workspace_service.accepted_types == ("image/*", "application/pdf")
    asyncio.run(container.close_resources())


def test_build_container_uses_configured_types() -> None:
    settings = Settings(accepted_file_types="application/pdf", environment="test")

    container = build_container(settings)

    assert container.workspace_service.accepted_types == ("application/pdf",)
    asyncio.run(container.close_resources())
