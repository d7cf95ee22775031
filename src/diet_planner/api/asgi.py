"""ASGI entrypoint for the diet planner app."""

from diet_planner.api.app import create_app
from diet_planner.containers import build_container

app = create_app(build_container())
