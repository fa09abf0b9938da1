"""Regression tests for application route registration."""
from fastapi.routing import APIRoute

from app.main import app


def _routes(path: str, method: str) -> list[APIRoute]:
    return [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path == path and method in route.methods
    ]


def test_planner_routes_registered_once() -> None:
    assert len(_routes("/habits/changes/preview", "POST")) == 1
    assert len(_routes("/habits/changes/apply", "POST")) == 1


def test_core_routes_present() -> None:
    for path, method in [
        ("/entries", "GET"),
        ("/entries", "POST"),
        ("/projects/plan", "POST"),
        ("/pomodoro/sessions", "POST"),
        ("/pomodoro/stats", "GET"),
        ("/pomodoro/timer/advance", "POST"),
        ("/review/summary", "GET"),
        ("/review/sessions", "GET"),
        ("/resources/summarize", "POST"),
    ]:
        assert _routes(path, method), f"{method} {path} missing"
