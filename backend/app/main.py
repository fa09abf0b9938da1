"""Main FastAPI application for the IMPROVE backend."""
from fastapi import FastAPI, Request

from app.api.routes.entries import router as entries_router
from app.api.routes.habit_changes import router as habit_changes_router
from app.api.routes.pomodoro import router as pomodoro_router
from app.api.routes.project_plan import router as project_plan_router
from app.api.routes.resources import router as resources_router
from app.api.routes.review import router as review_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.core.middleware import RequestIDMiddleware
from app.observability.client import init_opik
from app.observability.tracing import trace

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0", debug=settings.debug)
app.add_middleware(RequestIDMiddleware)
app.include_router(entries_router)
app.include_router(habit_changes_router)
app.include_router(project_plan_router)
app.include_router(pomodoro_router)
app.include_router(review_router)
app.include_router(resources_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
