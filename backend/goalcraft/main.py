"""Main FastAPI application for the Goalcraft backend."""
import logging

from fastapi import FastAPI, Request

from goalcraft.api.routes.goals import router as goals_router
from goalcraft.api.routes.progress import router as progress_router
from goalcraft.core.config import settings
from goalcraft.core.logging import configure_logging
from goalcraft.core.middleware import RequestIDMiddleware
from goalcraft.db.base import Base
from goalcraft.db.session import engine
from goalcraft.observability.client import init_opik
from goalcraft.observability.tracing import trace
from goalcraft.services.security import redact_sensitive

configure_logging(log_level=settings.log_level, debug=settings.debug)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(progress_router)
app.include_router(goals_router)


@app.on_event("startup")
async def startup() -> None:
    """Initialize observability and make sure the key-value table exists."""
    logger.debug("Starting with settings %s", redact_sensitive(settings.model_dump()))
    init_opik()
    Base.metadata.create_all(bind=engine)


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
