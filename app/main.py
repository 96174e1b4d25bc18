"""
Main FastAPI application.

This is the entry point for the API server and the server-rendered UI.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.db.session import dispose_engine
from app.errors import register_error_handlers
from app.routers import (
    health,
    auth,
    clients,
    assessment_types,
    assessments,
    answers,
    analysis,
    reports,
)

# UI routes
from app.ui.dependencies import get_optional_ui_user
from app.ui.routes import (
    auth as ui_auth,
    dashboard,
    clients as ui_clients,
    assessments as ui_assessments,
    results as ui_results,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    On shutdown the database engine's connection pool is released.
    """
    logger.info("Starting %s...", settings.APP_NAME)
    if not settings.LLM_API_KEY:
        logger.warning("LLM_API_KEY is not set; insight generation is disabled")

    yield

    logger.info("Shutting down %s...", settings.APP_NAME)
    await dispose_engine()


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Business assessment questionnaires, scoring and insights",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)


# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(clients.router)
app.include_router(assessment_types.router)
app.include_router(assessments.router)
app.include_router(answers.router)
app.include_router(analysis.router)
app.include_router(reports.router)

# UI routes (session-based authentication)
app.include_router(ui_auth.router)
app.include_router(dashboard.router)
app.include_router(ui_clients.router)
app.include_router(ui_assessments.router)
app.include_router(ui_results.router)


# Root endpoint
@app.get("/", include_in_schema=False)
async def root(current_user=Depends(get_optional_ui_user)):
    """
    Root endpoint - redirects to login or dashboard.
    """
    if current_user:
        return RedirectResponse(url="/dashboard", status_code=303)
    return RedirectResponse(url="/login", status_code=303)
