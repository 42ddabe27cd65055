"""
Main FastAPI application.

This is the entry point for the API server:

    uvicorn backoffice.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backoffice import __version__
from backoffice.core.config import settings
from backoffice.db.session import build_engine, build_session_maker
from backoffice.errors import register_error_handlers
from backoffice.routers import (
    auth,
    candidate_management,
    candidate_process,
    candidates,
    company,
    dashboard,
    health,
    management,
    post_sales,
    pre_invoice_items,
    pre_invoices,
    process,
    users,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    - On startup: configure logging, build the engine and session factory.
    - On shutdown: dispose of the engine's connection pool.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)
    logger.info("Starting %s %s", settings.APP_NAME, __version__)

    yield  # The server runs while we're "yielded" here

    logger.info("Shutting down %s...", settings.APP_NAME)
    await engine.dispose()


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Back-office API for recruiting processes, placements and billing",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(users.roles_router)
app.include_router(users.links_router)
app.include_router(company.router)
app.include_router(management.router)
app.include_router(process.router)
app.include_router(candidates.router)
app.include_router(candidate_process.router)
app.include_router(candidate_management.router)
app.include_router(post_sales.router)
app.include_router(pre_invoices.router)
app.include_router(pre_invoice_items.router)
app.include_router(dashboard.router)
