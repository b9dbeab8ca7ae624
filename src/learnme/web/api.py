"""FastAPI application factory.

Main entry point for the LearnMe Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from learnme import __version__
from learnme.config import load_app_config
from learnme.db.database import get_db_path, init_db, is_initialized
from learnme.web.routes import (
    activity_router,
    catalog_router,
    certifications_router,
    challenges_router,
    chat_router,
    code_router,
    dev_router,
    health_router,
    hints_router,
    portfolio_router,
    progress_router,
    users_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    if not is_initialized():
        init_db(load_app_config().db_path)
    logger.info("api_startup", db_path=str(get_db_path()), version=__version__)
    yield


async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """Turn unexpected errors into a JSON 500."""
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    app = FastAPI(
        title="LearnMe API",
        description="Web API for the LearnMe programming education platform",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(Exception, unhandled_error)

    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(catalog_router)
    app.include_router(progress_router)
    app.include_router(certifications_router)
    app.include_router(portfolio_router)
    app.include_router(chat_router)
    app.include_router(dev_router)
    app.include_router(hints_router)
    app.include_router(code_router)
    app.include_router(challenges_router)
    app.include_router(activity_router)

    return app


# Default app instance for uvicorn
app = create_app()
