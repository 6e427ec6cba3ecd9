"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from registrar import __version__
from registrar.api.dependencies import close_engine, init_engine
from registrar.api.models import APIResponse
from registrar.api.routes import enrollments
from registrar.api.routes import policy as policy_routes
from registrar.catalog import CatalogError, CourseNotFoundError, DuplicateCourseError
from registrar.enrollment import EnrollmentError, EnrollmentPolicy, policy_from_env

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    active_policy = app.state.policy if app.state.policy is not None else policy_from_env()
    init_engine(active_policy)
    logger.info("Enrollment engine ready (policy=%s)", active_policy)

    yield
    # Shutdown
    close_engine()


def create_app(policy: EnrollmentPolicy | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        policy: Policy for the enrollment engine. Defaults to the file named
                by REGISTRAR_POLICY, or the standard thresholds.
    """
    app = FastAPI(
        title="Registrar API",
        description="REST API for checking course enrollment requests",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.policy = policy

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(CourseNotFoundError)
    async def course_not_found_handler(
        _request: Request, exc: CourseNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(DuplicateCourseError)
    async def duplicate_course_handler(
        _request: Request, exc: DuplicateCourseError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(_request: Request, exc: CatalogError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    @app.exception_handler(EnrollmentError)
    async def enrollment_error_handler(_request: Request, exc: EnrollmentError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=APIResponse[None](data=None, error=str(exc)).model_dump(),
        )

    # Include routers
    app.include_router(enrollments.router, prefix="/api/v1")
    app.include_router(policy_routes.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
