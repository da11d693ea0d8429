"""Catalog admin API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, exception handlers and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from catalog_admin.api.banner_images import router as banner_images_router
from catalog_admin.api.categories import router as categories_router
from catalog_admin.api.health import router as health_router
from catalog_admin.api.middleware import setup_middleware
from catalog_admin.api.products import router as products_router
from catalog_admin.domain.exceptions import CatalogError
from catalog_admin.infrastructure.asset_store import close_asset_store
from catalog_admin.infrastructure.config import settings
from catalog_admin.infrastructure.database import create_tables, engine
from catalog_admin.infrastructure.logging_config import configure_logging

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting catalog admin API",
        version=settings.api_version,
        debug=settings.debug,
        category_delete_scope=settings.category_delete_scope,
    )

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database tables ready")

    yield

    logger.info("Shutting down catalog admin API")
    await close_asset_store()
    await engine.dispose()


app = FastAPI(
    title="Catalog Admin API",
    description="Product, category and banner management backend",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(banner_images_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map catalog errors to their HTTP status."""
    logger.warning(
        "Catalog error",
        path=request.url.path,
        method=request.method,
        error_type=type(exc).__name__,
        error=exc.message,
        **exc.details,
    )
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed query, path or body values as 400."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid {location}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    return _error(exc.status_code, str(exc.detail))
