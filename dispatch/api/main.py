"""
FastAPI application main entry point.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dispatch.api.routes import (
    cascade_router,
    drafts_router,
    users_router,
    voice_router,
)
from dispatch.core.config import settings
from dispatch.core.database import close_db, init_db
from dispatch.core.exceptions import GENERIC_ERROR_MESSAGE, DispatchError
from dispatch.core.llm_clients import LLMClient
from dispatch.core.logging import setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Creates the process-wide handles on startup and releases them on shutdown.
    """
    # Startup
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting Dispatch", environment=settings.environment)

    # Initialize Sentry for error tracking
    try:
        from dispatch.core.observability import init_sentry
        if init_sentry():
            logger.info("Sentry initialized")
    except Exception as e:
        logger.warning("Sentry initialization failed", error=str(e))

    # Initialize database
    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.warning("Database initialization failed", error=str(e))

    app.state.llm_client = LLMClient()
    logger.info("LLM client ready", provider=app.state.llm_client.default_provider.value)

    yield

    # Shutdown
    logger.info("Shutting down Dispatch")

    await app.state.llm_client.close()
    app.state.llm_client = None
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Dispatch: LinkedIn drafts in your team's own voices

    - Voice onboarding from writing samples
    - Single drafts in one person's voice
    - Cascades: one master message adapted for many people at once
    """,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DispatchError)
async def dispatch_error_handler(request: Request, exc: DispatchError) -> JSONResponse:
    """Render service errors as {"error": message}."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed bodies as {"error": message} with 400."""
    errors = exc.errors()
    fields = [
        ".".join(str(part) for part in error.get("loc", ())[1:])
        for error in errors
    ]
    fields = [field for field in fields if field]
    message = f"Invalid value for {fields[0]}." if fields else "Invalid request body."

    logger.info("Request validation failed", path=request.url.path, errors=len(errors))
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected errors; never return their details."""
    logger.exception("Unhandled error", path=request.url.path, error_type=type(exc).__name__)
    return JSONResponse(status_code=500, content={"error": GENERIC_ERROR_MESSAGE})


# Include API routes
app.include_router(cascade_router, prefix=settings.api_v1_prefix)
app.include_router(voice_router, prefix=settings.api_v1_prefix)
app.include_router(drafts_router, prefix=settings.api_v1_prefix)
app.include_router(users_router, prefix=settings.api_v1_prefix)


# Health check endpoint
@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.environment,
    }


# Root endpoint
@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "endpoints": {
            "cascade": f"{settings.api_v1_prefix}/cascade",
            "analyze_voice": f"{settings.api_v1_prefix}/analyze-voice",
            "generate_draft": f"{settings.api_v1_prefix}/generate-draft",
            "drafts": f"{settings.api_v1_prefix}/drafts",
            "users": f"{settings.api_v1_prefix}/users",
        },
    }
