"""
FastAPI application factory and lifecycle wiring.

Keeps app assembly separate from route/business modules for easier maintenance.
"""

# Standard library
import logging
import os
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Third-party
from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from core.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from core.llm_factory import default_model
from core.providers import configure_providers, should_use_fake_providers
from translation.chunker import MAX_CHUNK_CHARS, TOKEN_THRESHOLD

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_DEFAULT_ORIGINS = [
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:3000",  # React CRA
    "http://127.0.0.1:3000",
]
_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]


def _load_environment() -> None:
    """Load environment variables from config.env."""
    project_root = os.path.dirname(os.path.dirname(__file__))
    dotenv_path = os.path.join(project_root, "config.env")
    load_dotenv(dotenv_path=dotenv_path)


def _configure_logging() -> None:
    """Configure application logging and key environment visibility."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info(
        "GOOGLE_API_KEY: %s",
        "Loaded" if os.getenv("GOOGLE_API_KEY") else "Not Found",
    )
    logger.info(
        "INTERCOM_SECRET_KEY: %s",
        "Loaded" if os.getenv("INTERCOM_SECRET_KEY") else "Not Found",
    )
    logger.info("TRANSLATION_MODEL: %s", default_model())
    logger.info(
        "Chunking above %d estimated tokens, %d chars per chunk",
        TOKEN_THRESHOLD,
        MAX_CHUNK_CHARS,
    )
    logger.info("Fake LLM provider: %s", should_use_fake_providers())


def _get_cors_origins() -> list[str]:
    """Return CORS origins from env or secure defaults."""
    raw_origins = os.getenv("CORS_ORIGINS", "")
    if raw_origins:
        origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
        if origins:
            logger.info("CORS: Using env origins: %s", origins)
            return origins
        logger.warning("CORS_ORIGINS is set but empty after parsing; using defaults")

    logger.info("CORS: Using development origins (set CORS_ORIGINS for production)")
    return list(_DEFAULT_ORIGINS)


def _configure_cors(app: FastAPI) -> None:
    """Attach CORS middleware."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_cors_origins(),
        allow_credentials=True,
        allow_methods=list(_ALLOWED_METHODS),
        allow_headers=["*"],  # Allow Authorization header for JWT
    )


def _register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _register_middlewares(app: FastAPI) -> None:
    """Register middleware components."""

    @app.middleware("http")
    async def request_id_middleware(
        request: Request, call_next
    ) -> Response:
        request_id = request.headers.get("X-Request-Id", str(uuid.uuid4()))
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response


async def read_health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "success", "message": "API is running"}


def _register_routers(app: FastAPI) -> None:
    """Register all API routers under the versioned prefix."""
    from accounts.router import auth_router, users_router
    from stats.router import router as stats_router
    from translation.router import router as translation_router

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    api.include_router(
        translation_router, prefix="/translations", tags=["Translations"]
    )
    api.include_router(users_router, prefix="/users", tags=["Users"])
    api.include_router(stats_router, prefix="/stats", tags=["Statistics"])
    api.add_api_route("/health", read_health, methods=["GET"], tags=["Health"])
    app.include_router(api)


def _initialize_external_clients(app: FastAPI) -> None:
    """Initialize external clients needed by API routes."""
    from supabase_client import init_supabase

    client = init_supabase()
    app.state.supabase = client
    if client:
        logger.info("Supabase client ready")
    else:
        logger.warning("Supabase unavailable; database-backed features are limited")


def _initialize_llm_provider() -> None:
    """Select the real or fake chat model provider."""
    configure_providers(use_fake=should_use_fake_providers())


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """FastAPI lifespan hook for startup initialization."""
    logger.info("=== Application Startup ===")
    _initialize_external_clients(app)
    _initialize_llm_provider()
    logger.info("=== All components ready ===")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    _load_environment()
    _configure_logging()

    app = FastAPI(
        title="LinguaBridge Translation API",
        description="LLM translation with tone/style control and per-user history",
        version="1.0.0",
        lifespan=app_lifespan,
    )
    _configure_cors(app)
    _register_middlewares(app)
    _register_error_handlers(app)
    _register_routers(app)
    return app
