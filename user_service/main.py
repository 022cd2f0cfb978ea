# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
from typing import Optional
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

# Local application imports
from .api.v1 import user_router, USERS_PREFIX
from .core.config import Settings, get_settings
from .core.logging_config import request_id_var, setup_logging
from .di.container import DIContainer
from .domain.repositories.user_repository import UserRepository
from .infrastructure.db import PostgresUserRepository, open_connection_pool
from .infrastructure.memory import InMemoryUserRepository

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Middleware to expose the caller's request ID to log records."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, "-")
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        if request_id != "-":
            response.headers[REQUEST_ID_HEADER] = request_id
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    
    Startup builds the DI container unless one was supplied to
    ``create_application``. For the PostgreSQL backend it opens the
    connection pool (bounded retries) and ensures the users table exists.
    Any startup failure propagates and aborts the server.
    """
    settings: Settings = app.state.settings
    connection_pool = None
    
    if app.state.container is None:
        settings.validate()
        
        if settings.uses_postgres:
            connection_pool = await open_connection_pool(settings)
            try:
                app.state.container = DIContainer(connection_pool=connection_pool)
                repository: PostgresUserRepository = app.state.container.get(UserRepository)
                await repository.ensure_schema()
            except Exception:
                await connection_pool.close()
                raise
        else:
            logger.warning("Using in-memory storage; data is lost on restart")
            app.state.container = DIContainer(user_repository=InMemoryUserRepository())
    
    logger.info(f"User service started with '{settings.storage_backend}' storage")
    
    yield
    
    # Shutdown: release database connections
    if connection_pool is not None:
        try:
            await connection_pool.close()
            logger.info("PostgreSQL connection pool closed")
        except Exception as e:
            logger.error(f"Error closing connection pool: {e}", exc_info=True)
    
    logger.info("Application shutdown complete")


def _register_exception_handlers(application: FastAPI) -> None:
    """Render every error as {"error": "<message>"} with the matching status"""
    
    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )
    
    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation error"},
        )
    
    @application.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled {type(exc).__name__}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )


def create_application(
    settings: Optional[Settings] = None,
    user_repository: Optional[UserRepository] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.
    
    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging
    - Request ID middleware and JSON error handlers
    - API route registration and optional static files
    
    Args:
        settings: Settings to use instead of the environment-derived ones
        user_repository: Storage to use as-is, skipping the database
            bootstrap (tests and local development)
    
    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        # Load environment variables from .env file
        env_path = Path(__file__).resolve().parent.parent / ".env"
        load_dotenv(env_path)
        settings = get_settings()
    
    setup_logging(settings.log_level)
    
    application = FastAPI(
        title="User Service API",
        version="1.0.0",
        description="CRUD service for users backed by PostgreSQL",
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.container = (
        DIContainer(user_repository=user_repository) if user_repository is not None else None
    )
    
    application.add_middleware(RequestIdMiddleware)
    _register_exception_handlers(application)
    
    @application.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy", "storage": settings.storage_backend}
    
    # Register API routers
    application.include_router(user_router, prefix=USERS_PREFIX)
    
    # Static files go last so they never shadow API routes
    if settings.static_dir:
        static_path = Path(settings.static_dir)
        if static_path.is_dir():
            application.mount("/", StaticFiles(directory=static_path, html=True), name="static")
            logger.info(f"Serving static files from {static_path}")
        else:
            logger.warning(f"STATIC_DIR {static_path} is not a directory; static files disabled")
    
    return application
