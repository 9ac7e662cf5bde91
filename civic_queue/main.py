"""
Civic Queue - Main FastAPI Application

Routing and priority queue service for classified civic complaints.
It configures middleware, routes, and lifecycle handlers.
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .config.settings import settings
from .api.routes import api_router
from .api.middleware import CorrelationIdMiddleware, register_error_handlers
from .domain.defaults import DEFAULT_ROUTING
from .domain.models import RoutingDefaults
from .repositories.mongo_client import create_indexes, close_connection, get_database, health_check
from .repositories.routing_config_repo import RoutingConfigRepository
from .utils.logger import setup_logging, get_logger

# Setup logging first
setup_logging()
logger = get_logger(__name__)

VERSION = "1.0.0"


# =============================================================================
# Application Lifecycle
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
        - Creates MongoDB indexes
        - Seeds routing configuration if enabled

    Shutdown:
        - Closes database connections
    """
    logger.info("Starting Civic Queue...")

    try:
        create_indexes()
        logger.info("MongoDB indexes created")
    except PyMongoError as e:
        logger.error(f"Failed to create indexes: {e}")

    if settings.seed_routing_on_startup:
        try:
            RoutingConfigRepository(get_database(), app.state.routing_defaults).initialize_routing_configs()
        except PyMongoError as e:
            logger.error(f"Failed to seed routing configs: {e}")

    logger.info("Application started successfully")

    yield

    logger.info("Shutting down...")
    close_connection()
    logger.info("Application shutdown complete")


# =============================================================================
# Application Factory
# =============================================================================

def create_app(routing_defaults: RoutingDefaults = DEFAULT_ROUTING) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        routing_defaults: Built-in routing tables used as fallback and seed

    Returns:
        Configured FastAPI application instance
    """
    application = FastAPI(
        title="Civic Queue",
        description="Routing and priority queue for civic complaints",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
        openapi_url="/api/openapi.json" if settings.debug else None,
    )
    application.state.routing_defaults = routing_defaults

    _configure_middleware(application)
    register_error_handlers(application)
    _configure_routes(application)

    return application


def _configure_middleware(app: FastAPI) -> None:
    """Configure application middleware."""
    # allow_credentials must be False when allowing all origins
    allow_all = settings.cors_origins.strip() == "*"

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins_list,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Correlation-Id"],
    )

    app.add_middleware(CorrelationIdMiddleware)


def _configure_routes(app: FastAPI) -> None:
    """Configure application routes."""
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/health", tags=["Health"])
    async def health():
        """Health check including database connectivity."""
        mongo_health = health_check()
        return {
            "status": "healthy" if mongo_health.get("status") == "healthy" else "degraded",
            "version": VERSION,
            "environment": settings.environment,
            "mongo": mongo_health
        }

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Civic Queue",
            "version": VERSION,
            "docs": "/api/docs" if settings.debug else None
        }


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()
