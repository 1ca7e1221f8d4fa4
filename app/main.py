import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.error_handlers import register_error_handlers
from app.api.v1.routes.authentication import router as authentication_router
from app.api.v1.routes.cities import router as cities_router
from app.api.v1.routes.health import router as health_router
from app.api.v1.routes.points_of_interest import router as points_of_interest_router
from app.config import get_settings
from app.core.database_init import build_in_memory_store, initialize_database
from app.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    settings = get_settings()
    logger.info("Starting up application...")

    # The in-memory catalog lives exactly as long as the app
    app.state.city_store = build_in_memory_store(seed=settings.SEED_DATA)

    if settings.USE_DB_REPOS:
        if not initialize_database(seed=settings.SEED_DATA):
            raise RuntimeError("Database initialization failed")

    yield

    logger.info("Shutting down application...")


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    configure_logging(get_settings())

    app = FastAPI(
        title="City Info API",
        version="0.1.0",
        lifespan=lifespan,
    )
    register_error_handlers(app)

    app.include_router(cities_router, prefix="/api/v1")
    app.include_router(points_of_interest_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(authentication_router, prefix="/api")
    return app


app = create_app()


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
