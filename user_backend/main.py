# Standard library imports
from pathlib import Path
from contextlib import asynccontextmanager
import logging

# External package imports
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Local application imports
from .api.error_handlers import setup_exception_handlers
from .api.v1 import user_router, email_router
from .core.config import get_settings
from .core.logging_config import configure_logging
from .di.container import reset_container
from .infrastructure.db.mongo_connection import close_database, ensure_user_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Verifies MongoDB and creates the unique email index on startup,
    closes the MongoDB client on shutdown.
    """
    settings = get_settings()
    # A missing URI is a configuration error and stops startup
    settings.mongo_uri

    try:
        await ensure_user_indexes()
        logger.info(f"Connected to MongoDB ({settings.mongo_label}), database '{settings.mongo_database_name}'")
    except Exception as e:
        # Don't fail app startup if MongoDB is unavailable; requests will surface the error
        logger.error(f"Failed to verify MongoDB on startup: {e}", exc_info=True)

    logger.info(f"User backend ready, API base: http://{settings.host}:{settings.port}/api")

    yield

    close_database()
    reset_container()
    logger.info("Application shutdown complete")


def create_application() -> FastAPI:
    """
    Build the user management app: .env and logging first, then CORS,
    the error normalization stage and the /api routers.
    """
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    configure_logging(settings)

    application = FastAPI(
        title="User Management API",
        version="1.0.0",
        description="Register, list, update and delete users backed by MongoDB",
        lifespan=lifespan
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(application)

    application.include_router(user_router, prefix="/api")
    application.include_router(email_router, prefix="/api")

    return application


# Create application instance
app = create_application()
