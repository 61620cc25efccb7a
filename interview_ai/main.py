"""
Interview AI - Main FastAPI Application

This is the entry point for the interview service API.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interview_ai import __version__
from interview_ai.core.config import get_settings
from interview_ai.core.database import mongodb_client
from interview_ai.core.errors import register_exception_handlers
from interview_ai.providers.llm import close_llm_provider
from interview_ai.api import health, interviews

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info("Starting Interview AI...")

    if settings.uses_mongodb:
        await mongodb_client.connect()
        logger.info("MongoDB connection established")

    yield

    logger.info("Shutting down Interview AI...")
    await close_llm_provider()
    if settings.uses_mongodb:
        await mongodb_client.disconnect()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Mock interview service with AI-generated questions, feedback and reports",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, tags=["Health"])
    app.include_router(interviews.router, prefix="/api/interviews", tags=["Interviews"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "interview_ai.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
