"""
Timebox Planner - Main Application Entry Point

Daily timeboxing planner: schedule editing, window reconciliation and
LLM-assisted schedule generation.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timebox.core.config import get_settings
from timebox.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Timebox Planner in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from timebox.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Timebox Planner...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Timebox Planner",
        description="Daily timeboxing planner with LLM-assisted schedule generation",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from timebox.api import generation, models, schedule
    from timebox.api import settings as settings_api

    app.include_router(settings_api.router, prefix="/api/settings", tags=["settings"])
    app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])
    app.include_router(generation.router, prefix="/api/generate", tags=["generation"])
    app.include_router(models.router, prefix="/api/models", tags=["models"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
