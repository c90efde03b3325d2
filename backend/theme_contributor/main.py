"""
Theme Contributor Service Main Application
Flow: main.py -> config -> context -> middleware -> routers
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from theme_contributor.config.settings import get_settings
from theme_contributor.core.context import build_context
from theme_contributor.core.exceptions import ThemeContributorException
from theme_contributor.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("Starting Theme Contributor Service", version=settings.APP_VERSION)
    
    app.state.context = build_context(settings)
    
    yield
    
    logger.info("Shutting down Theme Contributor Service",
                contributors=len(app.state.context.registry))


async def theme_contributor_exception_handler(
    request: Request, exc: ThemeContributorException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details,
        },
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
    )
    
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )
    
    app.add_exception_handler(ThemeContributorException, theme_contributor_exception_handler)
    
    from theme_contributor.api import contributors, health, theme
    
    app.include_router(health.router, prefix="/api/health", tags=["health"])
    app.include_router(contributors.router, prefix="/api/contributors", tags=["contributors"])
    app.include_router(theme.router, prefix="/api/theme", tags=["theme"])
    
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "theme_contributor.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.DEBUG,
        log_config=None,  # Use structlog instead
    )
