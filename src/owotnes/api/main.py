"""
FastAPI Application Factory

Optional admin surface for a running bridge:
- /api/health                   liveness
- /api/v1/system/status         session + transport metrics
- /api/v1/system/tasks/summary  task registry summary
- /api/v1/system/reload         ROM reload
- /api/v1/system/command        command token injection

The factory is shared by main_asyncio.py and the tests.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from owotnes import __version__
from owotnes.api.middleware.error_handler import register_exception_handlers
from owotnes.api.routes import system
from owotnes.models.enums import LogCategory
from owotnes.utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)


def create_app(
    title: str = "owotnes bridge",
    description: str = "Admin API for the NES to Our World of Text bridge",
    version: str = __version__,
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: localhost dev URLs)

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    log.debug(f"Creating FastAPI app: {title} v{version}")

    if cors_origins is None:
        cors_origins = [
            "http://localhost",
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(system.router, prefix="/api/v1")

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "owotnes",
            "version": version,
        }

    log.info(f"FastAPI app created: {title}")
    return app
