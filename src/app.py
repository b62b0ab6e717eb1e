"""Main FastAPI application module.

This module builds the FastAPI application from a ``Settings`` value and
registers all route handlers. Run it with
``uvicorn app:create_app --factory`` or ``python app.py``.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.routes import admin, auth, designs, uploads, users
from config import Settings, load_settings
from core.database import init_db, make_engine, make_session_factory
from core.error_handlers import register_exception_handlers
from core.logging_config import setup_logging
from core.rate_limit import RateLimiter, RateLimitMiddleware
from core.security import TokenService

logger = logging.getLogger(__name__)

API_NAME = "Design Marketplace API"
API_VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Configuration to use; read from the environment if omitted.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings.log_level)

    app = FastAPI(
        title=API_NAME,
        description="REST API for a buyer/designer design marketplace with an admin console.",
        version=API_VERSION,
    )

    # Process-wide, read-only after startup
    engine = make_engine(settings.database_url)
    init_db(engine)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.token_service = TokenService(settings.jwt_secret, settings.jwt_expires_in)

    if settings.rate_limit_max_requests > 0:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=RateLimiter(
                limit=settings.rate_limit_max_requests,
                window_seconds=settings.rate_limit_window.total_seconds(),
            ),
        )

    # Added last so CORS headers also wrap rate-limit rejections
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Register route handlers
    app.include_router(auth.router)
    app.include_router(designs.router)
    app.include_router(users.router)
    app.include_router(uploads.router)
    app.include_router(admin.router)

    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        uploads.UPLOAD_URL_PREFIX,
        StaticFiles(directory=str(settings.upload_dir)),
        name="uploads",
    )

    @app.get("/", summary="API root", tags=["Info"])
    def root() -> dict:
        """API root, returns API information and documentation links."""
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "docs": {
                "swagger": "/docs",
                "redoc": "/redoc",
            },
            "health": "/api/health",
        }

    @app.get("/api/health", summary="Health check", tags=["Health"])
    def health() -> dict:
        return {"success": True, "status": "ok", "environment": settings.environment}

    logger.info(
        "Application created (environment=%s, database=%s)",
        settings.environment,
        engine.url.render_as_string(hide_password=True),
    )
    return app


# --- Startup code for direct execution ---
if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    server_url = f"http://{settings.host}:{settings.port}"
    print(f"Starting {API_NAME} at {server_url}")
    print(f"API docs: {server_url}/docs")

    uvicorn.run(
        "app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
