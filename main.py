import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from me_api.config import Settings, settings as default_settings
from me_api.database import Database
from me_api.errors import register_error_handlers
from me_api.health import check_database
from me_api.logging_config import setup_logging, setup_request_logging
from me_api.rate_limit import RateLimiter, setup_rate_limiting
from me_api.routers import experiences, profile, projects, search, skills

API_VERSION = "1.0.0"

logger = logging.getLogger("me_api.main")


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings; defaults to the environment-loaded ones
        database: Storage client; built from ``settings`` when omitted

    Returns:
        Configured FastAPI app with ``app.state.database`` set
    """
    settings = settings or default_settings
    database = database or Database.from_settings(settings)

    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_dir=settings.log_dir,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: create tables on the pooled connection
        logger.info(f"Starting {settings.app_name} ({settings.environment})")
        await database.init()
        logger.info(f"Health check available at http://localhost:{settings.port}/health")
        yield
        # Shutdown: close connections
        logger.info(f"Shutting down {settings.app_name}")
        await database.close()

    app = FastAPI(
        title=settings.app_name,
        description="Personal portfolio data API",
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database
    app.state.started_at = time.monotonic()

    # Rate limiting; registered before CORS so 429s still carry CORS headers
    app.state.limiter = RateLimiter.from_settings(settings)
    setup_rate_limiting(app)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=settings.cors_origin != "*",
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_request_logging(app)
    register_error_handlers(app, settings)

    # Include routers
    app.include_router(profile.router)
    app.include_router(skills.router)
    app.include_router(projects.router)
    app.include_router(experiences.router)
    app.include_router(search.router)

    @app.get("/")
    async def root():
        return {"success": True, "message": f"{settings.app_name} - Ready", "version": API_VERSION}

    @app.get("/health")
    async def health_check(request: Request):
        """Report service status, uptime and database connectivity."""
        database_health = await check_database(request.app.state.database)
        return {
            "status": "healthy" if database_health.status == "connected" else "degraded",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "environment": settings.environment,
            "database": database_health.status,
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    uvicorn.run("main:app", host="0.0.0.0", port=default_settings.port)


if __name__ == "__main__":
    run()
