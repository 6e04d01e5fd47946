"""
Main entrypoint for the Focus Orbit API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn focus_orbit_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import settings
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .core.db import init_db
from .services.role_service import RoleService


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create the database file and tables if needed, then grant the
    # configured administrators their role.
    init_db()
    RoleService.bootstrap_admins(settings.admin_identity_list())
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is configured before anything else so that the routers and
    services can log during startup.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug, lifespan=lifespan)

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
