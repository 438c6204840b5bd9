"""DevTrack Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devtrack import __version__
from devtrack.api.auth import router as auth_router
from devtrack.api.devices import router as devices_router
from devtrack.api.errors import register_error_handlers
from devtrack.api.system import router as system_router
from devtrack.config import Settings, settings as default_settings
from devtrack.database import build_engine, init_db

API_PREFIX = "/api"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("devtrack").setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup, release the engine on shutdown."""
    init_db(app.state.engine)
    yield
    app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Device inventory tracker: register, issue and return devices",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(devices_router, prefix=API_PREFIX)
    app.include_router(system_router, prefix=API_PREFIX)

    @app.get("/")
    def root():
        """Server info."""
        return {"name": settings.app_name, "version": __version__, "status": "running"}

    logger.info("DevTrack %s configured (timezone=%s)", __version__, settings.timezone)
    return app


def run() -> None:
    import uvicorn

    settings = default_settings
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
