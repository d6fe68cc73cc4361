import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI

from acai_control.api.v1.router import api_router
from acai_control.config.settings import Settings, settings as default_settings
from acai_control.core.logging_config import setup_logging
from acai_control.core.middleware import setup_exception_handlers, setup_middleware
from acai_control.shared.storage import Storage, build_storage, seed_catalog

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[Storage] = None,
    clock: Callable[[], datetime] = datetime.now
) -> FastAPI:
    """
    Application factory. O armazenamento é escolhido pela configuração ou
    injetado diretamente (testes).
    """
    settings = settings or default_settings
    storage = storage or build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info("🚀 %s Starting...", settings.app_name)
        logger.info("📍 Version: %s", settings.version)
        logger.info("🌍 Environment: %s", "Development" if settings.debug else "Production")
        logger.info("💾 Storage: %s", type(storage).__name__)

        storage.init()
        if settings.seed_catalog:
            seed_catalog(storage)

        yield

        # Shutdown
        logger.info("🛑 %s Shutting down...", settings.app_name)
        storage.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Ponto de venda e retaguarda para banca de açaí e farinhas",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.storage = storage
    app.state.clock = clock

    # Setup middleware
    setup_middleware(app, settings)
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api")

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "message": f"{settings.app_name} - Ponto de venda",
            "version": settings.version,
            "status": "running",
            "docs": "/docs" if settings.debug else "Disabled in production",
            "api": "/api"
        }

    return app


def run():
    import uvicorn

    setup_logging(default_settings.log_level)
    uvicorn.run(
        "acai_control.main:create_app",
        factory=True,
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug
    )


if __name__ == "__main__":
    run()
