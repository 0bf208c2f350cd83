#!/usr/bin/env python3
"""
Sunspear - Main FastAPI Application

Application entry point
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Import application configurations and components
from sunspear.config import ServerConfig
from sunspear.config.logging_config import LoggingConfig
from sunspear.utils.exceptions import EngineError, register_exception_handlers
from sunspear.utils.model.response_model import BaseResponse
from sunspear.utils.model.response_code import ResponseCode
from sunspear.db.base import init_db, dispose_db
from sunspear.services.docker_service import docker_service

# Import API routers
from sunspear.api import (
    compose_router,
    app_router,
    container_router,
    image_router,
    network_router,
    volume_router,
)
from sunspear.api.compose_router import compose_service
from sunspear.api.app_router import app_service

# Initialize logging
LoggingConfig().setup_logging()

# Initialize logger (after logging setup)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle

    Startup: create tables, seed compose templates, load the app catalog.
    Shutdown: dispose the database engine.
    """
    logger.info("=" * 80)
    logger.info("Starting Sunspear...")
    logger.info("=" * 80)

    await init_db()
    logger.info("Database initialized successfully")

    compose_service.templates.ensure_defaults()
    app_service.catalog.load()

    logger.info("Application startup complete")
    logger.info(f"Server URL: http://{ServerConfig.HOST}:{ServerConfig.PORT}")
    logger.info(f"Documentation: http://{ServerConfig.HOST}:{ServerConfig.PORT}/docs")
    logger.info(f"Health Check: http://{ServerConfig.HOST}:{ServerConfig.PORT}/health")
    logger.info("=" * 80)

    yield

    logger.info("Shutting down application...")

    try:
        await dispose_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error(f"Error closing database: {e}")

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="Sunspear",
        version="1.0.0",
        description="Management backend for a local container host",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Add CORS middleware (must be first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ServerConfig.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Include routers with /api prefix
    app.include_router(compose_router, prefix="/api")
    app.include_router(app_router, prefix="/api")
    app.include_router(container_router, prefix="/api")
    app.include_router(image_router, prefix="/api")
    app.include_router(network_router, prefix="/api")
    app.include_router(volume_router, prefix="/api")

    @app.get("/health", tags=["health"], operation_id="health")
    async def health():
        """Service and engine status"""
        try:
            await docker_service.ping()
            engine = "up"
        except EngineError as e:
            logger.warning(f"Engine ping failed: {e.message}")
            engine = "down"

        code = ResponseCode.SUCCESS if engine == "up" else ResponseCode.SERVICE_UNAVAILABLE
        return BaseResponse.of(code, data={"status": "ok", "engine": engine})

    return app


def run_api(host: str, port: int, **kwargs):
    """
    Run the API server with the given configuration
    """
    try:
        uvicorn.run(
            "sunspear.main:app",
            host=host,
            port=port,
            reload=kwargs.get("reload") or ServerConfig.RELOAD
        )
    except Exception as e:
        logger.error(f"Failed to start API server: {e}")
        raise


def main() -> None:
    """
    Sunspear console entry point
    """
    parser = argparse.ArgumentParser(prog='sunspear',
                                     description='Sunspear container host backend')
    parser.add_argument("--host", type=str, default=ServerConfig.HOST)
    parser.add_argument("--port", type=int, default=ServerConfig.PORT)
    parser.add_argument("--reload", action="store_true", default=ServerConfig.RELOAD)

    args = parser.parse_args()

    try:
        run_api(
            host=args.host,
            port=args.port,
            reload=args.reload
        )
    except KeyboardInterrupt:
        logger.info("\nShutting down Sunspear gracefully...")
    except Exception as e:
        logger.error(f"Application startup failed: {e}")
        sys.exit(1)


# Create the app instance
app = create_app()

if __name__ == "__main__":
    main()
