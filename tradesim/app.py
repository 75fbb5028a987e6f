"""
Trade Simulator FastAPI Application
Serves one in-memory simulator session to a presentation layer.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config.settings import ApplicationSettings, get_settings
from .engine.simulator_engine import TradeSimulator, create_simulator
from .exceptions import UnknownPresetError
from .routers import simulation_router
from .routers.simulation import get_simulator, set_simulator


# Configure structured logging
def setup_logging(settings: Optional[ApplicationSettings] = None) -> None:
    """Configure stdlib logging and structlog for the application."""
    settings = settings or get_settings()
    logging.basicConfig(
        format=settings.logging.format,
        level=getattr(logging, settings.logging.level.upper()),
        stream=sys.stdout,
    )
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer() if settings.logging.json_format else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


logger = structlog.get_logger("tradesim.app")


# ============================================================================
# Lifespan Events
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan events.
    
    Stops the auto-run loop on shutdown so no task outlives the app.
    """
    settings = get_settings()
    logger.info("Starting TradeSim", app_name=settings.app_name, version=settings.app_version)
    
    yield
    
    logger.info("Shutting down TradeSim")
    await get_simulator().stop()
    logger.info("TradeSim shutdown complete")


# ============================================================================
# Exception Handlers
# ============================================================================

async def unknown_preset_handler(request: Request, exc: UnknownPresetError) -> JSONResponse:
    """Handle unknown preset lookups."""
    logger.warning("Unknown preset", path=request.url.path, preset=exc.preset)
    
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": exc.error_code,
            "detail": str(exc),
            "available": list(exc.available),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle validation exceptions, including rejected non-finite values."""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in exc.errors()
    ]
    logger.warning("Validation error", path=request.url.path, errors=errors)
    
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "detail": errors,
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions."""
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": "An unexpected error occurred" if not get_settings().debug else str(exc),
        },
    )


# ============================================================================
# Health Check Router
# ============================================================================

health_router = APIRouter(tags=["Health"])


@health_router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict:
    """
    Health check endpoint.
    
    Returns:
        dict: Health status information.
    """
    settings = get_settings()
    simulator = get_simulator()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "running": simulator.is_running(),
    }


# ============================================================================
# Application Factory
# ============================================================================

def create_application(simulator: Optional[TradeSimulator] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        simulator: Session to serve, a fresh one is created if None
    
    Returns:
        FastAPI: Configured FastAPI application.
    """
    settings = get_settings()
    set_simulator(simulator or create_simulator())
    
    app = FastAPI(
        title=settings.app_name,
        description="Interactive Monte-Carlo trade simulator",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    
    app.add_exception_handler(UnknownPresetError, unknown_preset_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    
    app.include_router(health_router)
    app.include_router(simulation_router, prefix="/api/v1")
    
    return app


# ============================================================================
# Main Entry Point
# ============================================================================

def main():
    import uvicorn
    
    setup_logging()
    settings = get_settings()
    uvicorn.run(
        create_application(),
        host=settings.host,
        port=settings.port,
        log_level=settings.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
