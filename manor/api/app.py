"""
api/app.py - FastAPI application factory v1.0
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..bootstrap.config import ManorConfig, get_config
from .router import create_advisor_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[ManorConfig] = None) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Application configuration (defaults to get_config())

    Returns:
        FastAPI application instance
    """
    config = config or get_config()

    app = FastAPI(
        title="MANOR API",
        description="Residential Program Advisor API",
        version=__version__,
        docs_url=config.api.docs_url if config.api.enable_docs else None,
        redoc_url="/redoc" if config.api.enable_docs else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(create_advisor_router(config))

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "environment": config.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    logger.info(f"API created: environment={config.environment}")
    return app
