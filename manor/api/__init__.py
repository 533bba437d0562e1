"""
MANOR API Module

FastAPI router and application factory for the advisor engines.
"""

from .router import create_advisor_router
from .app import create_app

__all__ = [
    "create_advisor_router",
    "create_app",
]
