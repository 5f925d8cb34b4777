"""
Router package for the Program Import API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- imports: Spreadsheet program import and preview
"""

from api.routers.health import router as health_router
from api.routers.imports import router as imports_router

__all__ = [
    "health_router",
    "imports_router",
]
