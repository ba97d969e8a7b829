"""
API module for the appointments page

Provides the FastAPI application hosting the appointments view
"""

from src.api.server import create_app

__all__ = [
    "create_app",
]
