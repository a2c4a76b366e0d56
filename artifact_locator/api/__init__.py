"""API exports."""

from .routes import router as health_router

__all__ = ["health_router"]
