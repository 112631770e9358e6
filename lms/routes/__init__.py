"""HTTP routes."""
from .rooms import router as rooms_router

__all__ = ["rooms_router"]
