"""API Routes for ActionBase."""

from .action_collections_router import router as action_collections_router
from .applications_router import router as applications_router
from .pages_router import router as pages_router

__all__ = [
    "action_collections_router",
    "applications_router",
    "pages_router",
]
