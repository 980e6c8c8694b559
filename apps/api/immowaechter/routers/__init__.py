"""API routers."""

from immowaechter.routers.components import router as components_router
from immowaechter.routers.dashboard import router as dashboard_router
from immowaechter.routers.health import router as health_router
from immowaechter.routers.internal import router as internal_router

__all__ = [
    "components_router",
    "dashboard_router",
    "health_router",
    "internal_router",
]
