from packforge.api.health import router as health_router
from packforge.api.packs import router as packs_router

__all__ = [
    "health_router",
    "packs_router",
]
