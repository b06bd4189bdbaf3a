from lotusflare.api.health import router as health_router
from lotusflare.api.legality import router as legality_router

__all__ = [
    "health_router",
    "legality_router",
]
