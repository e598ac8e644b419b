from feedcore.api.routes.feed import router as feed_router
from feedcore.api.routes.health import router as health_router

__all__ = ["feed_router", "health_router"]
