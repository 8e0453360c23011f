# ============================================================================
# apps/__init__.py - Routers for every enabled app
# ============================================================================

from .call_routing.routes import router as call_routing_router
from .system.routes import router as system_router

available_routers = {
    "call_routing": call_routing_router,
    "system": system_router,
}

__all__ = list(available_routers.keys())
