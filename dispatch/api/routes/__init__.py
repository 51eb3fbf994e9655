"""API Route modules"""

from dispatch.api.routes.cascade import router as cascade_router
from dispatch.api.routes.drafts import router as drafts_router
from dispatch.api.routes.users import router as users_router
from dispatch.api.routes.voice import router as voice_router

__all__ = [
    "cascade_router",
    "drafts_router",
    "users_router",
    "voice_router",
]
