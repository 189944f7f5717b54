# routers/__init__.py

from fastapi import APIRouter

from .auth import router as auth_router
from .navigation import router as navigation_router
from .icons import router as icons_router
from .capabilities import router as capabilities_router
from .health import router as health_router


# Master router
api_router = APIRouter()

api_router.include_router(auth_router)

# Navigation core
api_router.include_router(navigation_router)
api_router.include_router(icons_router)
api_router.include_router(capabilities_router)

# Health
api_router.include_router(health_router)

__all__ = ["api_router"]
