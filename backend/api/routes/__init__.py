"""API Routes."""

from fastapi import APIRouter

from .admin import router as admin_router
from .articles import router as articles_router
from .auth import router as auth_router
from .health import router as health_router
from .payments import router as payments_router
from .publishers import router as publishers_router
from .users import router as users_router

# Create main API router
api_router = APIRouter()

# Include route modules
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(auth_router)
api_router.include_router(users_router)
api_router.include_router(articles_router)
api_router.include_router(admin_router)
api_router.include_router(publishers_router)
api_router.include_router(payments_router)
