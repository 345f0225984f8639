"""API router definitions."""

from fastapi import APIRouter

from .admin import router as admin_router
from .forms import router as forms_router
from .routes import health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(forms_router)
api_router.include_router(admin_router)

__all__ = ["api_router"]
