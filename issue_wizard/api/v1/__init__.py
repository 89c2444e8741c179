"""API v1 module."""

from fastapi import APIRouter

from issue_wizard.api.v1.routers import wizard_router


# Create main v1 router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(wizard_router)


__all__ = ["api_router"]
