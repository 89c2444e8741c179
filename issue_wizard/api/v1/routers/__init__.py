"""API routers."""

from issue_wizard.api.v1.routers.wizard import router as wizard_router


__all__ = [
    "wizard_router",
]
