"""FastAPI dependency injection for API endpoints."""

import logging
from functools import lru_cache

from issue_wizard.domain.fields.metadata_cache import field_metadata_cache
from issue_wizard.domain.wizard.state_manager import StateManager
from issue_wizard.services.field_metadata_service import FieldMetadataService
from issue_wizard.services.wizard_service import WizardService
from issue_wizard.settings import get_settings
from issue_wizard.tracker.client import TrackerClient, create_tracker_client
from issue_wizard.tracker.mock import MockTrackerClient
from issue_wizard.tracker.models import TrackerConfig


logger = logging.getLogger(__name__)


@lru_cache
def get_tracker_client() -> TrackerClient:
    """Get the tracker client.

    Falls back to an in-memory tracker when credentials are absent
    (production refuses to start without them).
    """
    settings = get_settings()
    if not settings.tracker_configured:
        logger.warning("Tracker credentials not configured; using in-memory tracker")
        return MockTrackerClient()

    return create_tracker_client(TrackerConfig(
        base_url=settings.tracker_base_url,
        username=settings.tracker_username,
        api_token=settings.tracker_api_token,
        timeout=settings.tracker_timeout_seconds,
    ))


@lru_cache
def get_state_manager() -> StateManager:
    """Get the process-wide wizard session."""
    return StateManager()


@lru_cache
def get_wizard_service() -> WizardService:
    """Get the wizard service bound to the shared session and tracker."""
    settings = get_settings()
    field_metadata_cache.ttl_seconds = settings.field_metadata_ttl_seconds
    client = get_tracker_client()
    return WizardService(
        state_manager=get_state_manager(),
        tracker_client=client,
        metadata_service=FieldMetadataService(client, field_metadata_cache),
    )


def clear_caches() -> None:
    """Clear cached dependencies (for testing)."""
    get_tracker_client.cache_clear()
    get_state_manager.cache_clear()
    get_wizard_service.cache_clear()
