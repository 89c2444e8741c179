"""Test fixtures for API tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from issue_wizard.api.v1 import api_router
from issue_wizard.api.v1.dependencies import clear_caches, get_wizard_service
from issue_wizard.domain.fields.metadata_cache import FieldMetadataCache
from issue_wizard.domain.wizard.state_manager import StateManager
from issue_wizard.services.field_metadata_service import FieldMetadataService
from issue_wizard.services.wizard_service import WizardService
from issue_wizard.tracker.mock import MockTrackerClient


@pytest.fixture
def tracker(create_meta) -> MockTrackerClient:
    """In-memory tracker knowing project PROJ and its Bug issue type."""
    return MockTrackerClient(
        field_schemas={"PROJ_10001": create_meta},
        projects={"PROJ": {"id": "10000", "key": "PROJ"}},
    )


@pytest.fixture
def wizard_service(tracker: MockTrackerClient) -> WizardService:
    return WizardService(
        StateManager(),
        tracker,
        FieldMetadataService(tracker, FieldMetadataCache()),
    )


@pytest.fixture
def app(wizard_service: WizardService) -> FastAPI:
    """Create test FastAPI application."""
    clear_caches()

    test_app = FastAPI(title="Test API")
    test_app.include_router(api_router)

    # Override dependencies
    test_app.dependency_overrides[get_wizard_service] = lambda: wizard_service

    yield test_app

    # Cleanup
    test_app.dependency_overrides.clear()
    clear_caches()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create test client."""
    return TestClient(app)
