"""
Shared pytest fixtures for all tests.

Provides a sample create-metadata response, a controllable clock and
state builders.
"""

import copy
from typing import Any, Dict

import pytest

from issue_wizard.domain.fields.metadata_cache import field_metadata_cache
from issue_wizard.domain.wizard.types import WizardStep
from issue_wizard.domain.wizard.wizard_state import ValidationState, WizardState


PROJECT_KEY = "PROJ"
PROJECT_ID = "10000"
ISSUE_TYPE_ID = "10001"


SAMPLE_CREATE_META: Dict[str, Any] = {
    "projects": [
        {
            "id": PROJECT_ID,
            "key": PROJECT_KEY,
            "name": "Project",
            "issuetypes": [
                {
                    "id": ISSUE_TYPE_ID,
                    "name": "Bug",
                    "fields": {
                        "summary": {
                            "name": "Summary",
                            "required": True,
                            "schema": {"type": "string", "system": "summary"},
                        },
                        "project": {
                            "name": "Project",
                            "required": True,
                            "schema": {"type": "project", "system": "project"},
                        },
                        "issuetype": {
                            "name": "Issue Type",
                            "required": True,
                            "schema": {"type": "issuetype", "system": "issuetype"},
                            "allowedValues": [{"id": ISSUE_TYPE_ID, "name": "Bug"}],
                        },
                        "description": {
                            "name": "Description",
                            "required": False,
                            "schema": {"type": "string", "system": "description"},
                        },
                        "priority": {
                            "name": "Priority",
                            "required": False,
                            "schema": {"type": "priority", "system": "priority"},
                            "allowedValues": [
                                {"id": "1", "name": "Highest"},
                                {"id": "2", "name": "High"},
                                {"id": "3", "name": "Medium"},
                            ],
                        },
                        "labels": {
                            "name": "Labels",
                            "required": False,
                            "schema": {"type": "array", "items": "string", "system": "labels"},
                        },
                        "assignee": {
                            "name": "Assignee",
                            "required": False,
                            "schema": {"type": "user", "system": "assignee"},
                        },
                        "customfield_10010": {
                            "name": "Severity",
                            "required": False,
                            "schema": {
                                "type": "option",
                                "custom": "com.atlassian.jira.plugin.system.customfieldtypes:select",
                                "customId": 10010,
                            },
                            "allowedValues": [
                                {"id": "100", "value": "Low"},
                                {"id": "101", "value": "High"},
                            ],
                        },
                        "customfield_10020": {
                            "name": "Story Points",
                            "required": False,
                            "schema": {
                                "type": "number",
                                "custom": "com.atlassian.jira.plugin.system.customfieldtypes:float",
                                "customId": 10020,
                            },
                        },
                        "environment_notes": {
                            "name": "Environment Notes",
                            "required": False,
                            "schema": {"type": "string"},
                        },
                    },
                }
            ],
        }
    ]
}


class FakeClock:
    """Manually advanced clock. Reports seconds, or milliseconds via `ms`."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def ms(self) -> int:
        return int(self.now * 1000)

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def create_meta() -> Dict[str, Any]:
    """A fresh copy of the sample create-metadata response."""
    return copy.deepcopy(SAMPLE_CREATE_META)


@pytest.fixture
def field_map(create_meta) -> Dict[str, Dict[str, Any]]:
    """The `fields` map of the sample issue type."""
    return create_meta["projects"][0]["issuetypes"][0]["fields"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def clear_shared_field_cache():
    """Keep the process-wide metadata cache from leaking between tests."""
    field_metadata_cache.clear()
    yield
    field_metadata_cache.clear()


def build_state(step: WizardStep = WizardStep.INITIATE, **overrides: Any) -> WizardState:
    """Active state at `step` with the given attributes."""
    state = WizardState.new(timestamp=1_000)
    state.current_step = step
    for key, value in overrides.items():
        if key == "validation" and isinstance(value, dict):
            value = ValidationState.from_dict(value)
        setattr(state, key, value)
    return state


@pytest.fixture
def make_state():
    """Factory fixture returning build_state."""
    return build_state


@pytest.fixture
def complete_state() -> WizardState:
    """State at field completion with everything filled in."""
    return build_state(
        WizardStep.FIELD_COMPLETION,
        project_key=PROJECT_KEY,
        issue_type_id=ISSUE_TYPE_ID,
        fields={"summary": "Login page times out"},
    )
