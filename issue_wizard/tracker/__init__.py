"""Issue tracker integration."""

from issue_wizard.tracker.models import (
    CreatedIssue,
    TrackerConfig,
    TrackerError,
    TrackerException,
)
from issue_wizard.tracker.client import (
    JiraTrackerClient,
    TrackerClient,
    create_tracker_client,
)
from issue_wizard.tracker.mock import MockCall, MockTrackerClient
from issue_wizard.tracker.projects import find_issue_type_fields, find_target_project
from issue_wizard.tracker.payload import (
    build_issue_payload,
    format_description_adf,
    format_user_field,
    issue_to_wizard_data,
    validate_issue_payload,
)

__all__ = [
    "CreatedIssue",
    "TrackerConfig",
    "TrackerError",
    "TrackerException",
    "JiraTrackerClient",
    "TrackerClient",
    "create_tracker_client",
    "MockCall",
    "MockTrackerClient",
    "find_issue_type_fields",
    "find_target_project",
    "build_issue_payload",
    "format_description_adf",
    "format_user_field",
    "issue_to_wizard_data",
    "validate_issue_payload",
]
