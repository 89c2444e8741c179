"""API v1 schemas."""

from issue_wizard.api.v1.schemas.common import ErrorResponse, HealthResponse
from issue_wizard.api.v1.schemas.wizard import (
    AnalysisCompleteRequest,
    CreatedIssueResponse,
    FieldsResponse,
    FieldsUpdateRequest,
    FieldsUpdateResponse,
    FlagResponse,
    IssueCreatedResponse,
    ResetResponse,
    StateUpdateRequest,
    StepCompletionResponse,
    UserConfirmationRequest,
    ValidationResponse,
    WizardStateResponse,
    WizardStatusResponse,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "AnalysisCompleteRequest",
    "CreatedIssueResponse",
    "FieldsResponse",
    "FieldsUpdateRequest",
    "FieldsUpdateResponse",
    "FlagResponse",
    "IssueCreatedResponse",
    "ResetResponse",
    "StateUpdateRequest",
    "StepCompletionResponse",
    "UserConfirmationRequest",
    "ValidationResponse",
    "WizardStateResponse",
    "WizardStatusResponse",
]
