"""Wizard API schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Requests
# =============================================================================

class StateUpdateRequest(BaseModel):
    """Partial wizard state. Only the attributes sent are applied."""

    current_step: Optional[str] = None
    project_key: Optional[str] = None
    issue_type_id: Optional[str] = None
    fields: Optional[Dict[str, Any]] = None
    validation: Optional[Dict[str, Any]] = None
    analysis: Optional[Dict[str, Any]] = None
    user_confirmation: Optional[bool] = None
    analysis_complete: Optional[bool] = None
    issue_key: Optional[str] = None
    mode: Optional[str] = None

    # Unknown attributes are passed through and rejected by the state manager
    model_config = {
        "extra": "allow",
        "json_schema_extra": {
            "example": {"current_step": "project_selection", "project_key": "PROJ"}
        },
    }


class FieldsUpdateRequest(BaseModel):
    """Field values to validate and store."""

    fields: Dict[str, Any] = Field(..., description="Field id -> value")
    validate_only: bool = Field(False, description="Validate without storing")

    model_config = {"json_schema_extra": {
        "example": {
            "fields": {"summary": "Login page times out", "priority": {"id": "3"}},
            "validate_only": False,
        }
    }}


class AnalysisCompleteRequest(BaseModel):
    """Set the analysis-complete gate."""

    is_complete: bool


class UserConfirmationRequest(BaseModel):
    """Set the user-confirmation gate."""

    confirmed: bool


# =============================================================================
# Responses
# =============================================================================

class ValidationResponse(BaseModel):
    """Last field validation outcome."""

    errors: Dict[str, List[str]] = Field(default_factory=dict)
    warnings: Dict[str, List[str]] = Field(default_factory=dict)


class WizardStateResponse(BaseModel):
    """Full wizard state."""

    active: bool
    current_step: str
    project_key: Optional[str] = None
    issue_type_id: Optional[str] = None
    fields: Dict[str, Any] = Field(default_factory=dict)
    validation: ValidationResponse = Field(default_factory=ValidationResponse)
    analysis: Optional[Dict[str, Any]] = None
    timestamp: int
    user_confirmation: Optional[bool] = None
    analysis_complete: Optional[bool] = None
    issue_key: Optional[str] = None
    mode: Optional[str] = None


class ResetResponse(BaseModel):
    """Reset acknowledgement."""

    reset: bool


class StepCompletionResponse(BaseModel):
    """Completion of the current step."""

    complete: bool
    required_fields: List[str] = Field(default_factory=list)


class WizardStatusResponse(BaseModel):
    """Session summary."""

    active: bool
    time_elapsed: int = Field(0, description="Seconds since the last state change")
    current_step: Optional[str] = None
    timestamp: Optional[int] = None
    progress: Optional[int] = None
    wizard_progress: Optional[int] = None
    has_validation_errors: bool = False
    validation_error_count: int = 0
    step_completion: Optional[StepCompletionResponse] = None


class FieldsResponse(BaseModel):
    """Categorized field schema."""

    message: str
    fields: Dict[str, List[Dict[str, Any]]]


class FieldsUpdateResponse(BaseModel):
    """Result of a field update or validation run."""

    message: str
    is_valid: bool = True
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    updated_fields: List[str] = Field(default_factory=list)
    state: Optional[WizardStateResponse] = None


class FlagResponse(BaseModel):
    """Result of setting a gating flag."""

    message: str
    state: WizardStateResponse


class CreatedIssueResponse(BaseModel):
    """Identifiers of the created issue."""

    id: str
    key: str
    self_url: str = Field("", alias="self")


class IssueCreatedResponse(BaseModel):
    """Result of issue creation."""

    message: str
    issue: CreatedIssueResponse
    state: WizardStateResponse
