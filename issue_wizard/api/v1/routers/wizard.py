"""Issue creation wizard endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from issue_wizard.api.v1.dependencies import get_wizard_service
from issue_wizard.api.v1.schemas import (
    AnalysisCompleteRequest,
    ErrorResponse,
    FieldsResponse,
    FieldsUpdateRequest,
    FieldsUpdateResponse,
    FlagResponse,
    IssueCreatedResponse,
    ResetResponse,
    StateUpdateRequest,
    UserConfirmationRequest,
    WizardStateResponse,
    WizardStatusResponse,
)
from issue_wizard.domain.wizard.state_manager import SESSION_ALREADY_ACTIVE
from issue_wizard.domain.wizard.types import ErrorCode, OperationResult
from issue_wizard.services.wizard_service import WizardService


router = APIRouter(prefix="/wizard", tags=["wizard"])


STATUS_BY_ERROR_CODE = {
    ErrorCode.INVALID_PARAMETERS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.EXECUTION_FAILED: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.UNKNOWN_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Rejected by the wizard rules"},
    404: {"model": ErrorResponse, "description": "Issue or project not found"},
    502: {"model": ErrorResponse, "description": "Tracker call failed"},
}


def _unwrap(result: OperationResult, status_code: Optional[int] = None) -> Any:
    """Return the result's data or raise the matching HTTPException."""
    if result:
        return result.data
    error = result.error
    raise HTTPException(
        status_code=status_code or STATUS_BY_ERROR_CODE.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.to_dict(),
    )


@router.post(
    "/state",
    response_model=WizardStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start a wizard session",
    responses={409: {"model": ErrorResponse, "description": "A session is already active"}},
)
async def initiate_state(
    service: WizardService = Depends(get_wizard_service),
) -> WizardStateResponse:
    result = await service.initiate_state()
    if not result and result.error.message == SESSION_ALREADY_ACTIVE:
        _unwrap(result, status.HTTP_409_CONFLICT)
    return _unwrap(result)


@router.get(
    "/state",
    response_model=WizardStateResponse,
    summary="Get the wizard state",
    responses=ERROR_RESPONSES,
)
async def get_state(
    service: WizardService = Depends(get_wizard_service),
) -> WizardStateResponse:
    return _unwrap(await service.get_state())


@router.delete(
    "/state",
    response_model=ResetResponse,
    summary="Reset the wizard session",
)
async def reset_state(
    service: WizardService = Depends(get_wizard_service),
) -> ResetResponse:
    return _unwrap(await service.reset_state())


@router.patch(
    "/state",
    response_model=WizardStateResponse,
    summary="Update the wizard state",
    description=(
        "Applies a partial update. Changing `current_step` must follow the "
        "step graph and the current step must be complete to move forward."
    ),
    responses=ERROR_RESPONSES,
)
async def update_state(
    request: StateUpdateRequest,
    service: WizardService = Depends(get_wizard_service),
) -> WizardStateResponse:
    return _unwrap(await service.update_state(request.model_dump(exclude_unset=True)))


@router.get(
    "/status",
    response_model=WizardStatusResponse,
    summary="Get wizard progress",
)
async def get_status(
    service: WizardService = Depends(get_wizard_service),
) -> WizardStatusResponse:
    return _unwrap(await service.get_status())


@router.get(
    "/fields",
    response_model=FieldsResponse,
    summary="Get the field schema",
    description="Categorized fields for the selected project and issue type.",
    responses=ERROR_RESPONSES,
)
async def get_fields(
    force_refresh: bool = Query(False, description="Bypass the field metadata cache"),
    service: WizardService = Depends(get_wizard_service),
) -> FieldsResponse:
    return _unwrap(await service.get_fields(force_refresh=force_refresh))


@router.post(
    "/fields",
    response_model=FieldsUpdateResponse,
    summary="Validate and store field values",
    responses=ERROR_RESPONSES,
)
async def update_fields(
    request: FieldsUpdateRequest,
    service: WizardService = Depends(get_wizard_service),
) -> FieldsUpdateResponse:
    return _unwrap(await service.update_fields(request.fields, validate_only=request.validate_only))


@router.put(
    "/analysis-complete",
    response_model=FlagResponse,
    summary="Set the analysis-complete gate",
    responses=ERROR_RESPONSES,
)
async def set_analysis_complete(
    request: AnalysisCompleteRequest,
    service: WizardService = Depends(get_wizard_service),
) -> FlagResponse:
    return _unwrap(await service.set_analysis_complete(request.is_complete))


@router.put(
    "/user-confirmation",
    response_model=FlagResponse,
    summary="Set the user-confirmation gate",
    responses=ERROR_RESPONSES,
)
async def set_user_confirmation(
    request: UserConfirmationRequest,
    service: WizardService = Depends(get_wizard_service),
) -> FlagResponse:
    return _unwrap(await service.set_user_confirmation(request.confirmed))


@router.post(
    "/issue",
    response_model=IssueCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create the issue",
    description="Requires analysis to be complete and the user to have confirmed.",
    responses=ERROR_RESPONSES,
)
async def create_issue(
    service: WizardService = Depends(get_wizard_service),
) -> IssueCreatedResponse:
    return _unwrap(await service.create_issue())


@router.post(
    "/issue/{issue_key}/load",
    response_model=WizardStateResponse,
    summary="Load an existing issue for updating",
    responses=ERROR_RESPONSES,
)
async def load_issue_into_state(
    issue_key: str,
    service: WizardService = Depends(get_wizard_service),
) -> WizardStateResponse:
    return _unwrap(await service.load_issue_into_state(issue_key))
