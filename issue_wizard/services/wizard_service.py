"""
Wizard service - the operations a client drives the wizard with.

Each operation returns an OperationResult and never raises. Tracker failures
become EXECUTION_FAILED (NOT_FOUND for missing issues or projects); anything
unexpected is logged with its traceback and becomes UNKNOWN_ERROR.
"""

import functools
import logging
from typing import Any, Callable, Dict, Optional

from issue_wizard.core.logging import LogContext
from issue_wizard.domain.fields.field_validator import validate_fields, validate_required_fields
from issue_wizard.domain.fields.models import (
    CategorizedFields,
    categorized_fields_from_dict,
    categorized_fields_to_dict,
)
from issue_wizard.domain.wizard.state_manager import StateManager
from issue_wizard.domain.wizard.step_progress import (
    calculate_progress,
    calculate_step_completion,
    calculate_wizard_progress,
)
from issue_wizard.domain.wizard.types import (
    ErrorCode,
    OperationResult,
    WizardMode,
    WizardStep,
    current_timestamp,
    is_step_at_or_beyond,
)
from issue_wizard.domain.wizard.wizard_state import ValidationState, WizardState
from issue_wizard.services.field_metadata_service import FieldMetadataService
from issue_wizard.tracker.client import TrackerClient
from issue_wizard.tracker.models import TrackerException
from issue_wizard.tracker.payload import (
    build_issue_payload,
    issue_to_wizard_data,
    validate_issue_payload,
)


logger = logging.getLogger(__name__)


# Supplied by the wizard itself, never by the client's field values
PAYLOAD_MANAGED_FIELDS = ("project", "issuetype")


def service_operation(func):
    """Convert stray exceptions from an async operation into failed results."""

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs) -> OperationResult:
        with LogContext(operation=func.__name__):
            try:
                return await func(self, *args, **kwargs)
            except TrackerException as e:
                logger.error(f"{func.__name__}: tracker call failed: {e.error.message}")
                code = ErrorCode.NOT_FOUND if e.error.error_type == "not_found" else ErrorCode.EXECUTION_FAILED
                return OperationResult.failure(code, e.error.message, details=e.error.to_dict())
            except Exception as e:
                logger.error(f"{func.__name__}: unexpected error: {e}", exc_info=True)
                return OperationResult.failure(ErrorCode.UNKNOWN_ERROR, f"Unexpected error: {e}")

    return wrapper


def _state_data(result: OperationResult) -> OperationResult:
    if result and isinstance(result.data, WizardState):
        return OperationResult.success(result.data.to_dict())
    return result


class WizardService:
    """
    Drives one wizard session against one tracker.

    Dependencies injected for testability.
    """

    def __init__(
        self,
        state_manager: StateManager,
        tracker_client: TrackerClient,
        metadata_service: Optional[FieldMetadataService] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self._state = state_manager
        self._client = tracker_client
        self._metadata = metadata_service or FieldMetadataService(tracker_client)
        self._clock = clock or current_timestamp

    @property
    def state_manager(self) -> StateManager:
        return self._state

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    @service_operation
    async def initiate_state(self) -> OperationResult:
        return _state_data(self._state.initialize_state())

    @service_operation
    async def get_state(self) -> OperationResult:
        return _state_data(self._state.get_state())

    @service_operation
    async def reset_state(self) -> OperationResult:
        return self._state.reset_state()

    @service_operation
    async def update_state(self, partial_state: Dict[str, Any]) -> OperationResult:
        if not isinstance(partial_state, dict):
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "State update must be an object")
        return _state_data(self._state.update_state(partial_state))

    @service_operation
    async def get_status(self) -> OperationResult:
        """Summary of the session: step, progress, validation and elapsed time."""
        if not self._state.is_active():
            return OperationResult.success({"active": False, "time_elapsed": 0})

        result = self._state.get_state()
        if not result:
            return result
        state: WizardState = result.data

        error_count = len(state.validation.errors)
        return OperationResult.success({
            "active": True,
            "current_step": state.current_step.value,
            "timestamp": state.timestamp,
            "time_elapsed": max(0, (self._clock() - state.timestamp) // 1000),
            "progress": calculate_progress(state.current_step),
            "wizard_progress": calculate_wizard_progress(state),
            "has_validation_errors": error_count > 0,
            "validation_error_count": error_count,
            "step_completion": calculate_step_completion(state),
        })

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------

    def _require_classified_session(self, required_step: WizardStep) -> OperationResult:
        result = self._state.get_state()
        if not result:
            return result
        state: WizardState = result.data

        if not is_step_at_or_beyond(state.current_step, required_step):
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                f"Wizard must be at or beyond the {required_step.value} step "
                f"(currently at {state.current_step.value})",
            )
        if not state.project_key or not state.issue_type_id:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Project and issue type must be selected first",
            )
        return result

    async def _load_categorized(self, state: WizardState, force_refresh: bool = False) -> OperationResult:
        """Fetch and categorize the schema, then record it in the session."""
        project = await self._client.get_project(state.project_key)
        result = await self._metadata.get_and_categorize_fields(
            state.project_key,
            state.issue_type_id,
            project_id=project.get("id"),
            force_refresh=force_refresh,
        )
        if not result:
            return result

        analysis = dict(state.analysis or {})
        analysis["metadata"] = categorized_fields_to_dict(result.data)
        stored = self._state.update_state({"analysis": analysis})
        if not stored:
            return stored
        return result

    @service_operation
    async def get_fields(self, force_refresh: bool = False) -> OperationResult:
        """Categorized field schema for the selected project and issue type."""
        check = self._require_classified_session(WizardStep.ISSUE_TYPE_SELECTION)
        if not check:
            return check

        result = await self._load_categorized(check.data, force_refresh=force_refresh)
        if not result:
            return result
        return OperationResult.success({
            "message": "Fields retrieved successfully",
            "fields": categorized_fields_to_dict(result.data),
        })

    @service_operation
    async def update_fields(self, fields: Dict[str, Any], validate_only: bool = False) -> OperationResult:
        """
        Validate field values and, unless validate_only, merge them into state.

        Valid values clear earlier validation errors and move the session to
        field completion if it has not reached it yet. Invalid values are
        not stored; their errors are recorded in the session's validation.
        """
        if not isinstance(fields, dict):
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "Fields parameter must be an object")

        check = self._require_classified_session(WizardStep.ISSUE_TYPE_SELECTION)
        if not check:
            return check
        state: WizardState = check.data

        loaded = await self._load_categorized(state)
        if not loaded:
            return loaded
        validation = validate_fields(fields, loaded.data)

        if validate_only:
            return OperationResult.success({
                "message": (
                    "All fields validated successfully" if validation.is_valid
                    else "Validation failed for one or more fields"
                ),
                "is_valid": validation.is_valid,
                "errors": validation.errors,
            })

        if not validation.is_valid:
            self._state.update_state({"validation": ValidationState(errors=validation.errors)})
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Validation failed for one or more fields",
                details={"errors": validation.errors},
            )

        partial: Dict[str, Any] = {"fields": fields, "validation": ValidationState()}
        if state.current_step == WizardStep.ISSUE_TYPE_SELECTION:
            partial["current_step"] = WizardStep.FIELD_COMPLETION
        updated = self._state.update_state(partial)
        if not updated:
            return updated

        return OperationResult.success({
            "message": "Fields updated successfully",
            "updated_fields": sorted(fields),
            "state": updated.data.to_dict(),
        })

    # ------------------------------------------------------------------
    # Gating flags
    # ------------------------------------------------------------------

    async def _set_flag(self, name: str, value: bool, label: str) -> OperationResult:
        if not isinstance(value, bool):
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, f"{label} must be a boolean")
        result = self._state.update_state({name: value})
        if not result:
            return result
        return OperationResult.success({
            "message": f"{label} updated to: {str(value).lower()}",
            "state": result.data.to_dict(),
        })

    @service_operation
    async def set_analysis_complete(self, is_complete: bool) -> OperationResult:
        return await self._set_flag("analysis_complete", is_complete, "Analysis status")

    @service_operation
    async def set_user_confirmation(self, confirmed: bool) -> OperationResult:
        return await self._set_flag("user_confirmation", confirmed, "User confirmation")

    # ------------------------------------------------------------------
    # Tracker writes and reads
    # ------------------------------------------------------------------

    async def _categorized_for(self, state: WizardState) -> OperationResult:
        if state.metadata:
            return OperationResult.success(categorized_fields_from_dict(state.metadata))
        return await self._load_categorized(state)

    @service_operation
    async def create_issue(self) -> OperationResult:
        """Submit the session's fields to the tracker as a new issue."""
        result = self._state.get_state()
        if not result:
            return result
        state: WizardState = result.data

        if not state.project_key or not state.issue_type_id:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Project and issue type are required for issue creation",
            )
        if state.mode == WizardMode.UPDATING:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                f"Issue {state.issue_key} is loaded for updating; "
                "reset the session to create a new issue",
            )
        if not state.analysis_complete:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Issue analysis must be completed before creating the issue",
            )
        if not state.user_confirmation:
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "User confirmation is required before creating the issue",
            )

        categorized = await self._categorized_for(state)
        if not categorized:
            return categorized
        schema: CategorizedFields = categorized.data

        required = validate_required_fields(state.fields, schema, skip=PAYLOAD_MANAGED_FIELDS)
        if not required.is_valid:
            logger.info(f"Issue creation blocked by fields {sorted(required.errors)}")
            return OperationResult.failure(
                ErrorCode.INVALID_PARAMETERS,
                "Missing or invalid required fields",
                details={"errors": required.errors},
            )

        payload = build_issue_payload(state)
        problem = validate_issue_payload(payload["fields"])
        if problem:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, problem)

        created = await self._client.create_issue(payload)

        # The issue exists at the tracker now, so the session follows it to
        # submission whatever step it was on.
        updated = self._state.update_state(
            {
                "issue_key": created.key,
                "mode": WizardMode.CREATING,
                "current_step": WizardStep.SUBMISSION,
            },
            force_step_transition=True,
        )
        if not updated:
            return updated

        return OperationResult.success({
            "message": f"Issue {created.key} created successfully",
            "issue": created.to_dict(),
            "state": updated.data.to_dict(),
        })

    @service_operation
    async def load_issue_into_state(self, issue_key: str) -> OperationResult:
        """Fetch an existing issue and start an update session for it."""
        if not issue_key:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "Issue key is required")

        issue = await self._client.get_issue(issue_key)
        return _state_data(self._state.load_issue(issue_to_wizard_data(issue)))
