"""Validation for wizard updates that do not go through the state machine.

Used when an update carries no step change. It also understands a step
change on its own terms: the first move out of `initiate` is always allowed,
skipping steps is not, and entering a selection step needs the preceding
selection.
"""

import logging
from typing import Any, Dict, Optional

from issue_wizard.domain.wizard.types import (
    WIZARD_STEP_ORDER,
    ErrorCode,
    OperationResult,
    WizardStep,
    coerce_step,
)
from issue_wizard.domain.wizard.wizard_state import WizardState


logger = logging.getLogger(__name__)


def validate_state_update(
    current_state: WizardState,
    partial_state: Dict[str, Any],
    force: bool = False,
) -> OperationResult:
    """Validate a partial update against the current state.

    Args:
        current_state: The live state
        partial_state: Attributes to update
        force: Skip all checks (loading an existing issue)

    Returns:
        OperationResult with data=True when the update is acceptable
    """
    if force:
        logger.debug("Forced update, skipping state validation")
        return OperationResult.success(True)

    requested = partial_state.get("current_step")
    if not requested:
        return OperationResult.success(True)

    target = coerce_step(requested)
    if target is None:
        return OperationResult.failure(
            ErrorCode.INVALID_PARAMETERS,
            f"Invalid step: {requested}",
        )

    if target == current_state.current_step:
        return OperationResult.success(True)

    # Bootstrapping: leaving initiate never needs anything
    if current_state.current_step == WizardStep.INITIATE and target == WizardStep.PROJECT_SELECTION:
        logger.debug("Allowing initiate -> project_selection")
        return OperationResult.success(True)

    if WIZARD_STEP_ORDER[target] > WIZARD_STEP_ORDER[current_state.current_step] + 1:
        return OperationResult.failure(
            ErrorCode.INVALID_PARAMETERS,
            f"Cannot skip from {current_state.current_step.value} to {target.value}",
        )

    error = _entry_requirement_error(current_state, target)
    if error is not None:
        logger.debug(f"Update rejected: {error}")
        return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, error)

    return OperationResult.success(True)


def _entry_requirement_error(state: WizardState, target: WizardStep) -> Optional[str]:
    if target == WizardStep.ISSUE_TYPE_SELECTION and not state.project_key:
        return "Must select a project before choosing issue type"
    if target == WizardStep.FIELD_COMPLETION and not state.issue_type_id:
        return "Must select an issue type before completing fields"
    return None
