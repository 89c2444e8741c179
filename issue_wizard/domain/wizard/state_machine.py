"""Wizard state machine - legal step transitions.

Transitions follow a fixed adjacency graph. Moving backward is always
allowed along the graph; moving forward requires the step being left to be
complete.
"""

import copy
import logging
from typing import Dict, List

from issue_wizard.domain.wizard.step_requirements import (
    check_step_requirements,
    get_missing_requirements,
)
from issue_wizard.domain.wizard.types import (
    WIZARD_STEP_ORDER,
    ErrorCode,
    OperationResult,
    WizardStep,
    coerce_step,
    current_timestamp,
)
from issue_wizard.domain.wizard.wizard_state import WizardState


logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[WizardStep, List[WizardStep]] = {
    WizardStep.INITIATE: [WizardStep.PROJECT_SELECTION],
    WizardStep.PROJECT_SELECTION: [WizardStep.INITIATE, WizardStep.ISSUE_TYPE_SELECTION],
    WizardStep.ISSUE_TYPE_SELECTION: [WizardStep.PROJECT_SELECTION, WizardStep.FIELD_COMPLETION],
    WizardStep.FIELD_COMPLETION: [WizardStep.ISSUE_TYPE_SELECTION, WizardStep.REVIEW],
    WizardStep.REVIEW: [WizardStep.FIELD_COMPLETION, WizardStep.SUBMISSION],
    WizardStep.SUBMISSION: [WizardStep.REVIEW],
}


def is_valid_transition(current_step, target_step) -> bool:
    """Check if moving from current_step to target_step is in the graph."""
    current = coerce_step(current_step)
    allowed = ALLOWED_TRANSITIONS.get(current) if current else None
    if allowed is None:
        logger.error(f"No transitions defined for step {current_step}")
        return False
    return coerce_step(target_step) in allowed


def transition_state(state: WizardState, target_step) -> OperationResult:
    """
    Attempt to move the state to target_step.

    Args:
        state: Current wizard state (not modified)
        target_step: Step to move to

    Returns:
        OperationResult with a new WizardState on success
    """
    target = coerce_step(target_step)
    if target is None:
        return OperationResult.failure(
            ErrorCode.INVALID_PARAMETERS,
            f"Invalid step: {target_step}",
        )

    current = state.current_step

    # Same step: nothing to do
    if target == current:
        return OperationResult.success(copy.deepcopy(state))

    if not is_valid_transition(current, target):
        return OperationResult.failure(
            ErrorCode.INVALID_PARAMETERS,
            f"Invalid transition from {current.value} to {target.value}",
        )

    # Backward along the graph is always allowed
    if WIZARD_STEP_ORDER[target] < WIZARD_STEP_ORDER[current]:
        logger.debug(f"Moving back from {current.value} to {target.value}")
        return OperationResult.success(_moved(state, target))

    if not check_step_requirements(state, current):
        missing = get_missing_requirements(state, current)
        return OperationResult.failure(
            ErrorCode.INVALID_PARAMETERS,
            f"Cannot advance to {target.value} because current step {current.value} "
            f"is incomplete. Missing: {', '.join(missing)}",
            details={"missing": missing},
        )

    logger.debug(f"Advancing from {current.value} to {target.value}")
    return OperationResult.success(_moved(state, target))


def _moved(state: WizardState, target: WizardStep) -> WizardState:
    moved = copy.deepcopy(state)
    moved.current_step = target
    moved.timestamp = current_timestamp()
    return moved
