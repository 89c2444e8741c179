"""Issue creation wizard: steps, transitions, requirements and state."""

from issue_wizard.domain.wizard.types import (
    WIZARD_STEP_ORDER,
    ErrorCode,
    OperationResult,
    WizardError,
    WizardMode,
    WizardStep,
    coerce_step,
    is_step_at_or_beyond,
    step_order,
)
from issue_wizard.domain.wizard.wizard_state import ValidationState, WizardState
from issue_wizard.domain.wizard.step_requirements import (
    check_step_requirements,
    get_missing_requirements,
)
from issue_wizard.domain.wizard.state_machine import (
    ALLOWED_TRANSITIONS,
    is_valid_transition,
    transition_state,
)
from issue_wizard.domain.wizard.state_validators import validate_state_update
from issue_wizard.domain.wizard.step_progress import (
    PROGRESS_BY_STEP,
    calculate_progress,
    calculate_step_completion,
    calculate_wizard_progress,
    get_next_step,
    get_previous_step,
)
from issue_wizard.domain.wizard.state_manager import StateManager, StateStore


__all__ = [
    "WIZARD_STEP_ORDER",
    "ErrorCode",
    "OperationResult",
    "WizardError",
    "WizardMode",
    "WizardStep",
    "coerce_step",
    "is_step_at_or_beyond",
    "step_order",
    "ValidationState",
    "WizardState",
    "check_step_requirements",
    "get_missing_requirements",
    "ALLOWED_TRANSITIONS",
    "is_valid_transition",
    "transition_state",
    "validate_state_update",
    "PROGRESS_BY_STEP",
    "calculate_progress",
    "calculate_step_completion",
    "calculate_wizard_progress",
    "get_next_step",
    "get_previous_step",
    "StateManager",
    "StateStore",
]
