"""Wizard progress tracking."""

from typing import Any, Dict, List, Optional

from issue_wizard.domain.wizard.step_requirements import check_step_requirements
from issue_wizard.domain.wizard.types import WIZARD_STEP_ORDER, WizardStep
from issue_wizard.domain.wizard.wizard_state import WizardState


# Approximate progress shown in status reports
PROGRESS_BY_STEP: Dict[WizardStep, int] = {
    WizardStep.INITIATE: 0,
    WizardStep.PROJECT_SELECTION: 20,
    WizardStep.ISSUE_TYPE_SELECTION: 40,
    WizardStep.FIELD_COMPLETION: 60,
    WizardStep.REVIEW: 80,
    WizardStep.SUBMISSION: 90,
}


def _step_at(index: int) -> Optional[WizardStep]:
    for step, order in WIZARD_STEP_ORDER.items():
        if order == index:
            return step
    return None


def get_next_step(step: WizardStep) -> Optional[WizardStep]:
    """Step after `step`, or None at the end."""
    return _step_at(WIZARD_STEP_ORDER[step] + 1)


def get_previous_step(step: WizardStep) -> Optional[WizardStep]:
    """Step before `step`, or None at the start."""
    return _step_at(WIZARD_STEP_ORDER[step] - 1)


def calculate_progress(step: WizardStep) -> int:
    """Progress percentage for a step."""
    return PROGRESS_BY_STEP.get(step, 0)


def calculate_wizard_progress(state: WizardState) -> int:
    """Progress percentage with half a step of credit for a complete step."""
    if state.current_step == WizardStep.INITIATE:
        return 0

    intervals = len(WizardStep) - 1
    progress = WIZARD_STEP_ORDER[state.current_step] / intervals * 100
    if check_step_requirements(state, state.current_step):
        progress += (100 / intervals) * 0.5

    return min(round(progress), 100)


def calculate_step_completion(state: WizardState) -> Dict[str, Any]:
    """Completion status of the current step and the inputs it still needs."""
    required: List[str] = []
    if state.current_step == WizardStep.PROJECT_SELECTION:
        if not state.project_key:
            required.append("project_key")
    elif state.current_step == WizardStep.ISSUE_TYPE_SELECTION:
        if not state.issue_type_id:
            required.append("issue_type_id")
    elif state.current_step == WizardStep.FIELD_COMPLETION:
        if not state.fields:
            required.append("summary")
    else:
        return {"complete": True, "required_fields": []}

    return {"complete": not required, "required_fields": required}
