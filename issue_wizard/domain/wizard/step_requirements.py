"""Step requirements - completion predicates and missing-requirement reports.

Each step has a predicate answering "is this step's data complete?" and a
parallel explainer listing what is missing. The explainers build on each
other, so a later step's report includes gaps from earlier steps.
"""

import logging
from typing import Callable, Dict, List

from issue_wizard.domain.wizard.types import WizardStep, coerce_step
from issue_wizard.domain.wizard.wizard_state import WizardState


logger = logging.getLogger(__name__)


def _has_project(state: WizardState) -> bool:
    return bool(state.project_key)


def _has_issue_type(state: WizardState) -> bool:
    return bool(state.project_key and state.issue_type_id)


def _has_valid_fields(state: WizardState) -> bool:
    return bool(
        state.project_key
        and state.issue_type_id
        and len(state.fields) > 0
        and not state.validation.errors
    )


STEP_REQUIREMENTS: Dict[WizardStep, Callable[[WizardState], bool]] = {
    WizardStep.INITIATE: lambda state: True,
    WizardStep.PROJECT_SELECTION: _has_project,
    WizardStep.ISSUE_TYPE_SELECTION: _has_issue_type,
    WizardStep.FIELD_COMPLETION: _has_valid_fields,
    WizardStep.REVIEW: _has_valid_fields,
    WizardStep.SUBMISSION: _has_valid_fields,
}


def _missing_for_project_selection(state: WizardState) -> List[str]:
    missing: List[str] = []
    if not state.project_key:
        missing.append("Project selection")
    return missing


def _missing_for_issue_type_selection(state: WizardState) -> List[str]:
    missing = _missing_for_project_selection(state)
    if not state.issue_type_id:
        missing.append("Issue type selection")
    return missing


def _missing_for_field_completion(state: WizardState) -> List[str]:
    missing = _missing_for_issue_type_selection(state)
    if not state.fields:
        missing.append("Required fields")
    if state.validation.errors:
        missing.append("Valid field values (validation errors exist)")
    return missing


MISSING_REQUIREMENT_HANDLERS: Dict[WizardStep, Callable[[WizardState], List[str]]] = {
    WizardStep.INITIATE: lambda state: [],
    WizardStep.PROJECT_SELECTION: _missing_for_project_selection,
    WizardStep.ISSUE_TYPE_SELECTION: _missing_for_issue_type_selection,
    WizardStep.FIELD_COMPLETION: _missing_for_field_completion,
    WizardStep.REVIEW: _missing_for_field_completion,
    WizardStep.SUBMISSION: _missing_for_field_completion,
}


def check_step_requirements(state: WizardState, step) -> bool:
    """Check whether the state satisfies the requirements of `step`."""
    resolved = coerce_step(step)
    requirement = STEP_REQUIREMENTS.get(resolved) if resolved else None
    if requirement is None:
        logger.error(f"No requirements defined for step {step}")
        return False
    return requirement(state)


def get_missing_requirements(state: WizardState, step) -> List[str]:
    """List human-readable requirements of `step` that the state lacks."""
    resolved = coerce_step(step)
    handler = MISSING_REQUIREMENT_HANDLERS.get(resolved) if resolved else None
    if handler is None:
        logger.error(f"No requirements defined for step {step}")
        return ["Unknown step"]
    return handler(state)
