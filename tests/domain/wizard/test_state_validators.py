"""Tests for the non-transition state update validator."""

from issue_wizard.domain.wizard.state_validators import validate_state_update
from issue_wizard.domain.wizard.types import ErrorCode, WizardStep


class TestValidateStateUpdate:
    """Tests for validate_state_update."""

    def test_no_step_change(self, make_state):
        assert validate_state_update(make_state(), {"project_key": "PROJ"})

    def test_same_step(self, make_state):
        state = make_state(WizardStep.REVIEW)
        assert validate_state_update(state, {"current_step": "review"})

    def test_force_skips_everything(self, make_state):
        assert validate_state_update(make_state(), {"current_step": "submission"}, force=True)

    def test_invalid_step(self, make_state):
        result = validate_state_update(make_state(), {"current_step": "launch"})
        assert not result
        assert result.error.code == ErrorCode.INVALID_PARAMETERS
        assert result.error.message == "Invalid step: launch"

    def test_leaving_initiate_always_allowed(self, make_state):
        assert validate_state_update(make_state(), {"current_step": "project_selection"})

    def test_skipping_rejected(self, make_state):
        state = make_state(WizardStep.PROJECT_SELECTION, project_key="PROJ")
        result = validate_state_update(state, {"current_step": "field_completion"})

        assert not result
        assert result.error.message == "Cannot skip from project_selection to field_completion"

    def test_issue_type_selection_needs_project(self, make_state):
        state = make_state(WizardStep.PROJECT_SELECTION)
        result = validate_state_update(state, {"current_step": "issue_type_selection"})

        assert not result
        assert result.error.message == "Must select a project before choosing issue type"

    def test_field_completion_needs_issue_type(self, make_state):
        state = make_state(WizardStep.ISSUE_TYPE_SELECTION, project_key="PROJ")
        result = validate_state_update(state, {"current_step": "field_completion"})

        assert not result
        assert result.error.message == "Must select an issue type before completing fields"

    def test_moving_back_allowed(self, make_state):
        state = make_state(WizardStep.REVIEW)
        assert validate_state_update(state, {"current_step": "initiate"})
