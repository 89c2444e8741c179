"""Tests for wizard step model and operation results."""

import pytest

from issue_wizard.domain.wizard.types import (
    WIZARD_STEP_ORDER,
    ErrorCode,
    OperationResult,
    WizardError,
    WizardStep,
    coerce_step,
    is_step_at_or_beyond,
    step_order,
)


class TestWizardStep:
    """Tests for WizardStep and its ordering."""

    def test_all_steps_defined(self):
        """All expected steps exist with their wire values."""
        assert [s.value for s in WizardStep] == [
            "initiate",
            "project_selection",
            "issue_type_selection",
            "field_completion",
            "review",
            "submission",
        ]

    def test_order_is_contiguous(self):
        """Every step has a unique position 0..5 matching declaration order."""
        assert sorted(WIZARD_STEP_ORDER.values()) == list(range(len(WizardStep)))
        for index, step in enumerate(WizardStep):
            assert WIZARD_STEP_ORDER[step] == index

    def test_step_order_accepts_strings(self):
        assert step_order("review") == 4
        assert step_order(WizardStep.INITIATE) == 0

    def test_step_order_rejects_unknown(self):
        with pytest.raises(ValueError):
            step_order("launch")

    def test_coerce_step(self):
        assert coerce_step("submission") == WizardStep.SUBMISSION
        assert coerce_step(WizardStep.REVIEW) == WizardStep.REVIEW
        assert coerce_step("nope") is None
        assert coerce_step(None) is None


class TestIsStepAtOrBeyond:
    """Tests for is_step_at_or_beyond."""

    def test_same_step(self):
        assert is_step_at_or_beyond(WizardStep.REVIEW, WizardStep.REVIEW)

    def test_later_step(self):
        assert is_step_at_or_beyond("submission", "project_selection")

    def test_earlier_step(self):
        assert not is_step_at_or_beyond("initiate", "review")

    def test_unknown_steps_never_satisfy(self):
        """Unknown current or required step yields False."""
        assert not is_step_at_or_beyond("bogus", "initiate")
        assert not is_step_at_or_beyond("review", "bogus")


class TestOperationResult:
    """Tests for OperationResult."""

    def test_success_is_truthy(self):
        result = OperationResult.success({"a": 1})
        assert result
        assert result.ok is True
        assert result.data == {"a": 1}
        assert result.error is None

    def test_failure_is_falsy(self):
        result = OperationResult.failure(ErrorCode.NOT_FOUND, "missing", {"k": "v"})
        assert not result
        assert result.data is None
        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.details == {"k": "v"}

    def test_error_to_dict(self):
        error = WizardError(code=ErrorCode.INVALID_PARAMETERS, message="bad")
        assert error.to_dict() == {
            "error_code": "INVALID_PARAMETERS",
            "message": "bad",
            "details": None,
        }
        assert str(error) == "[INVALID_PARAMETERS] bad"
