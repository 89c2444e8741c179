"""Core wizard types - steps, step ordering and operation results.

Operations in the wizard core never raise for expected failures. They return
an OperationResult carrying either the produced data or a WizardError.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union


class WizardStep(str, Enum):
    """Steps of the issue creation wizard, in order."""
    INITIATE = "initiate"
    PROJECT_SELECTION = "project_selection"
    ISSUE_TYPE_SELECTION = "issue_type_selection"
    FIELD_COMPLETION = "field_completion"
    REVIEW = "review"
    SUBMISSION = "submission"


class WizardMode(str, Enum):
    """Whether the session will create a new issue or edit a loaded one."""
    CREATING = "creating"
    UPDATING = "updating"


# Numeric position of each step, used for forward/backward comparisons
WIZARD_STEP_ORDER: Dict[WizardStep, int] = {
    WizardStep.INITIATE: 0,
    WizardStep.PROJECT_SELECTION: 1,
    WizardStep.ISSUE_TYPE_SELECTION: 2,
    WizardStep.FIELD_COMPLETION: 3,
    WizardStep.REVIEW: 4,
    WizardStep.SUBMISSION: 5,
}


def coerce_step(value: Union[WizardStep, str, None]) -> Optional[WizardStep]:
    """Convert a raw value to a WizardStep, or None when it is not one."""
    if isinstance(value, WizardStep):
        return value
    try:
        return WizardStep(value)
    except ValueError:
        return None


def step_order(step: Union[WizardStep, str]) -> int:
    """Return the position of a step. Raises ValueError for unknown steps."""
    resolved = coerce_step(step)
    if resolved is None:
        raise ValueError(f"Unknown wizard step: {step}")
    return WIZARD_STEP_ORDER[resolved]


def is_step_at_or_beyond(
    current_step: Union[WizardStep, str],
    required_step: Union[WizardStep, str],
) -> bool:
    """Check whether current_step has reached required_step.

    Unknown steps never satisfy a requirement.
    """
    current = coerce_step(current_step)
    required = coerce_step(required_step)
    if current is None or required is None:
        return False
    return WIZARD_STEP_ORDER[current] >= WIZARD_STEP_ORDER[required]


def current_timestamp() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


class ErrorCode(str, Enum):
    """Error taxonomy for wizard operations."""
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    NOT_FOUND = "NOT_FOUND"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    EXECUTION_FAILED = "EXECUTION_FAILED"


@dataclass
class WizardError:
    """A failed operation's code and human-readable message."""
    code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


@dataclass
class OperationResult:
    """Tagged success/failure value returned by wizard operations."""
    ok: bool
    data: Any = None
    error: Optional[WizardError] = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, data: Any = None) -> "OperationResult":
        """Create a successful result."""
        return cls(ok=True, data=data)

    @classmethod
    def failure(
        cls,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> "OperationResult":
        """Create a failed result."""
        return cls(ok=False, error=WizardError(code=code, message=message, details=details))
