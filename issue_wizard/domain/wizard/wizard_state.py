"""Wizard state - the single aggregate for one issue creation session.

Tracks the current step, project/issue type selections, accumulated field
values, the last validation outcome and the confirmation flags required
before an issue can be created.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from issue_wizard.domain.wizard.types import (
    WizardMode,
    WizardStep,
    coerce_step,
    current_timestamp,
)


@dataclass
class ValidationState:
    """Last computed validation outcome, keyed by field id."""
    errors: Dict[str, List[str]] = field(default_factory=dict)
    warnings: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "errors": {k: list(v) for k, v in self.errors.items()},
            "warnings": {k: list(v) for k, v in self.warnings.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ValidationState":
        """Restore from dict.

        Raises:
            ValueError: If the outcome or its `errors`/`warnings` are not
                mappings of field id to a list of messages.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("'validation' must be an object")
        return cls(
            errors=_messages_by_field(data, "errors"),
            warnings=_messages_by_field(data, "warnings"),
        )


def _messages_by_field(data: Dict[str, Any], key: str) -> Dict[str, List[str]]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'validation.{key}' must be an object")
    for field_id, messages in value.items():
        if not isinstance(messages, list):
            raise ValueError(f"'validation.{key}.{field_id}' must be a list")
    return {k: list(v) for k, v in value.items()}


# Attributes a partial update may set. `active` and `timestamp` are owned
# by the state manager.
UPDATABLE_FIELDS = frozenset({
    "current_step",
    "project_key",
    "issue_type_id",
    "fields",
    "validation",
    "analysis",
    "user_confirmation",
    "analysis_complete",
    "issue_key",
    "mode",
})


@dataclass
class WizardState:
    """Complete state of an issue creation session."""

    active: bool = False
    current_step: WizardStep = WizardStep.INITIATE

    # Selections
    project_key: Optional[str] = None
    issue_type_id: Optional[str] = None

    # Field values and their last validation outcome
    fields: Dict[str, Any] = field(default_factory=dict)
    validation: ValidationState = field(default_factory=ValidationState)

    # Categorized field schema for the current project/issue type
    analysis: Optional[Dict[str, Any]] = None

    # Last mutation time (ms since epoch)
    timestamp: int = 0

    # Gating flags for issue creation
    user_confirmation: Optional[bool] = None
    analysis_complete: Optional[bool] = None

    # Set once an issue exists
    issue_key: Optional[str] = None
    mode: Optional[WizardMode] = None

    @classmethod
    def new(cls, timestamp: Optional[int] = None) -> "WizardState":
        """Create a fresh active state at the first step."""
        return cls(
            active=True,
            current_step=WizardStep.INITIATE,
            timestamp=timestamp if timestamp is not None else current_timestamp(),
        )

    @property
    def metadata(self) -> Optional[Dict[str, Any]]:
        """Cached categorized field metadata, if any."""
        if not self.analysis:
            return None
        return self.analysis.get("metadata")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "active": self.active,
            "current_step": self.current_step.value,
            "project_key": self.project_key,
            "issue_type_id": self.issue_type_id,
            "fields": self.fields,
            "validation": self.validation.to_dict(),
            "analysis": self.analysis,
            "timestamp": self.timestamp,
            "user_confirmation": self.user_confirmation,
            "analysis_complete": self.analysis_complete,
            "issue_key": self.issue_key,
            "mode": self.mode.value if self.mode else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WizardState":
        """Restore from dict.

        Raises:
            ValueError: If `active` is not a boolean or `current_step`
                is not a known step.
        """
        active = data.get("active")
        if not isinstance(active, bool):
            raise ValueError("'active' must be a boolean")

        step = coerce_step(data.get("current_step"))
        if step is None:
            raise ValueError(f"Unknown wizard step: {data.get('current_step')!r}")

        mode = data.get("mode")
        return cls(
            active=active,
            current_step=step,
            project_key=data.get("project_key"),
            issue_type_id=data.get("issue_type_id"),
            fields=dict(data.get("fields") or {}),
            validation=ValidationState.from_dict(data.get("validation")),
            analysis=data.get("analysis"),
            timestamp=int(data.get("timestamp") or 0),
            user_confirmation=data.get("user_confirmation"),
            analysis_complete=data.get("analysis_complete"),
            issue_key=data.get("issue_key"),
            mode=WizardMode(mode) if mode else None,
        )
