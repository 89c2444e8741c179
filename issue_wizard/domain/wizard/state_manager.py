"""Wizard state manager - the only mutator of a live wizard session.

Every value crossing the manager boundary is deep-copied, so callers can
never alter the session by holding on to a returned state or to the dict
they passed in.
"""

import copy
import json
import logging
from typing import Any, Callable, Dict, Optional

from issue_wizard.domain.wizard.state_machine import transition_state
from issue_wizard.domain.wizard.state_validators import validate_state_update
from issue_wizard.domain.wizard.types import (
    ErrorCode,
    OperationResult,
    WizardMode,
    WizardStep,
    coerce_step,
    current_timestamp,
)
from issue_wizard.domain.wizard.wizard_state import (
    UPDATABLE_FIELDS,
    ValidationState,
    WizardState,
)


logger = logging.getLogger(__name__)


NO_ACTIVE_SESSION = "No active wizard session. Initiate a new session first."
SESSION_ALREADY_ACTIVE = "A wizard session is already active. Reset it before starting a new one."


class StateStore:
    """Holds one WizardState, copying on every read and write."""

    def __init__(self) -> None:
        self._value: Optional[WizardState] = None

    def get(self) -> Optional[WizardState]:
        return copy.deepcopy(self._value)

    def set(self, value: Optional[WizardState]) -> None:
        self._value = copy.deepcopy(value)


class StateManager:
    """
    Owns the state of one issue creation session.

    Updates that change the step go through the state machine; other
    updates go through the lighter state validator. Multiple sessions
    are served by multiple managers.
    """

    def __init__(
        self,
        store: Optional[StateStore] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        """
        Initialize the manager.

        Args:
            store: Storage primitive; a fresh StateStore by default
            clock: Returns the current time in milliseconds
        """
        self._store = store or StateStore()
        self._clock = clock or current_timestamp

    def is_active(self) -> bool:
        """Check whether a session is active."""
        state = self._store.get()
        return bool(state and state.active)

    def initialize_state(self) -> OperationResult:
        """Start a new session at the first step."""
        if self.is_active():
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, SESSION_ALREADY_ACTIVE)

        state = WizardState.new(timestamp=self._clock())
        self._store.set(state)
        logger.info("Initialized wizard session")
        return OperationResult.success(self._store.get())

    def get_state(self) -> OperationResult:
        """Return a copy of the live state."""
        if not self.is_active():
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, NO_ACTIVE_SESSION)
        return OperationResult.success(self._store.get())

    def reset_state(self) -> OperationResult:
        """Discard the session. Safe to call when nothing is active."""
        self._store.set(None)
        logger.info("Reset wizard session")
        return OperationResult.success({"reset": True})

    def update_state(
        self,
        partial_state: Dict[str, Any],
        force_step_transition: bool = False,
    ) -> OperationResult:
        """
        Merge a partial update into the live state.

        Args:
            partial_state: Attributes to set; `fields` is merged key-wise
            force_step_transition: Accept a step change without adjacency or
                completion checks. Used when loading an existing issue and
                after the tracker has accepted a new one.

        Returns:
            OperationResult with the committed state
        """
        current = self._store.get()
        if not current or not current.active:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, NO_ACTIVE_SESSION)

        partial = copy.deepcopy(dict(partial_state or {}))
        error = self._check_partial(partial)
        if error is not None:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, error)

        logger.debug(
            f"Updating wizard state at {current.current_step.value} "
            f"with {sorted(partial.keys())} (force={force_step_transition})"
        )

        target = coerce_step(partial.get("current_step")) if partial.get("current_step") else None
        if target is not None and target != current.current_step:
            if force_step_transition:
                base = current
                base.current_step = target
            else:
                result = transition_state(current, target)
                if not result:
                    logger.info(f"Step transition rejected: {result.error.message}")
                    return result
                base = result.data
        else:
            result = validate_state_update(current, partial, force=force_step_transition)
            if not result:
                logger.info(f"State update rejected: {result.error.message}")
                return result
            base = current

        updated = self._merge(base, partial)
        updated.timestamp = self._clock()
        self._store.set(updated)

        logger.debug(
            f"Wizard state now at {updated.current_step.value} "
            f"with {len(updated.fields)} field(s)"
        )
        return OperationResult.success(self._store.get())

    def serialize_state(self) -> OperationResult:
        """Serialize the live state to a JSON string."""
        state = self._store.get()
        if not state or not state.active:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, NO_ACTIVE_SESSION)
        try:
            return OperationResult.success(json.dumps(state.to_dict()))
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to serialize wizard state: {e}")
            return OperationResult.failure(ErrorCode.UNKNOWN_ERROR, "Failed to serialize wizard state")

    def deserialize_state(self, serialized: str) -> OperationResult:
        """Replace the live state with one restored from a JSON string."""
        try:
            data = json.loads(serialized)
        except (TypeError, ValueError) as e:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, f"Invalid state format: {e}")

        if not isinstance(data, dict):
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "Invalid state format")

        try:
            state = WizardState.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.warning(f"Rejected serialized state: {e}")
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "Invalid state format")

        self._store.set(state)
        return OperationResult.success(self._store.get())

    def load_issue(self, issue_data: Dict[str, Any]) -> OperationResult:
        """
        Start a session editing an existing issue.

        Args:
            issue_data: Dict with `issue_key`, `project_key`, `issue_type_id`
                and `fields`

        Returns:
            OperationResult with the new (or unchanged) state
        """
        issue_key = issue_data.get("issue_key")
        if not issue_key:
            return OperationResult.failure(ErrorCode.INVALID_PARAMETERS, "Issue key is required")

        current = self._store.get()
        if current and current.active and current.issue_key == issue_key:
            logger.debug(f"Issue {issue_key} already loaded")
            return OperationResult.success(current)

        self.reset_state()
        init = self.initialize_state()
        if not init:
            return init

        project_key = issue_data.get("project_key")
        issue_type_id = issue_data.get("issue_type_id")
        partial: Dict[str, Any] = {
            "issue_key": issue_key,
            "project_key": project_key,
            "issue_type_id": issue_type_id,
            "fields": issue_data.get("fields") or {},
            "mode": WizardMode.UPDATING,
        }
        if project_key and issue_type_id:
            partial["current_step"] = WizardStep.FIELD_COMPLETION

        logger.info(f"Loading issue {issue_key} into wizard session")
        return self.update_state(partial, force_step_transition=True)

    @staticmethod
    def _check_partial(partial: Dict[str, Any]) -> Optional[str]:
        unknown = sorted(set(partial) - UPDATABLE_FIELDS)
        if unknown:
            return f"Unknown state attributes: {', '.join(unknown)}"

        step = partial.get("current_step")
        if step and coerce_step(step) is None:
            return f"Invalid step: {step}"

        if "fields" in partial and not isinstance(partial["fields"], dict):
            return "Fields must be an object"

        mode = partial.get("mode")
        if mode is not None:
            try:
                WizardMode(mode)
            except ValueError:
                return f"Invalid mode: {mode}"

        validation = partial.get("validation")
        if validation is not None and not isinstance(validation, ValidationState):
            try:
                ValidationState.from_dict(validation)
            except ValueError as e:
                return f"Invalid validation: {e}"

        return None

    @staticmethod
    def _merge(base: WizardState, partial: Dict[str, Any]) -> WizardState:
        for key, value in partial.items():
            if key == "fields":
                base.fields = {**base.fields, **value}
            elif key == "current_step":
                if value:
                    base.current_step = coerce_step(value)
            elif key == "validation":
                base.validation = value if isinstance(value, ValidationState) else ValidationState.from_dict(value)
            elif key == "mode":
                base.mode = WizardMode(value) if value is not None else None
            else:
                setattr(base, key, value)
        return base
