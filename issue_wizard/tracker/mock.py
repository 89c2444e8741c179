"""Mock tracker client for testing."""

import copy
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from issue_wizard.tracker.models import CreatedIssue, TrackerError, TrackerException


@dataclass
class MockCall:
    """Record of a mock tracker call."""
    method: str
    args: Dict[str, Any]
    timestamp: float = field(default_factory=time.time)


class MockTrackerClient:
    """In-memory tracker for tests and local runs without credentials."""

    def __init__(
        self,
        field_schemas: Optional[Dict[str, Dict[str, Any]]] = None,
        projects: Optional[Dict[str, Dict[str, Any]]] = None,
        issues: Optional[Dict[str, Dict[str, Any]]] = None,
        key_prefix_start: int = 1,
    ):
        """
        Initialize mock client.

        Args:
            field_schemas: Create metadata responses keyed by "PROJECT_TYPEID"
            projects: Project responses keyed by project key
            issues: Issue responses keyed by issue key
            key_prefix_start: First issue number handed out by create_issue
        """
        self._field_schemas = field_schemas or {}
        self._projects = projects or {}
        self._issues = issues or {}
        self._next_number = key_prefix_start
        self._calls: List[MockCall] = []
        self._error_on_next: Optional[TrackerError] = None

    @property
    def calls(self) -> List[MockCall]:
        """Get list of all calls made to this client."""
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    def calls_to(self, method: str) -> List[MockCall]:
        """Get calls made to one method."""
        return [c for c in self._calls if c.method == method]

    def last_call(self) -> Optional[MockCall]:
        return self._calls[-1] if self._calls else None

    def set_error_on_next(self, error: TrackerError) -> None:
        """Configure an error to be raised on the next call."""
        self._error_on_next = error

    def set_field_schema(self, project_key: str, issue_type_id: str, data: Dict[str, Any]) -> None:
        self._field_schemas[f"{project_key}_{issue_type_id}"] = data

    def add_issue(self, issue_key: str, data: Dict[str, Any]) -> None:
        self._issues[issue_key] = data

    def clear_calls(self) -> None:
        self._calls.clear()

    def _record(self, method: str, **args: Any) -> None:
        self._calls.append(MockCall(method=method, args=copy.deepcopy(args)))
        if self._error_on_next:
            error = self._error_on_next
            self._error_on_next = None
            raise TrackerException(error)

    async def fetch_field_schema(self, project_key: str, issue_type_id: str) -> Dict[str, Any]:
        self._record("fetch_field_schema", project_key=project_key, issue_type_id=issue_type_id)
        data = self._field_schemas.get(f"{project_key}_{issue_type_id}")
        return copy.deepcopy(data) if data is not None else {"projects": []}

    async def get_project(self, project_key: str) -> Dict[str, Any]:
        self._record("get_project", project_key=project_key)
        if project_key not in self._projects:
            raise TrackerException(TrackerError.not_found(f"No project could be found with key '{project_key}'."))
        return copy.deepcopy(self._projects[project_key])

    async def create_issue(self, payload: Dict[str, Any]) -> CreatedIssue:
        self._record("create_issue", payload=payload)
        fields = payload.get("fields", {})
        project_key = fields.get("project", {}).get("key", "MOCK")
        number = self._next_number
        self._next_number += 1

        key = f"{project_key}-{number}"
        issue_id = str(10000 + number)
        self._issues[key] = {"id": issue_id, "key": key, "fields": copy.deepcopy(fields)}
        return CreatedIssue(id=issue_id, key=key, self_url=f"https://mock.tracker/rest/api/3/issue/{issue_id}")

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        self._record("get_issue", issue_key=issue_key)
        if issue_key not in self._issues:
            raise TrackerException(TrackerError.not_found("Issue does not exist or you do not have permission to see it."))
        return copy.deepcopy(self._issues[issue_key])
