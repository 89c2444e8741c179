"""Lookups inside create metadata responses."""

from typing import Any, Dict, Optional

from issue_wizard.domain.wizard.types import ErrorCode, OperationResult


def find_target_project(
    metadata: Dict[str, Any],
    project_key: str,
    project_id: Optional[str] = None,
) -> OperationResult:
    """
    Find a project in a create metadata response.

    The key is tried first, then the id.

    Returns:
        OperationResult with the project dict, or NOT_FOUND
    """
    projects = metadata.get("projects") or []

    if project_key:
        for project in projects:
            if project.get("key") == project_key:
                return OperationResult.success(project)

    if project_id:
        for project in projects:
            if str(project.get("id")) == str(project_id):
                return OperationResult.success(project)

    message = f'No project found with key "{project_key or ""}"'
    if project_id:
        message += f' or ID "{project_id}"'
    return OperationResult.failure(ErrorCode.NOT_FOUND, message)


def find_issue_type_fields(project: Dict[str, Any], issue_type_id: str) -> OperationResult:
    """Return the `fields` map of one issue type within a project."""
    for issue_type in project.get("issuetypes") or []:
        if str(issue_type.get("id")) == str(issue_type_id):
            return OperationResult.success(issue_type.get("fields") or {})

    return OperationResult.failure(
        ErrorCode.NOT_FOUND,
        f'No issue type with ID "{issue_type_id}" in project "{project.get("key", "")}"',
    )
