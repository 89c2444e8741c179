"""Conversion between wizard state and tracker issue payloads."""

import json
import logging
from typing import Any, Dict, Optional

from issue_wizard.domain.wizard.wizard_state import WizardState


logger = logging.getLogger(__name__)


# Fields the payload builder fills in itself
RESERVED_FIELDS = frozenset({"project", "issuetype", "summary", "description"})
USER_FIELDS = ("reporter", "assignee")


def convert_to_adf(text: str) -> Dict[str, Any]:
    """Wrap plain text in a single-paragraph Atlassian Document Format doc."""
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def format_description_adf(description: Any) -> Optional[Dict[str, Any]]:
    """
    Format a description for the tracker.

    Strings become ADF; an object that already looks like an ADF document
    passes through. Anything else (including "") is dropped.
    """
    if isinstance(description, str):
        return convert_to_adf(description) if description else None
    if isinstance(description, dict) and description.get("type") == "doc":
        return description
    return None


def format_user_field(value: Any, field_name: str) -> Optional[Dict[str, Any]]:
    """
    Normalize a user reference.

    A non-empty string is treated as an account id. Objects carrying `id`
    or `accountId` pass through unchanged.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return {"accountId": value} if value else None
    if isinstance(value, dict):
        if "id" in value or "accountId" in value:
            return value
        logger.warning(f"{field_name} field has unexpected object format: {json.dumps(value)}")
        return None
    if isinstance(value, list):
        logger.warning(f"{field_name} field has unexpected object format: {json.dumps(value)}")
        return None
    logger.warning(f"{field_name} field has unexpected type: {type(value).__name__}")
    return None


def validate_issue_payload(fields: Dict[str, Any]) -> Optional[str]:
    """Return a message for the first missing core field, or None."""
    if not fields.get("summary"):
        return "Summary is required"

    project = fields.get("project")
    if not isinstance(project, dict) or not project.get("key"):
        return "Project key is required"

    issue_type = fields.get("issuetype")
    if not isinstance(issue_type, dict):
        return "Issue type is required"
    if not issue_type.get("id") and not issue_type.get("name"):
        return "Either issue type ID or name is required"

    return None


def build_issue_payload(state: WizardState) -> Dict[str, Any]:
    """Build the create-issue request body from a wizard state."""
    source = state.fields
    fields: Dict[str, Any] = {
        "project": {"key": state.project_key},
        "issuetype": {"id": state.issue_type_id},
        "summary": source.get("summary"),
    }

    # Copy everything else first so formatted values win
    for name, value in source.items():
        if name not in RESERVED_FIELDS:
            fields[name] = value

    description = format_description_adf(source.get("description"))
    if description:
        fields["description"] = description

    for name in USER_FIELDS:
        if name not in source:
            continue
        formatted = format_user_field(source[name], name.capitalize())
        if formatted:
            fields[name] = formatted
        else:
            fields.pop(name, None)

    return {"fields": fields}


def _adf_to_text(node: Any) -> str:
    if isinstance(node, dict):
        if node.get("type") == "text":
            return node.get("text", "")
        parts = [_adf_to_text(child) for child in node.get("content") or []]
        separator = "\n" if node.get("type") == "doc" else ""
        return separator.join(parts)
    return ""


def issue_to_wizard_data(issue: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a fetched issue onto the shape StateManager.load_issue expects.

    Project and issue type move out of `fields`; an ADF description is
    flattened back to plain text.
    """
    raw_fields = dict(issue.get("fields") or {})
    project = raw_fields.pop("project", None) or {}
    issue_type = raw_fields.pop("issuetype", None) or {}

    fields = {k: v for k, v in raw_fields.items() if v is not None}
    description = fields.get("description")
    if isinstance(description, dict):
        fields["description"] = _adf_to_text(description)

    return {
        "issue_key": issue.get("key"),
        "project_key": project.get("key"),
        "issue_type_id": str(issue_type["id"]) if issue_type.get("id") is not None else None,
        "fields": fields,
    }
