"""Field validation pipeline.

Validates submitted field values against the categorized field schema:
unknown fields, required-ness, then type and allowed values.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from issue_wizard.domain.fields.models import CategorizedField, CategorizedFields
from issue_wizard.domain.fields.type_validator import validate_field_type_and_format


logger = logging.getLogger(__name__)


@dataclass
class FieldValidationResult:
    """Outcome of validating a set of field values."""
    is_valid: bool
    errors: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "errors": self.errors}


def find_field_metadata(field_id: str, categorized: CategorizedFields) -> Optional[CategorizedField]:
    """Look a field up across every category."""
    for fields in categorized.values():
        for candidate in fields:
            if candidate.id == field_id:
                return candidate
    return None


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def validate_single_field(field_id: str, value: Any, categorized: CategorizedFields) -> List[str]:
    """Validate one field value. Returns a list of error messages."""
    meta = find_field_metadata(field_id, categorized)
    if meta is None:
        return [f"Unknown field: {field_id}"]

    errors: List[str] = []
    if not _has_value(value):
        if meta.metadata.required:
            errors.append(f"{meta.name} field is required")
        return errors

    errors.extend(validate_field_type_and_format(value, meta.metadata))
    return errors


def validate_fields(fields: Dict[str, Any], categorized: CategorizedFields) -> FieldValidationResult:
    """Validate every supplied field and collect the failures per field.

    Schema fields missing from `fields` are not visited.
    """
    errors: Dict[str, List[str]] = {}
    for field_id, value in fields.items():
        field_errors = validate_single_field(field_id, value, categorized)
        if field_errors:
            errors[field_id] = field_errors

    if errors:
        logger.debug(f"Field validation failed for {sorted(errors)}")
    return FieldValidationResult(is_valid=not errors, errors=errors)


def validate_required_fields(
    fields: Dict[str, Any],
    categorized: CategorizedFields,
    skip: Iterable[str] = (),
) -> FieldValidationResult:
    """Check that every required schema field has a valid value in `fields`.

    Args:
        fields: Submitted field values
        categorized: Field schema
        skip: Field ids supplied elsewhere (e.g. project, issue type)
    """
    skipped = set(skip)
    errors: Dict[str, List[str]] = {}
    for field_list in categorized.values():
        for meta in field_list:
            if not meta.metadata.required or meta.id in skipped:
                continue
            field_errors = validate_single_field(meta.id, fields.get(meta.id), categorized)
            if field_errors:
                errors[meta.id] = field_errors
    return FieldValidationResult(is_valid=not errors, errors=errors)
