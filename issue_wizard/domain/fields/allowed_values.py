"""Allowed-value validation for field values.

Tracker schemas describe allowed values in mixed shapes: bare primitives,
objects with an `id`, or objects with `value`/`name`. The checker is chosen
from the shape of the submitted value.
"""

from typing import Any, List, Sequence

from issue_wizard.domain.fields.models import FieldSchema


NOT_ALLOWED = "is not in the list of allowed values"
MISSING_ID = 'Object value must have an "id" property'


def _matches_primitive(value: Any, allowed: Any) -> bool:
    if isinstance(allowed, dict):
        return ("value" in allowed and allowed["value"] == value) or (
            "name" in allowed and allowed["name"] == value
        )
    return allowed == value


def validate_primitive_value(value: Any, allowed_values: Sequence[Any]) -> List[str]:
    """A primitive must equal an allowed entry or its `value`/`name`."""
    if any(_matches_primitive(value, allowed) for allowed in allowed_values):
        return []
    return [f'Value "{value}" {NOT_ALLOWED}']


def _has_id(value: Any) -> bool:
    return isinstance(value, dict) and value.get("id") is not None


def _object_errors(value: Any, allowed_values: Sequence[Any]) -> List[str]:
    if not _has_id(value):
        return [MISSING_ID]
    target = str(value["id"])
    for allowed in allowed_values:
        if _has_id(allowed) and str(allowed["id"]) == target:
            return []
    return [f'Value with id "{value["id"]}" {NOT_ALLOWED}']


def validate_object_with_id(value: Any, allowed_values: Sequence[Any]) -> List[str]:
    """An object must carry an `id` matching an allowed entry's `id`.

    Non-object values are left to the type validator.
    """
    if not isinstance(value, dict):
        return []
    return _object_errors(value, allowed_values)


def validate_array_values(value: Any, allowed_values: Sequence[Any]) -> List[str]:
    """Check every element using the rule matching the first element's shape."""
    if not isinstance(value, list) or not value:
        return []

    use_ids = isinstance(value[0], dict)
    errors = []
    for index, item in enumerate(value):
        if use_ids:
            item_errors = _object_errors(item, allowed_values)
        else:
            item_errors = validate_primitive_value(item, allowed_values)
        errors.extend(f"Item at index {index}: {e}" for e in item_errors)
    return errors


def validate_allowed_values(value: Any, schema: FieldSchema) -> List[str]:
    """Validate a value against the schema's allowed values, if it has any."""
    if not schema.allowed_values or value is None:
        return []

    allowed = schema.allowed_values
    if isinstance(value, list):
        return validate_array_values(value, allowed)
    if isinstance(value, dict):
        return validate_object_with_id(value, allowed)
    return validate_primitive_value(value, allowed)
