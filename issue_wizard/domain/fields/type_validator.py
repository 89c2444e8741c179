"""Structural type checks for field values."""

from typing import Any, Callable, Dict, List

from issue_wizard.domain.fields.allowed_values import validate_allowed_values
from issue_wizard.domain.fields.models import FieldSchema


TypeCheck = Callable[[Any], List[str]]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_string(value: Any) -> List[str]:
    return [] if isinstance(value, str) else ["Value must be a string"]


def validate_number(value: Any) -> List[str]:
    return [] if _is_number(value) else ["Value must be a number"]


def validate_integer(value: Any) -> List[str]:
    if _is_number(value) and float(value).is_integer():
        return []
    return ["Value must be an integer"]


def validate_array(value: Any) -> List[str]:
    return [] if isinstance(value, list) else ["Value must be an array"]


def validate_object(value: Any) -> List[str]:
    return [] if isinstance(value, dict) else ["Value must be a valid option object"]


TYPE_VALIDATORS: Dict[str, TypeCheck] = {
    "string": validate_string,
    "number": validate_number,
    "integer": validate_integer,
    "array": validate_array,
    "option": validate_object,
    "user": validate_object,
    "group": validate_object,
}


def get_validator_for_type(schema_type: str) -> TypeCheck:
    """Checker for a schema type. Unknown types accept anything."""
    return TYPE_VALIDATORS.get(schema_type, lambda value: [])


def validate_field_type_and_format(value: Any, schema: FieldSchema) -> List[str]:
    """Type-check a value, then check allowed values if the type is right."""
    if not schema.type:
        return []

    errors = get_validator_for_type(schema.type)(value)
    if not errors:
        errors.extend(validate_allowed_values(value, schema))
    return errors
