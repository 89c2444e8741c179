"""Field schemas, field value validation and the field metadata cache."""

from issue_wizard.domain.fields.models import (
    CategorizedField,
    CategorizedFields,
    FieldCategory,
    FieldSchema,
    categorize_fields,
    categorized_fields_from_dict,
    categorized_fields_to_dict,
    determine_field_category,
    group_by_category,
)
from issue_wizard.domain.fields.allowed_values import (
    validate_allowed_values,
    validate_array_values,
    validate_object_with_id,
    validate_primitive_value,
)
from issue_wizard.domain.fields.type_validator import (
    get_validator_for_type,
    validate_field_type_and_format,
)
from issue_wizard.domain.fields.field_validator import (
    FieldValidationResult,
    find_field_metadata,
    validate_fields,
    validate_required_fields,
    validate_single_field,
)
from issue_wizard.domain.fields.metadata_cache import (
    DEFAULT_TTL_SECONDS,
    FieldMetadataCache,
    field_metadata_cache,
)


__all__ = [
    "CategorizedField",
    "CategorizedFields",
    "FieldCategory",
    "FieldSchema",
    "categorize_fields",
    "categorized_fields_from_dict",
    "categorized_fields_to_dict",
    "determine_field_category",
    "group_by_category",
    "validate_allowed_values",
    "validate_array_values",
    "validate_object_with_id",
    "validate_primitive_value",
    "get_validator_for_type",
    "validate_field_type_and_format",
    "FieldValidationResult",
    "find_field_metadata",
    "validate_fields",
    "validate_required_fields",
    "validate_single_field",
    "DEFAULT_TTL_SECONDS",
    "FieldMetadataCache",
    "field_metadata_cache",
]
