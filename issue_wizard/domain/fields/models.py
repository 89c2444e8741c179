"""Field schema models and categorization.

Field schemas come from the tracker's create-metadata endpoint. Each field is
tagged with a display category: required fields first, then system, custom
and everything else.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class FieldCategory(str, Enum):
    """Display category of a field."""
    REQUIRED = "required"
    SYSTEM = "system"
    CUSTOM = "custom"
    OPTIONAL = "optional"


@dataclass
class FieldSchema:
    """Tracker-supplied description of one field."""
    id: str
    name: str
    required: bool = False
    schema: Dict[str, Any] = field(default_factory=dict)
    allowed_values: Optional[List[Any]] = None
    custom: bool = False

    @property
    def type(self) -> Optional[str]:
        """Declared schema type (e.g. "string", "array", "option")."""
        return self.schema.get("type")

    @property
    def is_system(self) -> bool:
        return bool(self.schema.get("system"))

    @property
    def is_custom(self) -> bool:
        return bool(self.custom or self.schema.get("custom"))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "required": self.required,
            "schema": self.schema,
            "allowed_values": self.allowed_values,
            "custom": self.custom,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FieldSchema":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            required=bool(data.get("required", False)),
            schema=dict(data.get("schema") or {}),
            allowed_values=data.get("allowed_values"),
            custom=bool(data.get("custom", False)),
        )

    @classmethod
    def from_tracker(cls, field_id: str, data: Dict[str, Any]) -> "FieldSchema":
        """Build from a create-metadata field entry (camelCase keys)."""
        schema = dict(data.get("schema") or {})
        return cls(
            id=field_id,
            name=data.get("name", field_id),
            required=bool(data.get("required", False)),
            schema=schema,
            allowed_values=data.get("allowedValues"),
            custom=bool(schema.get("custom")) or field_id.startswith("customfield_"),
        )


@dataclass
class CategorizedField:
    """A field schema with its display category."""
    id: str
    name: str
    category: FieldCategory
    metadata: FieldSchema

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "metadata": self.metadata.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategorizedField":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            category=FieldCategory(data["category"]),
            metadata=FieldSchema.from_dict(data["metadata"]),
        )


# Category name -> fields in that category
CategorizedFields = Dict[str, List[CategorizedField]]


def determine_field_category(schema: FieldSchema) -> FieldCategory:
    """Required beats system, system beats custom."""
    if schema.required:
        return FieldCategory.REQUIRED
    if schema.is_system:
        return FieldCategory.SYSTEM
    if schema.is_custom:
        return FieldCategory.CUSTOM
    return FieldCategory.OPTIONAL


def categorize_fields(field_map: Dict[str, Dict[str, Any]]) -> List[CategorizedField]:
    """Categorize the `fields` map of one issue type's create metadata."""
    categorized = []
    for field_id, data in field_map.items():
        schema = FieldSchema.from_tracker(field_id, data)
        categorized.append(CategorizedField(
            id=field_id,
            name=schema.name,
            category=determine_field_category(schema),
            metadata=schema,
        ))
    return categorized


def group_by_category(fields: List[CategorizedField]) -> CategorizedFields:
    """Group fields under their category name."""
    grouped: CategorizedFields = {}
    for f in fields:
        grouped.setdefault(f.category.value, []).append(f)
    return grouped


def categorized_fields_to_dict(grouped: CategorizedFields) -> Dict[str, List[Dict[str, Any]]]:
    return {category: [f.to_dict() for f in items] for category, items in grouped.items()}


def categorized_fields_from_dict(data: Dict[str, List[Dict[str, Any]]]) -> CategorizedFields:
    return {
        category: [CategorizedField.from_dict(item) for item in items]
        for category, items in (data or {}).items()
    }
