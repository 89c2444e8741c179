"""Tests for field schema models and categorization."""

from issue_wizard.domain.fields.models import (
    CategorizedField,
    FieldCategory,
    FieldSchema,
    categorize_fields,
    categorized_fields_from_dict,
    categorized_fields_to_dict,
    determine_field_category,
    group_by_category,
)


class TestFieldSchema:
    """Tests for FieldSchema."""

    def test_from_tracker(self, field_map):
        schema = FieldSchema.from_tracker("priority", field_map["priority"])

        assert schema.id == "priority"
        assert schema.name == "Priority"
        assert schema.required is False
        assert schema.type == "priority"
        assert schema.allowed_values[0] == {"id": "1", "name": "Highest"}
        assert schema.is_system
        assert not schema.is_custom

    def test_custom_detected_from_schema(self, field_map):
        schema = FieldSchema.from_tracker("customfield_10010", field_map["customfield_10010"])
        assert schema.is_custom
        assert not schema.is_system

    def test_custom_detected_from_id(self):
        schema = FieldSchema.from_tracker("customfield_1", {"name": "X", "schema": {"type": "string"}})
        assert schema.is_custom

    def test_name_defaults_to_id(self):
        assert FieldSchema.from_tracker("foo", {}).name == "foo"

    def test_dict_round_trip(self, field_map):
        schema = FieldSchema.from_tracker("customfield_10010", field_map["customfield_10010"])
        assert FieldSchema.from_dict(schema.to_dict()) == schema


class TestCategorization:
    """Tests for determine_field_category and grouping."""

    def test_required_beats_system(self):
        schema = FieldSchema(id="summary", name="Summary", required=True, schema={"system": "summary"})
        assert determine_field_category(schema) == FieldCategory.REQUIRED

    def test_system(self):
        schema = FieldSchema(id="labels", name="Labels", schema={"system": "labels"})
        assert determine_field_category(schema) == FieldCategory.SYSTEM

    def test_custom(self):
        schema = FieldSchema(id="customfield_1", name="X", custom=True)
        assert determine_field_category(schema) == FieldCategory.CUSTOM

    def test_optional(self):
        assert determine_field_category(FieldSchema(id="x", name="X")) == FieldCategory.OPTIONAL

    def test_categorize_sample(self, field_map):
        grouped = group_by_category(categorize_fields(field_map))

        ids = {category: sorted(f.id for f in fields) for category, fields in grouped.items()}
        assert ids == {
            "required": ["issuetype", "project", "summary"],
            "system": ["assignee", "description", "labels", "priority"],
            "custom": ["customfield_10010", "customfield_10020"],
            "optional": ["environment_notes"],
        }

    def test_dict_round_trip(self, field_map):
        grouped = group_by_category(categorize_fields(field_map))
        restored = categorized_fields_from_dict(categorized_fields_to_dict(grouped))

        assert restored == grouped
        assert isinstance(restored["custom"][0], CategorizedField)

    def test_from_dict_handles_none(self):
        assert categorized_fields_from_dict(None) == {}
