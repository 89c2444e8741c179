"""Tests for the field validation pipeline."""

import pytest

from issue_wizard.domain.fields.field_validator import (
    find_field_metadata,
    validate_fields,
    validate_required_fields,
    validate_single_field,
)
from issue_wizard.domain.fields.models import categorize_fields, group_by_category


@pytest.fixture
def categorized(field_map):
    return group_by_category(categorize_fields(field_map))


class TestFindFieldMetadata:
    """Tests for find_field_metadata."""

    def test_found_in_any_category(self, categorized):
        assert find_field_metadata("customfield_10010", categorized).name == "Severity"
        assert find_field_metadata("summary", categorized).name == "Summary"

    def test_missing(self, categorized):
        assert find_field_metadata("nope", categorized) is None


class TestValidateSingleField:
    """Tests for validate_single_field."""

    def test_unknown_field(self, categorized):
        assert validate_single_field("nope", "x", categorized) == ["Unknown field: nope"]

    @pytest.mark.parametrize("empty", [None, ""])
    def test_required_empty(self, categorized, empty):
        assert validate_single_field("summary", empty, categorized) == ["Summary field is required"]

    def test_optional_empty_skips_type_checks(self, categorized):
        assert validate_single_field("customfield_10020", "", categorized) == []

    def test_type_error(self, categorized):
        assert validate_single_field("customfield_10020", "five", categorized) == ["Value must be a number"]

    def test_allowed_value_error(self, categorized):
        assert validate_single_field("priority", {"id": "4"}, categorized) == [
            'Value with id "4" is not in the list of allowed values'
        ]


class TestValidateFields:
    """Tests for validate_fields."""

    def test_valid(self, categorized):
        result = validate_fields(
            {"summary": "Broken", "priority": {"id": "3"}, "labels": ["ui"]},
            categorized,
        )
        assert result.is_valid
        assert result.errors == {}

    def test_collects_errors_per_field(self, categorized):
        result = validate_fields(
            {"summary": "", "priority": {"id": "4"}, "bogus": 1},
            categorized,
        )
        assert not result.is_valid
        assert result.errors == {
            "summary": ["Summary field is required"],
            "priority": ['Value with id "4" is not in the list of allowed values'],
            "bogus": ["Unknown field: bogus"],
        }

    def test_only_supplied_fields_checked(self, categorized):
        """A missing required field is not reported here."""
        assert validate_fields({"labels": ["ui"]}, categorized).is_valid

    def test_to_dict(self, categorized):
        assert validate_fields({}, categorized).to_dict() == {"is_valid": True, "errors": {}}


class TestValidateRequiredFields:
    """Tests for validate_required_fields."""

    def test_reports_missing_required(self, categorized):
        result = validate_required_fields({}, categorized, skip=("project", "issuetype"))
        assert result.errors == {"summary": ["Summary field is required"]}

    def test_without_skip_reports_managed_fields(self, categorized):
        result = validate_required_fields({"summary": "x"}, categorized)
        assert sorted(result.errors) == ["issuetype", "project"]

    def test_satisfied(self, categorized):
        result = validate_required_fields({"summary": "x"}, categorized, skip=["project", "issuetype"])
        assert result.is_valid
