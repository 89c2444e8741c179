"""Service layer exposing the wizard operations."""

from issue_wizard.services.field_metadata_service import FieldMetadataService
from issue_wizard.services.wizard_service import WizardService, service_operation

__all__ = [
    "FieldMetadataService",
    "WizardService",
    "service_operation",
]
