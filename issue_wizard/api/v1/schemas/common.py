"""Common schema types for API responses."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

    model_config = {"json_schema_extra": {
        "example": {
            "error_code": "INVALID_PARAMETERS",
            "message": "Invalid transition from initiate to review",
            "details": None,
        }
    }}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="API version")
    tracker_configured: bool = Field(..., description="Whether tracker credentials are set")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
