"""Issue tracker domain models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class TrackerConfig:
    """Connection settings for the tracker REST API."""
    base_url: str
    username: str
    api_token: str
    timeout: float = 30.0

    @property
    def auth(self) -> tuple:
        """Basic auth credentials for httpx."""
        return (self.username, self.api_token)


@dataclass
class CreatedIssue:
    """Response from the issue creation endpoint."""
    id: str
    key: str
    self_url: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreatedIssue":
        return cls(
            id=str(data.get("id", "")),
            key=data.get("key", ""),
            self_url=data.get("self", ""),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "key": self.key, "self": self.self_url}


@dataclass
class TrackerError:
    """Error from the tracker API."""
    error_type: str
    message: str
    status_code: Optional[int] = None
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def timeout(cls, message: str) -> "TrackerError":
        """Create a timeout error."""
        return cls(error_type="timeout", message=message)

    @classmethod
    def connection(cls, message: str) -> "TrackerError":
        """Create a connection error."""
        return cls(error_type="connection", message=message)

    @classmethod
    def api_error(
        cls,
        message: str,
        status_code: int,
        details: Optional[Dict[str, Any]] = None,
    ) -> "TrackerError":
        """Create an API error."""
        return cls(
            error_type="api_error",
            message=message,
            status_code=status_code,
            details=details or {},
        )

    @classmethod
    def not_found(cls, message: str) -> "TrackerError":
        """Create a not-found error."""
        return cls(error_type="not_found", message=message, status_code=404)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_type": self.error_type,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
        }


class TrackerException(Exception):
    """Exception wrapping tracker errors."""

    def __init__(self, error: TrackerError):
        self.error = error
        super().__init__(error.message)
