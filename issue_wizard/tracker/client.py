"""Issue tracker REST client."""

import logging
import time
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import httpx

from issue_wizard.tracker.models import (
    CreatedIssue,
    TrackerConfig,
    TrackerError,
    TrackerException,
)


logger = logging.getLogger(__name__)


CREATE_META_EXPAND = "projects.issuetypes.fields"


@runtime_checkable
class TrackerClient(Protocol):
    """Protocol for issue tracker clients."""

    async def fetch_field_schema(self, project_key: str, issue_type_id: str) -> Dict[str, Any]:
        """
        Fetch create metadata for one project and issue type.

        Returns:
            Raw response with a `projects` list

        Raises:
            TrackerException: On tracker errors
        """
        ...

    async def get_project(self, project_key: str) -> Dict[str, Any]:
        """Fetch a project by key."""
        ...

    async def create_issue(self, payload: Dict[str, Any]) -> CreatedIssue:
        """Create an issue from a `{"fields": ...}` payload."""
        ...

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        """Fetch an issue by key."""
        ...


def extract_error_message(response: httpx.Response) -> str:
    """Pull a readable message out of a tracker error body."""
    try:
        body = response.json() if response.content else {}
    except ValueError:
        return response.text or f"HTTP {response.status_code}"

    if not isinstance(body, dict):
        return response.text

    messages = list(body.get("errorMessages") or [])
    errors = body.get("errors") or {}
    messages.extend(f"{name}: {msg}" for name, msg in errors.items())
    if messages:
        return "; ".join(messages)
    return response.text or f"HTTP {response.status_code}"


class JiraTrackerClient:
    """Jira Cloud REST v3 client."""

    API_PREFIX = "/rest/api/3"

    def __init__(
        self,
        config: TrackerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            config: Base URL, credentials and timeout
            transport: Optional httpx transport (tests use MockTransport)
        """
        self._config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    async def fetch_field_schema(self, project_key: str, issue_type_id: str) -> Dict[str, Any]:
        data = await self._request(
            "GET",
            "/issue/createmeta",
            params={
                "projectKeys": project_key,
                "issuetypeIds": issue_type_id,
                "expand": CREATE_META_EXPAND,
            },
        )
        if not isinstance(data, dict) or "projects" not in data:
            raise TrackerException(TrackerError.api_error(
                "Unexpected create metadata response", 200,
            ))
        return data

    async def get_project(self, project_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/project/{project_key}")

    async def create_issue(self, payload: Dict[str, Any]) -> CreatedIssue:
        fields = payload.get("fields", {})
        logger.debug(
            f"Creating issue in project {fields.get('project', {}).get('key')} "
            f"with fields {sorted(fields)}"
        )
        data = await self._request("POST", "/issue", json=payload)
        created = CreatedIssue.from_dict(data)
        logger.info(f"Created issue {created.key}")
        return created

    async def get_issue(self, issue_key: str) -> Dict[str, Any]:
        return await self._request("GET", f"/issue/{issue_key}")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}{self.API_PREFIX}{path}"
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout,
                auth=self._config.auth,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=headers,
                )
        except httpx.TimeoutException as e:
            logger.error(f"Tracker request timed out: {method} {path}")
            raise TrackerException(TrackerError.timeout(f"Request timed out: {e}"))
        except httpx.RequestError as e:
            logger.error(f"Tracker request failed: {method} {path}: {e}")
            raise TrackerException(TrackerError.connection(f"Request failed: {e}"))

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"{method} {path} -> {response.status_code} ({latency_ms:.0f}ms)")

        if response.status_code == 404:
            raise TrackerException(TrackerError.not_found(extract_error_message(response)))

        if response.status_code >= 400:
            message = extract_error_message(response)
            logger.error(f"Tracker returned {response.status_code} for {method} {path}: {message}")
            raise TrackerException(TrackerError.api_error(message, response.status_code))

        if not response.content:
            return {}
        return response.json()


def create_tracker_client(config: TrackerConfig) -> JiraTrackerClient:
    """Build the production client."""
    return JiraTrackerClient(config)
