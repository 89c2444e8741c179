"""Tests for the wizard API endpoints."""

from fastapi.testclient import TestClient

from issue_wizard.tracker.models import TrackerError


BASE = "/api/v1/wizard"


def select_issue_type(client: TestClient) -> None:
    client.post(f"{BASE}/state")
    client.patch(f"{BASE}/state", json={"current_step": "project_selection", "project_key": "PROJ"})
    client.patch(f"{BASE}/state", json={"current_step": "issue_type_selection", "issue_type_id": "10001"})


def ready_to_create(client: TestClient) -> None:
    select_issue_type(client)
    client.post(f"{BASE}/fields", json={"fields": {"summary": "Login page times out"}})
    client.put(f"{BASE}/analysis-complete", json={"is_complete": True})
    client.put(f"{BASE}/user-confirmation", json={"confirmed": True})


class TestStateEndpoints:
    """Tests for /wizard/state."""

    def test_initiate(self, client):
        response = client.post(f"{BASE}/state")

        assert response.status_code == 201
        data = response.json()
        assert data["active"] is True
        assert data["current_step"] == "initiate"

    def test_initiate_twice_conflicts(self, client):
        client.post(f"{BASE}/state")

        response = client.post(f"{BASE}/state")

        assert response.status_code == 409
        assert response.json()["detail"]["error_code"] == "INVALID_PARAMETERS"

    def test_get_without_session(self, client):
        response = client.get(f"{BASE}/state")

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["error_code"] == "INVALID_PARAMETERS"
        assert "No active wizard session" in detail["message"]

    def test_patch(self, client):
        client.post(f"{BASE}/state")

        response = client.patch(
            f"{BASE}/state",
            json={"current_step": "project_selection", "project_key": "PROJ"},
        )

        assert response.status_code == 200
        assert response.json()["project_key"] == "PROJ"
        assert response.json()["current_step"] == "project_selection"

    def test_patch_rejects_step_skip(self, client):
        client.post(f"{BASE}/state")

        response = client.patch(f"{BASE}/state", json={"current_step": "review"})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Invalid transition from initiate to review"

    def test_patch_rejects_unknown_attribute(self, client):
        client.post(f"{BASE}/state")

        response = client.patch(f"{BASE}/state", json={"active": False})

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == "Unknown state attributes: active"

    def test_reset(self, client):
        client.post(f"{BASE}/state")

        response = client.delete(f"{BASE}/state")

        assert response.status_code == 200
        assert response.json() == {"reset": True}
        assert client.get(f"{BASE}/state").status_code == 400


class TestStatusEndpoint:
    """Tests for /wizard/status."""

    def test_inactive(self, client):
        response = client.get(f"{BASE}/status")

        assert response.status_code == 200
        assert response.json()["active"] is False
        assert response.json()["time_elapsed"] == 0

    def test_active(self, client):
        select_issue_type(client)

        data = client.get(f"{BASE}/status").json()

        assert data["current_step"] == "issue_type_selection"
        assert data["progress"] == 40
        assert data["step_completion"] == {"complete": True, "required_fields": []}


class TestFieldEndpoints:
    """Tests for /wizard/fields."""

    def test_get_fields(self, client):
        select_issue_type(client)

        response = client.get(f"{BASE}/fields")

        assert response.status_code == 200
        fields = response.json()["fields"]
        assert sorted(fields) == ["custom", "optional", "required", "system"]

    def test_get_fields_force_refresh(self, client, tracker):
        select_issue_type(client)

        client.get(f"{BASE}/fields")
        client.get(f"{BASE}/fields", params={"force_refresh": True})

        assert len(tracker.calls_to("fetch_field_schema")) == 2

    def test_get_fields_too_early(self, client):
        client.post(f"{BASE}/state")
        assert client.get(f"{BASE}/fields").status_code == 400

    def test_update_fields(self, client):
        select_issue_type(client)

        response = client.post(f"{BASE}/fields", json={"fields": {"summary": "Broken"}})

        assert response.status_code == 200
        data = response.json()
        assert data["updated_fields"] == ["summary"]
        assert data["state"]["current_step"] == "field_completion"

    def test_update_fields_invalid(self, client):
        select_issue_type(client)

        response = client.post(f"{BASE}/fields", json={"fields": {"priority": {"id": "9"}}})

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["message"] == "Validation failed for one or more fields"
        assert detail["details"]["errors"] == {
            "priority": ['Value with id "9" is not in the list of allowed values']
        }

    def test_validate_only(self, client):
        select_issue_type(client)

        response = client.post(
            f"{BASE}/fields",
            json={"fields": {"bogus": 1}, "validate_only": True},
        )

        assert response.status_code == 200
        assert response.json()["is_valid"] is False
        assert response.json()["errors"] == {"bogus": ["Unknown field: bogus"]}

    def test_fields_must_be_object(self, client):
        select_issue_type(client)
        response = client.post(f"{BASE}/fields", json={"fields": "summary"})
        assert response.status_code == 422


class TestIssueEndpoints:
    """Tests for issue creation and loading."""

    def test_flags(self, client):
        client.post(f"{BASE}/state")

        response = client.put(f"{BASE}/analysis-complete", json={"is_complete": True})

        assert response.status_code == 200
        assert response.json()["message"] == "Analysis status updated to: true"
        assert response.json()["state"]["analysis_complete"] is True

    def test_create_requires_confirmation(self, client):
        select_issue_type(client)
        client.post(f"{BASE}/fields", json={"fields": {"summary": "Broken"}})
        client.put(f"{BASE}/analysis-complete", json={"is_complete": True})

        response = client.post(f"{BASE}/issue")

        assert response.status_code == 400
        assert response.json()["detail"]["message"] == (
            "User confirmation is required before creating the issue"
        )

    def test_create(self, client):
        ready_to_create(client)

        response = client.post(f"{BASE}/issue")

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Issue PROJ-1 created successfully"
        assert data["issue"]["key"] == "PROJ-1"
        assert data["issue"]["self"].endswith("/issue/10001")
        assert data["state"]["current_step"] == "submission"

    def test_create_tracker_failure(self, client, tracker):
        ready_to_create(client)
        tracker.set_error_on_next(TrackerError.api_error("Service unavailable", 503))

        response = client.post(f"{BASE}/issue")

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail["error_code"] == "EXECUTION_FAILED"
        assert detail["details"]["status_code"] == 503

    def test_load_issue(self, client, tracker):
        tracker.add_issue("PROJ-5", {
            "key": "PROJ-5",
            "fields": {"project": {"key": "PROJ"}, "issuetype": {"id": "10001"}, "summary": "Old"},
        })

        response = client.post(f"{BASE}/issue/PROJ-5/load")

        assert response.status_code == 200
        assert response.json()["mode"] == "updating"
        assert response.json()["fields"] == {"summary": "Old"}

    def test_load_missing_issue(self, client):
        response = client.post(f"{BASE}/issue/PROJ-404/load")

        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == "NOT_FOUND"
