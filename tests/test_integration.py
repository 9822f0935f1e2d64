import re

import pytest
from fastapi.testclient import TestClient

from scrapyard.main import create_app


@pytest.fixture
def api_client() -> TestClient:
    return TestClient(create_app())


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}


def test_database_health_without_configuration(api_client: TestClient, no_db):
    payload = api_client.get("/api/health/database").json()
    assert payload["configured"] is False


def test_database_health_with_database(api_client: TestClient, fake_db):
    payload = api_client.get("/api/health/database").json()
    assert payload["configured"] is True
    assert payload["connected"] is True


def test_validate_personal_number_endpoint(api_client: TestClient):
    response = api_client.post(
        "/api/identity/personal-number/validate",
        json={"value": "811218-9876", "reference_date": "2026-10-17"},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is True
    assert payload["formatted"] == "811218-9876"
    assert payload["birth_date"] == "1981-12-18"
    assert payload["is_coordination_number"] is False


def test_invalid_personal_number_is_not_an_http_error(api_client: TestClient):
    response = api_client.post("/api/identity/personal-number/validate", json={"value": "811218-9875"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["is_valid"] is False
    assert payload["error"] == "invalid_checksum"
    assert payload["message"] == "Ogiltigt personnummer (kontrollsiffra)"
    assert payload["formatted"] is None


def test_coordination_number_endpoint(api_client: TestClient):
    payload = api_client.post(
        "/api/identity/personal-number/validate",
        json={"value": "701063-2391", "reference_date": "2026-10-17"},
    ).json()

    assert payload["is_coordination_number"] is True
    assert payload["birth_date"] == "1970-10-03"


def test_mask_endpoint(api_client: TestClient):
    masked = api_client.post("/api/identity/personal-number/mask", json={"value": "198112189876"}).json()
    assert masked == {"masked": "811218-****"}

    hidden = api_client.post("/api/identity/personal-number/mask", json={"value": "not a number"}).json()
    assert hidden == {"masked": "****-****"}


def test_organization_number_endpoint(api_client: TestClient):
    ok = api_client.post("/api/identity/organization-number/validate", json={"value": "5560125790"}).json()
    assert ok["is_valid"] is True
    assert ok["formatted"] == "556012-5790"

    bad = api_client.post("/api/identity/organization-number/validate", json={"value": "212000-0142"}).json()
    assert bad["error"] == "invalid_format"


def test_status_catalogue(api_client: TestClient):
    payload = api_client.get("/api/pickups/statuses").json()

    by_status = {item["status"]: item for item in payload}
    assert set(by_status) == {
        "pending", "scheduled", "assigned", "in_progress", "completed", "cancelled", "rejected",
    }
    assert by_status["assigned"]["allowed_transitions"] == ["in_progress", "cancelled", "rejected"]
    assert by_status["completed"]["is_terminal"] is True


def test_single_status(api_client: TestClient):
    payload = api_client.get("/api/pickups/statuses/in_progress").json()

    assert payload["next_status"] == "completed"
    assert payload["can_progress"] is True
    assert payload["progress_label"] == "Slutför upphämtning"
    assert payload["text"] == "Pågående"

    assert api_client.get("/api/pickups/statuses/archived").status_code == 422


def test_status_update_endpoint(api_client: TestClient, fake_db):
    fake_db.tables["pickup_orders"] = [{"id": "P1", "status": "pending"}]

    response = api_client.post("/api/pickups/P1/status", json={"status": "scheduled"})
    assert response.status_code == 200
    assert response.json()["status"] == "scheduled"

    conflict = api_client.post("/api/pickups/P1/status", json={"status": "completed"})
    assert conflict.status_code == 409

    missing = api_client.post("/api/pickups/P404/status", json={"status": "scheduled"})
    assert missing.status_code == 404


def test_status_update_without_database(api_client: TestClient, no_db):
    response = api_client.post("/api/pickups/P1/status", json={"status": "scheduled"})
    assert response.status_code == 503


def test_progress_endpoint(api_client: TestClient, fake_db):
    fake_db.tables["pickup_orders"] = [{"id": "P1", "status": "assigned"}]

    first = api_client.post("/api/pickups/P1/progress", json={"driver_name": "Anna"})
    assert first.status_code == 200
    assert first.json()["status"] == "in_progress"

    second = api_client.post("/api/pickups/P1/progress", json={"driver_name": "Anna"})
    assert second.json()["status"] == "completed"

    third = api_client.post("/api/pickups/P1/progress", json={"driver_name": "Anna"})
    assert third.status_code == 409


def test_driver_status_endpoints(api_client: TestClient, fake_db):
    fake_db.tables["drivers"] = [{"id": "D1", "driver_status": "offline"}]

    response = api_client.post("/api/drivers/D1/status", json={"status": "on_duty", "source": "driver_app"})
    assert response.status_code == 200
    payload = response.json()
    assert payload["old_status"] == "offline"
    assert payload["new_status"] == "available"
    assert payload["new_status_text"] == "Tillgänglig"

    history = api_client.get("/api/drivers/D1/status-history").json()
    assert history["driver_id"] == "D1"
    assert history["items"][0]["new_status"] == "available"


def test_driver_status_without_database(api_client: TestClient, no_db):
    response = api_client.post("/api/drivers/D1/status", json={"status": "busy"})
    assert response.status_code == 503


def test_driver_status_response_has_local_timestamp(api_client: TestClient, fake_db):
    fake_db.tables["drivers"] = [{"id": "D1", "driver_status": "available"}]

    payload = api_client.post("/api/drivers/D1/status", json={"status": "break"}).json()

    assert payload["changed_at"]
    assert re.fullmatch(r"\d{1,2} \S+ \d{4} \d{2}:\d{2}", payload["changed_at_text"])


def test_driver_status_rejects_unknown_status(api_client: TestClient, fake_db):
    fake_db.tables["drivers"] = [{"id": "D1", "driver_status": "available"}]

    response = api_client.post("/api/drivers/D1/status", json={"status": "avaliable"})

    assert response.status_code == 422
    assert fake_db.tables["drivers"][0]["driver_status"] == "available"
    assert "driver_status_history" not in fake_db.tables


def test_driver_status_for_unknown_driver(api_client: TestClient, fake_db):
    response = api_client.post("/api/drivers/ghost/status", json={"status": "busy"})

    assert response.status_code == 404
    assert "driver_status_history" not in fake_db.tables
