import json
import pytest
from pathlib import Path
from fastapi.testclient import TestClient

from onboarding.main import app
from onboarding.dependencies import get_application_service, get_credit_check_service
from onboarding.adapters.json_store.stores import ApplicationJsonStore
from onboarding.domain.applications.service import ApplicationService
from onboarding.domain.applications.credit_check import CreditCheckService
from onboarding.domain.encryption.errors import MasterKeyError
from onboarding.domain.encryption.key_provider import MasterKeyProvider


@pytest.fixture
def client(key_settings, master_key, tmp_path):
    config = key_settings.model_copy(update={"ENCRYPTION_KEY": master_key})
    service = ApplicationService(ApplicationJsonStore(config.APPLICATIONS_DIR), MasterKeyProvider(config))

    bad_ssns = tmp_path / "bad-ssns.json"
    bad_ssns.write_text(json.dumps({"badSSNs": ["666-66-6666"]}))

    app.dependency_overrides[get_application_service] = lambda: service
    app.dependency_overrides[get_credit_check_service] = lambda: CreditCheckService(bad_ssns)
    # No context manager: the lifespan would resolve the process-wide key
    return TestClient(app)


PAYLOAD = {
    "selectedProducts": ["checking"],
    "customerInfo": {
        "firstName": "Ana",
        "lastName": "García",
        "ssn": "123-45-6789",
        "email": "ana@example.com",
    },
    "identificationInfo": {"type": "stateId", "stateIdNumber": "S-998877"},
}


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "timestamp" in response.json()


def test_submit_and_retrieve_application(client, key_settings):
    response = client.post("/api/applications", json=PAYLOAD, headers={"User-Agent": "wizard-test"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "submitted"
    assert body["filename"].endswith("-Garca.json")

    stored = json.loads((Path(key_settings.APPLICATIONS_DIR) / body["filename"]).read_text())
    assert stored["data"]["customerInfo"]["ssn"]["_encrypted"] is True
    assert stored["metadata"]["userAgent"] == "wizard-test"

    response = client.get(f"/api/applications/{body['applicationId']}")
    assert response.status_code == 200
    assert response.json()["data"] == PAYLOAD


def test_unknown_application_is_404(client):
    response = client.get("/api/applications/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404
    assert response.json()["detail"]["error"]["code"] == "APPLICATION_NOT_FOUND"


@pytest.mark.parametrize("payload", [
    {"customerInfo": {"lastName": "Doe"}},
    {"selectedProducts": [], "customerInfo": {"lastName": "Doe"}},
    {"selectedProducts": ["brokerage"], "customerInfo": {"lastName": "Doe"}},
    {"selectedProducts": ["savings"]},
])
def test_invalid_submission_is_rejected(client, payload):
    response = client.post("/api/applications", json=payload)
    assert response.status_code == 422


def test_credit_check(client):
    response = client.post("/api/credit-check", json={"ssn": "666-66-6666"})
    assert response.status_code == 200
    assert response.json()["status"] == "requires_verification"

    response = client.post("/api/credit-check", json={"ssn": "123-45-6789"})
    assert response.status_code == 200
    assert response.json()["status"] == "approved"


def test_credit_check_unavailable(client, tmp_path):
    app.dependency_overrides[get_credit_check_service] = lambda: CreditCheckService(tmp_path / "nope.json")

    response = client.post("/api/credit-check", json={"ssn": "123-45-6789"})
    assert response.status_code == 503
    assert response.json()["detail"]["error"]["code"] == "CREDIT_CHECK_UNAVAILABLE"


def test_top_level_nulls_survive_roundtrip(client):
    payload = {
        "selectedProducts": ["checking"],
        "customerInfo": {"lastName": "Doe", "middleName": None, "ssn": "123-45-6789"},
        "identificationInfo": None,
        "referral": None,
    }

    response = client.post("/api/applications", json=payload)
    assert response.status_code == 200

    response = client.get(f"/api/applications/{response.json()['applicationId']}")
    assert response.status_code == 200
    assert response.json()["data"] == payload


class FailingService:
    async def create_application(self, data, user_agent=None, ip_address=None):
        raise MasterKeyError("Unable to read encryption key file")

    async def get_application(self, application_id):
        raise OSError("disk unavailable")


def test_save_failure_maps_to_500(client):
    app.dependency_overrides[get_application_service] = lambda: FailingService()

    response = client.post("/api/applications", json=PAYLOAD)
    assert response.status_code == 500
    assert response.json()["detail"]["error"]["code"] == "APPLICATION_SAVE_FAILED"


def test_load_failure_maps_to_500(client):
    app.dependency_overrides[get_application_service] = lambda: FailingService()

    response = client.get("/api/applications/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 500
    assert response.json()["detail"]["error"]["code"] == "APPLICATION_LOAD_FAILED"


def test_non_object_stored_application_maps_to_500(client, key_settings):
    app_dir = Path(key_settings.APPLICATIONS_DIR)
    app_dir.mkdir(parents=True, exist_ok=True)
    (app_dir / "deadbeef-Doe.json").write_text(json.dumps(["not", "an", "object"]))

    response = client.get("/api/applications/deadbeef")
    assert response.status_code == 500
    assert response.json()["detail"]["error"]["code"] == "APPLICATION_LOAD_FAILED"
