"""
Endpoint tests for POST /api/contact using FastAPI's TestClient.
"""
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from contact_intake.api import routes_contact
from contact_intake.core.config import get_settings
from contact_intake.core.db import get_session_factory
from contact_intake.core.errors import ContactStorageError, StorageErrorKind
from contact_intake.main import app
from contact_intake.models.person import Person
from contact_intake.services import intake as intake_module

from tests.fixtures.contact_fixtures import JANE_DOE, MINIMAL_CONTACT

CONTACT_URL = "/api/contact"


@pytest.fixture
def client(session_factory, settings):
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def prod_client(session_factory, settings):
    prod_settings = settings.model_copy(update={"ENV": "prod"})
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_settings] = lambda: prod_settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def _raise_storage_error(kind, message):
    def _intake(*args, **kwargs):
        raise ContactStorageError(kind, message)
    return _intake


class TestCreateContact:

    def test_success(self, client):
        response = client.post(CONTACT_URL, json=JANE_DOE)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["person_id"]
        assert body["organization_id"]
        assert body["message"] == "Successfully added Jane Doe"

    def test_success_without_company(self, client):
        response = client.post(CONTACT_URL, json=MINIMAL_CONTACT)
        assert response.status_code == 200
        assert response.json()["organization_id"] is None

    def test_same_company_variant_returns_same_organization(self, client):
        first = client.post(CONTACT_URL, json=JANE_DOE).json()
        second = client.post(CONTACT_URL, json=dict(JANE_DOE, company="acme")).json()
        assert first["organization_id"] == second["organization_id"]

    def test_numeric_phone_is_accepted(self, client):
        response = client.post(CONTACT_URL, json=dict(MINIMAL_CONTACT, phone=5550100))
        assert response.status_code == 200

    def test_missing_last_name_is_400_and_writes_nothing(self, client, session_factory):
        response = client.post(CONTACT_URL, json={"first_name": "Jane"})
        assert response.status_code == 400
        assert response.json() == {"error": "First name and last name are required"}

        db = session_factory()
        try:
            assert db.query(Person).count() == 0
        finally:
            db.close()

    def test_uncoercible_body_is_400(self, client):
        response = client.post(CONTACT_URL, json={"first_name": {"nested": True}, "last_name": "Doe"})
        assert response.status_code == 400

    def test_empty_body_is_400(self, client):
        response = client.post(CONTACT_URL)
        assert response.status_code == 400

    def test_json_array_body_is_400(self, client):
        response = client.post(CONTACT_URL, json=["Jane", "Doe"])
        assert response.status_code == 400
        assert response.json() == {"error": "First name and last name are required"}

    def test_malformed_json_is_400(self, client):
        response = client.post(
            CONTACT_URL,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "First name and last name are required"}


class TestMethods:

    def test_options_preflight(self, client):
        response = client.options(CONTACT_URL)
        assert response.status_code == 200
        assert response.content == b""

    def test_cors_preflight(self, client):
        response = client.options(
            CONTACT_URL,
            headers={
                "Origin": "https://forms.example.org",
                "Access-Control-Request-Method": "POST",
            },
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers
        assert response.content == b""

    @pytest.mark.parametrize("method", ["get", "put", "patch", "delete"])
    def test_other_methods_are_405(self, client, method):
        response = getattr(client, method)(CONTACT_URL)
        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}

    def test_head_is_405(self, client):
        assert client.head(CONTACT_URL).status_code == 405


class TestStorageErrors:

    def test_value_too_long(self, client, monkeypatch):
        monkeypatch.setattr(
            routes_contact,
            "intake_contact",
            _raise_storage_error(StorageErrorKind.VALUE_TOO_LONG, "value too long for type character varying(50)"),
        )
        response = client.post(CONTACT_URL, json=JANE_DOE)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "One of the fields is too long"
        assert "50 characters" in body["details"]
        assert body["debug_info"] == "value too long for type character varying(50)"

    def test_duplicate_key_in_dev_includes_raw_details(self, client, monkeypatch):
        monkeypatch.setattr(
            routes_contact,
            "intake_contact",
            _raise_storage_error(StorageErrorKind.DUPLICATE_KEY, "duplicate key value violates unique constraint"),
        )
        body = client.post(CONTACT_URL, json=JANE_DOE).json()
        assert body["error"] == "This person may already exist in the database"
        assert body["details"] == "duplicate key value violates unique constraint"

    def test_not_null(self, client, monkeypatch):
        monkeypatch.setattr(
            routes_contact,
            "intake_contact",
            _raise_storage_error(StorageErrorKind.NOT_NULL, "null value in column"),
        )
        body = client.post(CONTACT_URL, json=JANE_DOE).json()
        assert body["error"] == "Missing required information"
        assert body["details"] == "First name and last name are required."

    def test_production_hides_raw_error(self, prod_client, monkeypatch):
        monkeypatch.setattr(
            routes_contact,
            "intake_contact",
            _raise_storage_error(StorageErrorKind.DUPLICATE_KEY, "duplicate key value violates unique constraint"),
        )
        response = prod_client.post(CONTACT_URL, json=JANE_DOE)
        assert response.status_code == 500
        body = response.json()
        assert "duplicate key" not in body["details"]
        assert "debug_info" not in body

    def test_unexpected_error_is_generic_500(self, prod_client, monkeypatch):
        monkeypatch.setattr(routes_contact, "intake_contact", MagicMock(side_effect=RuntimeError("kaboom")))
        response = prod_client.post(CONTACT_URL, json=JANE_DOE)
        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to add contact"
        assert "kaboom" not in response.text

    def test_unexpected_error_traceback_logged_once(self, client, monkeypatch, caplog):
        monkeypatch.setattr(intake_module, "create_person", MagicMock(side_effect=RuntimeError("kaboom")))
        with caplog.at_level("ERROR"):
            response = client.post(CONTACT_URL, json=JANE_DOE)
        assert response.status_code == 500
        assert len([record for record in caplog.records if record.exc_info]) == 1


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
