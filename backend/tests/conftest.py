"""
Shared fixtures: every test gets its own app instance whose data file and
upload directory live under pytest's tmp_path.
"""

import pytest
from fastapi.testclient import TestClient

from conference_portal.core.config import Settings
from conference_portal.main import create_app
from payloads import ADMIN_PASSWORD


@pytest.fixture
def settings(tmp_path):
    return Settings(
        UPLOAD_DIR=str(tmp_path / "uploads"),
        DATA_DIR=str(tmp_path / "data"),
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        MAX_PAPER_SIZE_MB=1,
        MAX_PROOF_SIZE_MB=1,
        PAYMENT_PROOF_REQUIRED=False,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.record_store


@pytest.fixture
def registration_form():
    return {
        "category": "Academia",
        "region": "ASIA",
        "paperId": "P-042",
        "name": "Jane Doe",
        "organization": "University of Somewhere",
        "email": "Jane.Doe@Example.org",
        "mobile": "+91 98765 43210",
    }


@pytest.fixture
def registered(client, registration_form):
    """A registration created through the API; returns its response body"""
    response = client.post("/api/register", data=registration_form)
    assert response.status_code == 200, response.text
    return response.json()
