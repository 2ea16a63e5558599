import pytest

from conference_portal.core.security import ID_ALPHABET
from conference_portal.services.fees import FEES
from payloads import PDF_BYTES, PNG_BYTES

REQUIRED = ["category", "region", "name", "email", "mobile"]


@pytest.mark.parametrize(
    "category,region",
    [(category, region) for category, regions in FEES.items() for region in regions],
)
def test_register_returns_table_fee(client, registration_form, category, region):
    registration_form.update(category=category, region=region)

    response = client.post("/api/register", data=registration_form)

    assert response.status_code == 200
    body = response.json()
    assert body["currency"] == FEES[category][region]["currency"]
    assert body["amount"] == FEES[category][region]["amount"]
    assert body["file"] is None
    assert len(body["id"]) == 10 and set(body["id"]) <= set(ID_ALPHABET)


def test_registration_record_contents(client, store, registered, registration_form):
    record = store.get(registered["id"])

    assert record.category == "Academia"
    assert record.region == "ASIA"
    assert (record.currency, record.amount) == ("USD", 150)
    assert record.paper_id == "P-042"
    assert record.email == registration_form["email"]
    assert record.paid is False
    assert record.paid_at is None
    assert record.transaction_id is None
    assert record.payment_method is None
    assert record.payer_email is None
    assert record.paper_filename is None


@pytest.mark.parametrize("missing", REQUIRED)
def test_missing_required_field_is_rejected(client, store, registered, registration_form, missing):
    before = len(store.load())
    del registration_form[missing]

    response = client.post("/api/register", data=registration_form)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert len(store.load()) == before


def test_blank_required_field_is_rejected(client, store, registration_form):
    registration_form["name"] = "   "
    response = client.post("/api/register", data=registration_form)
    assert response.status_code == 400
    assert store.load() == []


def test_invalid_selection(client, store, registration_form):
    registration_form["region"] = "MARS"
    response = client.post(
        "/api/register",
        data=registration_form,
        files={"paper": ("paper.pdf", PDF_BYTES, "application/pdf")},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid category or region"}
    assert store.load() == []


def test_optional_fields_default_to_null(client, store, registration_form):
    del registration_form["paperId"]
    registration_form["organization"] = ""

    body = client.post("/api/register", data=registration_form).json()
    record = store.get(body["id"])

    assert record.paper_id is None
    assert record.organization is None


def test_register_with_paper_upload(client, store, settings, registration_form):
    response = client.post(
        "/api/register",
        data=registration_form,
        files={"paper": ("camera-ready.pdf", PDF_BYTES, "application/pdf")},
    )

    assert response.status_code == 200
    body = response.json()
    record = store.get(body["id"])
    assert body["file"] == f"/uploads/{record.paper_filename}"
    assert record.paper_original == "camera-ready.pdf"

    served = client.get(body["file"])
    assert served.status_code == 200
    assert served.content == PDF_BYTES


def test_non_pdf_paper_rejected(client, store, settings, registration_form):
    response = client.post(
        "/api/register",
        data=registration_form,
        files={"paper": ("photo.png", PNG_BYTES, "image/png")},
    )

    assert response.status_code == 415
    assert store.load() == []
    assert not settings.upload_path.exists() or not any(settings.upload_path.iterdir())


def test_oversized_paper_rejected(client, store, registration_form):
    too_big = b"%PDF" + b"0" * (1024 * 1024)
    response = client.post(
        "/api/register",
        data=registration_form,
        files={"paper": ("huge.pdf", too_big, "application/pdf")},
    )

    assert response.status_code == 413
    assert store.load() == []


def test_store_failure_is_a_generic_500(client, store, registration_form, monkeypatch):
    def broken_save(records):
        raise OSError("disk full at /secret/path/registrations.json")

    monkeypatch.setattr(store, "save", broken_save)

    response = client.post("/api/register", data=registration_form)

    assert response.status_code == 500
    assert response.json() == {"error": "Registration failed"}
    assert "secret" not in response.text


@pytest.mark.parametrize("path", ["/api/registrations/{}", "/api/participant/{}"])
def test_get_registration(client, registered, path):
    response = client.get(path.format(registered["id"]))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == registered["id"]
    assert body["name"] == "Jane Doe"
    assert body["paid"] is False


@pytest.mark.parametrize("path", ["/api/registrations/{}", "/api/participant/{}"])
def test_get_unknown_registration(client, path):
    response = client.get(path.format("NOPE123456"))
    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_health(client):
    assert client.get("/api/health").json() == {"ok": True}
