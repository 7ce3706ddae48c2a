from backend.routers.deps import get_catalog
from backend.schemas.billing import CatalogEntry


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["data"]["service"] == "diagnostic-billing"


def test_list_tests(client):
    response = client.get("/api/catalog/tests")
    assert response.status_code == 200
    payload = response.json()
    assert len(payload) == 8
    assert payload[0] == {
        "name": "CBC",
        "category": "Haematology",
        "prices": [{"variant": "Standard", "price": 300}, {"variant": "Premium", "price": 350}],
    }


def test_filter_tests(client):
    response = client.get("/api/catalog/tests", params={"query": "thyroid"})
    assert response.status_code == 200
    assert [entry["name"] for entry in response.json()] == ["THYROID PROFILE"]


def test_get_test(client):
    response = client.get("/api/catalog/tests/ESR")
    assert response.status_code == 200
    assert response.json()["prices"] == [{"variant": "", "price": 200}]


def test_unknown_test_returns_error_envelope(client):
    response = client.get("/api/catalog/tests/MRI")
    assert response.status_code == 404
    payload = response.json()
    assert payload["statusCode"] == 404
    assert payload["error"] == "NotFound"


def test_catalog_dependency_can_be_overridden(client):
    custom = (CatalogEntry(name="LFT", category="Biochemistry", prices=[{"price": 650}]),)
    client.app.dependency_overrides[get_catalog] = lambda: custom
    response = client.get("/api/catalog/tests")
    assert [entry["name"] for entry in response.json()] == ["LFT"]


def test_list_doctors(client):
    response = client.get("/api/catalog/doctors")
    assert response.status_code == 200
    doctors = response.json()
    assert len(doctors) == 6
    assert "Dr. Vinod JB (MS - Ayu)" in doctors


def test_render_report(client, scenario_payload):
    response = client.post("/api/reports/render", json=scenario_payload)
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 500
    assert data["total_display"] == "₹500"
    assert data["patient"]["date_display"] == "01/03/2024"
    assert [line["name"] for line in data["lines"]] == ["CBC", "ESR"]


def test_render_report_html(client, scenario_payload):
    response = client.post("/api/reports/render/html", json=scenario_payload)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Asha Rao" in response.text


def test_render_rejects_record_without_tests(client, scenario_payload):
    scenario_payload["selectedTests"] = []
    response = client.post("/api/reports/render", json=scenario_payload)
    assert response.status_code == 422
    payload = response.json()
    assert payload["error"] == "ValidationError"
    assert payload["details"]["errors"]


def test_render_rejects_unknown_sex(client, scenario_payload):
    scenario_payload["sex"] = "Unknown"
    response = client.post("/api/reports/render", json=scenario_payload)
    assert response.status_code == 422


def test_render_rejects_non_numeric_age(client, scenario_payload):
    scenario_payload["age"] = "abc"
    response = client.post("/api/reports/render", json=scenario_payload)
    assert response.status_code == 422
