from collections.abc import Generator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from backend.main import app
from backend.services.builder import BillingRecordBuilder

SCENARIO_DOCTOR = "Dr. Vinod JB (MS - Ayu)"


@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def builder() -> BillingRecordBuilder:
    return BillingRecordBuilder(today=date(2024, 3, 1))


@pytest.fixture()
def handoff_store() -> dict:
    return {}


@pytest.fixture()
def filled_builder(builder) -> BillingRecordBuilder:
    """Builder holding the Asha Rao bill: CBC (Standard) and ESR."""
    builder.set_field("name", "Asha Rao")
    builder.set_field("age", "34")
    builder.set_field("sex", "Female")
    builder.set_field("date", "2024-03-01")
    builder.toggle_doctor(SCENARIO_DOCTOR)
    builder.select_test_candidate("CBC")
    builder.select_price_for_candidate(300)
    builder.commit_test()
    builder.select_test_candidate("ESR")
    builder.select_price_for_candidate(200)
    builder.commit_test()
    return builder


@pytest.fixture()
def scenario_payload() -> dict:
    return {
        "name": "Asha Rao",
        "age": "34",
        "sex": "Female",
        "date": "2024-03-01",
        "referredDoctors": [SCENARIO_DOCTOR],
        "selectedTests": [
            {"name": "CBC", "price": 300, "variant": "Standard"},
            {"name": "ESR", "price": 200, "variant": ""},
        ],
    }
