import inspect

import pytest
from pydantic import ValidationError as SchemaValidationError

from backend.schemas.billing import CatalogEntry
from backend.seed.catalog_seed import DIAGNOSTIC_TESTS, build_catalog, build_roster, load_catalog, load_roster
from backend.services.catalog import filter_catalog, find_test, price_label


def test_seed_catalog_and_roster_load():
    catalog = load_catalog()
    assert [entry.name for entry in catalog][:3] == ["CBC", "Hb%", "ESR"]
    assert len(catalog) == len(DIAGNOSTIC_TESTS)
    assert len(set(load_roster())) == len(load_roster()) == 6


def test_empty_query_yields_full_catalog_in_order():
    catalog = load_catalog()
    assert list(filter_catalog(catalog, "")) == list(catalog)
    assert list(filter_catalog(catalog, None)) == list(catalog)


def test_filter_is_lazy():
    assert inspect.isgenerator(filter_catalog(load_catalog(), "cbc"))


@pytest.mark.parametrize("query", ["thyroid", "THYROID", "Thyroid Pro"])
def test_filter_matches_name_case_insensitively(query):
    assert [entry.name for entry in filter_catalog(load_catalog(), query)] == ["THYROID PROFILE"]


def test_filter_matches_category_and_keeps_declaration_order():
    names = [entry.name for entry in filter_catalog(load_catalog(), "serology")]
    assert names == ["BRUCELLA", "WESTREN'S BLOT"]


def test_filter_without_matches_is_empty():
    assert list(filter_catalog(load_catalog(), "mri")) == []


def test_find_test():
    catalog = load_catalog()
    assert find_test(catalog, "HBA1C").prices[0].price == 850
    assert find_test(catalog, "hba1c") is None
    assert find_test(catalog, "") is None


def test_option_for_resolves_variant():
    cbc = find_test(load_catalog(), "CBC")
    assert cbc.option_for(300).variant == "Standard"
    assert cbc.option_for(350).variant == "Premium"
    assert cbc.option_for(400) is None


def test_entry_with_repeated_price_is_rejected():
    with pytest.raises(SchemaValidationError):
        CatalogEntry(
            name="LFT",
            category="Biochemistry",
            prices=[{"variant": "Basic", "price": 500}, {"variant": "Extended", "price": 500}],
        )


def test_entry_without_prices_is_rejected():
    with pytest.raises(SchemaValidationError):
        CatalogEntry(name="LFT", category="Biochemistry", prices=[])


def test_entry_with_negative_price_is_rejected():
    with pytest.raises(SchemaValidationError):
        CatalogEntry(name="LFT", category="Biochemistry", prices=[{"price": -1}])


def test_duplicate_test_names_are_rejected():
    item = {"name": "ESR", "category": "Haematology", "prices": [{"price": 200}]}
    with pytest.raises(ValueError, match="Duplicate test names"):
        build_catalog([item, item])


def test_duplicate_doctors_are_rejected():
    with pytest.raises(ValueError):
        build_roster(["Dr. A", "Dr. A"])


def test_price_label():
    assert price_label(300, "Standard") == "₹300 (Standard)"
    assert price_label(200) == "₹200"
