from functools import lru_cache

from backend.schemas.billing import CatalogEntry


DOCTORS = [
    "Dr. Santosh Pujari (MS - Ayu, ENT, Ph.D)",
    "Dr. Vinod JB (MS - Ayu)",
    "Dr. Avinash Bhavikatti (MBBS, MS, Surgical Gastroenterology)",
    "Dr. Divya Bhavikatti (MBBS, MS - OBG)",
    "Dr. Sana Kouser Jamadar (MBBS, Family Physician)",
    "Dr. Vijaykumar Nayak (MS - Ayu, Ph.D)",
]

DIAGNOSTIC_TESTS = [
    {"name": "CBC", "category": "Haematology", "prices": [{"variant": "Standard", "price": 300}, {"variant": "Premium", "price": 350}]},
    {"name": "Hb%", "category": "Haematology", "prices": [{"variant": "", "price": 100}]},
    {"name": "ESR", "category": "Haematology", "prices": [{"variant": "", "price": 200}]},
    {"name": "BRUCELLA", "category": "Serology", "prices": [{"variant": "", "price": 850}]},
    {"name": "THYROID PROFILE", "category": "Endocrinology", "prices": [{"variant": "", "price": 700}]},
    {"name": "CD4, CD8", "category": "Immunology", "prices": [{"variant": "", "price": 2200}]},
    {"name": "WESTREN'S BLOT", "category": "Serology", "prices": [{"variant": "", "price": 3000}]},
    {"name": "HBA1C", "category": "Diabetes", "prices": [{"variant": "", "price": 850}]},
]


def build_catalog(items: list[dict]) -> tuple[CatalogEntry, ...]:
    entries = tuple(CatalogEntry.model_validate(item) for item in items)
    names = [entry.name for entry in entries]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate test names in catalog: {duplicates}")
    return entries


def build_roster(doctors: list[str]) -> tuple[str, ...]:
    if len(set(doctors)) != len(doctors):
        raise ValueError("Doctor roster contains duplicate entries")
    return tuple(doctors)


@lru_cache(maxsize=1)
def load_catalog() -> tuple[CatalogEntry, ...]:
    return build_catalog(DIAGNOSTIC_TESTS)


@lru_cache(maxsize=1)
def load_roster() -> tuple[str, ...]:
    return build_roster(DOCTORS)
