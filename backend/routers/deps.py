from backend.config import Settings, settings
from backend.schemas.billing import CatalogEntry
from backend.seed.catalog_seed import load_catalog, load_roster


def get_catalog() -> tuple[CatalogEntry, ...]:
    return load_catalog()


def get_roster() -> tuple[str, ...]:
    return load_roster()


def get_settings() -> Settings:
    return settings
