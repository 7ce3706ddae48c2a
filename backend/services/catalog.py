from typing import Iterable, Iterator

from backend.schemas.billing import CatalogEntry


def filter_catalog(catalog: Iterable[CatalogEntry], query: str | None) -> Iterator[CatalogEntry]:
    """Yield entries whose name or category contains ``query``, ignoring case.

    An empty query yields the whole catalog. Declaration order is kept.
    """
    needle = (query or "").casefold()
    for entry in catalog:
        if not needle or needle in entry.name.casefold() or needle in entry.category.casefold():
            yield entry


def find_test(catalog: Iterable[CatalogEntry], name: str | None) -> CatalogEntry | None:
    if not name:
        return None
    for entry in catalog:
        if entry.name == name:
            return entry
    return None


def price_label(price: int, variant: str = "", currency_symbol: str = "₹") -> str:
    label = f"{currency_symbol}{price}"
    if variant:
        label += f" ({variant})"
    return label
