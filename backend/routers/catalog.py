from fastapi import APIRouter, Depends, HTTPException, Query

from backend.routers.deps import get_catalog, get_roster
from backend.schemas.billing import CatalogEntry
from backend.services.catalog import filter_catalog, find_test

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/tests", response_model=list[CatalogEntry])
def list_tests(
    query: str = Query(default="", max_length=100),
    catalog: tuple[CatalogEntry, ...] = Depends(get_catalog),
):
    return list(filter_catalog(catalog, query))


@router.get("/tests/{name}", response_model=CatalogEntry)
def get_test(name: str, catalog: tuple[CatalogEntry, ...] = Depends(get_catalog)):
    entry = find_test(catalog, name)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Test {name!r} not found")
    return entry


@router.get("/doctors", response_model=list[str])
def list_doctors(roster: tuple[str, ...] = Depends(get_roster)):
    return list(roster)
