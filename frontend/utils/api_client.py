import os

import requests
import streamlit as st

BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


class ApiClient:
    def tests(self, query: str = ""):
        return requests.get(f"{BASE_URL}/api/catalog/tests", params={"query": query}, timeout=30)

    def doctors(self):
        return requests.get(f"{BASE_URL}/api/catalog/doctors", timeout=30)


# ---------------------------------------------------------------------------
# Cached reference data. The catalog and roster are load-time constants on
# the API side, so a long TTL is fine.
# ---------------------------------------------------------------------------

@st.cache_data(ttl=600, show_spinner=False)
def cached_catalog() -> tuple[bool, list]:
    try:
        res = ApiClient().tests()
    except requests.RequestException:
        return False, []
    return res.ok, res.json() if res.ok else []


@st.cache_data(ttl=600, show_spinner=False)
def cached_doctors() -> tuple[bool, list]:
    try:
        res = ApiClient().doctors()
    except requests.RequestException:
        return False, []
    return res.ok, res.json() if res.ok else []
