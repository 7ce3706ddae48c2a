"""Session-scoped billing state for the Streamlit pages."""

from __future__ import annotations

import streamlit as st

from backend.config import settings
from backend.schemas.billing import CatalogEntry
from backend.services.builder import BillingRecordBuilder
from backend.services.handoff import HandoffChannel
from utils.api_client import cached_catalog, cached_doctors

BUILDER_KEY = "billing_builder"


def get_builder() -> BillingRecordBuilder:
    """Return this session's builder, creating it from the API reference data on first use."""
    if BUILDER_KEY not in st.session_state:
        c_ok, tests = cached_catalog()
        d_ok, doctors = cached_doctors()
        if not c_ok or not d_ok:
            st.error("Could not load the test catalog or doctor list. Is the billing API running?")
            st.stop()
        st.session_state[BUILDER_KEY] = BillingRecordBuilder(
            catalog=[CatalogEntry.model_validate(item) for item in tests],
            roster=doctors,
        )
    return st.session_state[BUILDER_KEY]


def get_handoff() -> HandoffChannel:
    return HandoffChannel(st.session_state, settings.handoff_key)
