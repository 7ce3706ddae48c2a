import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent
for path in (APP_DIR, APP_DIR.parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import streamlit as st

from backend.config import settings
from backend.schemas.billing import Sex
from backend.services.catalog import price_label
from backend.services.errors import IncompleteSelection, IndexOutOfRange, InvalidSelection, ValidationError
from backend.services.report import format_inr
from utils.session import get_builder, get_handoff
from utils.theme import (
    apply_theme,
    get_colors,
    hospital_header,
    kpi_tile,
    line_item_html,
    pill_tag,
    render_sidebar,
    section_title,
)

st.set_page_config(
    page_title="Billing Form",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="expanded",
)
apply_theme()
render_sidebar()
COLORS = get_colors()

builder = get_builder()
record = builder.record

# Widget state is dropped when the user visits the report page, so it is
# re-seeded from the builder whenever it is missing.
_WIDGET_DEFAULTS = {
    "patient_name": record.name,
    "patient_sex": record.sex.value if isinstance(record.sex, Sex) else record.sex,
    "patient_date": record.date,
    "test_candidate": builder.candidate,
    "test_price": builder.pending_price,
}
for key, value in _WIDGET_DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value


# ── Callbacks ─────────────────────────────────────────────────────────────
def _sync_field(field: str, key: str) -> None:
    builder.set_field(field, st.session_state[key])


def _select_candidate() -> None:
    builder.select_test_candidate(st.session_state.test_candidate or "")
    st.session_state.test_price = None


def _select_price() -> None:
    price = st.session_state.test_price
    if price is None:
        return
    try:
        builder.select_price_for_candidate(price)
    except InvalidSelection as exc:
        st.session_state.test_price = None
        st.toast(exc.message, icon="⚠️")


def _add_test() -> None:
    try:
        item = builder.commit_test()
    except IncompleteSelection as exc:
        st.toast(exc.message, icon="⚠️")
        return
    st.session_state.test_candidate = ""
    st.session_state.test_price = None
    st.toast(f"Added {item.name}", icon="✅")


def _remove_test(index: int) -> None:
    try:
        builder.remove_test(index)
    except IndexOutOfRange as exc:
        st.toast(exc.message, icon="⚠️")


# ── Header ────────────────────────────────────────────────────────────────
hospital_header(f"{settings.laboratory_name} Billing System")

# ── Patient details ───────────────────────────────────────────────────────
section_title("👤 Patient Details")
c1, c2 = st.columns(2)
c1.text_input(
    "Patient Name",
    key="patient_name",
    placeholder="Enter patient name",
    on_change=_sync_field,
    args=("name", "patient_name"),
)
c2.number_input(
    "Age",
    key="patient_age",
    value=int(record.age) if record.age.strip().isdecimal() else None,
    min_value=0,
    step=1,
    format="%d",
    placeholder="Enter age",
    on_change=_sync_field,
    args=("age", "patient_age"),
)
c3, c4 = st.columns(2)
c3.selectbox(
    "Sex",
    options=[""] + [sex.value for sex in Sex],
    format_func=lambda value: value or "Select sex",
    key="patient_sex",
    on_change=_sync_field,
    args=("sex", "patient_sex"),
)
c4.date_input(
    "Date",
    key="patient_date",
    format="DD/MM/YYYY",
    on_change=_sync_field,
    args=("date", "patient_date"),
)

# ── Referring doctors ─────────────────────────────────────────────────────
section_title("🩺 Referring Doctors")
st.caption("Select one or more referring doctors")
doctor_cols = st.columns(2)
for i, doctor in enumerate(builder.roster):
    doctor_cols[i % 2].checkbox(
        doctor,
        value=builder.has_doctor(doctor),
        key=f"doctor_{i}",
        on_change=builder.toggle_doctor,
        args=(doctor,),
    )

if record.referred_doctors:
    st.markdown(" ".join(pill_tag(d) for d in record.referred_doctors), unsafe_allow_html=True)

# ── Test selection ────────────────────────────────────────────────────────
section_title("🧪 Diagnostic Tests")
query = st.text_input("Search tests", placeholder="Filter by test name or category", key="test_query")
matches = [entry.name for entry in builder.filter_catalog(query)]
if builder.candidate and builder.candidate not in matches:
    matches.insert(0, builder.candidate)

t1, t2, t3 = st.columns([2, 2, 1])
t1.selectbox(
    "Select Test",
    options=[""] + matches,
    format_func=lambda value: value or "Choose diagnostic test",
    key="test_candidate",
    on_change=_select_candidate,
)

if builder.candidate_entry is not None:
    options = {option.price: option.variant for option in builder.price_options}
    t2.selectbox(
        "Price Option",
        options=[None] + list(options),
        format_func=lambda price: "Select price" if price is None else price_label(price, options[price], settings.currency_symbol),
        key="test_price",
        on_change=_select_price,
    )

with t3:
    st.markdown("<div style='height:28px'></div>", unsafe_allow_html=True)
    st.button("➕ Add Test", on_click=_add_test, use_container_width=True)

# ── Selected tests summary ────────────────────────────────────────────────
if record.selected_tests:
    section_title("Selected Tests Summary")
    for i, item in enumerate(record.selected_tests):
        row, action = st.columns([12, 1])
        row.markdown(
            line_item_html(item.name, item.variant, format_inr(item.price, settings.currency_symbol)),
            unsafe_allow_html=True,
        )
        action.button("🗑️", key=f"remove_{i}", on_click=_remove_test, args=(i,), help="Remove test")

    st.markdown(
        kpi_tile("Total Amount", format_inr(builder.compute_total(), settings.currency_symbol), COLORS["primary"]),
        unsafe_allow_html=True,
    )

# ── Generate report ───────────────────────────────────────────────────────
st.markdown("<div style='height:16px'></div>", unsafe_allow_html=True)
_spacer, right = st.columns([3, 1])
if right.button("Generate Report ➜", type="primary", use_container_width=True):
    try:
        snapshot = builder.finalize()
    except ValidationError as exc:
        st.error(exc.message)
    else:
        get_handoff().write(snapshot)
        st.switch_page("pages/1_report.py")
