import sys
from pathlib import Path

APP_DIR = Path(__file__).resolve().parent.parent
for path in (APP_DIR, APP_DIR.parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from html import escape

import plotly.graph_objects as go
import streamlit as st

from backend.services.errors import MissingHandoff
from backend.services.report import line_items_frame, load_report, render_report_html
from utils.session import get_handoff
from utils.theme import (
    apply_theme,
    get_colors,
    hospital_header,
    line_item_html,
    plotly_layout_defaults,
    render_sidebar,
    section_title,
    signature_block,
    total_banner,
)

st.set_page_config(page_title="Billing Report", page_icon="📄", layout="wide")
apply_theme()
render_sidebar()
COLORS = get_colors()

# An absent or unreadable record is never shown as a report; send the user back to the form.
handoff = get_handoff()
if not handoff.has_snapshot():
    st.switch_page("app.py")
try:
    report = load_report(handoff)
except MissingHandoff:
    st.switch_page("app.py")

patient = report.patient

# ── Actions (screen only) ─────────────────────────────────────────────────
a1, a2, a3 = st.columns([2, 1, 1])
a1.page_link("app.py", label="Back to Form", icon="⬅️")
a2.download_button(
    "🖨️ Printable Report",
    data=render_report_html(report),
    file_name=f"billing_report_{patient.date}.html",
    mime="text/html",
    use_container_width=True,
    help="Open the downloaded file and print it from your browser",
)
a3.download_button(
    "⬇️ Line Items CSV",
    data=line_items_frame(report).to_csv(index=False),
    file_name=f"billing_items_{patient.date}.csv",
    mime="text/csv",
    use_container_width=True,
)

# ── Report ────────────────────────────────────────────────────────────────
hospital_header(report.laboratory_name, caption=report.title)

section_title("👤 Patient Information")
info_html_items = ""
for label, value in (
    ("Name", patient.name),
    ("Age", patient.age_display),
    ("Sex", patient.sex),
    ("Date", patient.date_display),
):
    info_html_items += (
        f'<div style="padding:8px 0;">'
        f'  <div class="info-label">{label}</div>'
        f'  <div class="info-value">{escape(value)}</div>'
        f'</div>'
    )
st.markdown(
    f"""
    <div class="card" style="border-left:4px solid {COLORS['primary']};">
        <div style="display:grid;grid-template-columns:repeat(4,1fr);gap:8px 32px;">
            {info_html_items}
        </div>
    </div>
    """,
    unsafe_allow_html=True,
)

section_title("🩺 Referring Doctor(s)")
for doctor in report.referred_doctors:
    st.markdown(f"• **{escape(doctor)}**")

section_title("🧪 Diagnostic Tests")
for line in report.lines:
    st.markdown(line_item_html(line.name, line.variant, line.price_display), unsafe_allow_html=True)

st.markdown(total_banner(report.total_display), unsafe_allow_html=True)

if len(report.lines) > 1:
    fig = go.Figure(
        go.Pie(
            labels=[f"{line.name} ({line.variant})" if line.variant else line.name for line in report.lines],
            values=[line.price for line in report.lines],
            hole=0.55,
            textinfo="label+percent",
            textfont=dict(size=13),
        )
    )
    fig.update_layout(**plotly_layout_defaults("Charges Breakdown"), showlegend=False)
    st.plotly_chart(fig, use_container_width=True)

# ── Signature & footer ────────────────────────────────────────────────────
st.markdown(
    signature_block(report.signature_label, report.hospital_name, report.footer, COLORS["border"]),
    unsafe_allow_html=True,
)
