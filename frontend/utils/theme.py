"""
Theme, CSS injection, color palette, and small HTML helpers
for the diagnostic billing Streamlit frontend.
"""

from __future__ import annotations

from html import escape

import streamlit as st

from backend.config import settings

# ---------------------------------------------------------------------------
# Color palettes (light + dark)
# ---------------------------------------------------------------------------
COLORS_LIGHT: dict[str, str] = {
    "primary": "#0D9488",       # teal-600
    "primary_light": "#CCFBF1", # teal-100
    "accent": "#F97316",        # orange-500
    "danger": "#EF4444",        # red-500
    "success": "#10B981",       # emerald-500
    "info": "#3B82F6",          # blue-500
    "text": "#1E293B",          # slate-800
    "text_muted": "#475569",    # slate-600
    "bg_card": "#FFFFFF",
    "bg_page": "#F8FAFC",       # slate-50
    "border": "#E2E8F0",        # slate-200
}

COLORS_DARK: dict[str, str] = {
    "primary": "#14B8A6",       # teal-400
    "primary_light": "#134E4A", # teal-900
    "accent": "#FB923C",        # orange-400
    "danger": "#F87171",        # red-400
    "success": "#34D399",       # emerald-400
    "info": "#60A5FA",          # blue-400
    "text": "#F1F5F9",          # slate-100
    "text_muted": "#94A3B8",    # slate-400
    "bg_card": "#1E293B",       # slate-800
    "bg_page": "#0F172A",       # slate-900
    "border": "#334155",        # slate-700
}


def get_colors() -> dict[str, str]:
    """Return the active palette based on ``st.session_state.dark_mode``."""
    if st.session_state.get("dark_mode", False):
        return COLORS_DARK
    return COLORS_LIGHT


def plotly_layout_defaults(title: str = "", height: int = 320) -> dict:
    """Common Plotly layout kwargs for the active palette."""
    c = get_colors()
    return dict(
        title=dict(text=title, font=dict(size=16, color=c["text"])),
        template="plotly_dark" if st.session_state.get("dark_mode") else "plotly_white",
        height=height,
        margin=dict(l=20, r=20, t=50, b=20),
        font=dict(family="Inter, system-ui, sans-serif", size=13, color=c["text"]),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )


# ---------------------------------------------------------------------------
# CSS injection
# ---------------------------------------------------------------------------
_CSS_TEMPLATE = """
<style>
[data-testid="stAppViewContainer"] {
    background-color: %(bg_page)s;
}
[data-testid="stMain"] p,
[data-testid="stMain"] span,
[data-testid="stMain"] li {
    color: %(text)s;
}

/* ---------- Card container ---------- */
.card {
    background: %(bg_card)s;
    border: 1px solid %(border)s;
    border-radius: 12px;
    padding: 24px;
    margin-bottom: 16px;
    box-shadow: 0 1px 3px rgba(0,0,0,0.06);
}

/* ---------- Hospital header ---------- */
.hospital-header { text-align: center; margin-bottom: 24px; }
.hospital-name { font-size: 2.2rem; font-weight: 800; color: %(primary)s; }
.hospital-sub { font-size: 1.1rem; color: %(text_muted)s; }
.card-muted { color: %(text_muted)s; font-size: 0.85rem; }

/* ---------- Line items ---------- */
.line-item {
    display: flex;
    justify-content: space-between;
    align-items: center;
    background: %(bg_card)s;
    border: 1px solid %(border)s;
    border-radius: 8px;
    padding: 12px 16px;
    margin-bottom: 8px;
}
.line-name { font-weight: 600; color: %(text)s; }
.line-variant { font-size: 0.85rem; color: %(text_muted)s; }
.line-price { font-weight: 700; font-size: 1.05rem; color: %(text)s; }

/* ---------- KPI tile ---------- */
.kpi-tile {
    background: %(bg_card)s;
    border: 1px solid %(border)s;
    border-radius: 12px;
    padding: 20px;
    text-align: center;
    box-shadow: 0 1px 3px rgba(0,0,0,0.06);
}
.kpi-value { font-size: 2rem; font-weight: 800; line-height: 1.1; }
.kpi-label {
    font-size: 0.82rem;
    color: %(text_muted)s;
    text-transform: uppercase;
    letter-spacing: 0.04em;
    margin-top: 6px;
}

/* ---------- Info grid ---------- */
.info-label { color: %(text_muted)s; font-size: 0.78rem; text-transform: uppercase; letter-spacing: 0.04em; }
.info-value { color: %(text)s; font-size: 1rem; font-weight: 600; }

/* ---------- Pill tags ---------- */
.pill {
    display: inline-block;
    padding: 3px 12px;
    border-radius: 9999px;
    font-size: 0.78rem;
    font-weight: 500;
    margin: 2px 4px 2px 0;
    border: 1px solid %(border)s;
    background: %(primary_light)s;
    color: %(text)s;
}

/* ---------- Total banner ---------- */
.total-banner {
    display: flex;
    justify-content: space-between;
    align-items: center;
    background: %(primary_light)s;
    border-radius: 12px;
    padding: 20px 24px;
    margin: 16px 0;
}
.total-label { font-size: 1.4rem; font-weight: 700; color: %(text)s; }
.total-value { font-size: 1.9rem; font-weight: 800; color: %(primary)s; }

/* ---------- Section title ---------- */
.section-title {
    font-size: 1.15rem;
    font-weight: 700;
    color: %(text)s;
    margin: 24px 0 12px 0;
    padding-bottom: 8px;
    border-bottom: 2px solid %(primary)s;
    display: inline-block;
}

/* ---------- Sidebar ---------- */
[data-testid="stSidebar"] {
    background-color: %(bg_card)s !important;
}
[data-testid="stSidebarNav"] a[aria-current="page"] span {
    color: %(primary)s !important;
    font-weight: 700;
}

/* ---------- Inputs ---------- */
[data-testid="stTextInput"] input,
[data-testid="stDateInput"] input,
[data-testid="stSelectbox"] div[data-baseweb="select"] {
    color: %(text)s !important;
    background-color: %(bg_card)s !important;
    border-color: %(border)s !important;
}
</style>
"""


def apply_theme() -> None:
    """Inject global CSS into the page. Call once at the top of every page."""
    if "dark_mode" not in st.session_state:
        st.session_state.dark_mode = False
    st.markdown(_CSS_TEMPLATE % get_colors(), unsafe_allow_html=True)


def render_sidebar() -> None:
    """Render the laboratory name and the dark-mode toggle."""
    with st.sidebar:
        st.markdown(f"**{escape(settings.hospital_name)}**  \n{escape(settings.laboratory_name)}")
        st.divider()
        dark = st.toggle(
            "🌙 Dark mode",
            value=st.session_state.get("dark_mode", False),
            key="dark_mode_toggle",
        )
        if dark != st.session_state.get("dark_mode", False):
            st.session_state.dark_mode = dark
            st.rerun()


# ---------------------------------------------------------------------------
# Reusable HTML helpers
# ---------------------------------------------------------------------------
def hospital_header(subtitle: str, caption: str | None = None) -> None:
    caption_html = f'<div class="card-muted" style="margin-top:6px;">{escape(caption)}</div>' if caption else ""
    st.markdown(
        f"""
        <div class="hospital-header">
            <div class="hospital-name">{escape(settings.hospital_name)}</div>
            <div class="hospital-sub">{escape(subtitle)}</div>
            {caption_html}
        </div>
        """,
        unsafe_allow_html=True,
    )


def kpi_tile(label: str, value: str | int | float, color: str) -> str:
    """Return HTML for a single KPI tile."""
    return (
        f'<div class="kpi-tile">'
        f'  <div class="kpi-value" style="color:{color};">{escape(str(value))}</div>'
        f'  <div class="kpi-label">{escape(label)}</div>'
        f'</div>'
    )


def line_item_html(name: str, variant: str, price_display: str) -> str:
    variant_html = f'<div class="line-variant">({escape(variant)})</div>' if variant else ""
    return (
        f'<div class="line-item">'
        f'  <div><div class="line-name">{escape(name)}</div>{variant_html}</div>'
        f'  <div class="line-price">{escape(price_display)}</div>'
        f'</div>'
    )


def total_banner(total_display: str) -> str:
    return (
        f'<div class="total-banner">'
        f'  <span class="total-label">Total Amount:</span>'
        f'  <span class="total-value">{escape(total_display)}</span>'
        f'</div>'
    )


def section_title(text: str) -> None:
    """Render a styled section heading."""
    st.markdown(f'<div class="section-title">{escape(text)}</div>', unsafe_allow_html=True)


def pill_tag(text: str) -> str:
    """Return HTML for a small pill tag."""
    return f'<span class="pill">{escape(text)}</span>'


def signature_block(signature_label: str, hospital_name: str, footer: str, border_color: str) -> str:
    """Return HTML for the signature line and the closing footer of a report."""
    return (
        f'<div style="display:flex;justify-content:flex-end;margin-top:48px;">'
        f'  <div style="text-align:center;">'
        f'    <div style="width:12rem;border-bottom:1px solid {border_color};margin-bottom:8px;"></div>'
        f'    <div style="font-weight:600;">{escape(signature_label)}</div>'
        f'    <div class="card-muted">{escape(hospital_name)}</div>'
        f'  </div>'
        f'</div>'
        f'<div style="margin-top:32px;padding-top:16px;border-top:1px solid {border_color};text-align:center;" class="card-muted">'
        f'  {escape(footer)}'
        f'</div>'
    )
