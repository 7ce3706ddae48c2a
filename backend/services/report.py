import re
from html import escape
from typing import Iterable

import pandas as pd

from backend.config import Settings, settings as default_settings
from backend.schemas.billing import LineItem, PatientRecord
from backend.schemas.report import BillingReport, ReportLine, ReportPatient
from backend.services.handoff import HandoffChannel

_LAKH_GROUPS_RE = re.compile(r"(\d)(?=(\d{2})+$)")


def compute_total(items: Iterable[LineItem]) -> int:
    return sum(item.price for item in items)


def format_inr(amount: int, currency_symbol: str = "₹") -> str:
    """Format an amount with Indian digit grouping, e.g. 150000 -> '₹1,50,000'."""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        grouped = _LAKH_GROUPS_RE.sub(r"\1,", head)
        digits = f"{grouped},{tail}"
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency_symbol}{digits}"


def render_report(snapshot: PatientRecord, settings: Settings | None = None) -> BillingReport:
    cfg = settings or default_settings
    lines = [
        ReportLine(
            name=item.name,
            variant=item.variant,
            price=item.price,
            price_display=format_inr(item.price, cfg.currency_symbol),
        )
        for item in snapshot.selected_tests
    ]
    total = compute_total(snapshot.selected_tests)
    return BillingReport(
        hospital_name=cfg.hospital_name,
        laboratory_name=cfg.laboratory_name,
        patient=ReportPatient(
            name=snapshot.name,
            age=snapshot.age,
            age_display=f"{snapshot.age} years",
            sex=snapshot.sex.value,
            date=snapshot.date.isoformat(),
            date_display=snapshot.date.strftime("%d/%m/%Y"),
        ),
        referred_doctors=list(snapshot.referred_doctors),
        lines=lines,
        total=total,
        total_display=format_inr(total, cfg.currency_symbol),
        footer=f"Thank you for choosing {cfg.hospital_name} {cfg.laboratory_name}",
    )


def load_report(channel: HandoffChannel, settings: Settings | None = None) -> BillingReport:
    """Render whatever the billing form handed off. Raises MissingHandoff when nothing is there."""
    return render_report(channel.read(), settings)


def line_items_frame(report: BillingReport) -> pd.DataFrame:
    rows = [{"Test": line.name, "Variant": line.variant, "Price": line.price} for line in report.lines]
    return pd.DataFrame(rows, columns=["Test", "Variant", "Price"])


_PRINT_CSS = """
@page { margin: 0.5in; size: A4; }
body { font-family: Inter, system-ui, sans-serif; color: #1E293B; margin: 0; }
.report { max-width: 56rem; margin: 0 auto; padding: 1.5rem; }
.header { text-align: center; margin-bottom: 1.5rem; }
.header h1 { font-size: 1.875rem; margin: 0 0 0.5rem 0; color: #0D9488; }
.header .lab { font-size: 1.125rem; color: #475569; margin: 0; }
.header .title { font-size: 0.875rem; color: #475569; margin-top: 0.5rem; }
h2 { font-size: 1.15rem; margin: 1.5rem 0 0.75rem 0; }
.patient { display: grid; grid-template-columns: repeat(4, 1fr); gap: 1rem; }
.label { font-size: 0.8rem; color: #475569; }
.value { font-weight: 600; }
table { width: 100%; border-collapse: collapse; }
td { padding: 0.6rem 0.75rem; border-bottom: 1px solid #E2E8F0; }
td.price { text-align: right; font-weight: 700; }
.variant { font-size: 0.85rem; color: #475569; }
.total { display: flex; justify-content: space-between; font-size: 1.5rem; font-weight: 700; margin-top: 1.5rem; }
.signature { display: flex; justify-content: flex-end; margin-top: 4rem; text-align: center; }
.signature .line { width: 12rem; border-bottom: 1px solid #9CA3AF; margin-bottom: 0.5rem; }
.footer { margin-top: 2rem; padding-top: 1rem; border-top: 1px solid #E2E8F0; text-align: center; font-size: 0.875rem; color: #475569; }
"""


def render_report_html(report: BillingReport) -> str:
    """Standalone A4 document for the browser print dialog."""
    patient = report.patient
    patient_cells = "".join(
        f'<div><div class="label">{label}</div><div class="value">{escape(value)}</div></div>'
        for label, value in (
            ("Name", patient.name),
            ("Age", patient.age_display),
            ("Sex", patient.sex),
            ("Date", patient.date_display),
        )
    )
    doctors = "".join(f"<li>{escape(doctor)}</li>" for doctor in report.referred_doctors)
    rows = ""
    for line in report.lines:
        variant = f'<div class="variant">({escape(line.variant)})</div>' if line.variant else ""
        rows += f'<tr><td><strong>{escape(line.name)}</strong>{variant}</td><td class="price">{escape(line.price_display)}</td></tr>'

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{escape(report.title)} - {escape(patient.name)}</title>
<style>{_PRINT_CSS}</style>
</head>
<body>
<div class="report">
  <div class="header">
    <h1>{escape(report.hospital_name)}</h1>
    <p class="lab">{escape(report.laboratory_name)}</p>
    <p class="title">{escape(report.title)}</p>
  </div>
  <h2>Patient Information</h2>
  <div class="patient">{patient_cells}</div>
  <h2>Referring Doctor(s)</h2>
  <ul>{doctors}</ul>
  <h2>Diagnostic Tests</h2>
  <table>{rows}</table>
  <div class="total"><span>Total Amount:</span><span>{escape(report.total_display)}</span></div>
  <div class="signature">
    <div>
      <div class="line"></div>
      <div>{escape(report.signature_label)}</div>
      <div class="label">{escape(report.hospital_name)}</div>
    </div>
  </div>
  <div class="footer">{escape(report.footer)}</div>
</div>
</body>
</html>
"""
