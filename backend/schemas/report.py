from pydantic import BaseModel, Field


class ReportPatient(BaseModel):
    name: str
    age: str
    age_display: str = Field(description="Age with unit, e.g. '34 years'")
    sex: str
    date: str = Field(description="ISO date of the bill")
    date_display: str = Field(description="Date formatted DD/MM/YYYY")


class ReportLine(BaseModel):
    name: str
    variant: str = ""
    price: int
    price_display: str


class BillingReport(BaseModel):
    """Fully computed, formatted billing report ready for display or printing."""
    hospital_name: str
    laboratory_name: str
    title: str = "Billing Report"
    patient: ReportPatient
    referred_doctors: list[str]
    lines: list[ReportLine]
    total: int
    total_display: str
    signature_label: str = "Doctor's Signature"
    footer: str
