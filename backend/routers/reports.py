from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from backend.config import Settings
from backend.routers.deps import get_settings
from backend.schemas.billing import PatientRecord
from backend.services.report import render_report, render_report_html

router = APIRouter(prefix="/api/reports", tags=["reports"])


@router.post("/render")
def render(snapshot: PatientRecord, settings: Settings = Depends(get_settings)):
    report = render_report(snapshot, settings)
    return {
        "statusCode": 200,
        "message": "Success",
        "data": report.model_dump(),
    }


@router.post("/render/html", response_class=HTMLResponse)
def render_html(snapshot: PatientRecord, settings: Settings = Depends(get_settings)):
    return HTMLResponse(render_report_html(render_report(snapshot, settings)))
