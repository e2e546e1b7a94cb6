from datetime import datetime

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import Response
from sqlalchemy.orm import Session

from foreclosure_hub.core.database import get_db
from foreclosure_hub.models.property_value_lead import PropertyValueLead
from foreclosure_hub.schemas.calculator import (
    PropertyDetails,
    ValuationResponse,
    PropertyValueLeadRequest,
    PropertyValueLeadResponse,
    SaleOptionsRequest,
    SaleOptionsResponse,
    ComparisonReportRequest,
    ComparisonEmailRequest,
    ComparisonReportResponse,
)
from foreclosure_hub.schemas.lead import SubmitResponse
from foreclosure_hub.services import valuation_service, sale_options_service, template_service
from foreclosure_hub.services.comparison_service import build_report, NoEstimate
from foreclosure_hub.services.email_service import EmailService
from foreclosure_hub.services.pdf_service import PdfService
from foreclosure_hub.workers.crm.lead_sync import sync_property_value_lead, sync_comparison_requester

router = APIRouter(prefix="/api/calculators", tags=["Calculators"])


def _report_or_422(req: ComparisonReportRequest):
    try:
        return build_report(req.model_dump())
    except NoEstimate as e:
        raise HTTPException(status_code=422, detail=str(e))


# 1. Property value estimate
@router.post("/valuation", response_model=ValuationResponse)
def estimate_value(req: PropertyDetails):
    return valuation_service.estimate_value(**req.model_dump())


# 2. Contact gate in front of the estimate
@router.post("/valuation/leads", response_model=PropertyValueLeadResponse)
def capture_property_value_lead(
    req: PropertyValueLeadRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    lead = PropertyValueLead(
        name=req.name.strip(),
        email=req.email.lower(),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    db.add(lead)
    db.commit()
    db.refresh(lead)

    background_tasks.add_task(sync_property_value_lead, lead.id)
    return {"success": True, "lead_id": lead.id}


# 3. Sale options for a known value
@router.post("/sale-options", response_model=SaleOptionsResponse)
def compare_sale_options(req: SaleOptionsRequest):
    return sale_options_service.compare_sale_options(req.property_value, req.mortgage_balance)


# 4. Estimate + comparison in one call
@router.post("/sale-options/report", response_model=ComparisonReportResponse)
def comparison_report(req: ComparisonReportRequest):
    return _report_or_422(req)


@router.post("/sale-options/pdf")
def download_comparison_pdf(req: ComparisonReportRequest):
    report = _report_or_422(req)
    pdf = PdfService().render_comparison(req.model_dump(), report["valuation"], report["comparison"], datetime.now())
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="sale-options-comparison.pdf"'},
    )


@router.post("/sale-options/email", response_model=SubmitResponse)
def email_comparison(req: ComparisonEmailRequest, background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
    report = _report_or_422(req)
    pdf = PdfService().render_comparison(req.model_dump(), report["valuation"], report["comparison"], datetime.now())

    first_name = req.first_name or req.email.split("@")[0]
    subject, html = template_service.comparison_email(first_name, report["comparison"])

    ok, _ = EmailService().send_logged(
        db, "comparison_report", req.email, subject, html,
        attachments=[("sale-options-comparison.pdf", pdf)],
    )

    background_tasks.add_task(
        sync_comparison_requester, req.email, first_name,
        report["valuation"]["estimated_value"], req.mortgage_balance,
    )

    if not ok:
        return {"success": False, "message": "Failed to send comparison report. Please try again."}
    return {"success": True, "message": f"Comparison report sent to {req.email}"}
