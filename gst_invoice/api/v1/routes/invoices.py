# gst_invoice/api/v1/routes/invoices.py
"""
Invoice endpoints: default form, live preview and the PDF / xlsx downloads.

Every endpoint takes the full form snapshot; nothing is stored server-side.
"""

from __future__ import annotations

import logging
from io import BytesIO

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import StreamingResponse

from gst_invoice.api.v1.envelope import ok
from gst_invoice.domain.models.invoice import Invoice, InvoiceFormData
from gst_invoice.domain.services.form_state import new_form_data
from gst_invoice.domain.services.invoice_builder import build_invoice, export_filename
from gst_invoice.domain.services.invoice_excel import generate_invoice_excel
from gst_invoice.domain.services.invoice_pdf import generate_invoice_pdf, plan_invoice_pages

logger = logging.getLogger("api.v1.invoices")

router = APIRouter(prefix="/invoices", tags=["Invoices"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _exportable(form: InvoiceFormData) -> Invoice:
    if not form.items:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Add at least one item before exporting",
        )
    return build_invoice(form)


def _download(content: bytes, media_type: str, filename: str) -> StreamingResponse:
    return StreamingResponse(
        BytesIO(content),
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/new", response_model=dict)
async def new_invoice_form():
    """A fresh form with today's date and the default terms."""
    return ok(new_form_data().model_dump())


@router.post("/preview", response_model=dict)
async def preview_invoice(form: InvoiceFormData):
    """Computed totals, amount in words and page count for the current form."""
    invoice = build_invoice(form)
    pages = plan_invoice_pages(invoice)
    return ok({
        "invoice": invoice.model_dump(),
        "page_count": len(pages),
        "can_export": bool(invoice.items),
    })


@router.post("/pdf")
async def download_pdf(form: InvoiceFormData):
    invoice = _exportable(form)
    filename = export_filename(invoice, "pdf")
    logger.info("PDF export requested: %s", filename)
    return _download(generate_invoice_pdf(invoice), "application/pdf", filename)


@router.post("/xlsx")
async def download_xlsx(form: InvoiceFormData):
    invoice = _exportable(form)
    filename = export_filename(invoice, "xlsx")
    logger.info("Excel export requested: %s", filename)
    return _download(generate_invoice_excel(invoice), XLSX_MEDIA_TYPE, filename)
