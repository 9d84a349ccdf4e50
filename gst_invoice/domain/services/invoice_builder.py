# gst_invoice/domain/services/invoice_builder.py
"""
Turn the live form state into the immutable ``Invoice`` the exporters consume.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import CompanyDetails, Invoice, InvoiceFormData
from gst_invoice.domain.services.gst_calculator import calculate_gst, round_half_up
from gst_invoice.domain.services.number_words import number_to_words

logger = logging.getLogger("invoice_builder")


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: int
    cgst: int
    sgst: int
    igst: int
    grand_total: int


def calculate_totals(form: InvoiceFormData) -> InvoiceTotals:
    """Subtotal, tax split and grand total for the current items."""
    subtotal = round_half_up(sum(item.amount for item in form.items))
    gst = calculate_gst(subtotal, form.gst_rate)

    if form.is_interstate:
        cgst, sgst, igst = 0, 0, gst.igst
    else:
        cgst, sgst, igst = gst.cgst, gst.sgst, 0

    return InvoiceTotals(
        subtotal=subtotal,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        grand_total=gst.total,
    )


def split_terms(text: str) -> tuple[str, ...]:
    """One term per non-blank line, in order."""
    return tuple(line.strip() for line in text.splitlines() if line.strip())


def build_invoice(form: InvoiceFormData) -> Invoice:
    """Snapshot the form into an Invoice. Same form in, equal Invoice out."""
    totals = calculate_totals(form)
    invoice = Invoice(
        invoice_number=form.invoice_number,
        invoice_date=form.invoice_date,
        due_date=form.due_date or None,
        po_number=form.po_number or None,
        po_date=form.po_date or None,
        display_name=form.display_name or None,
        duration=form.duration or None,
        billing_party=form.billing_party,
        items=form.items,
        gst_rate=form.gst_rate,
        is_interstate=form.is_interstate,
        subtotal=totals.subtotal,
        cgst=totals.cgst,
        sgst=totals.sgst,
        igst=totals.igst,
        grand_total=totals.grand_total,
        total_in_words=number_to_words(max(round_half_up(totals.grand_total), 0)),
        terms_and_conditions=split_terms(form.terms_and_conditions),
    )
    logger.debug(
        "Built invoice %s: %d items, grand total %d",
        invoice.invoice_number, len(invoice.items), invoice.grand_total,
    )
    return invoice


def company_details() -> CompanyDetails:
    """The issuer block, from configuration."""
    return CompanyDetails(
        name=settings.COMPANY_NAME,
        address=settings.COMPANY_ADDRESS,
        city=settings.COMPANY_CITY,
        state=settings.HOME_STATE,
        pincode=settings.COMPANY_PINCODE,
        gstin=settings.COMPANY_GSTIN,
        pan=settings.COMPANY_PAN,
        phone=settings.COMPANY_PHONE,
        email=settings.COMPANY_EMAIL,
        website=settings.COMPANY_WEBSITE,
    )


def export_filename(invoice: Invoice, extension: str) -> str:
    """Download name for an exported invoice, e.g. ``Invoice_DA-0042.pdf``."""
    return f"Invoice_{invoice.invoice_number}.{extension}"
