# gst_invoice/domain/services/invoice_excel.py
"""
Export an invoice as a single-sheet ``.xlsx`` workbook (openpyxl).

The sheet is a flat, printable rendition of the PDF: company block, invoice
references, bill-to party, the item table, tax summary, amount in words,
numbered terms and the signature lines.
"""

from __future__ import annotations

import io
import logging
from typing import Any, Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from gst_invoice.domain.models.invoice import CompanyDetails, Invoice
from gst_invoice.domain.services.invoice_builder import company_details

logger = logging.getLogger("invoice_excel")

SHEET_TITLE = "Invoice"
TABLE_HEADER = (
    "S.No.", "Town", "Location", "HSN", "Media", "Size",
    "Area", "Type", "Rate P.M.", "Period", "Amount",
)
COLUMN_WIDTHS = (8, 15, 20, 12, 15, 15, 10, 15, 12, 15, 15)
HEADER_FILL = PatternFill(start_color="2980B9", end_color="2980B9", fill_type="solid")

# Label lands in column I, value in column K
SUMMARY_LABEL_COLUMN = 8
SUMMARY_VALUE_COLUMN = 10


def _summary_row(label: str, value: int) -> list[Any]:
    row: list[Any] = [""] * (SUMMARY_VALUE_COLUMN + 1)
    row[SUMMARY_LABEL_COLUMN] = label
    row[SUMMARY_VALUE_COLUMN] = value
    return row


def build_sheet_rows(invoice: Invoice, company: CompanyDetails) -> tuple[list[list[Any]], int]:
    """
    All sheet rows in order.

    Returns:
        (rows, table header row index) - the index is 0-based.
    """
    party = invoice.billing_party
    rows: list[list[Any]] = [
        [company.name],
        [company.address],
        [f"{company.city}, {company.state} - {company.pincode}"],
        [f"Phone: {company.phone} | Email: {company.email}"],
        [f"GSTIN: {company.gstin}"],
        [""],
        ["TAX INVOICE"],
        [""],
        [f"Invoice No: {invoice.invoice_number}", "", "", f"Invoice Date: {invoice.invoice_date}"],
        [f"Due Date: {invoice.due_date}" if invoice.due_date else ""],
        [""],
        ["BILL TO:"],
        [party.name],
        [party.address],
        [f"{party.city}, {party.state} - {party.pincode}"],
        [f"GSTIN: {party.gstin}"],
        [""],
        ["INVOICE DETAILS:"],
        list(TABLE_HEADER),
    ]
    header_index = len(rows) - 1

    for item in invoice.items:
        rows.append([
            item.sno, item.town, item.location, item.hsn, item.media, item.size,
            item.area, item.type, item.rate_pm, item.period, item.amount,
        ])

    rows.append([""])
    rows.append(_summary_row("Subtotal:", invoice.subtotal))
    if invoice.cgst > 0:
        rows.append(_summary_row("CGST:", invoice.cgst))
        rows.append(_summary_row("SGST:", invoice.sgst))
    else:
        rows.append(_summary_row("IGST:", invoice.igst))
    rows.append(_summary_row("Grand Total:", invoice.grand_total))

    rows += [
        [""],
        [f"Amount in Words: {invoice.total_in_words}"],
        [""],
        ["TERMS & CONDITIONS:"],
    ]
    rows += [[f"{number}. {term}"] for number, term in enumerate(invoice.terms_and_conditions, start=1)]
    rows += [
        [""],
        [""],
        [f"For {company.name}"],
        ["Authorized Signatory"],
    ]
    return rows, header_index


def generate_invoice_excel(invoice: Invoice, *, company: Optional[CompanyDetails] = None) -> bytes:
    """
    Render the invoice as an xlsx workbook.

    Args:
        invoice: Snapshot from ``build_invoice``.
        company: Issuer details; taken from settings when omitted.

    Returns:
        Workbook file as bytes.
    """
    if company is None:
        company = company_details()

    rows, header_index = build_sheet_rows(invoice, company)

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    for row in rows:
        ws.append(row)

    for col_index, width in enumerate(COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col_index)].width = width

    # Company block and title
    for row in ws.iter_rows(min_row=1, max_row=7):
        for cell in row:
            if cell.value in (None, ""):
                continue
            size = 16 if cell.row == 1 else 14 if cell.row == 7 else 12
            cell.font = Font(bold=True, size=size)
            cell.alignment = Alignment(horizontal="center")

    for cell in ws[header_index + 1]:
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center")

    buf = io.BytesIO()
    wb.save(buf)
    logger.info("Exported invoice %s to xlsx: %d rows", invoice.invoice_number, len(rows))
    return buf.getvalue()
