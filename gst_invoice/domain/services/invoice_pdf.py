# gst_invoice/domain/services/invoice_pdf.py
"""
Generate the paginated tax invoice PDF using ReportLab.

Two passes:
  1. ``paginate`` plans the pages, measuring rows against the printable
     height of each page, so the page count is known up front.
  2. Each planned page is drawn once, in order: art, boundary box, markers,
     its slice of the table and, on the last page, words/terms/signature.

Header and footer art is resolved before either pass (see page_art.py).
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from gst_invoice.domain.models.invoice import CompanyDetails, Invoice
from gst_invoice.domain.services.formatting import format_duration_display
from gst_invoice.domain.services.gst_state_codes import get_state_from_gstin
from gst_invoice.domain.services.invoice_builder import company_details
from gst_invoice.domain.services.invoice_layout import (
    BASE_FONT_SIZE,
    COLUMNS,
    HEADER_TITLES,
    LABEL_COLUMN,
    PagePlan,
    TableRow,
    build_table_rows,
    paginate,
    responsive_font_size,
    wraps,
)
from gst_invoice.domain.services.page_art import PageArt, draw_footer, draw_header, resolve_page_art
from gst_invoice.domain.services.pdf_canvas import FONT, FONT_BOLD, LIGHT_GREY, Sheet

logger = logging.getLogger("invoice_pdf")

# ---------------------------------------------------------------------------
# Page geometry (mm from the top-left corner of an A4 page)
# ---------------------------------------------------------------------------
PAGE_WIDTH = A4[0] / mm
PAGE_HEIGHT = A4[1] / mm
MARGIN = 10
INVOICE_TOP = 40                      # below the 25mm header art + margins
FOOTER_SPACE = 50
BOX_HEIGHT = PAGE_HEIGHT - INVOICE_TOP - FOOTER_SPACE
BOX_BOTTOM = INVOICE_TOP + BOX_HEIGHT

TABLE_X = MARGIN + 2
TABLE_WIDTH = PAGE_WIDTH - MARGIN * 2 - 4
CONTINUATION_TABLE_TOP = INVOICE_TOP + 25
MARKER_SPACE = 12                     # room under a table for the C/F label

DETAILS_TOP = INVOICE_TOP + 24
DETAILS_HEIGHT = 45
DESCRIPTION_TOP = DETAILS_TOP + DETAILS_HEIGHT + 5
DESCRIPTION_HEIGHT = 20
FIRST_TABLE_TOP = DESCRIPTION_TOP + DESCRIPTION_HEIGHT + 5

LINE_STEP = 3.5
TERM_STEP = 4
WORDS_OFFSET = 6                      # below the last table
TERMS_OFFSET = 12
SIGNATURE_OFFSET = 20                 # below the first term

CELL_PADDING = 2                      # points
GRID_WIDTH = 0.25

COLUMN_WIDTHS = [col.width * TABLE_WIDTH * mm for col in COLUMNS]


# ---------------------------------------------------------------------------
# Table
# ---------------------------------------------------------------------------

def _clip(text: str, font_size: float, width: float) -> str:
    """Trim text until it fits the cell width (in points)."""
    while text and stringWidth(text, FONT, font_size) > width:
        text = text[:-1]
    return text


def _item_cell(text: str, col_index: int, font_size: int):
    column = COLUMNS[col_index]
    if wraps(text, column.max_chars):
        alignment = TA_RIGHT if column.align == "RIGHT" else TA_CENTER
        style = ParagraphStyle(
            f"Cell{col_index}",
            fontName=FONT,
            fontSize=font_size,
            leading=font_size * 1.2,
            alignment=alignment,
        )
        return Paragraph(escape(text), style)
    return _clip(text, font_size, COLUMN_WIDTHS[col_index] - CELL_PADDING * 2)


def _table_style(rows: Sequence[TableRow], *, with_header: bool) -> list:
    cmds = [
        ("FONTNAME", (0, 0), (-1, -1), FONT),
        ("FONTSIZE", (0, 0), (-1, -1), BASE_FONT_SIZE),
        ("LEADING", (0, 0), (-1, -1), BASE_FONT_SIZE * 1.2),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("BOTTOMPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("LEFTPADDING", (0, 0), (-1, -1), CELL_PADDING),
        ("RIGHTPADDING", (0, 0), (-1, -1), CELL_PADDING),
    ]
    for col_index, column in enumerate(COLUMNS):
        cmds.append(("ALIGN", (col_index, 0), (col_index, -1), column.align))

    offset = 0
    if with_header:
        offset = 1
        cmds += [
            ("BACKGROUND", (0, 0), (-1, 0), LIGHT_GREY),
            ("FONTNAME", (0, 0), (-1, 0), FONT_BOLD),
            ("FONTSIZE", (0, 0), (-1, 0), 8),
            ("LEADING", (0, 0), (-1, 0), 8 * 1.2),
            ("ALIGN", (0, 0), (-1, 0), "CENTER"),
            ("GRID", (0, 0), (-1, 0), GRID_WIDTH, colors.black),
        ]

    for index, row in enumerate(rows):
        r = index + offset
        if not row.is_total:
            cmds.append(("GRID", (0, r), (-1, r), GRID_WIDTH, colors.black))
            for col_index, text in enumerate(row.cells):
                size = responsive_font_size(text, COLUMNS[col_index].max_chars)
                if size != BASE_FONT_SIZE:
                    cmds.append(("FONTSIZE", (col_index, r), (col_index, r), size))
            continue

        # Totals: only the label and amount cells are boxed
        cmds += [
            ("GRID", (LABEL_COLUMN, r), (-1, r), GRID_WIDTH, colors.black),
            ("ALIGN", (LABEL_COLUMN, r), (LABEL_COLUMN, r), "LEFT"),
        ]
        if row.is_emphasised:
            cmds += [
                ("FONTNAME", (LABEL_COLUMN, r), (-1, r), FONT_BOLD),
                ("BACKGROUND", (LABEL_COLUMN, r), (-1, r), LIGHT_GREY),
            ]
    return cmds


def build_table(rows: Sequence[TableRow], *, with_header: bool = True) -> Table:
    """A ReportLab table for one page's slice of the combined rows."""
    data = [list(HEADER_TITLES)] if with_header else []
    for row in rows:
        if row.is_total:
            data.append(list(row.cells))
            continue
        data.append([
            _item_cell(text, col_index, responsive_font_size(text, COLUMNS[col_index].max_chars))
            for col_index, text in enumerate(row.cells)
        ])

    table = Table(data, colWidths=COLUMN_WIDTHS)
    table.setStyle(TableStyle(_table_style(rows, with_header=with_header)))
    return table


def table_height(table: Table) -> float:
    """Rendered height of a table in mm."""
    _, height = table.wrap(TABLE_WIDTH * mm, PAGE_HEIGHT * mm)
    return height / mm


def final_block_height(term_count: int) -> float:
    """Words line, numbered terms and the signature block under the last table."""
    return TERMS_OFFSET + max(TERM_STEP * max(term_count - 1, 0), SIGNATURE_OFFSET) + 2


def table_top(plan: PagePlan) -> float:
    return FIRST_TABLE_TOP if plan.is_first else CONTINUATION_TABLE_TOP


class PageFit:
    """
    Measures how many rows fit under the table top of a page.

    Row heights are fixed by the column widths, so each row is measured once
    on its own and the page capacity is a running sum. Non-final pages keep
    room for the C/F label, the final page for the words/terms/signature.
    """

    def __init__(self, rows: Sequence[TableRow], term_count: int):
        self._heights = [table_height(build_table([row], with_header=False)) for row in rows]
        header = table_height(build_table([], with_header=True))
        self._room = {
            first: BOX_BOTTOM - (FIRST_TABLE_TOP if first else CONTINUATION_TABLE_TOP) - header
            for first in (True, False)
        }
        self._final = final_block_height(term_count)

    def __call__(self, remaining: Sequence[TableRow], reserve_final: bool, first_page: bool = False) -> int:
        start = len(self._heights) - len(remaining)
        room = self._room[first_page] - (self._final if reserve_final else MARKER_SPACE)
        used = 0.0
        count = 0
        for height in self._heights[start:]:
            if used + height > room:
                break
            used += height
            count += 1
        return count


# ---------------------------------------------------------------------------
# Page sections
# ---------------------------------------------------------------------------

def _draw_lines(sheet: Sheet, lines: list[str], x: float, y: float, limit: float) -> float:
    for line in lines:
        if y >= limit:
            break
        sheet.text(x, y, line)
        y += LINE_STEP
    return y


def _draw_party_and_invoice_details(sheet: Sheet, invoice: Invoice) -> None:
    top = DETAILS_TOP
    limit = top + DETAILS_HEIGHT - 5
    sheet.rect(MARGIN + 2, top, PAGE_WIDTH - MARGIN * 2 - 4, DETAILS_HEIGHT)
    middle_x = PAGE_WIDTH / 2 + 15
    sheet.line(middle_x, top, middle_x, top + DETAILS_HEIGHT)

    # Left: bill-to party
    party = invoice.billing_party
    left_x = MARGIN + 5
    left_width = middle_x - MARGIN - 10
    sheet.font(7)
    sheet.text(left_x, top + 6, "To,")

    y = top + 12
    sheet.font(7, bold=True)
    y = _draw_lines(sheet, sheet.split_text(party.name, left_width), left_x, y, limit)
    sheet.font(7)
    y = _draw_lines(sheet, sheet.split_text(party.address, left_width), left_x, y, limit)
    city_line = f"{party.city}, {party.state} - {party.pincode}"
    y = _draw_lines(sheet, sheet.split_text(city_line, left_width), left_x, y, limit)

    if y < limit:
        sheet.text(left_x, y, "GSTIN: ")
        sheet.font(7, bold=True)
        sheet.text(left_x + 15, y, party.gstin or "")
        sheet.font(7)
        y += LINE_STEP

    info = get_state_from_gstin(party.gstin)
    state_line = f"State: {party.state}, State Code: {info.code if info else '00'}"
    _draw_lines(sheet, sheet.split_text(state_line, left_width), left_x, y, limit)

    # Right: invoice references
    right_x = middle_x + 5
    right_width = PAGE_WIDTH - middle_x - MARGIN - 10
    details = [
        f"Invoice No: {invoice.invoice_number}",
        f"Invoice Date: {invoice.invoice_date}",
    ]
    if invoice.due_date:
        details.append(f"Due Date: {invoice.due_date}")
    if invoice.po_number:
        details.append(f"PO NO.: {invoice.po_number}")
    if invoice.po_date:
        details.append(f"PO Date: {invoice.po_date}")

    y = top + 12
    for text in details:
        y = _draw_lines(sheet, sheet.split_text(text, right_width), right_x, y, limit)


def _draw_description(sheet: Sheet, invoice: Invoice) -> None:
    top = DESCRIPTION_TOP
    x = MARGIN + 5
    sheet.rect(MARGIN + 2, top - 2, PAGE_WIDTH - MARGIN * 2 - 4, DESCRIPTION_HEIGHT)

    sheet.font(8, bold=True)
    sheet.text(x, top + 3, "Towards the hoarding display charges at following particulars.")

    display = invoice.display_name or invoice.billing_party.name
    sheet.font(8)
    sheet.text(x, top + 8, 'Display : " ')
    sheet.font(8, bold=True)
    sheet.text(x + 20, top + 8, display)
    display_width = sheet.text_width(display)
    sheet.font(8)
    sheet.text(x + 20 + display_width, top + 8, ' "')

    duration = format_duration_display(invoice.duration) if invoice.duration else "-"
    sheet.text(x, top + 13, f"Duration : {duration}")


def _draw_first_page_heading(sheet: Sheet, invoice: Invoice) -> None:
    sheet.font(14, bold=True)
    sheet.text(PAGE_WIDTH / 2, INVOICE_TOP + 15, "Tax Invoice", align="center")
    sheet.line(MARGIN + 2, INVOICE_TOP + 19, PAGE_WIDTH - MARGIN - 2, INVOICE_TOP + 19)

    _draw_party_and_invoice_details(sheet, invoice)
    _draw_description(sheet, invoice)


def _draw_final_content(sheet: Sheet, invoice: Invoice, company: CompanyDetails, table_bottom: float) -> None:
    sheet.font(7, bold=True)
    sheet.text(MARGIN + 5, table_bottom + WORDS_OFFSET, f"Total in words : Rs. {invoice.total_in_words}.")

    terms_y = table_bottom + TERMS_OFFSET
    sheet.font(6)
    for number, term in enumerate(invoice.terms_and_conditions, start=1):
        sheet.text(MARGIN + 5, terms_y + (number - 1) * TERM_STEP, f"{number}. {term}")

    sheet.font(7)
    sheet.text(PAGE_WIDTH - 60, terms_y + SIGNATURE_OFFSET - 12, f"For, {company.name}")
    sheet.text(PAGE_WIDTH - 60, terms_y + SIGNATURE_OFFSET, "Authorised Signatory")


def draw_page(
    sheet: Sheet,
    plan: PagePlan,
    invoice: Invoice,
    art: PageArt,
    company: CompanyDetails,
) -> None:
    draw_header(sheet, art, company)
    draw_footer(sheet, art, company)

    footer_y = PAGE_HEIGHT - 30
    sheet.font(8)
    sheet.text(PAGE_WIDTH - 30, footer_y - 5, f"Page {plan.number} of {plan.total_pages}")

    sheet.rect(MARGIN, INVOICE_TOP, PAGE_WIDTH - MARGIN * 2, BOX_HEIGHT)

    if plan.is_first:
        _draw_first_page_heading(sheet, invoice)
    else:
        sheet.font(8, bold=True)
        sheet.text(MARGIN + 5, INVOICE_TOP + 15, "B/F (Brought Forward)")

    table_bottom = sheet.flowable(build_table(plan.rows), TABLE_X, table_top(plan), TABLE_WIDTH)

    if plan.carried_forward:
        sheet.font(8, bold=True)
        sheet.text(PAGE_WIDTH - 80, table_bottom + 10, "C/F (Carried Forward)")

    if plan.is_final:
        _draw_final_content(sheet, invoice, company, table_bottom)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def plan_invoice_pages(invoice: Invoice) -> list[PagePlan]:
    """First pass only: the page plan the PDF will be drawn from."""
    rows = build_table_rows(invoice)
    return paginate(rows, fits=PageFit(rows, len(invoice.terms_and_conditions)))


def generate_invoice_pdf(
    invoice: Invoice,
    *,
    art: Optional[PageArt] = None,
    company: Optional[CompanyDetails] = None,
) -> bytes:
    """
    Render the invoice as an A4 PDF.

    Args:
        invoice: Snapshot from ``build_invoice``.
        art: Pre-resolved header/footer art; resolved from the configured
             asset paths when omitted.
        company: Issuer details; taken from settings when omitted.

    Returns:
        PDF file as bytes.
    """
    if art is None:
        art = resolve_page_art()
    if company is None:
        company = company_details()

    plans = plan_invoice_pages(invoice)

    buf = io.BytesIO()
    canvas = Canvas(buf, pagesize=A4)
    canvas.setTitle(f"Invoice {invoice.invoice_number}")
    canvas.setAuthor(company.name)
    canvas.setLineWidth(GRID_WIDTH)
    sheet = Sheet(canvas)

    for plan in plans:
        draw_page(sheet, plan, invoice, art, company)
        sheet.next_page()

    canvas.save()
    logger.info(
        "Rendered invoice %s: %d items on %d page(s)",
        invoice.invoice_number, len(invoice.items), len(plans),
    )
    return buf.getvalue()
