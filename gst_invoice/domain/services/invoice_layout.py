# gst_invoice/domain/services/invoice_layout.py
"""
Invoice table layout: the combined items + totals rows, column policy,
responsive cell sizing and the page plan.

Nothing here draws. ``paginate`` is the first pass of PDF generation: it
decides which rows land on which page and which pages carry the
Brought Forward / Carried Forward markers. Continuation page capacity
depends on rendered row heights, so the renderer passes in a ``fits``
callback that measures; without one every continuation row is assumed to
fit on a single page.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Sequence

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import Invoice, InvoiceItem
from gst_invoice.domain.services.formatting import format_currency
from gst_invoice.domain.services.gst_calculator import tax_rate_label

BASE_FONT_SIZE = 7
TOTAL_ROW_COUNT = 6
LABEL_COLUMN = 9
AMOUNT_COLUMN = 10


@dataclass(frozen=True)
class Column:
    key: str
    title: str
    width: float        # fraction of the table width
    max_chars: int      # characters that fit at the base font size
    align: str = "CENTER"


COLUMNS: tuple[Column, ...] = (
    Column("sno", "Sr.NO", 0.05, 3),
    Column("town", "TOWN", 0.07, 8),
    Column("location", "LOCATION", 0.10, 15),
    Column("hsn", "HSN", 0.06, 8),
    Column("media", "MEDIA", 0.07, 10),
    Column("size", "SIZE", 0.06, 8),
    Column("area", "AREA", 0.05, 6),
    Column("type", "TYPE", 0.05, 8),
    Column("rate_pm", "RATE P.M.", 0.08, 10, "RIGHT"),
    Column("period", "PERIOD", 0.19, 20),
    Column("amount", "AMOUNT", 0.22, 12, "RIGHT"),
)

HEADER_TITLES: tuple[str, ...] = tuple(col.title for col in COLUMNS)


class RowKind(str, enum.Enum):
    ITEM = "item"
    SUBTOTAL = "subtotal"
    TAX = "tax"
    LESS_PO = "less_po"
    GRAND_TOTAL = "grand_total"


@dataclass(frozen=True)
class TableRow:
    kind: RowKind
    cells: tuple[str, ...]

    @property
    def is_total(self) -> bool:
        return self.kind is not RowKind.ITEM

    @property
    def is_emphasised(self) -> bool:
        return self.kind in (RowKind.SUBTOTAL, RowKind.GRAND_TOTAL)


@dataclass(frozen=True)
class PagePlan:
    number: int                 # 1-based
    total_pages: int
    rows: tuple[TableRow, ...]
    first_row: int              # index of rows[0] in the combined sequence

    @property
    def is_first(self) -> bool:
        return self.number == 1

    @property
    def is_final(self) -> bool:
        return self.number == self.total_pages

    @property
    def brought_forward(self) -> bool:
        return not self.is_first

    @property
    def carried_forward(self) -> bool:
        return not self.is_final


# (remaining rows, reserve room for final content, first page) -> rows that fit on that page
FitsCallback = Callable[[Sequence[TableRow], bool, bool], int]


# ---------------------------------------------------------------------------
# Cells
# ---------------------------------------------------------------------------

def _plain(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _tax_cell(amount: int) -> str:
    return format_currency(amount) if amount > 0 else "0"


def _item_row(item: InvoiceItem) -> TableRow:
    return TableRow(RowKind.ITEM, (
        str(item.sno),
        item.town,
        item.location,
        item.hsn,
        item.media,
        item.size,
        _plain(item.area),
        item.type,
        format_currency(item.rate_pm),
        item.period,
        format_currency(item.amount),
    ))


def _total_row(kind: RowKind, label: str, value: str) -> TableRow:
    return TableRow(kind, ("",) * LABEL_COLUMN + (label, value))


def build_table_rows(invoice: Invoice) -> tuple[TableRow, ...]:
    """Item rows followed by the six total rows, always in the same order."""
    rate = Decimal(str(invoice.gst_rate))
    half = tax_rate_label(rate / 2)
    full = tax_rate_label(rate)

    totals = (
        _total_row(RowKind.SUBTOTAL, "SUB TOTAL", format_currency(invoice.subtotal)),
        _total_row(RowKind.TAX, f"Add : CGST @ {half}%", _tax_cell(invoice.cgst)),
        _total_row(RowKind.TAX, f"Add : SGST @ {half}%", _tax_cell(invoice.sgst)),
        _total_row(RowKind.TAX, f"Add : IGST @ {full}%", _tax_cell(invoice.igst)),
        _total_row(RowKind.LESS_PO, "Less : PO", "0"),
        _total_row(RowKind.GRAND_TOTAL, "GRAND TOTAL", format_currency(invoice.grand_total)),
    )
    return tuple(_item_row(item) for item in invoice.items) + totals


def responsive_font_size(text: str, max_length: int, base_font_size: int = BASE_FONT_SIZE) -> int:
    """Step the font down as text outgrows the column's character budget."""
    if not text:
        return base_font_size

    length = len(text)
    if length <= max_length:
        return base_font_size
    if length <= max_length * 1.5:
        return max(base_font_size - 1, 5)
    if length <= max_length * 2:
        return max(base_font_size - 2, 4)
    return max(base_font_size - 3, 3)


def wraps(text: str, max_length: int) -> bool:
    """Only very long text wraps; anything shorter is clipped to the cell."""
    return len(text) > max_length * 3


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

def paginate(
    rows: Sequence[TableRow],
    *,
    first_page_budget: Optional[int] = None,
    fits: Optional[FitsCallback] = None,
) -> list[PagePlan]:
    """
    Split the combined rows into pages.

    The first page takes at most ``first_page_budget`` rows, and no more
    than ``fits`` reports for it. The rest go to continuation pages, each
    holding as many rows as ``fits`` reports. Whichever page is last must
    also leave room for the amount in words, terms and signature; if its
    rows only fit without that room, the final row is pushed onto one more
    page.
    """
    budget = settings.FIRST_PAGE_ROW_BUDGET if first_page_budget is None else first_page_budget
    chunks: list[tuple[int, tuple[TableRow, ...]]] = []

    start = 0
    while start < len(rows) or not chunks:
        first = not chunks
        remaining = rows[start:]
        count = min(budget, len(remaining)) if first else len(remaining)
        if fits is not None:
            count = min(count, fits(remaining, False, first))
        count = max(1, count) if remaining else 0

        if fits is not None and count == len(remaining) and len(remaining) > 1:
            if fits(remaining, True, first) < len(remaining):
                count = len(remaining) - 1

        chunks.append((start, tuple(remaining[:count])))
        start += count

    total = len(chunks)
    return [
        PagePlan(number=index, total_pages=total, rows=chunk, first_row=first_row)
        for index, (first_row, chunk) in enumerate(chunks, start=1)
    ]


def fits_on_one_page(invoice: Invoice, first_page_budget: Optional[int] = None) -> bool:
    budget = settings.FIRST_PAGE_ROW_BUDGET if first_page_budget is None else first_page_budget
    return len(invoice.items) + TOTAL_ROW_COUNT <= budget
