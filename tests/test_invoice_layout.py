"""Tests for table rows, responsive sizing and page planning."""

import pytest

from gst_invoice.domain.services.invoice_layout import (
    COLUMNS,
    TOTAL_ROW_COUNT,
    RowKind,
    build_table_rows,
    fits_on_one_page,
    paginate,
    responsive_font_size,
    wraps,
)
from gst_invoice.domain.services.invoice_builder import build_invoice

from tests.factories import make_form, make_item


class TestColumns:

    def test_widths_fill_table(self):
        assert sum(col.width for col in COLUMNS) == pytest.approx(1.0)

    def test_eleven_columns(self):
        assert len(COLUMNS) == 11
        assert COLUMNS[0].title == "Sr.NO"
        assert COLUMNS[-1].title == "AMOUNT"


class TestBuildTableRows:

    def test_items_then_totals(self, sample_invoice):
        rows = build_table_rows(sample_invoice)
        assert len(rows) == 2 + TOTAL_ROW_COUNT
        assert [row.kind for row in rows[-TOTAL_ROW_COUNT:]] == [
            RowKind.SUBTOTAL, RowKind.TAX, RowKind.TAX, RowKind.TAX, RowKind.LESS_PO, RowKind.GRAND_TOTAL,
        ]

    def test_item_cells_formatted(self, sample_invoice):
        cells = build_table_rows(sample_invoice)[0].cells
        assert cells[0] == "1"
        assert cells[8] == "30,000"
        assert cells[10] == "37,000"

    def test_tax_labels_follow_rate(self, sample_invoice):
        labels = [row.cells[9] for row in build_table_rows(sample_invoice)[-TOTAL_ROW_COUNT:]]
        assert labels == [
            "SUB TOTAL", "Add : CGST @ 9%", "Add : SGST @ 9%", "Add : IGST @ 18%", "Less : PO", "GRAND TOTAL",
        ]

    def test_fractional_half_rate(self):
        rows = build_table_rows(build_invoice(make_form(1, gst_rate=5)))
        assert rows[-5].cells[9] == "Add : CGST @ 2.5%"

    def test_zero_tax_shows_zero(self, sample_invoice):
        rows = build_table_rows(sample_invoice)
        igst = rows[-3]
        assert igst.cells[10] == "0"
        assert rows[-1].cells[10] == "87,320"

    def test_unparseable_rate_blank(self):
        invoice = build_invoice(make_form(items=(make_item(1, rate_pm="on request"),)))
        assert build_table_rows(invoice)[0].cells[8] == ""

    def test_emphasis(self, sample_invoice):
        rows = build_table_rows(sample_invoice)
        assert not rows[0].is_total
        assert [row.is_emphasised for row in rows[-TOTAL_ROW_COUNT:]] == [True, False, False, False, False, True]


class TestResponsiveFont:

    @pytest.mark.parametrize("text,size", [
        ("", 7),
        ("Raipur", 7),
        ("a" * 10, 7),
        ("a" * 15, 6),
        ("a" * 20, 5),
        ("a" * 21, 4),
        ("a" * 100, 4),
    ])
    def test_steps(self, text, size):
        assert responsive_font_size(text, 10) == size

    def test_floors(self):
        assert responsive_font_size("a" * 100, 10, base_font_size=5) == 3

    def test_wrap_threshold(self):
        assert not wraps("a" * 30, 10)
        assert wraps("a" * 31, 10)


class TestPaginate:

    def test_seven_items_single_page(self, invoice_with_items):
        pages = paginate(build_table_rows(invoice_with_items(7)))
        assert len(pages) == 1
        assert pages[0].is_first and pages[0].is_final
        assert not pages[0].carried_forward

    def test_eight_items_spill_one_row(self, invoice_with_items):
        pages = paginate(build_table_rows(invoice_with_items(8)))
        assert len(pages) == 2
        assert len(pages[0].rows) == 13
        assert pages[0].carried_forward
        assert pages[1].brought_forward
        assert [row.kind for row in pages[1].rows] == [RowKind.GRAND_TOTAL]
        assert pages[1].first_row == 13

    def test_every_row_placed_once_in_order(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(40))
        pages = paginate(rows, fits=lambda remaining, reserve, first: 10)
        placed = [row for page in pages for row in page.rows]
        assert placed == list(rows)
        assert all(page.total_pages == len(pages) for page in pages)
        assert [page.number for page in pages] == list(range(1, len(pages) + 1))

    def test_final_content_pushes_last_row(self, invoice_with_items):
        # 16 rows: 13 on page one, 3 left; all fit but only 2 with the words/terms block
        rows = build_table_rows(invoice_with_items(10))
        pages = paginate(rows, fits=lambda remaining, reserve, first: 20 if first else (2 if reserve else 4))
        assert [len(page.rows) for page in pages] == [13, 2, 1]

    def test_at_least_one_row_per_page(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(9))
        pages = paginate(rows, fits=lambda remaining, reserve, first: 20 if first else 0)
        assert [len(page.rows) for page in pages] == [13, 1, 1]

    def test_first_page_capped_by_measured_room(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(7))
        pages = paginate(rows, fits=lambda remaining, reserve, first: 5 if first else 50)
        assert [len(page.rows) for page in pages] == [5, 8]
        assert pages[0].carried_forward

    def test_single_page_keeps_room_for_final_content(self, invoice_with_items):
        # All 13 rows fit on page one, but only 10 with the words/terms block
        rows = build_table_rows(invoice_with_items(7))
        pages = paginate(rows, fits=lambda remaining, reserve, first: 10 if reserve else 20)
        assert [len(page.rows) for page in pages] == [12, 1]

    def test_custom_first_page_budget(self, invoice_with_items):
        pages = paginate(build_table_rows(invoice_with_items(2)), first_page_budget=5)
        assert [len(page.rows) for page in pages] == [5, 3]

    def test_fits_on_one_page(self, invoice_with_items):
        assert fits_on_one_page(invoice_with_items(7))
        assert not fits_on_one_page(invoice_with_items(8))
