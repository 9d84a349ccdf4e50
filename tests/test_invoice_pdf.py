"""Tests for the invoice PDF renderer."""

import io
import re

from PIL import Image
from reportlab.pdfgen.canvas import Canvas

from gst_invoice.domain.services.invoice_builder import build_invoice, company_details
from gst_invoice.domain.services.invoice_layout import build_table_rows
from gst_invoice.domain.services.invoice_pdf import (
    BOX_BOTTOM,
    MARKER_SPACE,
    PageFit,
    build_table,
    draw_page,
    final_block_height,
    generate_invoice_pdf,
    plan_invoice_pages,
    table_height,
    table_top,
)
from gst_invoice.domain.services.page_art import PageArt, load_image, resolve_page_art
from gst_invoice.domain.services.pdf_canvas import Sheet

from tests.factories import make_form, make_item

_PAGE = re.compile(rb"/Type /Page[^s]")

NO_ART = PageArt()


def _page_count(pdf: bytes) -> int:
    return len(_PAGE.findall(pdf))


class RecordingSheet(Sheet):
    """Sheet that keeps every (y, text) drawn, per page."""

    def __init__(self):
        super().__init__(Canvas(io.BytesIO()))
        self.pages = [[]]

    def text(self, x, y, value, *, align="left"):
        self.pages[-1].append((y, value))
        super().text(x, y, value, align=align)

    def next_page(self):
        super().next_page()
        self.pages.append([])


def _draw_all(invoice) -> list[dict[str, float]]:
    """Draw every planned page; returns text -> y for each page."""
    plans = plan_invoice_pages(invoice)
    sheet = RecordingSheet()
    for plan in plans:
        draw_page(sheet, plan, invoice, NO_ART, company_details())
        sheet.next_page()
    return [{value: y for y, value in page} for page in sheet.pages[: len(plans)]]


def _long_location_invoice():
    location = ("Opposite Municipal Corporation Office, Near Jaistambh Chowk, GE Road " * 3).strip()
    items = tuple(make_item(i, location=location) for i in range(1, 8))
    return build_invoice(make_form(items=items))


class TestGenerateInvoicePdf:

    def test_returns_pdf(self, sample_invoice):
        pdf = generate_invoice_pdf(sample_invoice, art=NO_ART)
        assert pdf.startswith(b"%PDF")
        assert _page_count(pdf) == 1

    def test_spill_adds_page(self, invoice_with_items):
        pdf = generate_invoice_pdf(invoice_with_items(8), art=NO_ART)
        assert _page_count(pdf) == 2

    def test_page_count_matches_plan(self, invoice_with_items):
        invoice = invoice_with_items(60)
        pages = plan_invoice_pages(invoice)
        assert len(pages) > 2
        assert _page_count(generate_invoice_pdf(invoice, art=NO_ART)) == len(pages)

    def test_interstate(self, invoice_with_items):
        pdf = generate_invoice_pdf(invoice_with_items(3, is_interstate=True), art=NO_ART)
        assert pdf.startswith(b"%PDF")

    def test_long_cell_text(self):
        item = make_item(1, location="Opposite Municipal Corporation Office, Near Jaistambh Chowk, Raipur")
        invoice = build_invoice(make_form(items=(item,)))
        assert generate_invoice_pdf(invoice, art=NO_ART).startswith(b"%PDF")

    def test_missing_configured_art_falls_back(self, sample_invoice):
        # No static images in the test environment: fallback design is drawn
        assert generate_invoice_pdf(sample_invoice).startswith(b"%PDF")

    def test_with_header_image(self, sample_invoice, tmp_path):
        header = tmp_path / "header.jpg"
        Image.new("RGB", (400, 50), (255, 140, 66)).save(header, "JPEG")
        art = resolve_page_art(header, tmp_path / "missing.jpg")
        assert art.header is not None
        assert art.footer is None
        assert generate_invoice_pdf(sample_invoice, art=art).startswith(b"%PDF")


class TestPageArt:

    def test_missing_file(self, tmp_path):
        assert load_image(tmp_path / "nope.jpg") is None

    def test_corrupt_file(self, tmp_path):
        broken = tmp_path / "broken.jpg"
        broken.write_bytes(b"not an image")
        assert load_image(broken) is None


class TestPageFit:

    def test_reserve_never_fits_more(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(60))
        fit = PageFit(rows, term_count=7)
        remaining = rows[13:]
        assert 0 < fit(remaining, True) <= fit(remaining, False)

    def test_capacity_bounded_by_remaining(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(8))
        fit = PageFit(rows, term_count=7)
        assert fit(rows[-1:], False) == 1

    def test_table_has_header(self, sample_invoice):
        table = build_table(build_table_rows(sample_invoice))
        _, height = table.wrap(500, 800)
        assert height > 0

    def test_first_page_room_smaller_than_continuation(self, invoice_with_items):
        rows = build_table_rows(invoice_with_items(60))
        fit = PageFit(rows, term_count=7)
        assert fit(rows, False, True) < fit(rows, False, False)


class TestPageMarkers:

    def _check_markers(self, invoice):
        pages = _draw_all(invoice)
        total = len(pages)
        words = f"Total in words : Rs. {invoice.total_in_words}."
        for number, texts in enumerate(pages, start=1):
            assert f"Page {number} of {total}" in texts
            assert ("Tax Invoice" in texts) == (number == 1)
            assert ("B/F (Brought Forward)" in texts) == (number > 1)
            assert ("C/F (Carried Forward)" in texts) == (number < total)
            assert (words in texts) == (number == total)
            assert ("Authorised Signatory" in texts) == (number == total)
        return pages

    def test_single_page(self, sample_invoice):
        assert len(self._check_markers(sample_invoice)) == 1

    def test_eight_items(self, invoice_with_items):
        assert len(self._check_markers(invoice_with_items(8))) == 2

    def test_sixty_items(self, invoice_with_items):
        assert len(self._check_markers(invoice_with_items(60))) > 2

    def test_all_terms_on_last_page(self, invoice_with_items):
        invoice = invoice_with_items(8)
        last = _draw_all(invoice)[-1]
        for number, term in enumerate(invoice.terms_and_conditions, start=1):
            assert f"{number}. {term}" in last


class TestPageGeometry:

    def _assert_within_box(self, invoice):
        plans = plan_invoice_pages(invoice)
        reserve = final_block_height(len(invoice.terms_and_conditions))
        for plan in plans:
            bottom = table_top(plan) + table_height(build_table(plan.rows))
            limit = BOX_BOTTOM - (reserve if plan.is_final else MARKER_SPACE)
            assert bottom <= limit, f"page {plan.number}: table ends at {bottom:.1f}mm, limit {limit:.1f}mm"
        return plans

    def test_seven_plain_items_stay_on_one_page(self, invoice_with_items):
        assert len(self._assert_within_box(invoice_with_items(7))) == 1

    def test_tall_rows_flow_off_first_page(self):
        invoice = _long_location_invoice()
        plans = self._assert_within_box(invoice)
        assert len(plans) > 1
        assert sum(len(plan.rows) for plan in plans) == 7 + 6

    def test_tall_rows_final_content_inside_box(self):
        last = _draw_all(_long_location_invoice())[-1]
        assert last["Authorised Signatory"] <= BOX_BOTTOM

    def test_long_terms_list_keeps_signature_inside_box(self):
        terms = "\n".join(f"Condition number {n} applies to this booking." for n in range(1, 16))
        invoice = build_invoice(make_form(7, terms_and_conditions=terms))
        self._assert_within_box(invoice)

        last = _draw_all(invoice)[-1]
        assert last["15. Condition number 15 applies to this booking."] <= BOX_BOTTOM
        assert last["Authorised Signatory"] <= BOX_BOTTOM
