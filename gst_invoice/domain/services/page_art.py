# gst_invoice/domain/services/page_art.py
"""
Header and footer art for invoice pages.

Phase 1 of PDF generation resolves each asset to either a loaded image or
``None`` (use the vector fallback). Phase 2 only draws what was resolved, so
a missing or broken JPEG never interrupts rendering.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from reportlab.lib.utils import ImageReader

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import CompanyDetails
from gst_invoice.domain.services.pdf_canvas import ORANGE, Sheet

logger = logging.getLogger("page_art")

ART_MARGIN = 5
ART_HEIGHT = 25

# (x offset, y offset, scale) of the orange squares on each side of the art
_HEADER_LEFT = [(6, 6, 1.0), (13, 10, 1.2), (23, 4, 0.8), (30, 13, 1.0), (10, 18, 1.1), (20, 22, 0.7)]
_HEADER_RIGHT = [(13, 6, 1.1), (23, 10, 1.3), (33, 4, 1.0), (18, 18, 0.8), (28, 22, 1.2), (38, 13, 0.7)]
_FOOTER_LEFT = [(6, 5, 1.0), (10, 8, 1.2), (16, 4, 0.8), (20, 10, 1.0), (8, 15, 1.1), (14, 18, 0.7)]
_FOOTER_RIGHT = [(13, 5, 1.1), (18, 8, 1.3), (24, 4, 1.0), (16, 15, 0.8), (22, 18, 1.2), (28, 10, 0.7)]


@dataclass(frozen=True)
class PageArt:
    header: Optional[ImageReader] = None
    footer: Optional[ImageReader] = None


def load_image(path: str | Path) -> Optional[ImageReader]:
    """Open an image for drawing, or None if it is missing or unreadable."""
    try:
        reader = ImageReader(str(path))
        reader.getSize()
    except Exception:
        logger.warning("Could not load image %s, using fallback design", path)
        return None
    return reader


def resolve_page_art(header_path: str | Path | None = None, footer_path: str | Path | None = None) -> PageArt:
    return PageArt(
        header=load_image(header_path or settings.HEADER_IMAGE_PATH),
        footer=load_image(footer_path or settings.FOOTER_IMAGE_PATH),
    )


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------

def _squares(sheet: Sheet, origin_x: float, origin_y: float, pattern, size: float, mirror: bool) -> None:
    for dx, dy, scale in pattern:
        x = origin_x - dx if mirror else origin_x + dx
        sheet.rect(x, origin_y + dy, size * scale, size * scale, fill=ORANGE)


def draw_header(sheet: Sheet, art: PageArt, company: CompanyDetails) -> None:
    width = sheet.width - ART_MARGIN * 2
    if art.header is not None:
        sheet.image(art.header, ART_MARGIN, ART_MARGIN, width, ART_HEIGHT)
        return

    sheet.rect(ART_MARGIN, ART_MARGIN, width, ART_HEIGHT)
    _squares(sheet, ART_MARGIN, ART_MARGIN, _HEADER_LEFT, 2.5, mirror=False)
    _squares(sheet, sheet.width - ART_MARGIN, ART_MARGIN, _HEADER_RIGHT, 2.5, mirror=True)

    # Boxed company name in the centre
    logo_w, logo_h = 70, 18
    logo_x = sheet.width / 2 - logo_w / 2
    logo_y = ART_MARGIN + 4
    sheet.rect(logo_x, logo_y, logo_w, logo_h, line_width=0.5)

    first, _, rest = company.name.partition(" ")
    sheet.font(14, bold=True)
    sheet.text(logo_x + logo_w / 2, logo_y + 9, first, align="center")
    if rest:
        sheet.font(10)
        sheet.text(logo_x + logo_w / 2, logo_y + 15, rest, align="center")


def draw_footer(sheet: Sheet, art: PageArt, company: CompanyDetails) -> None:
    width = sheet.width - ART_MARGIN * 2
    footer_y = sheet.height - ART_HEIGHT - ART_MARGIN
    if art.footer is not None:
        sheet.image(art.footer, ART_MARGIN, footer_y, width, ART_HEIGHT)
        return

    sheet.rect(ART_MARGIN, footer_y, width, ART_HEIGHT)
    _squares(sheet, ART_MARGIN, footer_y, _FOOTER_LEFT, 1.5, mirror=False)
    _squares(sheet, sheet.width - ART_MARGIN, footer_y, _FOOTER_RIGHT, 1.5, mirror=True)

    text_x = ART_MARGIN + 28
    sheet.font(6)
    sheet.text(text_x, footer_y + 8, f"{company.address}, {company.city}, {company.state} {company.pincode}")
    sheet.text(text_x, footer_y + 14, f"Phone: {company.phone}")
    sheet.text(text_x + 50, footer_y + 14, f"Email: {company.email}")
    sheet.text(text_x, footer_y + 20, f"Website: {company.website}")

    # Association membership box
    box_w, box_h = 50, 18
    box_x, box_y = sheet.width - 80, footer_y + 3
    sheet.rect(box_x, box_y, box_w, box_h, line_width=0.3)
    centre = box_x + box_w / 2
    sheet.font(5)
    sheet.text(centre, box_y + 4, "Proud Member Of", align="center")
    sheet.font(6, bold=True)
    sheet.text(centre, box_y + 8, "INDIAN OUTDOOR", align="center")
    sheet.text(centre, box_y + 12, "ADVERTISING", align="center")
    sheet.font(5)
    sheet.text(centre, box_y + 16, "ASSOCIATION", align="center")
