# gst_invoice/domain/services/pdf_canvas.py
"""
Thin wrapper over a ReportLab canvas that takes millimetres measured from
the top-left corner, matching how the invoice layout is measured.
"""

from __future__ import annotations

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Flowable

ORANGE = colors.Color(1, 140 / 255, 66 / 255)
LIGHT_GREY = colors.Color(240 / 255, 240 / 255, 240 / 255)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


class Sheet:
    """One PDF document, drawn page by page in top-left millimetre coordinates."""

    def __init__(self, canvas: Canvas, pagesize=A4):
        self.canvas = canvas
        self.width = pagesize[0] / mm
        self.height = pagesize[1] / mm
        self._font = FONT
        self._size = 10

    def _y(self, top: float) -> float:
        return (self.height - top) * mm

    def font(self, size: float, bold: bool = False) -> None:
        self._font = FONT_BOLD if bold else FONT
        self._size = size
        self.canvas.setFont(self._font, size)

    def text(self, x: float, y: float, value: str, *, align: str = "left") -> None:
        if align == "center":
            self.canvas.drawCentredString(x * mm, self._y(y), value)
        elif align == "right":
            self.canvas.drawRightString(x * mm, self._y(y), value)
        else:
            self.canvas.drawString(x * mm, self._y(y), value)

    def text_width(self, value: str) -> float:
        return stringWidth(value, self._font, self._size) / mm

    def split_text(self, value: str, max_width: float) -> list[str]:
        return simpleSplit(value or "", self._font, self._size, max_width * mm)

    def rect(self, x: float, y: float, w: float, h: float, *, fill=None, line_width: float | None = None) -> None:
        c = self.canvas
        c.saveState()
        if line_width is not None:
            c.setLineWidth(line_width)
        if fill is not None:
            c.setFillColor(fill)
        c.rect(x * mm, self._y(y + h), w * mm, h * mm, stroke=0 if fill is not None else 1, fill=1 if fill is not None else 0)
        c.restoreState()

    def line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self.canvas.line(x1 * mm, self._y(y1), x2 * mm, self._y(y2))

    def image(self, image: ImageReader, x: float, y: float, w: float, h: float) -> None:
        self.canvas.drawImage(image, x * mm, self._y(y + h), width=w * mm, height=h * mm)

    def flowable(self, flowable: Flowable, x: float, y: float, width: float) -> float:
        """Draw a flowable with its top edge at ``y``; returns the y of its bottom edge."""
        _, height = flowable.wrapOn(self.canvas, width * mm, self.height * mm)
        flowable.drawOn(self.canvas, x * mm, self._y(y) - height)
        return y + height / mm

    def next_page(self) -> None:
        self.canvas.showPage()
