# gst_invoice/domain/services/gst_calculator.py
"""
GST split for invoice totals.

The caller decides which side of the breakdown applies: CGST + SGST for an
intrastate supply, IGST for an interstate one. Both add up to the same
``total``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class GstBreakdown:
    cgst: int
    sgst: int
    igst: int
    total: int

    @property
    def gst_amount(self) -> int:
        return self.igst


def round_half_up(value: float | int | Decimal) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_gst(amount: float | int, gst_rate: float = 18) -> GstBreakdown:
    """
    Compute the GST on a taxable amount.

    Args:
        amount: Taxable value in rupees; rounded to the nearest rupee first.
        gst_rate: Percentage, any value accepted (default 18).

    Returns:
        GstBreakdown with cgst/sgst (half each), igst (full) and the
        amount-plus-tax total. Zero or negative amounts carry no tax.
    """
    rounded_amount = round_half_up(amount)
    if rounded_amount <= 0:
        gst_amount = 0
    else:
        gst_amount = round_half_up(Decimal(rounded_amount) * Decimal(str(gst_rate)) / 100)

    half = round_half_up(Decimal(gst_amount) / 2)
    return GstBreakdown(
        cgst=half,
        sgst=half,
        igst=gst_amount,
        total=rounded_amount + gst_amount,
    )


def tax_rate_label(rate: float | int | Decimal) -> str:
    """Render a rate without trailing zeros: 18.0 -> '18', 2.50 -> '2.5'."""
    return format(Decimal(str(rate)).normalize(), "f")
