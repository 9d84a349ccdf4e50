# gst_invoice/domain/services/formatting.py
"""
Display helpers shared by the PDF and spreadsheet exporters.

Form fields are free text, so parsing here never raises: anything that does
not read as a number becomes ``None`` and the caller decides what to show.
"""

from __future__ import annotations

import math
import re
from typing import Optional

from gst_invoice.domain.services.gst_calculator import round_half_up

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_leading_int(value) -> Optional[int]:
    """'37', '37 days' -> 37; '', 'abc' -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else None


def parse_leading_float(value) -> Optional[float]:
    """'12000', '12000/-' -> 12000.0; '', 'N/A' -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _LEADING_FLOAT.match(str(value or ""))
    return float(match.group(1)) if match else None


def indian_comma(value: int) -> str:
    """Group digits the Indian way: 1234567 -> '12,34,567'."""
    sign = "-" if value < 0 else ""
    s = str(abs(value))

    # If length <= 3 -> no need to format
    if len(s) <= 3:
        return sign + s

    # Last 3 digits stay together, the rest in pairs
    last3 = s[-3:]
    rest = s[:-3]
    parts = []
    while len(rest) > 2:
        parts.insert(0, rest[-2:])
        rest = rest[:-2]
    parts.insert(0, rest)

    return sign + ",".join(parts) + "," + last3


def format_currency(amount) -> str:
    """
    Whole-rupee amount for table cells, without symbol or decimals.

    Zero, blank and unparseable values render as an empty string.
    """
    number = parse_leading_float(amount) if isinstance(amount, str) else amount
    if number is None or not math.isfinite(number):
        return ""
    rounded = round_half_up(number)
    if rounded == 0:
        return ""
    return indian_comma(rounded)


def format_duration_display(duration: str) -> str:
    """'37' -> '1 month 7 days', '60' -> '2 months', '20' -> '20 days'."""
    days = parse_leading_int(duration)
    if days is None:
        return duration

    months, remaining = divmod(days, 30)
    if months <= 0:
        return f"{days} days"
    label = f"{months} month{'s' if months > 1 else ''}"
    if remaining == 0:
        return label
    return f"{label} {remaining} days"
