# gst_invoice/domain/services/number_words.py
"""
Rupee amounts in words using the Indian numbering system.

    150000   -> "One Lakh Fifty Thousand Only"
    12345678 -> "One Crore Twenty Three Lakh Forty Five Thousand Six Hundred Seventy Eight Only"
"""

from __future__ import annotations

_ONES = ["", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine"]
_TEENS = [
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen",
    "Fifteen", "Sixteen", "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

_CRORE = 10_000_000
_LAKH = 100_000
_THOUSAND = 1_000


def _convert_hundreds(n: int) -> list[str]:
    """Words for 1..999."""
    words: list[str] = []
    if n >= 100:
        words += [_ONES[n // 100], "Hundred"]
        n %= 100
    if n >= 20:
        words.append(_TENS[n // 10])
        n %= 10
    elif n >= 10:
        # Teens never take a trailing unit
        words.append(_TEENS[n - 10])
        return words
    if n > 0:
        words.append(_ONES[n])
    return words


def _indian_groups(n: int) -> list[str]:
    crores, rest = divmod(n, _CRORE)
    lakhs, rest = divmod(rest, _LAKH)
    thousands, hundreds = divmod(rest, _THOUSAND)

    words: list[str] = []
    if crores:
        # More than 999 crore: spell the crore count itself in Indian groups
        words += (_convert_hundreds(crores) if crores < 1000 else _indian_groups(crores)) + ["Crore"]
    if lakhs:
        words += _convert_hundreds(lakhs) + ["Lakh"]
    if thousands:
        words += _convert_hundreds(thousands) + ["Thousand"]
    if hundreds:
        words += _convert_hundreds(hundreds)
    return words


def number_to_words(num: int) -> str:
    """Convert a non-negative whole rupee amount to words, suffixed with 'Only'."""
    num = int(num)
    if num < 0:
        raise ValueError(f"number_to_words expects a non-negative amount, got {num}")
    if num == 0:
        return "Zero"
    return " ".join(_indian_groups(num)) + " Only"
