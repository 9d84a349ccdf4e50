# gst_invoice/domain/services/form_state.py
"""
Invoice form state transitions.

Every function takes the current ``InvoiceFormData`` and returns a new
snapshot; nothing is mutated in place. Derived fields (item period and
amount, due date, billing state, interstate flag) are recomputed here at
edit time so that aggregation only has to sum.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import date, timedelta
from typing import Optional

from gst_invoice.core.config import settings
from gst_invoice.domain.models.invoice import BillingParty, InvoiceFormData, InvoiceItem
from gst_invoice.domain.services.formatting import parse_leading_float, parse_leading_int
from gst_invoice.domain.services.gst_calculator import round_half_up
from gst_invoice.domain.services.gst_state_codes import get_state_from_gstin

logger = logging.getLogger("form_state")

DAYS_PER_MONTH = 30

DEFAULT_TERMS = (
    "Any complaint about the advertisement must be received within 7 days from the date of bill.",
    "Cheques/D.D.(crossed) to be drawn in favour of DESHKAR ADVERTISING, RAIPUR",
    "Interest will be charged @ 24% if the bill is not paid in 10 days.",
    "No receipt is valid unless given on official form.",
    "Subject to Raipur Jurisdiction. State: Chhattisgarh, State Code : 22",
    "Enquiry Pin Code : 492001",
    "Our PAN NO.: AKJPD0941N & Our GST NO.: 22AKJPD0941N4Z8",
)

# Fields a plain edit may set; everything else is derived or has its own updater
_PLAIN_FIELDS = frozenset({
    "invoice_number", "po_number", "po_date", "display_name", "gst_rate", "terms_and_conditions",
})
_ITEM_DERIVED = frozenset({"id", "sno"})


# ---------------------------------------------------------------------------
# Derivations
# ---------------------------------------------------------------------------

def _parse_date(value: str | date | None) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def calculate_period_from_dates(start_date: str | date | None, duration: str | int | None) -> str:
    """
    Display period for a booking of ``duration`` days starting on ``start_date``.

    The range is inclusive: 15 Jan + 37 days -> '15/01/2025 to 20/02/2025'.
    Returns '' when either input is missing or unreadable, or the duration
    is not positive.
    """
    if not start_date or duration in (None, ""):
        return ""
    start = _parse_date(start_date)
    days = parse_leading_int(duration)
    if start is None or days is None or days <= 0:
        return ""

    end = start + timedelta(days=days - 1)
    return f"{start.strftime('%d/%m/%Y')} to {end.strftime('%d/%m/%Y')}"


def calculate_amount_from_duration(rate_pm: str | float | int | None, duration: str | int | None) -> int:
    """
    Amount for ``duration`` days at a monthly rate, with a month fixed at 30 days.

    37 days at 30,000/month = 1 month + 7 days = 30,000 + 7,000 = 37,000.
    """
    if not rate_pm or duration in (None, ""):
        return 0
    rate = parse_leading_float(rate_pm)
    days = parse_leading_int(duration)
    if rate is None or days is None or days < 0:
        return 0

    months, remaining_days = divmod(days, DAYS_PER_MONTH)
    return round_half_up(months * rate + remaining_days * (rate / DAYS_PER_MONTH))


def calculate_due_date(invoice_date: str | date | None, credit_days: int) -> str:
    """ISO due date ``credit_days`` after the invoice date, '' without credit."""
    start = _parse_date(invoice_date)
    if start is None or credit_days <= 0:
        return ""
    return (start + timedelta(days=credit_days)).isoformat()


def is_interstate_state(state: str) -> bool:
    return state != settings.HOME_STATE


# ---------------------------------------------------------------------------
# Form construction
# ---------------------------------------------------------------------------

def new_form_data(*, today: date | None = None, invoice_number: str | None = None) -> InvoiceFormData:
    """A blank form with the company defaults filled in."""
    today = today or date.today()
    if invoice_number is None:
        invoice_number = f"INV{str(int(time.time() * 1000))[-6:]}"
    return InvoiceFormData(
        invoice_number=invoice_number,
        invoice_date=today.isoformat(),
        duration=settings.DEFAULT_DURATION,
        gst_rate=settings.DEFAULT_GST_RATE,
        terms_and_conditions="\n".join(DEFAULT_TERMS),
    )


def update_details(form: InvoiceFormData, **changes) -> InvoiceFormData:
    """Set fields that have no derived dependants (invoice number, PO, rate, terms)."""
    unknown = set(changes) - _PLAIN_FIELDS
    if unknown:
        raise ValueError(f"Not a plain form field: {', '.join(sorted(unknown))}")
    return form.model_copy(update=changes)


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

def _renumber(items) -> tuple[InvoiceItem, ...]:
    return tuple(item.model_copy(update={"sno": index}) for index, item in enumerate(items, start=1))


def _new_item_id() -> str:
    return uuid.uuid4().hex


def add_item(form: InvoiceFormData, *, item_id: str | None = None) -> InvoiceFormData:
    item = InvoiceItem(
        id=item_id or _new_item_id(),
        sno=len(form.items) + 1,
        hsn=settings.DEFAULT_HSN,
    )
    return form.model_copy(update={"items": _renumber([*form.items, item])})


def remove_item(form: InvoiceFormData, item_id: str) -> InvoiceFormData:
    remaining = [item for item in form.items if item.id != item_id]
    return form.model_copy(update={"items": _renumber(remaining)})


def copy_item(form: InvoiceFormData, item_id: str, *, new_id: str | None = None) -> InvoiceFormData:
    """Append a duplicate of an item at the end of the list."""
    source = next((item for item in form.items if item.id == item_id), None)
    if source is None:
        return form
    duplicate = source.model_copy(update={"id": new_id or _new_item_id()})
    return form.model_copy(update={"items": _renumber([*form.items, duplicate])})


def update_item(form: InvoiceFormData, item_id: str, field: str, value) -> InvoiceFormData:
    """
    Edit one cell of an item.

    A new rate re-derives the amount from the global duration, and the period
    is refreshed whenever the global start date and duration are both set.
    """
    if field in _ITEM_DERIVED or field not in InvoiceItem.model_fields:
        raise ValueError(f"Item field cannot be edited: {field}")

    if field == "amount":
        value = round_half_up(parse_leading_float(value) or 0)

    items = []
    for item in form.items:
        if item.id != item_id:
            items.append(item)
            continue

        changes = {field: value}
        if field == "rate_pm" and value and form.duration:
            changes["amount"] = calculate_amount_from_duration(value, form.duration)
        if form.start_date and form.duration:
            changes["period"] = calculate_period_from_dates(form.start_date, form.duration)
        items.append(item.model_copy(update=changes))

    return form.model_copy(update={"items": tuple(items)})


def update_schedule(
    form: InvoiceFormData,
    *,
    start_date: str | None = None,
    duration: str | None = None,
) -> InvoiceFormData:
    """Change the global start date and/or duration and re-derive every item."""
    changes = {}
    if start_date is not None:
        changes["start_date"] = start_date
    if duration is not None:
        changes["duration"] = duration
    updated = form.model_copy(update=changes)

    items = []
    for item in updated.items:
        item_changes = {}
        if updated.start_date and updated.duration:
            item_changes["period"] = calculate_period_from_dates(updated.start_date, updated.duration)
        if item.rate_pm and updated.duration:
            item_changes["amount"] = calculate_amount_from_duration(item.rate_pm, updated.duration)
        items.append(item.model_copy(update=item_changes) if item_changes else item)

    logger.debug("Schedule changed (%s), re-derived %d items", ", ".join(changes) or "none", len(items))
    return updated.model_copy(update={"items": tuple(items)})


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def update_invoice_date(form: InvoiceFormData, invoice_date: str) -> InvoiceFormData:
    return form.model_copy(update={
        "invoice_date": invoice_date,
        "due_date": calculate_due_date(invoice_date, form.credit_days),
    })


def update_credit_days(form: InvoiceFormData, credit_days: int) -> InvoiceFormData:
    return form.model_copy(update={
        "credit_days": credit_days,
        "due_date": calculate_due_date(form.invoice_date, credit_days),
    })


# ---------------------------------------------------------------------------
# Billing party and interstate flag
# ---------------------------------------------------------------------------

def _with_state(form: InvoiceFormData, party: BillingParty, state: str) -> InvoiceFormData:
    changes = {"billing_party": party.model_copy(update={"state": state})}
    if not form.interstate_locked:
        changes["is_interstate"] = is_interstate_state(state)
    return form.model_copy(update=changes)


def update_billing_party(form: InvoiceFormData, field: str, value: str) -> InvoiceFormData:
    """
    Edit a billing party field.

    A GSTIN whose prefix resolves overwrites the state (and, unless the user
    has taken control of the interstate checkbox, the interstate flag).
    """
    if field not in BillingParty.model_fields:
        raise ValueError(f"Unknown billing party field: {field}")
    if field == "state":
        return set_billing_state(form, value)

    party = form.billing_party.model_copy(update={field: value})
    if field == "gstin" and value:
        info = get_state_from_gstin(value)
        if info is not None:
            return _with_state(form, party, info.state)
    return form.model_copy(update={"billing_party": party})


def set_billing_state(form: InvoiceFormData, state: str) -> InvoiceFormData:
    """Direct state edit; kept until the GSTIN changes again."""
    return _with_state(form, form.billing_party, state)


def set_interstate(form: InvoiceFormData, is_interstate: bool) -> InvoiceFormData:
    """Explicit checkbox toggle. From here on the checkbox wins over state edits."""
    return form.model_copy(update={"is_interstate": is_interstate, "interstate_locked": True})
