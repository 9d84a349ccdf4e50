from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# Free-text form cells: a number when the user typed one, the raw text otherwise
NumberOrText = Union[int, float, str]


class InvoiceItem(BaseModel):
    """One advertising site (hoarding) billed on the invoice."""

    model_config = ConfigDict(frozen=True)

    id: str
    sno: int = Field(default=1, ge=1)
    town: str = ""
    location: str = ""
    hsn: str = "998366"
    media: str = ""
    size: str = ""
    area: NumberOrText = ""
    type: str = ""
    rate_pm: NumberOrText = ""
    period: str = ""
    amount: int = 0


class BillingParty(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    gstin: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None


class CompanyDetails(BaseModel):
    """The issuing company, printed in the header, footer and terms."""

    model_config = ConfigDict(frozen=True)

    name: str
    address: str
    city: str
    state: str
    pincode: str
    gstin: str
    pan: str
    phone: str
    email: str
    website: str


class InvoiceFormData(BaseModel):
    """Live form state. Updated only through the pure functions in form_state."""

    model_config = ConfigDict(frozen=True)

    invoice_number: str = ""
    invoice_date: str = ""              # ISO YYYY-MM-DD as entered
    due_date: str = ""
    credit_days: int = 0
    po_number: str = ""
    po_date: str = ""
    display_name: str = ""
    duration: str = ""                  # days, free text ("37")
    start_date: str = ""
    billing_party: BillingParty = Field(default_factory=BillingParty)
    items: tuple[InvoiceItem, ...] = ()
    gst_rate: float = 18
    is_interstate: bool = False
    # Set once the user toggles the interstate checkbox; state edits stop overriding it
    interstate_locked: bool = False
    terms_and_conditions: str = ""


class Invoice(BaseModel):
    """Immutable snapshot handed to the PDF / spreadsheet exporters."""

    model_config = ConfigDict(frozen=True)

    invoice_number: str
    invoice_date: str
    due_date: Optional[str] = None
    po_number: Optional[str] = None
    po_date: Optional[str] = None
    display_name: Optional[str] = None
    duration: Optional[str] = None
    billing_party: BillingParty
    items: tuple[InvoiceItem, ...]
    gst_rate: float = 18
    is_interstate: bool = False
    subtotal: int
    cgst: int
    sgst: int
    igst: int
    grand_total: int
    total_in_words: str
    terms_and_conditions: tuple[str, ...] = ()
