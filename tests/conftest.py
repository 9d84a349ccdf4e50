"""Shared test fixtures for the invoice generator test suite."""

import pytest

from gst_invoice.domain.models.invoice import InvoiceFormData
from gst_invoice.domain.services.invoice_builder import build_invoice

from tests.factories import make_form


@pytest.fixture
def sample_form() -> InvoiceFormData:
    """Two intrastate items of Rs 37,000 each."""
    return make_form()


@pytest.fixture
def sample_invoice(sample_form):
    return build_invoice(sample_form)


@pytest.fixture
def invoice_with_items():
    """Factory: an invoice with ``n`` identical items."""
    def _build(n: int, **overrides):
        return build_invoice(make_form(n, **overrides))
    return _build
