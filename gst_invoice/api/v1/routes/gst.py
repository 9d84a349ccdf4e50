# gst_invoice/api/v1/routes/gst.py
"""
GST lookups used by the invoice form: state list and GSTIN → state.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from gst_invoice.api.v1.envelope import ok
from gst_invoice.domain.services.form_state import is_interstate_state
from gst_invoice.domain.services.gst_state_codes import get_state_from_gstin, state_names

logger = logging.getLogger("api.v1.gst")

router = APIRouter(prefix="/gst", tags=["GST"])


@router.get("/states", response_model=dict)
async def list_states():
    """State names for the billing-state dropdown."""
    return ok(state_names())


@router.get("/states/{gstin}", response_model=dict)
async def resolve_state(gstin: str):
    """
    Resolve the state registered in a GSTIN's two-digit prefix.

    Also reports whether billing that state is interstate for the issuer.
    """
    info = get_state_from_gstin(gstin)
    if info is None:
        logger.info("Unknown GSTIN state prefix: %r", gstin[:2])
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No state for GSTIN prefix {gstin[:2]!r}",
        )
    return ok({
        "state": info.state,
        "code": info.code,
        "is_interstate": is_interstate_state(info.state),
    })
