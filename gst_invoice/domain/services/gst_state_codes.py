# gst_invoice/domain/services/gst_state_codes.py
"""
GSTIN -> state lookup.

The first two characters of a GSTIN are the registrant's state code. The
table is fixed at import time; code 25 has no state assigned and 28 (old
Andhra Pradesh) is no longer issued, so both are absent.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional


class StateInfo(NamedTuple):
    state: str
    code: str


def _table(names: dict[str, str]) -> Mapping[str, StateInfo]:
    return MappingProxyType({code: StateInfo(state=name, code=code) for code, name in names.items()})


GST_STATE_CODES: Mapping[str, StateInfo] = _table({
    "01": "Jammu and Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu", "27": "Maharashtra",
    "29": "Karnataka", "30": "Goa", "31": "Lakshadweep",
    "32": "Kerala", "33": "Tamil Nadu", "34": "Puducherry",
    "35": "Andaman and Nicobar Islands", "36": "Telangana", "37": "Andhra Pradesh",
    "38": "Ladakh",
})


def get_state_from_gstin(gstin: str | None) -> Optional[StateInfo]:
    """Resolve the state encoded in a GSTIN prefix, or None if unknown."""
    if not gstin or len(gstin) < 2:
        return None
    return GST_STATE_CODES.get(gstin[:2])


def state_names() -> list[str]:
    """State names in code order, for the state picker."""
    return [info.state for info in GST_STATE_CODES.values()]
