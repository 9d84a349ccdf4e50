"""Tests for GSTIN -> state resolution."""

import pytest

from gst_invoice.domain.services.gst_state_codes import GST_STATE_CODES, get_state_from_gstin, state_names


class TestGetStateFromGstin:

    def test_home_state(self):
        info = get_state_from_gstin("22AKJPD0941N4Z8")
        assert info.state == "Chhattisgarh"
        assert info.code == "22"

    def test_other_state(self):
        assert get_state_from_gstin("27AAAAA0000A1Z5").state == "Maharashtra"

    @pytest.mark.parametrize("gstin", ["", None, "2", "25ABCDE1234F1Z5", "28ABCDE1234F1Z5", "99XYZ", "AB123"])
    def test_unknown_or_short(self, gstin):
        assert get_state_from_gstin(gstin) is None

    def test_prefix_is_enough(self):
        assert get_state_from_gstin("36").state == "Telangana"


class TestStateTable:

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            GST_STATE_CODES["25"] = None

    def test_codes_match_keys(self):
        assert all(info.code == code for code, info in GST_STATE_CODES.items())

    def test_state_names_in_code_order(self):
        names = state_names()
        assert names[0] == "Jammu and Kashmir"
        assert names[-1] == "Ladakh"
        assert len(names) == len(GST_STATE_CODES)
