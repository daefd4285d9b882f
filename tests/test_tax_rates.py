"""
Tests for the static tax jurisdiction table.
"""

import pytest

from storefront_checkout.services.tax_rates import (
    CA_JURISDICTIONS,
    DEFAULT_CA,
    DEFAULT_INTERNATIONAL,
    DEFAULT_US,
    TAX_JURISDICTIONS,
    US_JURISDICTIONS,
    get_province_code,
    get_state_code,
)


class TestJurisdictionTable:
    """Tests for table contents."""

    def test_all_states_and_dc_present(self):
        assert len(US_JURISDICTIONS) == 51
        assert "DC" in US_JURISDICTIONS

    def test_all_provinces_and_territories_present(self):
        assert len(CA_JURISDICTIONS) == 13

    @pytest.mark.parametrize("code", ["AK", "DE", "MT", "NH", "OR"])
    def test_no_sales_tax_states(self, code):
        assert US_JURISDICTIONS[code].taxes == ()
        assert US_JURISDICTIONS[code].is_tax_free

    def test_hawaii_is_excise(self):
        (component,) = US_JURISDICTIONS["HI"].taxes
        assert component.type == "excise"
        assert component.name == "Hawaii General Excise Tax"

    def test_new_mexico_is_gross_receipts(self):
        (component,) = US_JURISDICTIONS["NM"].taxes
        assert component.type == "gross_receipts"

    def test_quebec_stacks_gst_and_qst(self):
        names = [c.name for c in CA_JURISDICTIONS["QC"].taxes]
        assert names == ["GST", "QST"]

    def test_ontario_is_hst(self):
        (component,) = CA_JURISDICTIONS["ON"].taxes
        assert (component.name, component.rate, component.type) == ("HST", 0.13, "hst")

    def test_defaults(self):
        assert TAX_JURISDICTIONS[DEFAULT_US].location == "United States (Default)"
        assert [c.rate for c in TAX_JURISDICTIONS[DEFAULT_US].taxes] == [0.07]
        assert [c.name for c in TAX_JURISDICTIONS[DEFAULT_CA].taxes] == ["GST", "PST"]
        assert TAX_JURISDICTIONS[DEFAULT_INTERNATIONAL].is_tax_free

    def test_all_rates_are_fractions(self):
        for jurisdiction in TAX_JURISDICTIONS.values():
            for component in jurisdiction.taxes:
                assert 0 < component.rate < 1

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            TAX_JURISDICTIONS["XX"] = TAX_JURISDICTIONS[DEFAULT_US]


class TestCodeLookup:
    """Tests for state/province name to code mapping."""

    def test_state_name(self):
        assert get_state_code("California") == "CA"

    def test_state_name_case_insensitive(self):
        assert get_state_code("  new york ") == "NY"

    def test_two_letters_taken_as_code(self):
        assert get_state_code("tx") == "TX"

    def test_unknown_name(self):
        assert get_state_code("Narnia") is None

    def test_province_name(self):
        assert get_province_code("British Columbia") == "BC"
        assert get_province_code("Quebec") == "QC"

    def test_province_code(self):
        assert get_province_code("on") == "ON"
