"""
Static tax jurisdiction table.

Jurisdictions are keyed by US state / Canadian province code, plus three
fallback entries:

- DEFAULT_US: US address whose state is unknown
- DEFAULT_CA: Canadian address whose province is unknown
- DEFAULT_INTERNATIONAL: everything else (no tax collected)

US states carry a single base-rate component (sales, excise or gross
receipts); AK, DE, MT, NH and OR have none. Canadian provinces carry GST
alone, HST alone, or GST stacked with PST/QST.

The table is hand-maintained and frozen at import time.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class TaxComponent:
    """A single tax applied in a jurisdiction (e.g. GST 5%)."""
    name: str
    rate: float
    type: str


@dataclass(frozen=True)
class TaxJurisdiction:
    code: str
    location: str
    taxes: Tuple[TaxComponent, ...] = ()

    @property
    def is_tax_free(self) -> bool:
        return not self.taxes


DEFAULT_US = "DEFAULT_US"
DEFAULT_CA = "DEFAULT_CA"
DEFAULT_INTERNATIONAL = "DEFAULT_INTERNATIONAL"


def _state(code: str, location: str, rate: float = None, tax_type: str = "sales",
           name: str = None) -> TaxJurisdiction:
    if rate is None:
        return TaxJurisdiction(code, location)
    return TaxJurisdiction(
        code, location, (TaxComponent(name or f"{location} Sales Tax", rate, tax_type),)
    )


def _gst() -> TaxComponent:
    return TaxComponent("GST", 0.05, "gst")


def _hst(rate: float) -> TaxComponent:
    return TaxComponent("HST", rate, "hst")


def _pst(rate: float) -> TaxComponent:
    return TaxComponent("PST", rate, "pst")


# =============================================================================
# US States + DC
# =============================================================================

_US_JURISDICTIONS = (
    _state("AL", "Alabama", 0.04),
    _state("AK", "Alaska"),
    _state("AZ", "Arizona", 0.056),
    _state("AR", "Arkansas", 0.065),
    _state("CA", "California", 0.0725),
    _state("CO", "Colorado", 0.029),
    _state("CT", "Connecticut", 0.0635),
    _state("DE", "Delaware"),
    _state("FL", "Florida", 0.06),
    _state("GA", "Georgia", 0.04),
    _state("HI", "Hawaii", 0.04, "excise", "Hawaii General Excise Tax"),
    _state("ID", "Idaho", 0.06),
    _state("IL", "Illinois", 0.0625),
    _state("IN", "Indiana", 0.07),
    _state("IA", "Iowa", 0.06),
    _state("KS", "Kansas", 0.065),
    _state("KY", "Kentucky", 0.06),
    _state("LA", "Louisiana", 0.0445),
    _state("ME", "Maine", 0.055),
    _state("MD", "Maryland", 0.06),
    _state("MA", "Massachusetts", 0.0625),
    _state("MI", "Michigan", 0.06),
    _state("MN", "Minnesota", 0.06875),
    _state("MS", "Mississippi", 0.07),
    _state("MO", "Missouri", 0.04225),
    _state("MT", "Montana"),
    _state("NE", "Nebraska", 0.055),
    _state("NV", "Nevada", 0.0685),
    _state("NH", "New Hampshire"),
    _state("NJ", "New Jersey", 0.06625),
    _state("NM", "New Mexico", 0.05125, "gross_receipts", "New Mexico Gross Receipts Tax"),
    _state("NY", "New York", 0.08),
    _state("NC", "North Carolina", 0.0475),
    _state("ND", "North Dakota", 0.05),
    _state("OH", "Ohio", 0.0575),
    _state("OK", "Oklahoma", 0.045),
    _state("OR", "Oregon"),
    _state("PA", "Pennsylvania", 0.06),
    _state("RI", "Rhode Island", 0.07),
    _state("SC", "South Carolina", 0.06),
    _state("SD", "South Dakota", 0.045),
    _state("TN", "Tennessee", 0.07),
    _state("TX", "Texas", 0.0625),
    _state("UT", "Utah", 0.0485),
    _state("VT", "Vermont", 0.06),
    _state("VA", "Virginia", 0.053),
    _state("WA", "Washington", 0.065),
    _state("WV", "West Virginia", 0.06),
    _state("WI", "Wisconsin", 0.05),
    _state("WY", "Wyoming", 0.04),
    _state("DC", "District of Columbia", 0.06),
)


# =============================================================================
# Canadian Provinces and Territories
# =============================================================================

_CA_JURISDICTIONS = (
    TaxJurisdiction("AB", "Alberta", (_gst(),)),
    TaxJurisdiction("BC", "British Columbia", (_gst(), _pst(0.07))),
    TaxJurisdiction("MB", "Manitoba", (_gst(), _pst(0.07))),
    TaxJurisdiction("NB", "New Brunswick", (_hst(0.15),)),
    TaxJurisdiction("NL", "Newfoundland and Labrador", (_hst(0.15),)),
    TaxJurisdiction("NS", "Nova Scotia", (_hst(0.15),)),
    TaxJurisdiction("ON", "Ontario", (_hst(0.13),)),
    TaxJurisdiction("PE", "Prince Edward Island", (_hst(0.15),)),
    TaxJurisdiction("QC", "Quebec", (_gst(), TaxComponent("QST", 0.09975, "qst"))),
    TaxJurisdiction("SK", "Saskatchewan", (_gst(), _pst(0.06))),
    TaxJurisdiction("NT", "Northwest Territories", (_gst(),)),
    TaxJurisdiction("NU", "Nunavut", (_gst(),)),
    TaxJurisdiction("YT", "Yukon", (_gst(),)),
)


# =============================================================================
# Fallbacks
# =============================================================================

_DEFAULT_JURISDICTIONS = (
    TaxJurisdiction(
        DEFAULT_US, "United States (Default)",
        (TaxComponent("US Sales Tax", 0.07, "sales"),),
    ),
    TaxJurisdiction(DEFAULT_CA, "Canada (Default)", (_gst(), _pst(0.07))),
    TaxJurisdiction(DEFAULT_INTERNATIONAL, "International (Tax Free)"),
)


US_JURISDICTIONS: Mapping[str, TaxJurisdiction] = MappingProxyType(
    {j.code: j for j in _US_JURISDICTIONS}
)
CA_JURISDICTIONS: Mapping[str, TaxJurisdiction] = MappingProxyType(
    {j.code: j for j in _CA_JURISDICTIONS}
)
TAX_JURISDICTIONS: Mapping[str, TaxJurisdiction] = MappingProxyType(
    {j.code: j for j in _US_JURISDICTIONS + _CA_JURISDICTIONS + _DEFAULT_JURISDICTIONS}
)


# =============================================================================
# Name → Code Lookup
# =============================================================================

US_STATE_CODES: Dict[str, str] = {
    j.location.upper(): j.code for j in _US_JURISDICTIONS
}

CA_PROVINCE_CODES: Dict[str, str] = {
    j.location.upper(): j.code for j in _CA_JURISDICTIONS
}


def _lookup_code(value: str, names: Mapping[str, str]) -> Optional[str]:
    key = value.strip().upper()
    if key in names:
        return names[key]
    # Two characters is taken to be a code already
    if len(key) == 2:
        return key
    return None


def get_state_code(state: str) -> Optional[str]:
    """
    Map a US state name or abbreviation to its 2-letter code.

    "California" and "CALIFORNIA" give "CA"; any 2-character input is
    returned upper-cased as-is, whether or not it is a real state.
    """
    return _lookup_code(state, US_STATE_CODES)


def get_province_code(province: str) -> Optional[str]:
    """Map a Canadian province/territory name or abbreviation to its 2-letter code."""
    return _lookup_code(province, CA_PROVINCE_CODES)
