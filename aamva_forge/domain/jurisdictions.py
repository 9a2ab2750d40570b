"""Jurisdiction registry.

Static table of US issuing authorities with their AAMVA Issuer Identification
Numbers. Choosing a jurisdiction creates an Attribute Record whose
jurisdiction slots (state, country, IIN, version) are pre-populated.
"""

from typing import Optional

from aamva_forge.domain.attribute_record import AttributeRecord, Jurisdiction, jurisdiction_slots
from aamva_forge.domain.ports import JurisdictionNotFoundError

# AAMVA DL/ID Card Design Standard (2020)
CURRENT_VERSION = "10"

_IINS = (
    ("Alabama", "AL", "636033"),
    ("Alaska", "AK", "636059"),
    ("Arizona", "AZ", "636026"),
    ("Arkansas", "AR", "636021"),
    ("California", "CA", "636014"),
    ("Colorado", "CO", "636020"),
    ("Connecticut", "CT", "636006"),
    ("Delaware", "DE", "636011"),
    ("District of Columbia", "DC", "636043"),
    ("Florida", "FL", "636010"),
    ("Georgia", "GA", "636055"),
    ("Hawaii", "HI", "636047"),
    ("Idaho", "ID", "636050"),
    ("Illinois", "IL", "636035"),
    ("Indiana", "IN", "636037"),
    ("Iowa", "IA", "636018"),
    ("Kansas", "KS", "636022"),
    ("Kentucky", "KY", "636046"),
    ("Louisiana", "LA", "636007"),
    ("Maine", "ME", "636041"),
    ("Maryland", "MD", "636003"),
    ("Massachusetts", "MA", "636002"),
    ("Michigan", "MI", "636032"),
    ("Minnesota", "MN", "636038"),
    ("Mississippi", "MS", "636051"),
    ("Missouri", "MO", "636030"),
    ("Montana", "MT", "636008"),
    ("Nebraska", "NE", "636054"),
    ("Nevada", "NV", "636049"),
    ("New Hampshire", "NH", "636039"),
    ("New Jersey", "NJ", "636036"),
    ("New Mexico", "NM", "636009"),
    ("New York", "NY", "636001"),
    ("North Carolina", "NC", "636004"),
    ("North Dakota", "ND", "636034"),
    ("Ohio", "OH", "636023"),
    ("Oklahoma", "OK", "636058"),
    ("Oregon", "OR", "636029"),
    ("Pennsylvania", "PA", "636025"),
    ("Rhode Island", "RI", "636052"),
    ("South Carolina", "SC", "636005"),
    ("South Dakota", "SD", "636042"),
    ("Tennessee", "TN", "636053"),
    ("Texas", "TX", "636015"),
    ("Utah", "UT", "636040"),
    ("Vermont", "VT", "636024"),
    ("Virginia", "VA", "636000"),
    ("Washington", "WA", "636045"),
    ("West Virginia", "WV", "636061"),
    ("Wisconsin", "WI", "636031"),
    ("Wyoming", "WY", "636060"),
)

JURISDICTIONS: tuple[Jurisdiction, ...] = tuple(
    Jurisdiction(name=name, code=code, iin=iin, version=CURRENT_VERSION, country="USA")
    for name, code, iin in _IINS
)

_BY_CODE: dict[str, Jurisdiction] = {j.code: j for j in JURISDICTIONS}

# Longest names first so "West Virginia" wins over "Virginia"
_DETECTION_ORDER = sorted(JURISDICTIONS, key=lambda j: len(j.name), reverse=True)


def get_jurisdiction(code: str) -> Jurisdiction:
    """Look up a jurisdiction by its two-letter code (case-insensitive).

    Raises:
        JurisdictionNotFoundError: If the code is not registered
    """
    jurisdiction = _BY_CODE.get(code.strip().upper())
    if jurisdiction is None:
        raise JurisdictionNotFoundError(f"Unknown jurisdiction code: {code!r}", code=code)
    return jurisdiction


def detect_jurisdiction(text: str) -> Optional[Jurisdiction]:
    """Guess the issuing jurisdiction from OCR text by searching for its name.

    Returns:
        The jurisdiction with the longest name found in the text, or None
    """
    upper_text = text.upper()
    for jurisdiction in _DETECTION_ORDER:
        if jurisdiction.name.upper() in upper_text:
            return jurisdiction
    return None


def new_attribute_record(jurisdiction: Jurisdiction) -> AttributeRecord:
    """Create an empty Attribute Record pre-populated with jurisdiction slots."""
    return AttributeRecord(**jurisdiction_slots(jurisdiction))
