"""Element Catalog - read-only registry of reconciled AAMVA data elements.

Each entry maps a three-letter element identifier to a human description, the
Attribute Record slot it corresponds to, and an optional format pattern that
the raw scanned value must satisfy. An entry without a pattern is checked for
presence and equality only.

The catalog is built once at import time and never mutated; its declaration
order is the order fields appear in a validation report.
"""

import re
from dataclasses import dataclass
from typing import Optional

from aamva_forge.domain.attribute_record import ELEMENT_SLOTS
from aamva_forge.domain.enums import ComplianceType


@dataclass(frozen=True)
class CatalogEntry:
    """One reconciled data element.

    Attributes:
        element_id: Three-letter AAMVA element identifier
        description: Human-readable field name
        slot: Attribute Record slot holding the reference value
        pattern: Compiled format pattern for the scanned value, or None
    """
    element_id: str
    description: str
    slot: str
    pattern: Optional[re.Pattern] = None

    def matches_format(self, value: str) -> bool:
        """True when the entry has no pattern or the value satisfies it."""
        if self.pattern is None:
            return True
        return self.pattern.search(value) is not None


def _entry(element_id: str, description: str, pattern: Optional[str] = None, flags: int = 0) -> CatalogEntry:
    return CatalogEntry(
        element_id=element_id,
        description=description,
        slot=ELEMENT_SLOTS[element_id],
        pattern=re.compile(pattern, flags) if pattern is not None else None,
    )


ELEMENT_CATALOG: tuple[CatalogEntry, ...] = (
    _entry("DAQ", "License Number", r"^[A-Z0-9]+$", re.IGNORECASE),
    _entry("DBA", "Expiration Date", r"^\d{8}$"),
    _entry("DCS", "Last Name", r"^[A-Z\s-]+$", re.IGNORECASE),
    _entry("DAC", "First Name", r"^[A-Z\s-]+$", re.IGNORECASE),
    _entry("DAD", "Middle Name"),
    _entry("DBB", "Date of Birth", r"^\d{8}$"),
    _entry("DBD", "Issue Date", r"^\d{8}$"),
    _entry("DEB", "File Creation Date", r"^\d{8}$"),
    _entry("DDA", "Compliance Type", rf"^[{''.join(c.value for c in ComplianceType)}]$"),
    _entry("DAG", "Address Street"),
    _entry("DAI", "City"),
    _entry("DAJ", "State Code", r"^[A-Z]{2}$"),
    _entry("DAK", "Zip Code", r"^[0-9-]{5,11}$"),
    _entry("DCA", "Class"),
    _entry("DBC", "Sex", r"^[12X]$"),
    _entry("DAU", "Height"),
    _entry("DAW", "Weight"),
    _entry("DAY", "Eye Color", r"^[A-Z]{3}$"),
    _entry("DAZ", "Hair Color", r"^[A-Z]{3}$"),
    _entry("DCB", "Restrictions"),
    _entry("DCD", "Endorsements"),
    _entry("DCF", "Doc Discriminator"),
    _entry("DCG", "Country", r"^[A-Z]{3}$"),
)

_CATALOG_INDEX: dict[str, CatalogEntry] = {entry.element_id: entry for entry in ELEMENT_CATALOG}


def get_entry(element_id: str) -> Optional[CatalogEntry]:
    """Look up a catalog entry by element identifier."""
    return _CATALOG_INDEX.get(element_id)


def catalog_element_ids() -> tuple[str, ...]:
    """Element identifiers in catalog (report) order."""
    return tuple(entry.element_id for entry in ELEMENT_CATALOG)
