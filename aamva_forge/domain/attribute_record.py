"""Attribute Record Schema Definitions.

This module defines the in-memory representation of one driver's license / ID
card's data elements. The Attribute Record is what the Encoder serializes and
what the Reconciler compares a scanned barcode against.

Architecture:
    - Pure domain models with zero infrastructure dependencies
    - Every slot is a string (never None); Pydantic coerces None to ""
    - Each slot is aliased to its three-letter AAMVA element identifier, so a
      record can be built from, and dumped to, an element-keyed mapping
    - Jurisdiction slots are set once when a jurisdiction is chosen and are
      ignored by merge()
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Placeholder emitted for blank restrictions/endorsements
NONE_PLACEHOLDER = "NONE"

HEIGHT_UNITS = (" in", " cm")
DEFAULT_HEIGHT_UNIT = " in"


class Jurisdiction(BaseModel):
    """Issuing authority (US state / territory) and its AAMVA header values.

    Parameters:
        name: Display name (e.g., "California")
        code: Two-letter jurisdiction code written to DAJ
        iin: Six-digit Issuer Identification Number written to the header
        version: Two-digit AAMVA card design standard version
        country: Three-letter country code written to DCG
    """

    model_config = ConfigDict(frozen=True)

    name: str
    code: str = Field(..., pattern=r"^[A-Z]{2}$")
    iin: str = Field(..., pattern=r"^\d{6}$")
    version: str = Field(..., pattern=r"^\d{2}$")
    country: str = Field("USA", pattern=r"^[A-Z]{3}$")


class AttributeRecord(BaseModel):
    """Structured personal / license attributes for one credential.

    Dates (birth_date, issue_date, expiration_date, creation_date) are 8 ASCII
    digits in MMDDYYYY order. Sex uses the AAMVA codes 1 (male), 2 (female)
    and X (not specified).

    Parameters:
        state: Jurisdiction code (DAJ)
        country: Country code (DCG)
        iin: Issuer Identification Number (header)
        version: AAMVA version number (header)
        compliance_type: F = fully compliant (REAL ID), N = standard (DDA)
        creation_date: Record creation date (DEB)
        license_number: Customer ID number (DAQ)
        last_name: Family name (DCS)
        first_name: First name (DAC)
        middle_name: Middle name(s) (DAD)
        birth_date: Date of birth (DBB)
        issue_date: Document issue date (DBD)
        expiration_date: Document expiration date (DBA)
        sex: Sex code (DBC)
        height: Height, e.g. "070 in" (DAU)
        weight: Weight in pounds (DAW)
        eye_color: Three-letter eye color code (DAY)
        hair_color: Three-letter hair color code (DAZ)
        street: Street address (DAG)
        city: City (DAI)
        zip_code: Postal code (DAK)
        vehicle_class: Jurisdiction-specific vehicle class (DCA)
        restrictions: Restriction codes, "NONE" if blank (DCB)
        endorsements: Endorsement codes, "NONE" if blank (DCD)
        document_discriminator: Document discriminator (DCF)
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Jurisdiction slots
    state: str = Field("", alias="DAJ", description="Jurisdiction code")
    country: str = Field("", alias="DCG", description="Country")
    iin: str = Field("", alias="IIN", description="Issuer Identification Number")
    version: str = Field("", alias="Version", description="AAMVA version")

    # Mandatory metadata
    compliance_type: str = Field("", alias="DDA", description="Compliance type (F/N)")
    creation_date: str = Field("", alias="DEB", description="File creation date")

    # Personal / physical data
    license_number: str = Field("", alias="DAQ", description="License number")
    last_name: str = Field("", alias="DCS", description="Last name")
    first_name: str = Field("", alias="DAC", description="First name")
    middle_name: str = Field("", alias="DAD", description="Middle name")
    birth_date: str = Field("", alias="DBB", description="Date of birth")
    issue_date: str = Field("", alias="DBD", description="Issue date")
    expiration_date: str = Field("", alias="DBA", description="Expiration date")
    sex: str = Field("", alias="DBC", description="Sex code")
    height: str = Field("", alias="DAU", description="Height")
    weight: str = Field("", alias="DAW", description="Weight")
    eye_color: str = Field("", alias="DAY", description="Eye color")
    hair_color: str = Field("", alias="DAZ", description="Hair color")
    street: str = Field("", alias="DAG", description="Street address")
    city: str = Field("", alias="DAI", description="City")
    zip_code: str = Field("", alias="DAK", description="Zip code")
    vehicle_class: str = Field("", alias="DCA", description="Vehicle class")
    restrictions: str = Field("", alias="DCB", description="Restrictions")
    endorsements: str = Field("", alias="DCD", description="Endorsements")
    document_discriminator: str = Field("", alias="DCF", description="Document discriminator")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Slots are never null: None becomes "", numbers become their string form."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v
        return str(v)

    def get_element(self, element_id: str) -> str:
        """Return the slot value for a three-letter element identifier.

        Raises:
            KeyError: If the identifier does not map to a slot
        """
        return getattr(self, ELEMENT_SLOTS[element_id])

    def merge(self, updates: dict[str, Any]) -> "AttributeRecord":
        """Return a copy with the non-empty values of a partial update applied.

        Keys may be element identifiers or slot names. Jurisdiction slots are
        read-only and unknown keys are ignored.

        Parameters:
            updates: Partial attribute mapping (e.g., OCR extractor output)

        Returns:
            New AttributeRecord; self is left untouched
        """
        changes: dict[str, str] = {}
        for key, value in updates.items():
            slot = ELEMENT_SLOTS.get(key, key)
            if slot not in SLOT_NAMES or slot in JURISDICTION_SLOTS:
                continue
            if value is None or str(value).strip() == "":
                continue
            changes[slot] = str(value)
        return self.model_copy(update=changes)

    def normalized_restrictions(self) -> str:
        return self.restrictions if self.restrictions.strip() else NONE_PLACEHOLDER

    def normalized_endorsements(self) -> str:
        return self.endorsements if self.endorsements.strip() else NONE_PLACEHOLDER

    def normalized_height(self) -> str:
        """Height with a unit suffix; " in" is appended when none is present."""
        if self.height.endswith(HEIGHT_UNITS):
            return self.height
        return f"{self.height}{DEFAULT_HEIGHT_UNIT}"

    def missing_required_elements(self) -> list[str]:
        """Element identifiers of mandatory slots that are blank.

        The Encoder does not enforce these; callers that want a completeness
        check before encoding use this list.
        """
        return [
            element_id
            for element_id in REQUIRED_ELEMENTS
            if not self.get_element(element_id).strip()
        ]

    def to_elements(self) -> dict[str, str]:
        """Dump as an element-identifier keyed mapping."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_elements(cls, data: dict[str, Any], jurisdiction: Optional[Jurisdiction] = None) -> "AttributeRecord":
        """Build a record from an element-keyed (or slot-keyed) mapping.

        When a jurisdiction is given its slots are written over whatever the
        mapping carries.
        """
        record = cls.model_validate(data)
        if jurisdiction is not None:
            record = record.model_copy(update=jurisdiction_slots(jurisdiction))
        return record


def jurisdiction_slots(jurisdiction: Jurisdiction) -> dict[str, str]:
    """Slot values a jurisdiction pre-populates."""
    return {
        "state": jurisdiction.code,
        "country": jurisdiction.country,
        "iin": jurisdiction.iin,
        "version": jurisdiction.version,
    }


SLOT_NAMES = frozenset(AttributeRecord.model_fields)

# Element identifier (or header key) -> slot name
ELEMENT_SLOTS: dict[str, str] = {
    field.alias: name for name, field in AttributeRecord.model_fields.items()
}

JURISDICTION_SLOTS = frozenset({"state", "country", "iin", "version"})

REQUIRED_ELEMENTS = (
    "IIN",
    "Version",
    "DDA",
    "DEB",
    "DAQ",
    "DCS",
    "DAC",
    "DBB",
    "DBD",
    "DBA",
)
