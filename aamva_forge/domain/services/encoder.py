"""AAMVA Record Encoder.

Serializes an Attribute Record into the byte-exact text payload a PDF417
renderer consumes. Layout (AAMVA DL/ID Card Design Standard, 2020):

    header (21)      "@" LF RS CR "ANSI " IIN(6) Version(2) "00" "01"
    designator (10)  "DL" offset(4) length(4)
    subfile body     "DL" + elements, each "<ID><value>" LF
    terminator       CR

The offset is always 31 because header and designator never change length.
The designator length counts the subfile body plus the trailing CR.
"""

import logging

from aamva_forge.domain.attribute_record import AttributeRecord
from aamva_forge.domain.ports import EncodingError, Result

logger = logging.getLogger(__name__)

COMPLIANCE_INDICATOR = "@"
DATA_ELEMENT_SEPARATOR = "\n"
RECORD_SEPARATOR = "\x1e"
SEGMENT_TERMINATOR = "\r"
FILE_TYPE = "ANSI "
JURISDICTION_VERSION = "00"
NUMBER_OF_ENTRIES = "01"
SUBFILE_TYPE = "DL"

HEADER_LENGTH = 21
DESIGNATOR_LENGTH = 10
SUBFILE_OFFSET = HEADER_LENGTH + DESIGNATOR_LENGTH

# Name truncation indicators are structural placeholders, always emitted empty
TRUNCATION_ELEMENTS = frozenset({"DDE", "DDF", "DDG"})

# Fixed element order of the subfile body
CANONICAL_ORDER: tuple[str, ...] = (
    "DDA",  # compliance type
    "DEB",  # file creation date
    "DAQ",  # license number
    "DCS",  # last name
    "DDE",
    "DAC",  # first name
    "DDF",
    "DAD",  # middle name
    "DDG",
    "DCA",  # class
    "DCB",  # restrictions
    "DCD",  # endorsements
    "DBA",  # expiration date
    "DBB",  # date of birth
    "DBC",  # sex
    "DAY",  # eye color
    "DAZ",  # hair color
    "DAU",  # height
    "DAW",  # weight
    "DAG",  # street
    "DAI",  # city
    "DAJ",  # state
    "DAK",  # zip
    "DCF",  # document discriminator
    "DCG",  # country
    "DBD",  # issue date
)


def _element_value(record: AttributeRecord, element_id: str) -> str:
    if element_id in TRUNCATION_ELEMENTS:
        return ""
    if element_id == "DCB":
        return record.normalized_restrictions()
    if element_id == "DCD":
        return record.normalized_endorsements()
    if element_id == "DAU":
        return record.normalized_height()
    return record.get_element(element_id)


def build_subfile_body(record: AttributeRecord) -> str:
    """Subfile type tag followed by every element in canonical order."""
    parts = [SUBFILE_TYPE]
    for element_id in CANONICAL_ORDER:
        parts.append(f"{element_id}{_element_value(record, element_id)}{DATA_ELEMENT_SEPARATOR}")
    return "".join(parts)


def build_header(record: AttributeRecord) -> str:
    return (
        COMPLIANCE_INDICATOR
        + DATA_ELEMENT_SEPARATOR
        + RECORD_SEPARATOR
        + SEGMENT_TERMINATOR
        + FILE_TYPE
        + record.iin
        + record.version
        + JURISDICTION_VERSION
        + NUMBER_OF_ENTRIES
    )


def build_subfile_designator(body: str) -> str:
    """Subfile type, 4-digit offset and 4-digit length (body plus final CR)."""
    return f"{SUBFILE_TYPE}{SUBFILE_OFFSET:04d}{len(body) + 1:04d}"


def encode_record(record: AttributeRecord) -> str:
    """Serialize an Attribute Record into an AAMVA barcode payload.

    Blank mandatory slots are written as empty segments; completeness is the
    caller's responsibility (see AttributeRecord.missing_required_elements).

    Parameters:
        record: Fully populated Attribute Record (not mutated)

    Returns:
        str: header + designator + subfile body + segment terminator

    Raises:
        EncodingError: If the input is not an AttributeRecord
    """
    if not isinstance(record, AttributeRecord):
        raise EncodingError(
            f"Expected AttributeRecord, got {type(record).__name__}"
        )

    body = build_subfile_body(record)
    payload = build_header(record) + build_subfile_designator(body) + body + SEGMENT_TERMINATOR
    logger.debug(f"Encoded AAMVA record: body={len(body)} chars, total={len(payload)} chars")
    return payload


def encode_record_safe(record: AttributeRecord, strict: bool = False) -> Result[str]:
    """Encode without raising, for callers at the collaborator boundary.

    Parameters:
        record: Attribute Record to encode
        strict: When True, refuse records with blank mandatory slots

    Returns:
        Result[str]: The payload, or a failure naming the missing elements
    """
    try:
        if strict:
            missing = record.missing_required_elements()
            if missing:
                return Result.failure_result(
                    EncodingError(f"Missing required elements: {', '.join(missing)}", missing),
                    error_details={"missing_elements": missing},
                )
        return Result.success_result(encode_record(record))
    except (EncodingError, AttributeError) as e:
        return Result.failure_result(e, error_type="EncodingError")
