"""Barcode Reconciler - cross-validates a scanned record against reference data.

Decodes a raw AAMVA payload and compares every Element Catalog entry with the
reference Attribute Record, producing a ValidationReport. Scanned input is
expected to be imperfect; every problem is reported per field and nothing
is raised.

Per-field status resolution:
    1. Element absent from the scan           -> MISSING_IN_SCAN (final)
    2. Scanned value fails the catalog pattern -> INVALID_FORMAT
    3. Normalized values differ                -> MISMATCH (overrides 2)
    4. Otherwise                               -> MATCH (unless 2 applied)

Blank restrictions and endorsements are compared as the "NONE" the Encoder
writes, while the report shows the reference slot as given.
"""

import logging
import re
from typing import Optional

from aamva_forge.domain.attribute_record import AttributeRecord
from aamva_forge.domain.element_catalog import ELEMENT_CATALOG, CatalogEntry
from aamva_forge.domain.enums import ValidationStatus
from aamva_forge.domain.services.decoder import decode_record
from aamva_forge.domain.services.encoder import SUBFILE_OFFSET
from aamva_forge.domain.validation_report import (
    EMPTY_REFERENCE,
    NOT_FOUND,
    ValidationFieldResult,
    ValidationReport,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_NON_DIGIT = re.compile(r"\D")

HEIGHT_ELEMENT = "DAU"


def normalize_value(value: str) -> str:
    """Uppercase, collapse whitespace runs to one space, trim."""
    return _WHITESPACE_RUN.sub(" ", (value or "").upper()).strip()


def digits_only(value: str) -> str:
    return _NON_DIGIT.sub("", value or "")


def height_digits(value: str) -> str:
    """Digits of a height with leading zeros dropped ("070 in" -> "70")."""
    return digits_only(value).lstrip("0")


def has_valid_signature(raw: str) -> bool:
    """Record starts with the compliance indicator and carries the ANSI tag
    within the header region (everything before the first subfile body)."""
    return raw.startswith("@") and "ANSI" in raw[:SUBFILE_OFFSET]


def _expected_value(reference: AttributeRecord, entry: CatalogEntry) -> str:
    # What the Encoder would have written for the slot
    if entry.element_id == "DCB":
        return reference.normalized_restrictions()
    if entry.element_id == "DCD":
        return reference.normalized_endorsements()
    return reference.get_element(entry.element_id)


def reconcile_field(
    entry: CatalogEntry,
    observed: str,
    reference_value: str,
    expected: Optional[str] = None,
) -> ValidationFieldResult:
    """Validate one present element against its catalog entry and reference.

    The observed value is compared with `expected` when given (the reference
    as the Encoder would serialize it); the report carries `reference_value`.
    """
    status = ValidationStatus.MATCH
    message = ""

    if not entry.matches_format(observed):
        status = ValidationStatus.INVALID_FORMAT
        message = f"Format mismatch for {entry.description}. Expected pattern."

    norm_observed = normalize_value(observed)
    norm_reference = normalize_value(reference_value if expected is None else expected)

    if entry.element_id == HEIGHT_ELEMENT:
        observed_digits = height_digits(norm_observed)
        reference_digits = height_digits(norm_reference)
        if observed_digits != reference_digits:
            status = ValidationStatus.MISMATCH
            message = f"Values differ: Form({reference_digits}) vs Scan({observed_digits})"
    elif norm_observed != norm_reference:
        # A data-integrity discrepancy outranks a pattern violation
        status = ValidationStatus.MISMATCH
        message = "Data mismatch."

    return ValidationFieldResult(
        element_id=entry.element_id,
        description=entry.description,
        reference_value=reference_value,
        observed_value=observed,
        status=status,
        message=message,
    )


def reconcile(raw: str, reference: AttributeRecord) -> ValidationReport:
    """Cross-validate a raw scanned record against a reference Attribute Record.

    Parameters:
        raw: Raw payload (scanner output or fresh Encoder output)
        reference: Attribute Record holding the expected values

    Returns:
        ValidationReport: Signature flag, the raw string, and one field result
        per catalog entry in catalog order
    """
    raw = raw if isinstance(raw, str) else ""
    observed_map = decode_record(raw)
    results: list[ValidationFieldResult] = []

    for entry in ELEMENT_CATALOG:
        observed = observed_map.get(entry.element_id)
        reference_value = reference.get_element(entry.element_id)

        if not observed:
            results.append(ValidationFieldResult(
                element_id=entry.element_id,
                description=entry.description,
                reference_value=reference_value or EMPTY_REFERENCE,
                observed_value=NOT_FOUND,
                status=ValidationStatus.MISSING_IN_SCAN,
            ))
            continue

        results.append(reconcile_field(entry, observed, reference_value, _expected_value(reference, entry)))

    report = ValidationReport(
        is_valid_signature=has_valid_signature(raw),
        raw_string=raw,
        fields=tuple(results),
    )

    issues = report.issues()
    logger.debug(
        f"Reconciled {len(results)} elements, {len(issues)} issues: "
        + ", ".join(f"{r.element_id}={r.status.value}" for r in issues)
    )
    return report
