"""OCR Field Extractor - best-effort text mining for US driver's licenses.

Turns free text recognized from a photographed card into a partial Attribute
Record keyed by element identifier. The heuristics target the printed labels
found on US licenses (DOB, EXP, HGT, numbered AAMVA field labels such as
"4B." for expiration, Texas-style "1. LAST / 2. FIRST MIDDLE" names).

This module is independent of the codec: its output is treated like any
other partially-filled record, with no notion of confidence or provenance.
Every function is pure and never raises on string input.
"""

import logging
import re
from typing import Optional

from aamva_forge.domain.attribute_record import AttributeRecord, Jurisdiction
from aamva_forge.domain.jurisdictions import detect_jurisdiction, new_attribute_record

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"(\d{2}[-/. ]\d{2}[-/. ]\d{4}|\d{4}[-/. ]\d{2}[-/. ]\d{2})")

SEX_FEMALE_PATTERNS = (re.compile(r"\b(SEX|S)\s*[:.]?\s*F\b"), re.compile(r"\b15\.?\s*F\b"))
SEX_MALE_PATTERNS = (re.compile(r"\b(SEX|S)\s*[:.]?\s*M\b"), re.compile(r"\b15\.?\s*M\b"))

# 5'-02" style heights, with and without the closing inch mark
HEIGHT_PATTERN = re.compile(r"(?:HGT|HEIGHT|16\.?)\s*[:.]?\s*(\d)[' -]{0,2}(\d{2})\"")
HEIGHT_PATTERN_SIMPLE = re.compile(r"(?:HGT|HEIGHT|16\.?)\s*[:.]?\s*(\d)[' -]{0,2}(\d{2})")
WEIGHT_PATTERN = re.compile(r"(?:WGT|WEIGHT)\s*[:.]?\s*(\d{2,3})")

EYE_CODES = ("BRO", "BLU", "GRN", "HAZ", "BLK", "GRY", "MAR", "PNK", "DIC")
HAIR_CODES = ("BAL", "BLK", "BLN", "BRO", "GRY", "RED", "SDY", "WHI")

NUMBERED_LAST_NAME = re.compile(r"1\.\s*([A-Z]+)")
NUMBERED_FIRST_NAME = re.compile(r"2\.\s*([A-Z]+)(?:\s+([A-Z]+))?")
LABELED_LAST_NAME = re.compile(r"(?:LN|LAST|SURNAME)\s*[:.]?\s*([A-Z]+)")
LABELED_FIRST_NAME = re.compile(r"(?:FN|FIRST|GIVEN)\s*[:.]?\s*([A-Z]+)")

ZIP_PATTERN = re.compile(r"\b(\d{5})[- ]?(\d{4})?\b")


def to_aamva_date(date_str: str) -> str:
    """Convert YYYY-MM-DD or MM/DD/YYYY (any separator) to MMDDYYYY.

    Returns:
        8-digit date, or "" if the input is not a recognizable date
    """
    clean = re.sub(r"[^0-9]", "", date_str)
    if len(clean) != 8:
        return ""

    if 1900 < int(clean[0:4]) < 2100:
        return clean[4:6] + clean[6:8] + clean[0:4]
    if 1900 < int(clean[4:8]) < 2100:
        return clean
    return ""


def _extract_dates(lines: list[str], full_text: str, updates: dict[str, str]) -> None:
    for line in lines:
        upper = line.upper()
        found = DATE_PATTERN.search(line)
        if not found:
            continue
        date_val = to_aamva_date(found.group(0))
        if not date_val:
            continue

        if "DOB" in upper or "BIRTH" in upper or "3." in upper:
            updates["DBB"] = date_val
        elif "EXP" in upper or "4B." in upper:
            updates["DBA"] = date_val
        elif "ISS" in upper or "4A." in upper:
            updates["DBD"] = date_val

    # Unlabeled cards: earliest year is the birth date, latest the expiration
    if "DBB" not in updates or "DBA" not in updates:
        dates = [to_aamva_date(d.group(0)) for d in DATE_PATTERN.finditer(full_text)]
        dates = sorted((d for d in dates if len(d) == 8), key=lambda d: int(d[4:]))
        if dates:
            updates.setdefault("DBB", dates[0])
            updates.setdefault("DBA", dates[-1])


def _extract_sex(full_text: str) -> Optional[str]:
    if any(p.search(full_text) for p in SEX_FEMALE_PATTERNS):
        return "2"
    if any(p.search(full_text) for p in SEX_MALE_PATTERNS):
        return "1"
    return None


def _extract_height(full_text: str) -> Optional[str]:
    match = HEIGHT_PATTERN.search(full_text) or HEIGHT_PATTERN_SIMPLE.search(full_text)
    if not match:
        return None
    inches = int(match.group(1)) * 12 + int(match.group(2))
    return str(inches).zfill(3)


def _extract_eye_color(full_text: str) -> Optional[str]:
    for code in EYE_CODES:
        idx = full_text.find(code)
        if idx < 0:
            continue
        # Require an EYE / "18." label nearby so addresses don't match
        context = full_text[max(0, idx - 10):idx + 3]
        if "EYE" in context or "18" in context:
            return code
    return None


def _extract_hair_color(full_text: str) -> Optional[str]:
    for code in HAIR_CODES:
        if f"HAIR {code}" in full_text or f"HAI {code}" in full_text:
            return code
    return None


def _extract_names(full_text: str, updates: dict[str, str]) -> None:
    last = NUMBERED_LAST_NAME.search(full_text) or LABELED_LAST_NAME.search(full_text)
    if last:
        updates["DCS"] = last.group(1)

    numbered_first = NUMBERED_FIRST_NAME.search(full_text)
    if numbered_first:
        updates["DAC"] = numbered_first.group(1)
        if numbered_first.group(2):
            updates["DAD"] = numbered_first.group(2)
    else:
        labeled_first = LABELED_FIRST_NAME.search(full_text)
        if labeled_first:
            updates["DAC"] = labeled_first.group(1)


def extract_fields(text: str) -> dict[str, str]:
    """Mine license attributes out of OCR text.

    Parameters:
        text: Free text recognized from a photographed license

    Returns:
        dict: Element identifier -> value for every attribute found
    """
    updates: dict[str, str] = {}
    if not text:
        return updates

    lines = [line.strip() for line in text.split("\n") if line.strip()]
    full_text = text.upper()

    _extract_dates(lines, full_text, updates)

    for element_id, value in (
        ("DBC", _extract_sex(full_text)),
        ("DAU", _extract_height(full_text)),
        ("DAY", _extract_eye_color(full_text)),
        ("DAZ", _extract_hair_color(full_text)),
    ):
        if value:
            updates[element_id] = value

    weight = WEIGHT_PATTERN.search(full_text)
    if weight:
        updates["DAW"] = weight.group(1)

    _extract_names(full_text, updates)

    zip_match = ZIP_PATTERN.search(full_text)
    if zip_match:
        updates["DAK"] = zip_match.group(1) + (zip_match.group(2) or "0000")

    logger.debug(f"OCR extraction found elements: {sorted(updates)}")
    return updates


def record_from_ocr_text(
    text: str,
    fallback: Jurisdiction,
    base: Optional[AttributeRecord] = None,
) -> AttributeRecord:
    """Build an Attribute Record from OCR text.

    The jurisdiction is detected from the text (falling back to the given one)
    unless a base record is supplied, whose jurisdiction slots are kept.
    """
    if base is None:
        base = new_attribute_record(detect_jurisdiction(text or "") or fallback)
    return base.merge(extract_fields(text))
