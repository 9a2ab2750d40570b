"""AAMVA Record Decoder.

Turns raw barcode text into a mapping of element identifier to observed
value. Input may come from noisy scan hardware, so decoding is best-effort:
malformed input yields a partial or empty map and never raises.
"""

import logging
import re

from aamva_forge.domain.enums import SubfileType

logger = logging.getLogger(__name__)

_SUBFILE_TAGS = "|".join(tag.value for tag in SubfileType)

# The file header and subfile designators share a line with the first
# element. Everything up to the first glued "<type><element id>" goes, or the
# whole line when no element follows. Designators ("DL0031...") never qualify.
HEADER_PATTERN = re.compile(rf"^ANSI ?.*?(?=(?:{_SUBFILE_TAGS})[A-Z]{{3}}|$)")
# Some encoders glue the subfile type to the first element: "DLDAQ123..."
GLUED_SUBFILE_PATTERN = re.compile(rf"^(?:{_SUBFILE_TAGS})[A-Z]{{3}}")
ELEMENT_PATTERN = re.compile(r"^([A-Z]{3})(.*)$", re.DOTALL)

MIN_LINE_LENGTH = 4


def decode_record(raw: str) -> dict[str, str]:
    """Parse a raw AAMVA payload into element identifier -> value.

    CR is treated like LF since scanners and transports swap them. The file
    header and subfile designators are cut from the line they share with the
    first element. The last occurrence of a repeated element wins.

    Parameters:
        raw: Raw text as produced by an encoder or a barcode scanner

    Returns:
        dict: Observed (untyped, unvalidated) values; empty if the record does
        not start with the compliance indicator "@"
    """
    elements: dict[str, str] = {}
    if not isinstance(raw, str) or not raw.startswith("@"):
        logger.warning("Rejected record without compliance indicator")
        return elements

    for line in raw.replace("\r", "\n").split("\n"):
        line = HEADER_PATTERN.sub("", line.strip(), count=1)

        if GLUED_SUBFILE_PATTERN.match(line):
            line = line[2:]

        if len(line) < MIN_LINE_LENGTH:
            continue

        match = ELEMENT_PATTERN.match(line)
        if match:
            elements[match.group(1)] = match.group(2).strip()

    logger.debug(f"Decoded {len(elements)} elements")
    return elements
