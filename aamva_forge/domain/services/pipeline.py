"""Codec Pipeline - the record/symbol round trip driven through the ports.

Connects the pure codec operations to the external collaborators:

    AttributeRecord -> encode -> BarcodeRendererPort -> symbol image
    symbol image -> BarcodeScannerPort -> reconcile against reference
    card photo -> OCRTextPort -> OCR extractor -> AttributeRecord

Adapters are injected by the caller; nothing here knows how an image is
rendered, scanned or recognized.
"""

import logging
from typing import Optional

from aamva_forge.domain.attribute_record import AttributeRecord, Jurisdiction
from aamva_forge.domain.ports import (
    BarcodeRendererPort,
    BarcodeScannerPort,
    OCRTextPort,
    Result,
)
from aamva_forge.domain.services.encoder import encode_record_safe
from aamva_forge.domain.services.ocr_extractor import record_from_ocr_text
from aamva_forge.domain.services.reconciler import reconcile
from aamva_forge.domain.validation_report import ValidationReport

logger = logging.getLogger(__name__)


def render_barcode(
    record: AttributeRecord,
    renderer: BarcodeRendererPort,
    strict: bool = False,
) -> Result[bytes]:
    """Encode a record and render the payload as a barcode symbol.

    Parameters:
        record: Attribute Record to encode
        renderer: Adapter producing the symbol image from the payload
        strict: Refuse records with blank mandatory slots

    Returns:
        Result[bytes]: Symbol image bytes, or the encoding/rendering failure
    """
    encoded = encode_record_safe(record, strict=strict)
    if encoded.is_failure():
        return Result.failure_result(
            encoded.error,
            error_type=encoded.error_type,
            error_details=encoded.error_details,
        )

    try:
        image = renderer.render(encoded.value)
    except (OSError, ValueError) as e:
        logger.error(f"Barcode rendering failed: {type(e).__name__}")
        return Result.failure_result(e, error_details={"stage": "render"})

    logger.debug(f"Rendered barcode symbol: payload={len(encoded.value)} chars, image={len(image)} bytes")
    return Result.success_result(image)


def verify_scan(
    image: bytes,
    scanner: BarcodeScannerPort,
    reference: AttributeRecord,
) -> ValidationReport:
    """Scan a symbol image and reconcile its payload against a reference.

    A scanner that finds no symbol produces the same report as an empty
    scan: invalid signature, every field MISSING_IN_SCAN.
    """
    raw = scanner.scan(image)
    if raw is None:
        logger.warning("No barcode symbol found in image")
        raw = ""
    return reconcile(raw, reference)


def record_from_photo(
    image: bytes,
    ocr: OCRTextPort,
    fallback: Jurisdiction,
    base: Optional[AttributeRecord] = None,
) -> AttributeRecord:
    """Recognize a card photo and mine its text into an Attribute Record."""
    text = ocr.recognize(image) or ""
    logger.debug(f"OCR recognized {len(text)} chars")
    return record_from_ocr_text(text, fallback, base=base)
