"""Domain services for AAMVA-Forge.

This package contains the codec operations (encode, decode, reconcile) and
the OCR field extractor. All services are pure functions over their inputs;
the pipeline functions reach external collaborators only through ports.
"""

from .encoder import encode_record, encode_record_safe
from .decoder import decode_record
from .reconciler import reconcile
from .ocr_extractor import extract_fields, record_from_ocr_text
from .pipeline import record_from_photo, render_barcode, verify_scan

__all__ = [
    "encode_record",
    "encode_record_safe",
    "decode_record",
    "reconcile",
    "extract_fields",
    "record_from_ocr_text",
    "render_barcode",
    "verify_scan",
    "record_from_photo",
]
