"""Domain enumerations for the AAMVA record codec.

Enums are `str` subclasses so that they serialize to their wire/report value
directly (JSON reports, Rich tables) without custom encoders.
"""

from enum import Enum


class ValidationStatus(str, Enum):
    """Outcome of reconciling one catalog element against the reference record."""
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"
    MISSING_IN_SCAN = "MISSING_IN_SCAN"
    INVALID_FORMAT = "INVALID_FORMAT"


class ComplianceType(str, Enum):
    """DDA compliance indicator values."""
    FULLY_COMPLIANT = "F"  # REAL ID
    STANDARD = "N"


class SubfileType(str, Enum):
    """Two-letter subfile type tags a decoder may find glued to the first element."""
    DRIVER_LICENSE = "DL"
    ID_CARD = "ID"
    ENHANCED = "EN"
