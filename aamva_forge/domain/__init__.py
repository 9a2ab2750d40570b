"""Domain layer for AAMVA-Forge.

This module contains the attribute record schema, the element catalog and
the validation report models. All domain models are pure Python with no
external dependencies beyond Pydantic.
"""

from .attribute_record import AttributeRecord, Jurisdiction
from .element_catalog import ELEMENT_CATALOG, CatalogEntry
from .enums import ComplianceType, SubfileType, ValidationStatus
from .validation_report import ValidationFieldResult, ValidationReport

__all__ = [
    "AttributeRecord",
    "Jurisdiction",
    "ELEMENT_CATALOG",
    "CatalogEntry",
    "ComplianceType",
    "SubfileType",
    "ValidationStatus",
    "ValidationFieldResult",
    "ValidationReport",
]
