"""Unit tests for the Element Catalog and validation report models."""

import dataclasses

import pytest

from aamva_forge.domain.attribute_record import AttributeRecord
from aamva_forge.domain.element_catalog import (
    ELEMENT_CATALOG,
    catalog_element_ids,
    get_entry,
)
from aamva_forge.domain.enums import ComplianceType, ValidationStatus
from aamva_forge.domain.validation_report import ValidationFieldResult, ValidationReport


class TestElementCatalog:
    """Test suite for the Element Catalog."""

    def test_identifiers_are_unique(self):
        ids = catalog_element_ids()
        assert len(ids) == len(set(ids)) == len(ELEMENT_CATALOG)

    def test_every_entry_maps_to_a_slot(self):
        for entry in ELEMENT_CATALOG:
            assert entry.slot in AttributeRecord.model_fields

    def test_entries_are_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            ELEMENT_CATALOG[0].description = "changed"

    def test_get_entry(self):
        assert get_entry("DAJ").description == "State Code"
        assert get_entry("ZZZ") is None

    @pytest.mark.parametrize("element_id,value,valid", [
        ("DAJ", "CA", True),
        ("DAJ", "california", False),
        ("DAJ", "ca", False),
        ("DBB", "08311977", True),
        ("DBB", "1977-08-31", False),
        ("DAQ", "d1234567", True),
        ("DAQ", "D-123", False),
        ("DDA", "F", True),
        ("DDA", "N", True),
        ("DDA", "|", False),
        ("DBC", "X", True),
        ("DBC", "M", False),
        ("DAK", "95814-0000", True),
        ("DAK", "958", False),
        ("DCS", "DE LA CRUZ", True),
        ("DCS", "O'BRIEN", False),
        ("DAD", "anything at all", True),
    ])
    def test_patterns(self, element_id, value, valid):
        assert get_entry(element_id).matches_format(value) is valid

    @pytest.mark.parametrize("compliance", list(ComplianceType))
    def test_compliance_pattern_accepts_every_compliance_type(self, compliance):
        assert get_entry("DDA").matches_format(compliance.value) is True

    def test_compliance_pattern_rejects_other_letters(self):
        entry = get_entry("DDA")

        assert entry.matches_format("X") is False
        assert entry.matches_format("FN") is False


class TestValidationReport:
    """Test suite for ValidationReport helpers."""

    def _report(self, *statuses):
        fields = tuple(
            ValidationFieldResult(
                element_id=f"DA{chr(ord('A') + i)}",
                description="Field",
                reference_value="x",
                observed_value="x",
                status=status,
            )
            for i, status in enumerate(statuses)
        )
        return ValidationReport(is_valid_signature=True, raw_string="@", fields=fields)

    def test_counts_include_every_status(self):
        report = self._report(ValidationStatus.MATCH, ValidationStatus.MATCH, ValidationStatus.MISMATCH)
        counts = report.counts()

        assert counts[ValidationStatus.MATCH] == 2
        assert counts[ValidationStatus.MISMATCH] == 1
        assert counts[ValidationStatus.MISSING_IN_SCAN] == 0
        assert counts[ValidationStatus.INVALID_FORMAT] == 0

    def test_is_clean(self):
        assert self._report(ValidationStatus.MATCH).is_clean
        assert not self._report(ValidationStatus.INVALID_FORMAT).is_clean

    def test_invalid_signature_is_never_clean(self):
        report = self._report(ValidationStatus.MATCH).model_copy(update={"is_valid_signature": False})
        assert not report.is_clean

    def test_report_is_frozen(self):
        report = self._report(ValidationStatus.MATCH)
        with pytest.raises(Exception):
            report.raw_string = "changed"

    def test_to_dict(self):
        data = self._report(ValidationStatus.MATCH, ValidationStatus.MISSING_IN_SCAN).to_dict()

        assert data["is_valid_signature"] is True
        assert data["fields"][1]["status"] == "MISSING_IN_SCAN"
        assert data["summary"] == {
            "MATCH": 1,
            "MISMATCH": 0,
            "MISSING_IN_SCAN": 1,
            "INVALID_FORMAT": 0,
        }
