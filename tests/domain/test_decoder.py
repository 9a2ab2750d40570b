"""Unit tests for the AAMVA record decoder."""

import pytest

from aamva_forge.domain.element_catalog import ELEMENT_CATALOG
from aamva_forge.domain.services.decoder import decode_record
from aamva_forge.domain.services.encoder import encode_record


class TestDecodeRecord:
    """Test suite for decode_record."""

    def test_round_trip_recovers_catalog_elements(self, sample_record):
        """Test decoding encoder output recovers every catalog element."""
        decoded = decode_record(encode_record(sample_record))

        for entry in ELEMENT_CATALOG:
            expected = sample_record.get_element(entry.element_id)
            if entry.element_id in ("DCB", "DCD"):
                expected = "NONE"
            assert decoded[entry.element_id] == expected, entry.element_id

    def test_first_element_is_separated_from_header(self, sample_record):
        """Test DDA shares a line with header and designator but still decodes."""
        decoded = decode_record(encode_record(sample_record))

        assert decoded["DDA"] == "F"
        assert "ANS" not in decoded

    @pytest.mark.parametrize("iin,version", [
        ("", ""),
        ("ABC123", "10"),
        ("63601", "9"),
    ])
    def test_header_with_irregular_iin_still_separates_first_element(self, sample_record, iin, version):
        """Test blank or non-numeric jurisdiction slots do not swallow DDA."""
        record = sample_record.merge({})
        record.iin = iin
        record.version = version

        decoded = decode_record(encode_record(record))

        assert decoded["DDA"] == "F"
        assert "ANS" not in decoded
        assert decoded["DAQ"] == "D1234567"

    def test_header_line_without_glued_element_is_dropped(self):
        """Test a header line followed by elements on their own lines."""
        raw = "@\n\x1e\rANSI 636014100001DL00310020\rDAQX12345\nDDAN\n"

        assert decode_record(raw) == {"DAQ": "X12345", "DDA": "N"}

    def test_truncation_placeholders_are_not_decoded(self, sample_record):
        """Test empty placeholder lines are too short to carry data."""
        decoded = decode_record(encode_record(sample_record))

        for element_id in ("DDE", "DDF", "DDG"):
            assert decoded.get(element_id, "") == ""

    def test_glued_subfile_tag_is_stripped(self):
        """Test "DLDDAF" yields DDA = F."""
        assert decode_record("@\nDLDDAF\n") == {"DDA": "F"}

    @pytest.mark.parametrize("tag", ["DL", "ID", "EN"])
    def test_all_subfile_tags_are_stripped(self, tag):
        decoded = decode_record(f"@\n{tag}DAQX12345\n")
        assert decoded == {"DAQ": "X12345"}

    def test_missing_compliance_indicator_yields_empty_map(self, sample_record):
        """Test records not starting with "@" are rejected."""
        payload = encode_record(sample_record)

        assert decode_record(payload[1:]) == {}
        assert decode_record("ANSI 636000DAQ123") == {}
        assert decode_record("") == {}

    def test_cr_and_lf_are_interchangeable(self, sample_record):
        """Test scanners that swap CR and LF still decode."""
        payload = encode_record(sample_record)
        swapped = payload.replace("\n", "\r")

        assert decode_record(swapped) == decode_record(payload)

    def test_crlf_line_endings(self):
        decoded = decode_record("@\r\nDAQ123456\r\nDCSDOE\r\n")
        assert decoded == {"DAQ": "123456", "DCS": "DOE"}

    def test_short_lines_are_discarded(self):
        """Test lines under four characters carry no element."""
        decoded = decode_record("@\nDAQ\nDCS\nDACJ\n")
        assert decoded == {"DAC": "J"}

    def test_values_are_trimmed(self):
        decoded = decode_record("@\n  DCS  SMITH  \n")
        assert decoded == {"DCS": "SMITH"}

    def test_last_occurrence_wins(self):
        """Test duplicated elements keep the final value."""
        decoded = decode_record("@\nDCSSMITH\nDCSJONES\n")
        assert decoded == {"DCS": "JONES"}

    def test_lines_without_identifier_are_ignored(self):
        decoded = decode_record("@\nhello world\n1234567\nDAQ999\n")
        assert decoded == {"DAQ": "999"}

    def test_partial_record(self):
        """Test truncated scans yield the elements that survived."""
        decoded = decode_record("@\n\x1e\rANSI 636000100001DL00310050DLDAQT64235789\nDCSSAMPLE\nDAC")

        assert decoded == {"DAQ": "T64235789", "DCS": "SAMPLE"}

    def test_never_raises_on_garbage(self):
        for raw in ("@", "@\x00\x01\x02", "@" + "\n" * 50, "@ANSI", "@\nDL"):
            assert isinstance(decode_record(raw), dict)
