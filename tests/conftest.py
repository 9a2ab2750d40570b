"""Shared fixtures for AAMVA-Forge tests."""

import pytest

from aamva_forge.domain.attribute_record import AttributeRecord
from aamva_forge.domain.jurisdictions import get_jurisdiction, new_attribute_record


@pytest.fixture
def california():
    return get_jurisdiction("CA")


@pytest.fixture
def sample_record(california) -> AttributeRecord:
    """Fully populated California record with blank restrictions/endorsements."""
    return new_attribute_record(california).merge({
        "DDA": "F",
        "DEB": "01152024",
        "DAQ": "D1234567",
        "DCS": "SAMPLE",
        "DAC": "JANE",
        "DAD": "ANNE",
        "DBB": "08311977",
        "DBD": "01152024",
        "DBA": "08312029",
        "DBC": "2",
        "DAU": "064 in",
        "DAW": "120",
        "DAY": "BRO",
        "DAZ": "BRO",
        "DAG": "123 MAIN STREET",
        "DAI": "SACRAMENTO",
        "DAK": "958140000",
        "DCA": "C",
        "DCF": "0115202412345",
    })


@pytest.fixture
def sample_body() -> str:
    """Expected subfile body for sample_record."""
    return (
        "DL"
        "DDAF\n"
        "DEB01152024\n"
        "DAQD1234567\n"
        "DCSSAMPLE\n"
        "DDE\n"
        "DACJANE\n"
        "DDF\n"
        "DADANNE\n"
        "DDG\n"
        "DCAC\n"
        "DCBNONE\n"
        "DCDNONE\n"
        "DBA08312029\n"
        "DBB08311977\n"
        "DBC2\n"
        "DAYBRO\n"
        "DAZBRO\n"
        "DAU064 in\n"
        "DAW120\n"
        "DAG123 MAIN STREET\n"
        "DAISACRAMENTO\n"
        "DAJCA\n"
        "DAK958140000\n"
        "DCF0115202412345\n"
        "DCGUSA\n"
        "DBD01152024\n"
    )
