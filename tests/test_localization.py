"""Tests for Thai date formatting and document-type normalization."""
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from records_form.localization import (
    THAI_MONTHS,
    format_birth_date,
    format_local_date,
    format_request_date,
    normalize_document_type,
    parse_iso_date,
    thai_month_name,
)
from records_form.models import BLANK_DATE, DocumentVariant


@pytest.mark.parametrize("month", range(1, 13))
def test_format_local_date_every_month(month):
    """Test each month maps to its table entry with the era offset applied."""
    local = format_local_date(date(2024, month, 9))

    assert local.day == 9
    assert local.month_name == THAI_MONTHS[month - 1]
    assert local.month_name != ""
    assert local.year == 2567


@pytest.mark.parametrize("month", [0, 13, -1, 99])
def test_format_local_date_out_of_range_month(month):
    """Test an impossible month gives an empty name instead of failing."""
    local = format_local_date(SimpleNamespace(year=2024, month=month, day=1))

    assert local.month_name == ""
    assert local.year == 2567
    assert thai_month_name(month) == ""


def test_format_birth_date_leap_day():
    """Test a leap-day birth date converts field by field."""
    local = format_birth_date("2008-02-29")

    assert local.day == 29
    assert local.month_name == THAI_MONTHS[1]
    assert local.year == 2551
    assert local.day_text == "29"
    assert local.year_text == "2551"


@pytest.mark.parametrize("text", ["not-a-date", "", "2008-02-30", "29/02/2008", "  ", "2008-2-9", "20080229"])
def test_format_birth_date_malformed(text):
    """Test malformed birth dates render as blank fields."""
    local = format_birth_date(text)

    assert local == BLANK_DATE
    assert local.day_text == ""
    assert local.month_name == ""
    assert local.year_text == ""


def test_parse_iso_date():
    assert parse_iso_date("2008-02-29") == date(2008, 2, 29)
    assert parse_iso_date(" 2010-12-01 ") == date(2010, 12, 1)
    assert parse_iso_date("garbage") is None
    assert parse_iso_date(None) is None
    assert parse_iso_date("2008-2-9") is None
    assert parse_iso_date("๒๐๐๘-๐๒-๒๙") is None


def test_format_request_date():
    """Test the letter date line uses the Thai month and Buddhist year."""
    result = format_request_date(datetime(2025, 6, 15, 9, 30))

    assert result == "วันที่ 15  เดือน มิถุนายน  พ.ศ. 2568"


@pytest.mark.parametrize("label", ["ปพ.7", "ปพ7", "ปพ.๗", "ปพ๗", " ปพ.7 ", "ปพ. 7", "ปพ．7", "ใบรับรอง ปพ.7"])
def test_normalize_certificate_labels(label):
    """Test every spelling of the certificate label selects the certificate form."""
    assert normalize_document_type(label) is DocumentVariant.CERTIFICATE_REQUEST


@pytest.mark.parametrize("label", ["ปพ.1", "รบ.1/ปพ.1", "", "transcript", "ปพ.๑", "ปพ."])
def test_normalize_other_labels(label):
    """Test anything else falls back to the transcript form."""
    assert normalize_document_type(label) is DocumentVariant.STANDARD_TRANSCRIPT_REQUEST


def test_normalize_none_label():
    assert normalize_document_type(None) is DocumentVariant.STANDARD_TRANSCRIPT_REQUEST


@pytest.mark.parametrize("label", ["ปพ.7", "ปพ.๗", "ปพ.1", "", "random text", "PP.7", "ปพ 7"])
def test_normalize_is_idempotent(label):
    """Test normalizing an already normalized label is stable."""
    once = normalize_document_type(label)

    assert normalize_document_type(once) is once
