"""Tests for request models and settings."""
import pytest
from pydantic import ValidationError

from records_form.config import FormSettings, load_settings
from records_form.models import (
    DIRECTOR_PLACEHOLDER,
    REGISTRAR_PLACEHOLDER,
    Officials,
    PageGeometry,
    RequestRecord,
)


def test_request_record_class_alias(request_data):
    """Test the stored "class" key maps to ``grade``."""
    record = RequestRecord(**request_data)

    assert record.grade == "3"
    assert record.room == "2"


def test_request_record_populate_by_name(request_data):
    request_data.pop("class")
    record = RequestRecord(grade="5", **request_data)

    assert record.grade == "5"


def test_request_record_optional_defaults(minimal_record):
    assert minimal_record.prefix == ""
    assert minimal_record.document_type == ""
    assert minimal_record.grade == ""
    assert minimal_record.father_name == ""
    assert minimal_record.academic_year == ""


def test_request_record_is_frozen(record):
    with pytest.raises(ValidationError):
        record.name = "other"


def test_request_record_requires_name(request_data):
    request_data.pop("name")

    with pytest.raises(ValidationError):
        RequestRecord(**request_data)


def test_applicant_name_and_filename(record, minimal_record):
    assert record.applicant_name == "นายสมชาย ใจดี"
    assert minimal_record.applicant_name == "สมชาย ใจดี"
    assert record.download_filename == "request-65f1c2a9e4b0a1d2c3f4a5b6.pdf"


def test_officials_with_fallback():
    """Test stored names are kept only when both are present."""
    assert Officials.with_fallback("A", "B") == Officials(registrar="A", director="B")

    for registrar, director in (("", "B"), ("A", ""), (None, None)):
        officials = Officials.with_fallback(registrar, director)
        assert officials.registrar == REGISTRAR_PLACEHOLDER
        assert officials.director == DIRECTOR_PLACEHOLDER


def test_page_geometry_defaults():
    geometry = PageGeometry()

    assert geometry.printable_width == 174.0
    assert geometry.bottom_limit == 279.0


def test_load_settings_defaults():
    assert load_settings(None) == FormSettings()


def test_load_settings_from_yaml(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        "school:\n"
        "  address_lines: [Sample School, Main Road]\n"
        "  addressee: Principal\n"
        "assets:\n"
        "  search_dirs: [/srv/assets]\n"
        "page:\n"
        "  margin_left: 20\n",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.school.address_lines == ["Sample School", "Main Road", ""]
    assert settings.school.addressee == "Principal"
    assert settings.assets.search_dirs == ["/srv/assets"]
    assert settings.assets.names().regular_font == "fonts/THSarabun.ttf"
    assert settings.page.geometry().left == 20
    assert settings.page.geometry().printable_width == 172


def test_load_settings_empty_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path) == FormSettings()


def test_settings_reject_long_address(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("school:\n  address_lines: [a, b, c, d]\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        load_settings(path)
