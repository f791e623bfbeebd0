"""Shared fixtures for records-form tests."""

from datetime import datetime, timezone

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from records_form.models import Officials, RequestRecord
from records_form.resources import AssetNames


@pytest.fixture
def request_data():
    """A transcript request with every optional field filled in."""
    return {
        "id": "65f1c2a9e4b0a1d2c3f4a5b6",
        "prefix": "นาย",
        "name": "สมชาย ใจดี",
        "document_type": "ปพ.1",
        "id_card": "1449900123456",
        "student_id": "12345",
        "date_of_birth": "2008-02-29",
        "class": "3",
        "room": "2",
        "academic_year": "2568",
        "father_name": "นายสมศักดิ์ ใจดี",
        "mother_name": "นางสมศรี ใจดี",
        "purpose": "ศึกษาต่อ",
        "created_at": datetime(2025, 6, 15, 9, 30, tzinfo=timezone.utc),
    }


@pytest.fixture
def record(request_data):
    return RequestRecord(**request_data)


@pytest.fixture
def minimal_record(request_data):
    """Only the required fields."""
    data = {key: request_data[key] for key in ("id", "name", "id_card", "date_of_birth", "purpose", "created_at")}
    return RequestRecord(**data)


@pytest.fixture
def officials():
    return Officials(registrar="นางสาวใจดี มีสุข", director="นายประเสริฐ ดีงาม")


@pytest.fixture
def empty_dirs(tmp_path):
    """Candidate directories that hold no assets."""
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    return [first, second]


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((50, 0))
    pen.lineTo((50, 700))
    pen.lineTo((450, 700))
    pen.lineTo((450, 0))
    pen.closePath()
    return pen.glyph()


@pytest.fixture
def font_dir(tmp_path):
    """A search directory holding a small TrueType font covering ASCII and Thai."""
    codepoints = list(range(0x21, 0x7F)) + list(range(0x0E01, 0x0E5C))
    cmap = {0x20: "space"}
    cmap.update({cp: f"uni{cp:04X}" for cp in codepoints})
    glyph_order = [".notdef", "space"] + [cmap[cp] for cp in codepoints]

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(cmap)
    glyph = _box_glyph()
    builder.setupGlyf({name: glyph for name in glyph_order})
    glyf = builder.font["glyf"]
    builder.setupHorizontalMetrics({name: (500, glyf[name].xMin) for name in glyph_order})
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({
        "familyName": "THSarabun",
        "styleName": "Regular",
        "uniqueFontIdentifier": "records-form: THSarabun.Regular",
        "fullName": "THSarabun Regular",
        "psName": "THSarabun-Regular",
        "version": "Version 1.0",
    })
    builder.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    builder.setupPost()

    directory = tmp_path / "assets"
    path = directory / AssetNames().regular_font
    path.parent.mkdir(parents=True)
    builder.save(str(path))
    return directory
