"""Positional layout of the request form.

The form is described by ``FORM_FIELDS``, an ordered list of descriptors, and
placed by ``build_layout`` which walks it once with a cursor and returns
absolute draw operations. Offsets are millimetres from the page margins.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Union

from records_form.config import FormSettings
from records_form.localization import format_birth_date, format_request_date
from records_form.models import DocumentVariant, Officials, PageGeometry, RequestRecord

LINE_HEIGHT = 6.0
BODY_SIZE = 14.0
TITLE_SIZE = 16.0
CIRCLE_RADIUS = 2.5
CIRCLE_LINE_WIDTH = 0.3
RULE_LINE_WIDTH = 0.2

Measure = Callable[[str, bool, float], float]


# -- draw operations ---------------------------------------------------------

@dataclass(frozen=True)
class TextOp:
    page: int
    x: float
    y: float
    width: float
    height: float
    text: str
    align: str = "L"
    bold: bool = False
    size: float = BODY_SIZE


@dataclass(frozen=True)
class LineOp:
    page: int
    x1: float
    y1: float
    x2: float
    y2: float
    line_width: float = RULE_LINE_WIDTH


@dataclass(frozen=True)
class CircleOp:
    """Outline circle centred on (x, y)."""

    page: int
    x: float
    y: float
    radius: float = CIRCLE_RADIUS
    line_width: float = CIRCLE_LINE_WIDTH


@dataclass(frozen=True)
class ImageOp:
    page: int
    x: float
    y: float
    width: float
    path: Path


DrawOp = Union[TextOp, LineOp, CircleOp, ImageOp]


# -- field descriptors -------------------------------------------------------

@dataclass(frozen=True)
class Share:
    """A width expressed as a fraction of the printable width."""

    fraction: float


FULL = Share(1.0)
HALF = Share(0.5)

Width = Union[float, Share]


@dataclass(frozen=True)
class Cell:
    """One cell of a row.

    ``text`` is a ``str.format`` template over the form context. A cell with
    an empty template draws nothing but still takes up its width.
    ``circle_at`` centres a choice circle that many millimetres into the cell.
    """

    width: Width
    text: str = ""
    align: str = "L"
    bold: bool = False
    size: float = BODY_SIZE
    wrap: bool = False
    circle_at: float | None = None
    when: str | None = None


@dataclass(frozen=True)
class Row:
    """A line of cells.

    ``top`` pins the row below the top margin; otherwise it follows the
    previous row. ``when`` names a context flag; a row or cell whose flag is
    false is left out entirely but keeps its slot.
    """

    id: str
    cells: tuple[Cell, ...]
    top: float | None = None
    indent: Width = 0.0
    height: float = LINE_HEIGHT
    advance: float = LINE_HEIGHT
    when: str | None = None


@dataclass(frozen=True)
class Rule:
    """Full-width horizontal line ``drop`` below the cursor."""

    id: str
    drop: float
    advance: float


@dataclass(frozen=True)
class Crest:
    """Centred image, ``drop`` below half the top margin."""

    id: str
    width: float
    drop: float


Field = Union[Crest, Row, Rule]


@dataclass(frozen=True)
class VariantText:
    title: str
    subject: str
    declaration: str


VARIANT_TEXTS = {
    DocumentVariant.STANDARD_TRANSCRIPT_REQUEST: VariantText(
        title="คำร้องขอใบระเบียนแสดงผลการเรียน(รบ.1/ปพ.1)",
        subject="เรื่อง    ขอใบระเบียนแสดงผลการเรียน(รบ.1/ปพ.1)",
        declaration="มีความประสงค์จะขอใบระเบียนแสดงผลการเรียน(รบ.1/ปพ.1) จำนวน 1 ฉบับ",
    ),
    DocumentVariant.CERTIFICATE_REQUEST: VariantText(
        title="คำร้องขอใบรับรองผลการศึกษา(ปพ.7)",
        subject="เรื่อง    ขอใบรับรองผลการศึกษา(ปพ.7)",
        declaration="มีความประสงค์จะขอใบรับรองผลการศึกษา(ปพ.7) จำนวน 1 ฉบับ",
    ),
}

_CHOICES = (
    Cell(18.0, "เห็นควร"),
    Cell(5.0, circle_at=0.0),
    Cell(25.0, "อนุญาต", circle_at=20.0),
)

FORM_FIELDS: tuple[Field, ...] = (
    Crest("crest", width=25.0, drop=5.0),
    Row("title", (Cell(FULL, "{title}", align="C", bold=True, size=TITLE_SIZE),),
        top=18.0, height=18.0, advance=21.0),
    Row("address_1", (Cell(44.0, "{address_1}"),), indent=130.0),
    Row("address_2", (Cell(44.0, "{address_2}"),), indent=130.0),
    Row("address_3", (Cell(44.0, "{address_3}"),), indent=130.0, advance=12.0),
    Row("date", (Cell(HALF, "{request_date}"),), top=60.0, indent=HALF),
    Row("subject", (Cell(FULL, "{subject}"),), top=68.0),
    Row("addressee", (Cell(FULL, "เรียน   {addressee}"),), top=77.0),
    Row("identity", (
        Cell(Share(0.09), "ข้าพเจ้า: _____________________________________"),
        Cell(Share(0.36), "{applicant_name}", align="C"),
        Cell(Share(0.209), "เลขประจำตัวประชาชน:____________________"),
        Cell(Share(0.176), "{id_card}"),
        Cell(Share(0.0462), "ชั้น: _______", when="has_class_room"),
        Cell(Share(0.1188), "{class_room}", when="has_class_room"),
    ), top=90.0, indent=9.0),
    Row("student", (
        Cell(15.0, "รหัสนักเรียน:______________"),
        Cell(30.0, "{student_id}", align="C"),
        Cell(15.0, "ปีการศึกษา: _______________", when="has_academic_year"),
        Cell(30.0, "{academic_year}", align="C", when="has_academic_year"),
        Cell(13.0, "เกิดวันที่: _____"),
        Cell(10.0, "{birth_day}", align="C"),
        Cell(13.0, "เดือน: _______________"),
        Cell(24.0, "{birth_month}", align="C"),
        Cell(6.0, "พ.ศ.: ________"),
        Cell(20.0, "{birth_year}", align="C"),
    ), top=100.0, advance=11.0),
    Row("guardians", (
        Cell(15.0, "บิดาชื่อ: ___________________________________________"),
        Cell(72.0, "{father_name}", align="C"),
        Cell(15.0, "มารดาชื่อ: ________________________________________"),
        Cell(72.0, "{mother_name}", align="C"),
    ), advance=10.0, when="has_guardians"),
    Row("declaration", (Cell(FULL, "{declaration}"),), advance=10.0),
    Row("purpose", (
        Cell(10.0, "เพื่อ: _______________________________________________________________________________________________"),
        Cell(160.0, "{purpose}", wrap=True),
    ), advance=10.0),
    Row("attachments", (Cell(10.0, "ทั้งนี้  ข้าพเจ้าได้แนบเอกสารหลักฐานต่างๆ มาด้วยแล้ว"),),
        indent=9.0, advance=7.0),
    Row("attachment_1", (Cell(10.0, "1. รูปถ่ายขนาด 1.5 นิ้ว (ถ่ายไว้ไม่เกิน 6 เดือน)    จำนวน 2 รูป"),),
        indent=18.0, advance=7.0),
    Row("attachment_2", (Cell(10.0, "2. สำเนาบัตรประชาชน (กรณีเป็นศิษย์เก่า)"),),
        indent=18.0, advance=7.0),
    Row("attachment_3", (Cell(10.0, "3. ใบแจ้งความเอกสารหาย (กรณีหายหรือชำรุด)"),),
        indent=18.0, advance=10.0),
    Row("closing", (Cell(10.0, "จึงเรียนมาเพื่อโปรดพิจารณา"),), indent=9.0, advance=7.0),
    Row("regards", (Cell(10.0, "ขอแสดงความนับถือ", align="C"),), indent=120.0, advance=14.0),
    Row("applicant_signature", (Cell(10.0, "ลงชื่อ ______________________________", align="C"),),
        indent=120.0, advance=7.0),
    Row("applicant_name", (Cell(10.0, "( {applicant_name} )", align="C"),),
        indent=120.0, advance=7.0),
    Rule("applicant_rule", drop=4.0, advance=7.0),
    Row("comment_headings", (
        Cell(HALF, "ความเห็นนายทะเบียน", bold=True),
        Cell(10.0, "ความเห็นผู้อำนวยการ", bold=True),
    ), advance=10.0),
    Row("comment_choices", _CHOICES + (Cell(40.0, "ไม่อนุญาต"),) + _CHOICES + (Cell(10.0, "ไม่อนุญาต"),),
        indent=9.0, advance=15.0),
    Row("official_signatures", (
        Cell(HALF, "ลงนาม ______________________________", align="C"),
        Cell(HALF, "ลงนาม ______________________________", align="C"),
    ), advance=7.0),
    Row("official_names", (
        Cell(HALF, "( {registrar} )", align="C"),
        Cell(HALF, "( {director} )", align="C"),
    ), advance=7.0),
    Row("official_dates", (
        Cell(HALF, "___/___/___", align="C"),
        Cell(HALF, "___/___/___", align="C"),
    )),
)


# -- context -----------------------------------------------------------------

def build_context(
    record: RequestRecord,
    officials: Officials,
    variant: DocumentVariant,
    settings: FormSettings,
) -> dict:
    """Every value the form templates and ``when`` flags refer to."""
    texts = VARIANT_TEXTS[variant]
    birth = format_birth_date(record.date_of_birth)
    address = settings.school.address_lines
    class_room = ""
    if record.grade or record.room:
        class_room = f"{record.grade}/{record.room}"
    return {
        "title": texts.title,
        "subject": texts.subject,
        "declaration": texts.declaration,
        "address_1": address[0],
        "address_2": address[1],
        "address_3": address[2],
        "addressee": settings.school.addressee,
        "request_date": format_request_date(record.created_at),
        "applicant_name": record.applicant_name,
        "id_card": record.id_card,
        "class_room": class_room,
        "student_id": record.student_id,
        "academic_year": record.academic_year,
        "birth_day": birth.day_text,
        "birth_month": birth.month_name,
        "birth_year": birth.year_text,
        "father_name": record.father_name,
        "mother_name": record.mother_name,
        "purpose": record.purpose,
        "registrar": officials.registrar,
        "director": officials.director,
        "has_class_room": bool(class_room),
        "has_academic_year": bool(record.academic_year),
        "has_guardians": bool(record.father_name or record.mother_name),
    }


# -- walker ------------------------------------------------------------------

def estimate_width(text: str, bold: bool, size: float) -> float:
    """Rough text width in mm for when no font is loaded."""
    return len(text) * size * (0.2 if bold else 0.18)


def wrap_text(text: str, width: float, measure: Measure, bold: bool = False, size: float = BODY_SIZE) -> list[str]:
    """Greedy line wrap, breaking at whitespace where possible and anywhere otherwise."""
    if not text or measure(text, bold, size) <= width:
        return [text]
    lines: list[str] = []
    current = ""
    for token in re.split(r"(\s+)", text):
        pieces = [token] if measure(token, bold, size) <= width else list(token)
        for piece in pieces:
            candidate = current + piece
            if current and measure(candidate, bold, size) > width:
                lines.append(current.rstrip())
                current = piece.lstrip()
            else:
                current = candidate
    if current.strip():
        lines.append(current.rstrip())
    return lines or [""]


class _Cursor:
    def __init__(self, geometry: PageGeometry):
        self.geometry = geometry
        self.page = 1
        self.y = geometry.top

    def fit(self, height: float) -> None:
        if self.y + height > self.geometry.bottom_limit and self.y > self.geometry.top:
            self.page += 1
            self.y = self.geometry.top


def _width(value: Width, geometry: PageGeometry) -> float:
    if isinstance(value, Share):
        return value.fraction * geometry.printable_width
    return value


def _visible(flag: str | None, context: dict) -> bool:
    return flag is None or bool(context[flag])


def _place_row(row: Row, cursor: _Cursor, context: dict, measure: Measure) -> list[DrawOp]:
    geometry = cursor.geometry
    if row.top is not None and cursor.page == 1:
        cursor.y = geometry.top + row.top
    if not _visible(row.when, context):
        cursor.y += row.advance
        return []

    x = geometry.left + _width(row.indent, geometry)
    cells = []
    for cell in row.cells:
        width = _width(cell.width, geometry)
        text = cell.text.format(**context)
        lines = wrap_text(text, width, measure, cell.bold, cell.size) if cell.wrap else [text]
        if _visible(cell.when, context):
            cells.append((cell, x, width, lines))
        x += width
    depth = max((len(lines) for _, _, _, lines in cells), default=1)

    # Keep a wrapped block together when it fits on a fresh page; otherwise
    # break line by line.
    block = depth * row.height
    cursor.fit(block if block <= geometry.bottom_limit - geometry.top else row.height)

    ops: list[DrawOp] = []
    for n in range(depth):
        if n:
            cursor.y += row.height
            cursor.fit(row.height)
        for cell, x, width, lines in cells:
            if n < len(lines) and cell.text:
                ops.append(TextOp(
                    page=cursor.page, x=x, y=cursor.y, width=width, height=row.height,
                    text=lines[n], align=cell.align, bold=cell.bold, size=cell.size,
                ))
            if n == 0 and cell.circle_at is not None:
                ops.append(CircleOp(page=cursor.page, x=x + cell.circle_at, y=cursor.y + row.height / 2))
    cursor.y += row.advance
    return ops


def build_layout(
    geometry: PageGeometry,
    variant: DocumentVariant,
    record: RequestRecord,
    officials: Officials,
    *,
    crest: Path | None = None,
    settings: FormSettings | None = None,
    measure: Measure = estimate_width,
) -> list[DrawOp]:
    """Place every form field and return the draw operations in draw order."""
    context = build_context(record, officials, variant, settings or FormSettings())
    cursor = _Cursor(geometry)
    ops: list[DrawOp] = []
    for field in FORM_FIELDS:
        if isinstance(field, Crest):
            if crest is not None:
                x = geometry.left + (geometry.printable_width - field.width) / 2
                ops.append(ImageOp(page=cursor.page, x=x, y=geometry.top / 2 + field.drop,
                                   width=field.width, path=crest))
        elif isinstance(field, Rule):
            cursor.fit(field.drop)
            y = cursor.y + field.drop
            ops.append(LineOp(page=cursor.page, x1=geometry.left, y1=y,
                              x2=geometry.left + geometry.printable_width, y2=y))
            cursor.y += field.advance
        else:
            ops.extend(_place_row(field, cursor, context, measure))
    return ops
