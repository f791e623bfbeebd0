"""Data models for request form rendering."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

REGISTRAR_PLACEHOLDER = "นายทะเบียน (ยังไม่ได้กำหนด)"
DIRECTOR_PLACEHOLDER = "ผู้อำนวยการ (ยังไม่ได้กำหนด)"


class DocumentVariant(str, Enum):
    """The two official forms a request can be printed on."""

    STANDARD_TRANSCRIPT_REQUEST = "ปพ.1"
    CERTIFICATE_REQUEST = "ปพ.7"


class RequestRecord(BaseModel):
    """A student's document request as stored by the intake service."""

    model_config = {"frozen": True, "populate_by_name": True}

    id: str
    prefix: str = ""
    name: str
    document_type: str = ""
    id_card: str
    student_id: str = ""
    date_of_birth: str
    grade: str = Field("", alias="class")
    room: str = ""
    academic_year: str = ""
    father_name: str = ""
    mother_name: str = ""
    purpose: str
    created_at: datetime

    @property
    def applicant_name(self) -> str:
        return f"{self.prefix}{self.name}".strip()

    @property
    def download_filename(self) -> str:
        return f"request-{self.id}.pdf"


class Officials(BaseModel):
    """Names printed on the registrar and director signature lines."""

    model_config = {"frozen": True}

    registrar: str = ""
    director: str = ""

    @classmethod
    def with_fallback(cls, registrar: str | None, director: str | None) -> "Officials":
        """Use the stored names, or the "not yet configured" placeholders if either is missing."""
        if not registrar or not director:
            return cls(registrar=REGISTRAR_PLACEHOLDER, director=DIRECTOR_PLACEHOLDER)
        return cls(registrar=registrar, director=director)


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins in millimetres."""

    width: float = 210.0
    height: float = 297.0
    left: float = 18.0
    right: float = 18.0
    top: float = 12.0
    bottom: float = 18.0

    @property
    def printable_width(self) -> float:
        return self.width - self.left - self.right

    @property
    def bottom_limit(self) -> float:
        return self.height - self.bottom


@dataclass(frozen=True)
class LocalDate:
    """A date in the Buddhist-era calendar. Zero fields mean "unknown"."""

    day: int
    month_name: str
    year: int

    @property
    def day_text(self) -> str:
        return str(self.day) if self.day else ""

    @property
    def year_text(self) -> str:
        return str(self.year) if self.year else ""


BLANK_DATE = LocalDate(day=0, month_name="", year=0)
