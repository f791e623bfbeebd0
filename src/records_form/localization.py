"""Thai calendar dates and document-type labels."""

import re
from datetime import date, datetime

from records_form.models import BLANK_DATE, DocumentVariant, LocalDate

BUDDHIST_ERA_OFFSET = 543

THAI_MONTHS = (
    "มกราคม",
    "กุมภาพันธ์",
    "มีนาคม",
    "เมษายน",
    "พฤษภาคม",
    "มิถุนายน",
    "กรกฎาคม",
    "สิงหาคม",
    "กันยายน",
    "ตุลาคม",
    "พฤศจิกายน",
    "ธันวาคม",
)

CERTIFICATE_KEYWORD = "ปพ7"

_THAI_DIGITS = str.maketrans("๐๑๒๓๔๕๖๗๘๙", "0123456789")
# ASCII period, full-width full stop, ideographic full stop, and any whitespace
_IGNORED = re.compile(r"[.．。\s]+")
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def thai_month_name(month: int) -> str:
    """Return the Thai name for a 1-based month, or "" when out of range."""
    if 1 <= month <= len(THAI_MONTHS):
        return THAI_MONTHS[month - 1]
    return ""


def format_local_date(value) -> LocalDate:
    """Convert anything with ``year``/``month``/``day`` to a Buddhist-era date."""
    return LocalDate(
        day=value.day,
        month_name=thai_month_name(value.month),
        year=value.year + BUDDHIST_ERA_OFFSET,
    )


def parse_iso_date(text: str) -> date | None:
    """Parse a zero-padded ``YYYY-MM-DD`` date; anything else gives ``None``."""
    text = (text or "").strip()
    if not _ISO_DATE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def format_birth_date(text: str) -> LocalDate:
    """Format an ISO birth date, falling back to blank fields when it doesn't parse."""
    parsed = parse_iso_date(text)
    if parsed is None:
        return BLANK_DATE
    return format_local_date(parsed)


def format_request_date(value) -> str:
    local = format_local_date(value)
    return f"วันที่ {local.day}  เดือน {local.month_name}  พ.ศ. {local.year}"


def normalize_label(label: str) -> str:
    return _IGNORED.sub("", (label or "").translate(_THAI_DIGITS))


def normalize_document_type(label: str) -> DocumentVariant:
    """Map a free-form document-type label to the form it should be printed on.

    Labels such as ``"ปพ.7"``, ``"ปพ7"`` and ``"ปพ.๗"`` select the certificate
    request; everything else, including an empty label, selects the transcript
    request. Variants are themselves labels, so normalizing twice is stable.
    """
    if CERTIFICATE_KEYWORD in normalize_label(label):
        return DocumentVariant.CERTIFICATE_REQUEST
    return DocumentVariant.STANDARD_TRANSCRIPT_REQUEST
