"""PDF rendering of request forms using FPDF2."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from fontTools.ttLib import TTLibError
from fpdf import FPDF
from fpdf.errors import FPDFException

from records_form.config import FormSettings
from records_form.layout import CircleOp, DrawOp, ImageOp, LineOp, TextOp, build_layout
from records_form.localization import normalize_document_type
from records_form.models import Officials, PageGeometry, RequestRecord
from records_form.resources import FontAsset, ResolvedFont, default_search_dirs, resolve

log = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
FORM_FONT = "THSarabun"
FALLBACK_FONT = "Helvetica"


class DocumentRenderError(RuntimeError):
    """The PDF engine could not produce the document."""


class FormPDF(FPDF):
    """Single-form document drawn from absolute draw operations."""

    def __init__(self, geometry: PageGeometry, font: FontAsset):
        super().__init__(orientation="P", unit="mm", format=(geometry.width, geometry.height))
        self.geometry = geometry
        self.set_margins(geometry.left, geometry.top, geometry.right)
        # Page breaks are decided by the layout.
        self.set_auto_page_break(False, margin=geometry.bottom)
        self.set_draw_color(0, 0, 0)
        self.set_text_color(0, 0, 0)

        self.form_font = FALLBACK_FONT
        if isinstance(font, ResolvedFont):
            try:
                self.add_font(FORM_FONT, "", str(font.regular))
                self.add_font(FORM_FONT, "B", str(font.bold))
                self.form_font = FORM_FONT
            except (OSError, TTLibError) as exc:
                log.warning(f"Could not load {font.regular}, using {FALLBACK_FONT}: {exc}")

    def printable(self, text: str) -> str:
        """Replace glyphs the built-in font cannot encode."""
        if self.form_font == FORM_FONT:
            return text
        return text.encode("latin-1", "replace").decode("latin-1")

    def use_font(self, bold: bool, size: float) -> None:
        self.set_font(self.form_font, "B" if bold else "", size)

    def measure(self, text: str, bold: bool, size: float) -> float:
        self.use_font(bold, size)
        return self.get_string_width(self.printable(text))

    def render(self, ops: Iterable[DrawOp], creation_date: datetime) -> bytes:
        """Draw the operations in order and return the finished PDF."""
        if creation_date.tzinfo is None:
            creation_date = creation_date.replace(tzinfo=timezone.utc)
        try:
            self.set_creation_date(creation_date)
            self.add_page()
            for op in ops:
                while self.page < op.page:
                    self.add_page()
                self._draw(op)
            return bytes(self.output())
        except (FPDFException, OSError) as exc:
            raise DocumentRenderError(f"Failed to render PDF: {exc}") from exc

    def _draw(self, op: DrawOp) -> None:
        if isinstance(op, TextOp):
            self.use_font(op.bold, op.size)
            self.set_xy(op.x, op.y)
            self.cell(op.width, op.height, self.printable(op.text), align=op.align)
        elif isinstance(op, LineOp):
            self.set_line_width(op.line_width)
            self.line(op.x1, op.y1, op.x2, op.y2)
        elif isinstance(op, CircleOp):
            self.set_line_width(op.line_width)
            self.ellipse(op.x - op.radius, op.y - op.radius, 2 * op.radius, 2 * op.radius, style="D")
        elif isinstance(op, ImageOp):
            self._draw_image(op)

    def _draw_image(self, op: ImageOp) -> None:
        try:
            self.image(str(op.path), x=op.x, y=op.y, w=op.width)
        except (OSError, ValueError, FPDFException) as exc:
            log.warning(f"Could not draw crest {op.path}: {exc}")


def generate_pdf(
    record: RequestRecord,
    officials: Officials,
    *,
    settings: FormSettings | None = None,
    search_dirs: Iterable[str | Path] | None = None,
) -> bytes:
    """Render the request form for ``record`` and return the PDF bytes.

    Assets are resolved on every call. Missing fonts or crest degrade the
    output; only a failure to serialize raises ``DocumentRenderError``.
    """
    settings = settings or FormSettings()
    if search_dirs is None:
        search_dirs = default_search_dirs(settings.assets.search_dirs)
    assets = resolve(search_dirs, settings.assets.names())

    geometry = settings.page.geometry()
    variant = normalize_document_type(record.document_type)
    pdf = FormPDF(geometry, assets.font)
    ops = build_layout(
        geometry,
        variant,
        record,
        officials,
        crest=assets.crest,
        settings=settings,
        measure=pdf.measure,
    )
    content = pdf.render(ops, record.created_at)
    log.info(f"Rendered {variant.name} for request {record.id} ({len(content)} bytes, {pdf.page} page(s))")
    return content
