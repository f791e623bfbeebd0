"""Printable school-records request forms."""

from records_form.generator import PDF_MEDIA_TYPE, DocumentRenderError, generate_pdf
from records_form.models import DocumentVariant, Officials, RequestRecord

__all__ = [
    "PDF_MEDIA_TYPE",
    "DocumentRenderError",
    "DocumentVariant",
    "Officials",
    "RequestRecord",
    "generate_pdf",
]
