"""Text extraction adapters."""

from .pdfplumber import PdfPlumberAdapter

__all__ = ["PdfPlumberAdapter"]
