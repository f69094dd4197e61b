"""Text extraction adapter using pdfplumber."""

import io
import logging

import pdfplumber

from ...ports.text import TextExtractorPort

logger = logging.getLogger(__name__)


class PdfPlumberAdapter(TextExtractorPort):
    """Text extraction from the embedded text layer of a PDF."""

    def extract_text(self, data: bytes) -> str:
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            pages = [page.extract_text() or "" for page in pdf.pages]

        logger.debug(f"Extracted text from {len(pages)} pages")
        return "\n".join(pages)
