"""
PDF document text extractor.

Uses multiple extraction methods for robust text extraction:
1. pdfplumber - Primary method, good for structured text
2. pypdf - Fallback method
"""

import io

import pdfplumber
from pypdf import PdfReader

from src.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)

# pdfplumber output shorter than this is treated as a miss and pypdf is tried
MIN_PRIMARY_CHARS = 50


class PDFExtractor(BaseExtractor):
    """Extractor for PDF documents."""

    name = "pdf"

    def extract_from_bytes(self, content: bytes) -> ExtractionResult:
        """Extract text from PDF bytes."""
        try:
            return self._extract_from_file_object(io.BytesIO(content))
        except Exception as e:
            logger.debug(f"PDF extraction from bytes failed: {e}")
            return self._create_error_result(e)

    def _extract_from_file_object(self, file_obj) -> ExtractionResult:
        """Extract text from a file-like object."""
        warnings = []

        text, page_count, metadata = self._extract_with_pdfplumber(file_obj)

        if text and len(text.strip()) > MIN_PRIMARY_CHARS:
            return ExtractionResult(
                text=text,
                page_count=page_count,
                metadata=metadata,
                warnings=warnings,
            )

        warnings.append("pdfplumber extraction yielded limited text, trying pypdf")
        file_obj.seek(0)
        fallback_text, fallback_pages, fallback_meta = self._extract_with_pypdf(file_obj)

        if len(fallback_text.strip()) > len(text.strip()):
            text, page_count, metadata = fallback_text, fallback_pages, fallback_meta

        if not text.strip():
            warnings.append("PDF may be image-based or encrypted")

        return ExtractionResult(
            text=text,
            page_count=page_count,
            metadata=metadata,
            warnings=warnings,
            success=bool(metadata),
            error_message=None if metadata else "No PDF parser could read the document",
        )

    def _extract_with_pdfplumber(self, file_obj) -> tuple[str, int, dict]:
        """Extract text using pdfplumber."""
        try:
            text_parts = []
            metadata = {"extractor": "pdfplumber"}

            with pdfplumber.open(file_obj) as pdf:
                page_count = len(pdf.pages)
                metadata["page_count"] = page_count

                for page in pdf.pages:
                    page_text = page.extract_text()
                    if page_text:
                        text_parts.append(page_text)

            return "\n\n".join(text_parts), page_count, metadata

        except Exception as e:
            logger.debug(f"pdfplumber extraction error: {e}")
            return "", 0, {}

    def _extract_with_pypdf(self, file_obj) -> tuple[str, int, dict]:
        """Extract text using pypdf."""
        try:
            text_parts = []
            metadata = {"extractor": "pypdf"}

            reader = PdfReader(file_obj)
            page_count = len(reader.pages)
            metadata["page_count"] = page_count

            for page in reader.pages:
                page_text = page.extract_text()
                if page_text:
                    text_parts.append(page_text)

            return "\n\n".join(text_parts), page_count, metadata

        except Exception as e:
            logger.debug(f"pypdf extraction error: {e}")
            return "", 0, {}
