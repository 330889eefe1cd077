"""
Word-processing document text extractor.

Uses python-docx for DOCX (zip-based Office Open XML) documents.
"""

import io

from docx import Document

from src.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult

logger = get_logger(__name__)


class DOCXExtractor(BaseExtractor):
    """Extractor for Microsoft Word documents."""

    name = "docx"

    def extract_from_bytes(self, content: bytes) -> ExtractionResult:
        """Extract text from DOCX bytes."""
        try:
            doc = Document(io.BytesIO(content))
            return self._process_document(doc)
        except Exception as e:
            logger.debug(f"DOCX extraction from bytes failed: {e}")
            return self._create_error_result(e)

    def _process_document(self, doc) -> ExtractionResult:
        """Process a python-docx Document object."""
        text_parts = []
        warnings = []

        for paragraph in doc.paragraphs:
            text = paragraph.text.strip()
            if text:
                text_parts.append(text)

        # Résumé templates often lay out skills and dates in tables
        for table in doc.tables:
            for row in table.rows:
                row_text = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_text:
                    text_parts.append(" | ".join(row_text))

        full_text = "\n".join(text_parts)

        if not full_text.strip():
            warnings.append("Document appears to be empty or contains only images")

        return ExtractionResult(
            text=full_text,
            page_count=len(doc.sections) if doc.sections else 1,
            metadata={"extractor": "python-docx"},
            warnings=warnings,
        )
