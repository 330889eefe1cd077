"""
File content extractors for résumé buffers.

Supports extraction of text from PDF, DOCX and plain-text documents,
chained by format sniffing.
"""

from .base import BaseExtractor, ExtractionResult
from .pdf_extractor import PDFExtractor
from .docx_extractor import DOCXExtractor
from .text_extractor import TextExtractor
from .extraction_chain import (
    DocumentHints,
    ExtractionChain,
    ExtractionStep,
    build_default_steps,
    extract_text,
    get_extraction_chain,
)

__all__ = [
    "BaseExtractor",
    "ExtractionResult",
    "PDFExtractor",
    "DOCXExtractor",
    "TextExtractor",
    "DocumentHints",
    "ExtractionChain",
    "ExtractionStep",
    "build_default_steps",
    "extract_text",
    "get_extraction_chain",
]
