"""
Text extraction for RecruitCRM.

Turns résumé buffers and fetched pages into plain text for the search
pipeline.

Main Components:
- ExtractionChain: Format-sniffing extraction (PDF, DOCX, plain text)
- strip_html: Visible text of HTML pages
"""

from .extractors import (
    BaseExtractor,
    DOCXExtractor,
    ExtractionChain,
    ExtractionResult,
    ExtractionStep,
    PDFExtractor,
    TextExtractor,
    extract_text,
    get_extraction_chain,
)

from .text_cleaning import collapse_whitespace, strip_html

__all__ = [
    # Extractors
    "BaseExtractor",
    "DOCXExtractor",
    "ExtractionChain",
    "ExtractionResult",
    "ExtractionStep",
    "PDFExtractor",
    "TextExtractor",
    "extract_text",
    "get_extraction_chain",
    # Cleaning
    "collapse_whitespace",
    "strip_html",
]
