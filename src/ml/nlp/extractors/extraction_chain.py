"""
Ordered text extraction for résumé buffers of unknown format.

Content types from uncontrolled sources (cloud drives, S3 buckets, ATS
exports) are unreliable, so the buffer's magic number is sniffed first and
the advertised type only adds hints. Each step is an isolated
``(predicate, extractor)`` pair; the first non-empty result wins.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from src.utils.constants import (
    OFFICE_CONTENT_HINTS,
    PDF_CONTENT_HINTS,
    PDF_MAGIC,
    ZIP_MAGIC,
)
from src.utils.logger import get_logger

from .base import BaseExtractor, ExtractionResult
from .docx_extractor import DOCXExtractor
from .pdf_extractor import PDFExtractor
from .text_extractor import TextExtractor

logger = get_logger(__name__)


@dataclass
class DocumentHints:
    """What is known about a buffer before any parser has run."""

    content_type: str
    looks_pdf: bool
    looks_zip: bool
    attempted: set[str] = field(default_factory=set)

    @classmethod
    def sniff(cls, buffer: bytes, content_type: Optional[str]) -> "DocumentHints":
        return cls(
            content_type=(content_type or "").lower(),
            looks_pdf=buffer[:4] == PDF_MAGIC,
            looks_zip=buffer[:2] == ZIP_MAGIC,
        )

    @property
    def pdf_hinted(self) -> bool:
        return self.looks_pdf or any(h in self.content_type for h in PDF_CONTENT_HINTS)

    @property
    def office_hinted(self) -> bool:
        return self.looks_zip or any(h in self.content_type for h in OFFICE_CONTENT_HINTS)


@dataclass
class ExtractionStep:
    """One entry of the chain: run ``extractor`` when ``predicate(hints)`` holds."""

    name: str
    predicate: Callable[[DocumentHints], bool]
    extractor: BaseExtractor


def build_default_steps(
    pdf_extractor: Optional[BaseExtractor] = None,
    office_extractor: Optional[BaseExtractor] = None,
    text_extractor: Optional[BaseExtractor] = None,
) -> list[ExtractionStep]:
    """
    The standard chain: sniffed/hinted PDF, sniffed/hinted Office document,
    last-resort PDF, then plain UTF-8 text.
    """
    pdf_extractor = pdf_extractor or PDFExtractor()
    office_extractor = office_extractor or DOCXExtractor()
    text_extractor = text_extractor or TextExtractor()

    return [
        ExtractionStep("pdf", lambda h: h.pdf_hinted, pdf_extractor),
        ExtractionStep("office", lambda h: h.office_hinted, office_extractor),
        # Covers PDFs that neither the magic number nor the content type revealed
        ExtractionStep("pdf_last_resort", lambda h: "pdf" not in h.attempted, pdf_extractor),
        ExtractionStep("plain_text", lambda h: True, text_extractor),
    ]


class ExtractionChain:
    """
    Evaluates extraction steps in order with per-step error isolation.

    Usage:
        chain = ExtractionChain()
        text = chain.extract_text(buffer, "application/octet-stream")
    """

    def __init__(self, steps: Optional[list[ExtractionStep]] = None):
        self.steps = steps if steps is not None else build_default_steps()

    def extract(self, buffer: bytes, content_type: Optional[str] = None) -> ExtractionResult:
        """
        Run the chain and return the winning step's result.

        Returns an unsuccessful, empty ``ExtractionResult`` when every step
        came back empty.
        """
        if not buffer:
            return ExtractionResult(text="", success=False, error_message="Empty buffer")

        hints = DocumentHints.sniff(buffer, content_type)
        errors: list[str] = []

        for step in self.steps:
            if not step.predicate(hints):
                continue

            hints.attempted.add(step.extractor.name)
            try:
                result = step.extractor.extract_from_bytes(buffer)
            except Exception as e:
                logger.debug(f"Extraction step '{step.name}' raised: {e}")
                errors.append(f"{step.name}: {e}")
                continue

            if not result.success and result.error_message:
                errors.append(f"{step.name}: {result.error_message}")
            if not result.is_empty:
                result.metadata.setdefault("step", step.name)
                return result

        logger.debug(f"No extraction step produced text (content_type={hints.content_type!r})")
        return ExtractionResult(
            text="",
            success=False,
            error_message="; ".join(errors) or "No extractor produced text",
        )

    def extract_text(self, buffer: bytes, content_type: Optional[str] = None) -> str:
        """Plain text from ``buffer``, or ``""`` when nothing usable was found. Never raises."""
        try:
            return self.extract(buffer, content_type).text
        except Exception as e:
            logger.warning(f"Extraction chain failed unexpectedly: {e}")
            return ""


# Singleton instance
_extraction_chain: Optional[ExtractionChain] = None


def get_extraction_chain() -> ExtractionChain:
    """Get the default extraction chain singleton instance."""
    global _extraction_chain
    if _extraction_chain is None:
        _extraction_chain = ExtractionChain()
    return _extraction_chain


def extract_text(buffer: bytes, content_type: Optional[str] = None) -> str:
    """Extract plain text from a buffer with the default chain."""
    return get_extraction_chain().extract_text(buffer, content_type)
