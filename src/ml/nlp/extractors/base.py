"""
Base extractor class for document text extraction.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ExtractionResult:
    """Result of text extraction from a document."""

    text: str
    page_count: int = 1
    metadata: dict = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    success: bool = True
    error_message: Optional[str] = None

    @property
    def word_count(self) -> int:
        """Count words in extracted text."""
        return len(self.text.split())

    @property
    def char_count(self) -> int:
        """Count characters in extracted text."""
        return len(self.text)

    @property
    def is_empty(self) -> bool:
        """Check if extraction resulted in empty text."""
        return len(self.text.strip()) == 0


class BaseExtractor(ABC):
    """
    Abstract base class for document text extractors.

    Extractors work on in-memory buffers (résumés arrive over HTTP) and
    report failure through ``ExtractionResult`` instead of raising.
    """

    name: str = "base"

    @abstractmethod
    def extract_from_bytes(self, content: bytes) -> ExtractionResult:
        """
        Extract text content from document bytes.

        Args:
            content: Raw bytes of the document

        Returns:
            ExtractionResult containing the extracted text and metadata
        """
        pass

    def _create_error_result(self, error: Exception) -> ExtractionResult:
        """Create an error result from an exception."""
        return ExtractionResult(
            text="",
            success=False,
            error_message=str(error),
            metadata={"extractor": self.name},
        )
