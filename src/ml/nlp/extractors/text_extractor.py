"""
Plain text extractor, the final step of the extraction chain.
"""

from .base import BaseExtractor, ExtractionResult


class TextExtractor(BaseExtractor):
    """Decodes a buffer as UTF-8 text."""

    name = "plain_text"

    def extract_from_bytes(self, content: bytes) -> ExtractionResult:
        text = content.decode("utf-8", errors="replace").lstrip("\ufeff")
        return ExtractionResult(
            text=text,
            page_count=max(1, len(text) // 3000),
            metadata={"extractor": self.name, "encoding": "utf-8"},
        )
