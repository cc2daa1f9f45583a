from abc import ABC, abstractmethod

from docsummary.extraction.models import ExtractionResult


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction strategies."""

    name: str = "pdf"

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        """Extract cleaned text and a page count from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            ExtractionResult scored by the quality gate. Low quality is not an
            error; the caller decides what to do with it.

        Raises:
            ExtractionError: if this strategy cannot produce any result.
        """
