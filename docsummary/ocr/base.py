from abc import ABC, abstractmethod

from docsummary.extraction.models import ExtractionResult


class BaseOcrExtractor(ABC):
    """Contract for optical character recognition adapters."""

    @abstractmethod
    def extract(self, image_bytes: bytes) -> ExtractionResult:
        """Recognize text in an image.

        Returns:
            ExtractionResult with ``confidence`` in [0, 100]. A low confidence
            or word count is returned, never raised.

        Raises:
            OcrError: if the recognition engine fails.
        """
