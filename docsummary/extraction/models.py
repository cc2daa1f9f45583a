from dataclasses import dataclass
from typing import Literal

from docsummary.extraction.exceptions import UnsupportedDocumentTypeError
from docsummary.text.cleaner import validate

DocumentKind = Literal["pdf", "image"]
ExtractionMethod = Literal["structured_pdf", "raw_stream_pdf", "ocr"]

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/bmp",
        "image/tiff",
        "image/webp",
    }
)


def kind_for_mime_type(mime_type: str) -> DocumentKind:
    """Map a declared MIME type to the extraction path it takes."""
    normalized = mime_type.lower().split(";")[0].strip()
    if normalized == PDF_MIME_TYPE:
        return "pdf"
    if normalized in IMAGE_MIME_TYPES:
        return "image"
    raise UnsupportedDocumentTypeError(f"Unsupported document type '{mime_type}'")


@dataclass(frozen=True)
class DocumentBytes:
    """An uploaded document as received from the upload boundary."""

    content: bytes
    kind: DocumentKind
    original_name: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class ExtractionResult:
    """Text produced by one extraction strategy.

    Never mutated; later stages build new instances with ``dataclasses.replace``.
    """

    text: str
    method: ExtractionMethod
    text_length: int
    word_count: int
    is_valid: bool
    pages: int | None = None
    confidence: float | None = None
    encoding: str | None = None
    warning: str | None = None

    @classmethod
    def from_text(
        cls,
        text: str,
        method: ExtractionMethod,
        *,
        pages: int | None = None,
        confidence: float | None = None,
        encoding: str | None = None,
    ) -> "ExtractionResult":
        """Build a result for already-cleaned text, scoring it with the quality gate."""
        verdict = validate(text)
        return cls(
            text=text,
            method=method,
            text_length=len(text),
            word_count=verdict.meaningful_words,
            is_valid=verdict.is_valid,
            pages=pages,
            confidence=confidence,
            encoding=encoding,
            warning=None if verdict.is_valid else verdict.message,
        )


@dataclass(frozen=True)
class ExtractionOutcome:
    """Extraction result plus the upload metadata that outlives the bytes."""

    original_name: str
    kind: DocumentKind
    file_size: int
    result: ExtractionResult
    processing_time_ms: int
