from typing import ClassVar

_SCANNED_PDF_ADVICE = (
    "For PDF files, this usually indicates:\n"
    "• Scanned PDF (image-based, no selectable text)\n"
    "• Password protection\n"
    "• Complex formatting\n\n"
    "Solution: Convert scanned PDFs to images and upload those."
)


class ExtractionError(Exception):
    """Base exception for all text extraction errors."""

    remediation: ClassVar[str] = "Text extraction failed. Please try a different file."
    retry_suggested: ClassVar[bool] = False


class UnsupportedDocumentTypeError(ExtractionError):
    """Raised when the declared MIME type is neither a PDF nor an image."""

    remediation = "Only PDF documents and images (JPG, PNG, GIF, BMP, TIFF, WEBP) are supported."


class DocumentTooLargeError(ExtractionError):
    """Raised when the upload exceeds the configured size ceiling."""

    remediation = "File too large. Maximum size is 10MB."


class ByteSourceConsumedError(ExtractionError):
    """Raised when a read-once byte source is read a second time."""


class StructuredParseError(ExtractionError):
    """Raised when the PDF container cannot be parsed by the structural parser."""


class RawStreamExtractionError(ExtractionError):
    """Raised when brute-force scanning of the PDF bytes recovers no text."""


class OcrError(ExtractionError):
    """Raised when the OCR engine itself fails."""

    remediation = (
        "OCR processing failed. Make sure the image is not corrupted and "
        "try a clearer, higher-resolution scan."
    )


class InsufficientTextError(ExtractionError):
    """Raised when fewer than 10 characters survive all extraction attempts."""

    remediation = "Unable to extract sufficient text from the document.\n\n" + _SCANNED_PDF_ADVICE


class AllExtractionMethodsFailedError(ExtractionError):
    """Raised when every PDF extraction strategy failed."""

    remediation = (
        "PDF text extraction failed. This appears to be a scanned PDF or "
        "contains minimal text.\n\n"
        "Solutions:\n"
        "• Convert scanned PDFs to JPG/PNG images and upload those\n"
        "• Ensure the PDF has selectable text\n"
        "• Try a different PDF file"
    )

    def __init__(self, message: str, errors: list[ExtractionError] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []
