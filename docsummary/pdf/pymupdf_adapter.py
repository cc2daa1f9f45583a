import pymupdf

from docsummary.extraction.exceptions import StructuredParseError
from docsummary.extraction.models import ExtractionResult
from docsummary.pdf.base import BasePdfExtractor
from docsummary.text.cleaner import clean


class PyMuPdfAdapter(BasePdfExtractor):
    """Structured PDF extraction using PyMuPDF."""

    name = "pymupdf"

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise StructuredParseError(f"pymupdf could not parse PDF: {exc}") from exc
        return ExtractionResult.from_text(
            clean("\n\n".join(pages)),
            "structured_pdf",
            pages=len(pages),
        )
