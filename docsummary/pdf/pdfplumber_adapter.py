import io

import pdfplumber

from docsummary.extraction.exceptions import StructuredParseError
from docsummary.extraction.models import ExtractionResult
from docsummary.pdf.base import BasePdfExtractor
from docsummary.text.cleaner import clean


class PdfPlumberAdapter(BasePdfExtractor):
    """Structured PDF extraction using pdfplumber."""

    name = "pdfplumber"

    def extract(self, pdf_bytes: bytes) -> ExtractionResult:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise StructuredParseError(f"pdfplumber could not parse PDF: {exc}") from exc
        return ExtractionResult.from_text(
            clean("\n\n".join(pages)),
            "structured_pdf",
            pages=len(pages),
        )
