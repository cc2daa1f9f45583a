from docsummary.config.settings import Settings
from docsummary.pdf.base import BasePdfExtractor
from docsummary.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docsummary.pdf.pymupdf_adapter import PyMuPdfAdapter
from docsummary.pdf.raw_stream import RawStreamPdfExtractor


class PdfExtractorFactory:
    """Builds the ordered PDF extraction cascade from settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        """Create the structured extractor selected by ``pdf_engine``."""
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_cascade(cls, settings: Settings) -> list[BasePdfExtractor]:
        """Structured parser first, raw stream scanning as the fallback."""
        return [cls.create(settings), RawStreamPdfExtractor()]
