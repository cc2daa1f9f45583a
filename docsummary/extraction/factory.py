from docsummary.config.settings import Settings
from docsummary.extraction.orchestrator import ExtractionOrchestrator
from docsummary.ocr.tesseract_adapter import TesseractOcrAdapter
from docsummary.pdf.factory import PdfExtractorFactory


class OrchestratorFactory:
    """Creates the extraction orchestrator with the configured engines."""

    @classmethod
    def create(cls, settings: Settings) -> ExtractionOrchestrator:
        return ExtractionOrchestrator(
            pdf_extractors=PdfExtractorFactory.create_cascade(settings),
            ocr_extractor=TesseractOcrAdapter(
                language=settings.ocr_language,
                tesseract_cmd=settings.ocr_tesseract_cmd,
            ),
        )
