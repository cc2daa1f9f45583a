"""Per-upload extraction state machine.

PDF: structured parser -> raw stream scan -> quality gate. A strategy wins when
it yields enough meaningful, mostly non-symbol text; otherwise the cascade
continues and the best weak result is kept if nothing better turns up.
Image: OCR -> quality gate. Both paths end at the minimum-text gate, the only
hard stop besides every PDF strategy failing.
"""

import time
from dataclasses import replace

from docsummary.extraction.byte_source import ByteSource
from docsummary.extraction.exceptions import (
    AllExtractionMethodsFailedError,
    ExtractionError,
    InsufficientTextError,
)
from docsummary.extraction.models import DocumentBytes, ExtractionOutcome, ExtractionResult
from docsummary.logging.logger import Log
from docsummary.ocr.base import BaseOcrExtractor
from docsummary.pdf.base import BasePdfExtractor
from docsummary.text.cleaner import (
    MIN_MEANINGFUL_WORDS,
    is_mostly_special_chars,
    meaningful_sample,
    validate,
)

MIN_FINAL_TEXT_LENGTH = 10

GUIDANCE_TEMPLATE = """{text}

Document: {original_name}
Pages: {pages}
Extracted Characters: {text_length}
Meaningful Words: {word_count}

Note: This appears to be a scanned PDF or contains minimal text. For better results:
• Convert scanned PDFs to JPG/PNG images and upload those
• Ensure text-based PDFs have selectable text
• Check if the PDF is password protected"""


class ExtractionOrchestrator:
    """Runs the extraction cascade for one upload at a time."""

    def __init__(
        self,
        pdf_extractors: list[BasePdfExtractor],
        ocr_extractor: BaseOcrExtractor,
    ) -> None:
        if not pdf_extractors:
            raise ValueError("At least one PDF extractor is required")
        self._pdf_extractors = pdf_extractors
        self._ocr_extractor = ocr_extractor

    def extract(self, source: ByteSource) -> ExtractionOutcome:
        """Read the source once, release it, and extract its text.

        Raises:
            AllExtractionMethodsFailedError: every PDF strategy failed.
            OcrError: the OCR engine failed on an image.
            InsufficientTextError: fewer than 10 characters were recovered.
        """
        started = time.monotonic()
        with source:
            document = source.read()
        Log.info(
            f"Processing {document.kind.upper()} '{document.original_name}' "
            f"({document.size / 1024 / 1024:.2f} MB)"
        )

        if document.kind == "pdf":
            result = self._extract_pdf(document)
        else:
            result = self._extract_image(document)

        processing_time_ms = int((time.monotonic() - started) * 1000)
        Log.info(
            f"Extraction completed in {processing_time_ms}ms via {result.method}: "
            f"{result.text_length} chars, {result.word_count} meaningful words"
        )
        return ExtractionOutcome(
            original_name=document.original_name,
            kind=document.kind,
            file_size=document.size,
            result=result,
            processing_time_ms=processing_time_ms,
        )

    def _extract_pdf(self, document: DocumentBytes) -> ExtractionResult:
        result = self._run_pdf_cascade(document)
        self._require_minimum_text(result)
        Log.debug(f"Extracted text sample: {meaningful_sample(result.text)}")

        verdict = validate(result.text)
        if verdict.is_valid:
            return result
        Log.warning(f"Text validation failed for '{document.original_name}': {verdict.message}")
        return replace(
            result,
            text=GUIDANCE_TEMPLATE.format(
                text=result.text,
                original_name=document.original_name,
                pages=result.pages if result.pages is not None else "unknown",
                text_length=result.text_length,
                word_count=verdict.meaningful_words,
            ),
            is_valid=False,
            warning=verdict.message,
        )

    def _run_pdf_cascade(self, document: DocumentBytes) -> ExtractionResult:
        errors: list[ExtractionError] = []
        weak_results: list[ExtractionResult] = []
        for extractor in self._pdf_extractors:
            try:
                result = extractor.extract(document.content)
            except ExtractionError as exc:
                Log.warning(f"PDF extraction via {extractor.name} failed: {exc}")
                errors.append(exc)
                continue
            Log.info(
                f"PDF extraction via {extractor.name}: {result.pages} pages, "
                f"{result.text_length} chars, {result.word_count} meaningful words"
            )
            if not self._is_low_quality(result):
                return result
            Log.warning(f"PDF extraction via {extractor.name} produced low-quality text")
            weak_results.append(result)

        if weak_results:
            return self._best_of(weak_results)
        raise AllExtractionMethodsFailedError(
            "All PDF text extraction methods failed: "
            + "; ".join(str(error) for error in errors),
            errors,
        )

    @staticmethod
    def _is_low_quality(result: ExtractionResult) -> bool:
        return result.word_count < MIN_MEANINGFUL_WORDS or is_mostly_special_chars(result.text)

    @staticmethod
    def _best_of(results: list[ExtractionResult]) -> ExtractionResult:
        """First valid result, else the one with the most meaningful words."""
        for result in results:
            if result.is_valid:
                return result
        return max(results, key=lambda result: result.word_count)

    def _extract_image(self, document: DocumentBytes) -> ExtractionResult:
        result = self._ocr_extractor.extract(document.content)
        self._require_minimum_text(result)
        if not result.is_valid:
            Log.warning(f"OCR text validation failed for '{document.original_name}': {result.warning}")
        return result

    @staticmethod
    def _require_minimum_text(result: ExtractionResult) -> None:
        if len(result.text.strip()) < MIN_FINAL_TEXT_LENGTH:
            raise InsufficientTextError(
                f"Only {len(result.text.strip())} characters extracted via {result.method}"
            )
