from unittest.mock import MagicMock

import pytest

from docsummary.database.models import SummaryRecord
from docsummary.database.repositories.job_repository import JobRepository
from docsummary.database.repositories.summary_repository import SummaryRepository
from docsummary.database.repositories.uploaded_documents_repository import (
    UploadedDocumentsRepository,
)
from docsummary.extraction.byte_source import ByteSource
from docsummary.extraction.exceptions import InsufficientTextError
from docsummary.extraction.models import ExtractionOutcome, ExtractionResult
from docsummary.extraction.orchestrator import ExtractionOrchestrator
from docsummary.processor.file_loader import FileLoader
from docsummary.processor.models import UploadedDocument
from docsummary.processor.processor import Processor
from docsummary.processor.steps import (
    ExtractTextStep,
    LoadDocumentStep,
    MarkProcessingStep,
    PersistExtractionStep,
    PersistSummaryStep,
    RecordErrorStep,
    SummarizeStep,
)
from docsummary.summarization.exceptions import QuotaExceededError
from docsummary.summarization.models import SummarizationOutcome
from docsummary.summarization.service import SummaryService

EXTRACTED_TEXT = (
    "The committee reviewed the annual budget and approved funding "
    "for three new community projects this spring."
)


def _make_document() -> UploadedDocument:
    return UploadedDocument(
        id=1,
        uuid="abc-123",
        storage_disk="local",
        original_name="budget.pdf",
        mime_type="application/pdf",
        file_size_bytes=1024,
    )


def _make_extraction() -> ExtractionOutcome:
    return ExtractionOutcome(
        original_name="budget.pdf",
        kind="pdf",
        file_size=1024,
        result=ExtractionResult.from_text(EXTRACTED_TEXT, "structured_pdf", pages=1),
        processing_time_ms=30,
    )


def _make_summary() -> SummarizationOutcome:
    return SummarizationOutcome(
        summary_text="Budget approved.\n\nProjects funded.",
        provider_used="ai",
        processing_time_ms=70,
        model_name="gemini-2.0-flash",
    )


def _make_pipeline() -> tuple[
    Processor,
    MagicMock,
    MagicMock,
    MagicMock,
    MagicMock,
    MagicMock,
    MagicMock,
    MagicMock,
]:
    file_loader = MagicMock(spec=FileLoader)
    doc_repo = MagicMock(spec=UploadedDocumentsRepository)
    orchestrator = MagicMock(spec=ExtractionOrchestrator)
    summary_service = MagicMock(spec=SummaryService)
    summary_repo = MagicMock(spec=SummaryRepository)
    job_repo = MagicMock(spec=JobRepository)
    byte_source = MagicMock(spec=ByteSource)

    doc_repo.find_by_id.return_value = _make_document()
    file_loader.open.return_value = byte_source
    orchestrator.extract.return_value = _make_extraction()
    summary_service.summarize.return_value = _make_summary()
    summary_repo.insert.return_value = 55

    steps = [
        MarkProcessingStep(job_repo),
        LoadDocumentStep(file_loader=file_loader, doc_repo=doc_repo),
        ExtractTextStep(orchestrator),
        PersistExtractionStep(doc_repo),
        SummarizeStep(summary_service),
        PersistSummaryStep(summary_repo),
    ]
    processor = Processor(steps=steps, failed_step=RecordErrorStep(job_repo))
    return (
        processor,
        file_loader,
        doc_repo,
        orchestrator,
        summary_service,
        summary_repo,
        job_repo,
        byte_source,
    )


class TestProcessorPipeline:
    def test_runs_all_steps_and_persists_outputs(self) -> None:
        (
            processor,
            file_loader,
            doc_repo,
            orchestrator,
            summary_service,
            summary_repo,
            job_repo,
            byte_source,
        ) = _make_pipeline()

        context = processor.process(uploaded_document_id=1, job_id=9, summary_length="short")

        job_repo.mark_processing.assert_called_once_with(9)
        doc_repo.find_by_id.assert_called_once_with(1)
        file_loader.open.assert_called_once_with(_make_document())
        orchestrator.extract.assert_called_once_with(byte_source)
        update_kwargs = doc_repo.update_extraction_result.call_args.kwargs
        assert update_kwargs["extracted_text"] == EXTRACTED_TEXT
        assert update_kwargs["extraction_payload"]["extractionMethod"] == "structured_pdf"
        summary_service.summarize.assert_called_once_with(EXTRACTED_TEXT, "short")
        summary_repo.insert.assert_called_once()
        assert context.summary_id == 55
        job_repo.record_error.assert_not_called()

    def test_summary_record_fields(self) -> None:
        processor, *_rest, summary_repo, _job_repo, _source = _make_pipeline()

        processor.process(uploaded_document_id=1, job_id=9, summary_length="long")

        record = summary_repo.insert.call_args.args[0]
        assert record == SummaryRecord(
            uploaded_document_id=1,
            filename="abc-123",
            original_name="budget.pdf",
            file_type="pdf",
            extracted_text_sample=EXTRACTED_TEXT,
            summary="Budget approved.\n\nProjects funded.",
            summary_length="long",
            provider_used="ai",
            model_name="gemini-2.0-flash",
            processing_time_ms=100,
            file_size=1024,
        )

    def test_records_remediation_and_reraises_on_extraction_error(self) -> None:
        (
            processor,
            _loader,
            doc_repo,
            orchestrator,
            summary_service,
            _summary_repo,
            job_repo,
            byte_source,
        ) = _make_pipeline()
        orchestrator.extract.side_effect = InsufficientTextError("Only 3 characters")

        with pytest.raises(InsufficientTextError, match="Only 3 characters"):
            processor.process(uploaded_document_id=1, job_id=7)

        job_repo.mark_processing.assert_called_once_with(7)
        job_repo.record_error.assert_called_once_with(7, InsufficientTextError.remediation)
        doc_repo.update_extraction_result.assert_not_called()
        summary_service.summarize.assert_not_called()
        byte_source.close.assert_called_once()

    def test_summarization_error_keeps_extraction(self) -> None:
        (
            processor,
            _loader,
            doc_repo,
            _orchestrator,
            summary_service,
            summary_repo,
            job_repo,
            _source,
        ) = _make_pipeline()
        summary_service.summarize.side_effect = QuotaExceededError("429 quota")

        with pytest.raises(QuotaExceededError):
            processor.process(uploaded_document_id=1, job_id=7)

        doc_repo.update_extraction_result.assert_called_once()
        summary_repo.insert.assert_not_called()
        job_repo.record_error.assert_called_once_with(7, QuotaExceededError.remediation)

    def test_unexpected_error_records_message(self) -> None:
        processor, _loader, doc_repo, *_rest, job_repo, _source = _make_pipeline()
        doc_repo.find_by_id.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            processor.process(uploaded_document_id=1, job_id=3)

        job_repo.record_error.assert_called_once_with(3, "connection lost")

    def test_mark_processing_runs_before_pipeline_work(self) -> None:
        (
            processor,
            file_loader,
            doc_repo,
            orchestrator,
            _service,
            _summary_repo,
            job_repo,
            byte_source,
        ) = _make_pipeline()
        call_order: list[str] = []

        job_repo.mark_processing.side_effect = lambda *_: call_order.append("mark_processing")
        doc_repo.find_by_id.side_effect = lambda *_: (
            call_order.append("find_by_id"),
            _make_document(),
        )[1]
        file_loader.open.side_effect = lambda *_: (call_order.append("open"), byte_source)[1]
        orchestrator.extract.side_effect = lambda *_: (
            call_order.append("extract"),
            _make_extraction(),
        )[1]

        processor.process(uploaded_document_id=1, job_id=7)

        assert call_order == ["mark_processing", "find_by_id", "open", "extract"]


class TestBuildProcessor:
    def test_wires_pipeline_in_order(self, tmp_path) -> None:  # type: ignore[no-untyped-def]
        from docsummary.config.settings import Settings
        from docsummary.processor.processor import build_processor

        settings = Settings(summarization_provider="example")

        processor = build_processor(settings, files_root=tmp_path)

        assert [type(step) for step in processor._steps] == [
            MarkProcessingStep,
            LoadDocumentStep,
            ExtractTextStep,
            PersistExtractionStep,
            SummarizeStep,
            PersistSummaryStep,
        ]
        assert isinstance(processor._failed_step, RecordErrorStep)
