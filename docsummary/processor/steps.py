from docsummary.database.models import SummaryRecord, text_sample
from docsummary.database.repositories.job_repository import JobRepository
from docsummary.database.repositories.summary_repository import SummaryRepository
from docsummary.database.repositories.uploaded_documents_repository import (
    UploadedDocumentsRepository,
)
from docsummary.extraction.orchestrator import ExtractionOrchestrator
from docsummary.logging.logger import Log
from docsummary.processor.file_loader import FileLoader
from docsummary.processor.payloads import extraction_payload
from docsummary.processor.pipeline import PipelineContext, PipelineStep
from docsummary.summarization.service import SummaryService


class MarkProcessingStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._job_repo.mark_processing(context.job_id)
        Log.info(f"Job {context.job_id} marked as processing")
        return context


class RecordErrorStep(PipelineStep):
    def __init__(self, job_repo: JobRepository) -> None:
        self._job_repo = job_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        self._job_repo.record_error(context.job_id, context.error_message)
        Log.error(f"Job {context.job_id} failed: {context.error_message}")
        return context


class LoadDocumentStep(PipelineStep):
    def __init__(
        self,
        file_loader: FileLoader,
        doc_repo: UploadedDocumentsRepository,
    ) -> None:
        self._file_loader = file_loader
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        document = self._doc_repo.find_by_id(context.uploaded_document_id)
        context.document = document
        context.byte_source = self._file_loader.open(document)
        Log.info(
            f"Opened '{document.original_name}' ({document.mime_type}, "
            f"{document.file_size_bytes} bytes) for document {context.uploaded_document_id}"
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, orchestrator: ExtractionOrchestrator) -> None:
        self._orchestrator = orchestrator

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.byte_source is None:
            raise ValueError("PipelineContext.byte_source must be set before extraction")
        context.extraction = self._orchestrator.extract(context.byte_source)
        context.byte_source = None
        return context


class PersistExtractionStep(PipelineStep):
    def __init__(self, doc_repo: UploadedDocumentsRepository) -> None:
        self._doc_repo = doc_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before persist")
        self._doc_repo.update_extraction_result(
            context.uploaded_document_id,
            extracted_text=context.extraction.result.text,
            extraction_payload=extraction_payload(context.extraction),
        )
        return context


class SummarizeStep(PipelineStep):
    def __init__(self, summary_service: SummaryService) -> None:
        self._summary_service = summary_service

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before summarization")
        context.summarization = self._summary_service.summarize(
            context.extraction.result.text,
            context.summary_length,
        )
        Log.info(
            f"Summarized document {context.uploaded_document_id} via "
            f"{context.summarization.provider_used}"
        )
        return context


class PersistSummaryStep(PipelineStep):
    def __init__(self, summary_repo: SummaryRepository) -> None:
        self._summary_repo = summary_repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None or context.extraction is None:
            raise ValueError("PipelineContext.document and extraction must be set before persist")
        if context.summarization is None:
            raise ValueError("PipelineContext.summarization must be set before persist")
        extraction = context.extraction
        summarization = context.summarization
        record = SummaryRecord(
            uploaded_document_id=context.uploaded_document_id,
            filename=context.document.uuid,
            original_name=extraction.original_name,
            file_type=extraction.kind,
            extracted_text_sample=text_sample(extraction.result.text),
            summary=summarization.summary_text,
            summary_length=context.summary_length,
            provider_used=summarization.provider_used,
            model_name=summarization.model_name,
            processing_time_ms=extraction.processing_time_ms + summarization.processing_time_ms,
            file_size=extraction.file_size,
        )
        context.summary_id = self._summary_repo.insert(record)
        Log.info(f"Stored summary {context.summary_id} for document {context.uploaded_document_id}")
        return context
