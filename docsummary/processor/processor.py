from pathlib import Path

from docsummary.config.settings import Settings
from docsummary.database.repositories.job_repository import JobRepository
from docsummary.database.repositories.summary_repository import SummaryRepository
from docsummary.database.repositories.uploaded_documents_repository import (
    UploadedDocumentsRepository,
)
from docsummary.extraction.factory import OrchestratorFactory
from docsummary.logging.logger import Log
from docsummary.processor.file_loader import FileLoader
from docsummary.processor.payloads import error_payload
from docsummary.processor.pipeline import PipelineContext, PipelineStep
from docsummary.processor.steps import (
    ExtractTextStep,
    LoadDocumentStep,
    MarkProcessingStep,
    PersistExtractionStep,
    PersistSummaryStep,
    RecordErrorStep,
    SummarizeStep,
)
from docsummary.summarization.factory import SummarizerFactory


class Processor:
    """Runs the document pipeline: load -> extract -> summarize -> persist.

    When a step raises, ``failed_step`` records the error on the job and the
    exception propagates so the job runner can decide whether to retry.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(
        self,
        uploaded_document_id: int,
        job_id: int,
        summary_length: str = "medium",
    ) -> PipelineContext:
        Log.info(f"Processing document {uploaded_document_id} for job {job_id}")
        context = PipelineContext(
            uploaded_document_id=uploaded_document_id,
            job_id=job_id,
            summary_length=summary_length,
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = error_payload(exc)["error"]
            self._failed_step.run(context)
            raise
        finally:
            if context.byte_source is not None:
                context.byte_source.close()
        return context


def build_processor(
    settings: Settings,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    job_repo = JobRepository(settings.max_job_attempts)
    doc_repo = UploadedDocumentsRepository()
    file_loader = FileLoader(
        files_root=files_root if files_root is not None else Path(settings.files_root),
        max_size_bytes=settings.max_upload_size_bytes,
        delete_after_read=settings.delete_uploaded_files,
    )
    steps: list[PipelineStep] = [
        MarkProcessingStep(job_repo),
        LoadDocumentStep(file_loader=file_loader, doc_repo=doc_repo),
        ExtractTextStep(OrchestratorFactory.create(settings)),
        PersistExtractionStep(doc_repo),
        SummarizeStep(SummarizerFactory.create(settings)),
        PersistSummaryStep(SummaryRepository()),
    ]
    return Processor(steps=steps, failed_step=RecordErrorStep(job_repo))
