from abc import ABC, abstractmethod
from dataclasses import dataclass

from docsummary.extraction.byte_source import ByteSource
from docsummary.extraction.models import ExtractionOutcome
from docsummary.processor.models import UploadedDocument
from docsummary.summarization.models import SummarizationOutcome


@dataclass(slots=True)
class PipelineContext:
    uploaded_document_id: int
    job_id: int
    summary_length: str = "medium"
    document: UploadedDocument | None = None
    byte_source: ByteSource | None = None
    extraction: ExtractionOutcome | None = None
    summarization: SummarizationOutcome | None = None
    summary_id: int | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
