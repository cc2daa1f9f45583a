from dataclasses import dataclass
from datetime import datetime

EXTRACTED_TEXT_SAMPLE_CHARS = 3000


@dataclass
class JobRecord:
    """Represents a row from the summary_jobs table."""

    id: int
    uploaded_document_id: int
    status: str
    attempts: int
    summary_length: str = "medium"
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class SummaryRecord:
    """A finished summary as stored in the summaries table."""

    uploaded_document_id: int
    filename: str
    original_name: str
    file_type: str
    extracted_text_sample: str
    summary: str
    summary_length: str
    provider_used: str
    model_name: str | None
    processing_time_ms: int
    file_size: int


def text_sample(text: str, limit: int = EXTRACTED_TEXT_SAMPLE_CHARS) -> str:
    """Truncate text to at most ``limit`` characters, marking the cut with '...'."""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
