"""JSON-ready payloads describing extraction, summarization and failures.

The worker stores ``extraction_payload`` on the document and the ``error_payload``
message on the job. ``summary_payload`` is the response body an HTTP front end
returns for a finished summary; the worker itself persists a ``SummaryRecord``.
"""

from typing import Any

from docsummary.extraction.models import ExtractionOutcome
from docsummary.summarization.models import SummarizationOutcome


def extraction_payload(outcome: ExtractionOutcome) -> dict[str, Any]:
    result = outcome.result
    payload: dict[str, Any] = {
        "success": True,
        "message": "Document processed successfully",
        "extractedText": result.text,
        "originalName": outcome.original_name,
        "fileType": outcome.kind,
        "fileSize": outcome.file_size,
        "processingTime": outcome.processing_time_ms,
        "extractionMethod": result.method,
        "textLength": result.text_length,
        "wordCount": result.word_count,
        "isValid": result.is_valid,
    }
    if result.pages is not None:
        payload["pages"] = result.pages
    if result.confidence is not None:
        payload["confidence"] = round(result.confidence)
    if result.warning:
        payload["warning"] = result.warning
    return payload


def summary_payload(
    outcome: SummarizationOutcome,
    *,
    summary_length: str,
    original_name: str,
    file_type: str,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "success": True,
        "summary": outcome.summary_text,
        "summaryLength": summary_length,
        "providerUsed": outcome.provider_used,
        "modelName": outcome.model_name,
        "processingTime": outcome.processing_time_ms,
        "originalName": original_name,
        "fileType": file_type,
        "paragraphCount": outcome.paragraph_count,
    }
    if outcome.notice:
        payload["notice"] = outcome.notice
        payload["retrySuggested"] = outcome.retry_suggested
    return payload


def error_payload(exc: BaseException) -> dict[str, Any]:
    """Describe a failure with remediation text and a retry hint.

    Domain errors carry ``remediation`` and ``retry_suggested``; anything else
    is reported by its message and treated as transient.
    """
    remediation = getattr(exc, "remediation", None)
    retry_suggested = getattr(exc, "retry_suggested", True)
    return {
        "error": remediation or str(exc),
        "details": str(exc),
        "retrySuggested": bool(retry_suggested),
    }
