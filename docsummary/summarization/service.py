import time

from docsummary.logging.logger import Log
from docsummary.summarization.client import SummarizationClient
from docsummary.summarization.exceptions import (
    AllModelsUnavailableError,
    ServiceUnavailableError,
)
from docsummary.summarization.fallback import ExtractiveFallbackSummarizer
from docsummary.summarization.models import SummarizationOutcome

FALLBACK_NOTICE = (
    "AI service was temporarily unavailable. This is a basic extraction - "
    "for better results, try again in a few minutes."
)


class SummaryService:
    """Summarizes with the AI client and falls back to extraction when it is down.

    Only an exhausted service triggers the fallback; quota, configuration and
    content errors propagate to the caller.
    """

    FALLBACK_ERRORS = (ServiceUnavailableError, AllModelsUnavailableError)

    def __init__(
        self,
        client: SummarizationClient,
        fallback: ExtractiveFallbackSummarizer | None = None,
    ) -> None:
        self._client = client
        self._fallback = fallback or ExtractiveFallbackSummarizer()

    @property
    def client(self) -> SummarizationClient:
        return self._client

    def summarize(self, text: str, length: str = "medium") -> SummarizationOutcome:
        started = time.monotonic()
        try:
            return self._client.summarize(text, length)
        except self.FALLBACK_ERRORS as exc:
            Log.warning(f"AI service unavailable, using fallback summary: {exc}")
            summary = self._fallback.summarize(text, length)
        return SummarizationOutcome(
            summary_text=summary,
            provider_used="fallback",
            processing_time_ms=int((time.monotonic() - started) * 1000),
            notice=FALLBACK_NOTICE,
            retry_suggested=True,
        )
