from typing import ClassVar


class SummarizationError(Exception):
    """Base exception for all summarization errors."""

    remediation: ClassVar[str] = "Summary generation failed. Please try again."
    retry_suggested: ClassVar[bool] = True


class SummaryInputError(SummarizationError):
    """Raised when the text or requested length cannot be summarized."""

    remediation = "No text provided for summarization, or invalid summary length."
    retry_suggested = False


class GenerationBackendError(SummarizationError):
    """Raised by generation adapters when the AI backend call fails.

    ``kind`` is a structured failure category when the backend exposes one
    (HTTP status, SDK exception type); ``None`` means only the message is known.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ModelUnavailableError(SummarizationError):
    """Raised when the requested model does not exist or is not served."""

    remediation = (
        "The AI model is not available in your region or API version. "
        "Trying alternative models..."
    )


class AllModelsUnavailableError(SummarizationError):
    """Raised when every candidate model has been abandoned."""

    remediation = (
        "All AI models are currently unavailable. This is usually temporary - "
        "please try again in 5-10 minutes."
    )


class ServiceUnavailableError(SummarizationError):
    """Raised when the AI service is overloaded or failed its health probe."""

    remediation = (
        "AI service is temporarily overloaded. This is common during peak hours. "
        "Please try again in 1-2 minutes."
    )


class QuotaExceededError(SummarizationError):
    """Raised when the API quota is exhausted."""

    remediation = (
        "API quota exceeded. This is common with free tier limits. "
        "Please try again tomorrow or upgrade your plan."
    )
    retry_suggested = False


class AuthConfigError(SummarizationError):
    """Raised when the API key or provider configuration is rejected."""

    remediation = "Service configuration error. Please contact support."
    retry_suggested = False


class ContentBlockedError(SummarizationError):
    """Raised when the backend refuses the content for safety reasons."""

    remediation = "Content was blocked for safety reasons. Please try a different document."
    retry_suggested = False


class SummarizationTimeoutError(SummarizationError):
    """Raised when the AI service keeps timing out."""

    remediation = "AI service is responding slowly. Please try again in a moment."


class SummaryGenerationFailedError(SummarizationError):
    """Raised for exhausted retries that match no specific failure class."""
