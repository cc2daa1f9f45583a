"""Maps generation backend failures to retry decisions and terminal errors.

Structured ``kind`` values set by the adapters win. Errors without a kind are
classified by substring-matching the backend's message, which depends on the
backend's wording and may drift between API versions.
"""

from docsummary.summarization.exceptions import (
    AuthConfigError,
    ContentBlockedError,
    ModelUnavailableError,
    QuotaExceededError,
    ServiceUnavailableError,
    SummarizationError,
    SummarizationTimeoutError,
    SummaryGenerationFailedError,
)

SWITCHABLE_KINDS = frozenset({"model_not_found", "overloaded", "unavailable"})

KIND_ERRORS: dict[str, type[SummarizationError]] = {
    "overloaded": ServiceUnavailableError,
    "unavailable": ServiceUnavailableError,
    "rate_limited": ServiceUnavailableError,
    "quota_exceeded": QuotaExceededError,
    "auth": AuthConfigError,
    "content_blocked": ContentBlockedError,
    "timeout": SummarizationTimeoutError,
    "model_not_found": ModelUnavailableError,
}

_SWITCH_MARKERS = (
    "404",
    "not found",
    "model",
    "unavailable",
    "overload",
    "not supported",
    "invalid model",
)

# Order matters: the first matching rule wins.
_MESSAGE_RULES: tuple[tuple[tuple[str, ...], type[SummarizationError]], ...] = (
    (("503", "overload", "unavailable"), ServiceUnavailableError),
    (("quota", "exceeded"), QuotaExceededError),
    (("api key", "invalid", "auth"), AuthConfigError),
    (("safety", "content"), ContentBlockedError),
    (("timeout",), SummarizationTimeoutError),
    (("model", "not found"), ModelUnavailableError),
)


def _kind_of(error: BaseException) -> str | None:
    kind = getattr(error, "kind", None)
    return kind if isinstance(kind, str) else None


def should_switch_model(error: BaseException) -> bool:
    """True when the failure is about the model itself rather than load."""
    kind = _kind_of(error)
    if kind is not None:
        return kind in SWITCHABLE_KINDS
    message = str(error).lower()
    return any(marker in message for marker in _SWITCH_MARKERS)


def classify_failure(error: BaseException) -> SummarizationError:
    """Build the terminal error raised once retries are exhausted."""
    kind = _kind_of(error)
    if kind in KIND_ERRORS:
        return KIND_ERRORS[kind](str(error))
    message = str(error).lower()
    for markers, error_cls in _MESSAGE_RULES:
        if any(marker in message for marker in markers):
            return error_cls(str(error))
    return SummaryGenerationFailedError(f"Summary generation failed: {error}")
