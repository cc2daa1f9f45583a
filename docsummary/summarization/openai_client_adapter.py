import httpx
import openai

from docsummary.summarization.client_base import BaseGenerationClient
from docsummary.summarization.exceptions import GenerationBackendError


def kind_for_status(status_code: int, message: str) -> str | None:
    """Map an HTTP status from the provider to a failure kind."""
    if status_code == 404:
        return "model_not_found"
    if status_code in (401, 403):
        return "auth"
    if status_code == 429:
        lowered = message.lower()
        return "quota_exceeded" if "quota" in lowered else "rate_limited"
    if status_code == 503:
        return "overloaded"
    if status_code == 504:
        return "timeout"
    return None


class OpenAIClientAdapter(BaseGenerationClient):
    """Generation client built on the OpenAI-compatible chat completions API.

    Works with any provider exposing that API, including Gemini's
    OpenAI-compatible endpoint. SDK-level retries are disabled because
    SummarizationClient owns the retry policy.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str | None = None,
        temperature: float = 0.3,
        max_output_tokens: int = 8192,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=None,
            max_retries=0,
        )
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

    def generate(self, *, model: str, prompt: str, timeout: float | None = None) -> str:
        client = self._client if timeout is None else self._client.with_options(timeout=timeout)
        try:
            response = client.chat.completions.create(
                model=model,
                temperature=self._temperature,
                max_tokens=self._max_output_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise GenerationBackendError(
                f"AI provider timeout: {exc}", kind="timeout"
            ) from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise GenerationBackendError(
                f"AI provider network error: {exc}", kind="network"
            ) from exc
        except openai.APIStatusError as exc:
            raise GenerationBackendError(
                f"AI provider API error: {exc}",
                kind=kind_for_status(exc.status_code, str(exc)),
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            raise GenerationBackendError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise GenerationBackendError("AI returned no choices")
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise GenerationBackendError(
                "AI response blocked by safety filter", kind="content_blocked"
            )
        content = choice.message.content
        if not content:
            raise GenerationBackendError("AI returned empty response")
        return content
