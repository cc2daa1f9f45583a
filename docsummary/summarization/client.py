"""AI summarization with per-model retries and cross-model failover.

Each model gets ``max_retries`` attempts with linear backoff for transient
failures. Model-level failures (not found, unsupported, overloaded) abandon the
model at once and move to the next candidate. The candidate index is shared by
every request served by the same client instance and never moves backwards, so
a model abandoned by one request is skipped by all later ones.
"""

import re
import threading
import time
from collections.abc import Callable, Sequence
from pathlib import Path

from docsummary.logging.logger import Log
from docsummary.summarization.client_base import BaseGenerationClient
from docsummary.summarization.error_classifier import classify_failure, should_switch_model
from docsummary.summarization.exceptions import (
    AllModelsUnavailableError,
    ServiceUnavailableError,
    SummaryInputError,
)
from docsummary.summarization.models import (
    INPUT_CHAR_LIMITS,
    LENGTH_DESCRIPTIONS,
    ModelCandidate,
    SummarizationOutcome,
)
from docsummary.summarization.prompt_loader import load_prompt_template

HEALTH_PROBE_PROMPT = "Say 'ready'"

_WHITESPACE_RUN = re.compile(r"\s+")


def prepare_input(text: str, length: str) -> str:
    """Collapse whitespace and keep only the prefix allowed for this length."""
    limit = INPUT_CHAR_LIMITS[length]
    return _WHITESPACE_RUN.sub(" ", text)[:limit].strip()


class SummarizationClient:
    """Stateful summarization client; create one per process and share it."""

    def __init__(
        self,
        *,
        generator: BaseGenerationClient,
        candidates: Sequence[ModelCandidate],
        max_retries: int = 3,
        retry_delay_seconds: float = 2.0,
        model_switch_cooldown_seconds: float = 1.5,
        health_probe_timeout_seconds: float = 3.0,
        prompt_template_path: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not candidates:
            raise ValueError("At least one model candidate is required")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._generator = generator
        self._candidates = tuple(sorted(candidates, key=lambda c: c.priority))
        self._max_retries = max_retries
        self._retry_delay_seconds = retry_delay_seconds
        self._model_switch_cooldown_seconds = model_switch_cooldown_seconds
        self._health_probe_timeout_seconds = health_probe_timeout_seconds
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._sleep = sleep

        self._lock = threading.Lock()
        self._current_index = 0
        self._service_available = True

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_model(self) -> str:
        return self._candidates[self._current_index].name

    @property
    def models(self) -> list[str]:
        return [candidate.name for candidate in self._candidates]

    @property
    def service_available(self) -> bool:
        return self._service_available

    def summarize(self, text: str, length: str = "medium") -> SummarizationOutcome:
        """Summarize text with the current model, failing over as needed.

        Raises:
            SummaryInputError: empty text or unknown length.
            ServiceUnavailableError: the service was down and the health probe failed,
                or retries ended on an overload.
            AllModelsUnavailableError: the last candidate model was abandoned.
            SummarizationError: any other classified failure after retries.
        """
        if length not in INPUT_CHAR_LIMITS:
            raise SummaryInputError(
                f"Invalid summary length '{length}'. Use short, medium, or long."
            )
        if not text or not text.strip():
            raise SummaryInputError("No text content to summarize")

        started = time.monotonic()
        if not self._service_available:
            self._probe_service()

        document_text = prepare_input(text, length)
        prompt = self._prompt_template.format(
            length_description=LENGTH_DESCRIPTIONS[length],
            document_text=document_text,
        )

        model_index = self._current_index
        attempt = 1
        last_error: Exception | None = None
        while attempt <= self._max_retries:
            model = self._candidates[model_index].name
            Log.info(
                f"Attempt {attempt} with {model}: {len(document_text)} chars "
                f"for {length} summary"
            )
            try:
                summary = self._generator.generate(model=model, prompt=prompt)
            except Exception as exc:
                last_error = exc
                Log.warning(f"Attempt {attempt} with {model} failed: {exc}")
                if should_switch_model(exc):
                    model_index = self._advance_model(model_index)
                    attempt = 1
                    self._sleep(self._model_switch_cooldown_seconds)
                    continue
                if attempt < self._max_retries:
                    delay = self._retry_delay_seconds * attempt
                    Log.info(f"Retrying {model} in {delay:g} seconds")
                    self._sleep(delay)
                attempt += 1
                continue

            self._service_available = True
            outcome = SummarizationOutcome(
                summary_text=summary,
                provider_used="ai",
                model_name=model,
                processing_time_ms=int((time.monotonic() - started) * 1000),
            )
            Log.info(
                f"Summary generated by {model}: {len(summary)} chars, "
                f"{outcome.paragraph_count} paragraphs"
            )
            return outcome

        self._service_available = False
        if last_error is None:
            raise ServiceUnavailableError("No generation attempt was made")
        error = classify_failure(last_error)
        Log.error(f"Summarization failed after {self._max_retries} attempts: {error}")
        raise error from last_error

    def _advance_model(self, failed_index: int) -> int:
        """Move past the failed model and return the index to use next."""
        with self._lock:
            if self._current_index > failed_index:
                return self._current_index
            if self._current_index + 1 >= len(self._candidates):
                self._service_available = False
                Log.error("No more models to try, marking AI service unavailable")
                raise AllModelsUnavailableError(
                    f"All {len(self._candidates)} AI models are currently unavailable"
                )
            self._current_index += 1
            Log.warning(f"Switching to model: {self.current_model}")
            return self._current_index

    def _probe_service(self) -> None:
        model = self.current_model
        try:
            self._generator.generate(
                model=model,
                prompt=HEALTH_PROBE_PROMPT,
                timeout=self._health_probe_timeout_seconds,
            )
        except Exception as exc:
            Log.warning(f"Quick service check against {model} failed: {exc}")
            raise ServiceUnavailableError(
                "AI service is currently unavailable. Please try again in a few minutes."
            ) from exc
        Log.info(f"Quick service check against {model} passed")
        self._service_available = True
