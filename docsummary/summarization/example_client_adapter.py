"""Offline generation client for local development and tests.

Implement BaseGenerationClient and register the provider in SummarizerFactory
to add a real backend.
"""

from docsummary.summarization.client_base import BaseGenerationClient


class ExampleClientAdapter(BaseGenerationClient):
    """Returns a fixed, deterministic summary without any network calls."""

    def generate(self, *, model: str, prompt: str, timeout: float | None = None) -> str:
        _ = timeout
        return (
            f"Example summary produced by {model}.\n\n"
            f"The prompt contained {len(prompt)} characters."
        )
