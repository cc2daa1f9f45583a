from abc import ABC, abstractmethod


class BaseGenerationClient(ABC):
    """Contract for provider-specific text generation clients."""

    @abstractmethod
    def generate(self, *, model: str, prompt: str, timeout: float | None = None) -> str:
        """Return generated text for the prompt.

        ``timeout`` bounds this single call in seconds; ``None`` leaves the call
        unbounded on the client side.

        Raises:
            GenerationBackendError: on any provider failure.
        """
