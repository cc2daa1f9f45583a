from typing import ClassVar

from docsummary.config.settings import Settings
from docsummary.summarization.client import SummarizationClient
from docsummary.summarization.client_base import BaseGenerationClient
from docsummary.summarization.example_client_adapter import ExampleClientAdapter
from docsummary.summarization.models import ModelCandidate
from docsummary.summarization.openai_client_adapter import OpenAIClientAdapter
from docsummary.summarization.service import SummaryService


class SummarizerFactory:
    """Creates the configured summarization service."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> SummaryService:
        """Create a summary service with its own failover state."""
        client = SummarizationClient(
            generator=cls.create_generator(settings),
            candidates=cls.create_candidates(settings),
            max_retries=settings.summarization_max_retries,
            retry_delay_seconds=settings.summarization_retry_delay_seconds,
            model_switch_cooldown_seconds=settings.summarization_model_switch_cooldown_seconds,
            health_probe_timeout_seconds=settings.summarization_health_probe_timeout_seconds,
        )
        return SummaryService(client)

    @classmethod
    def create_candidates(cls, settings: Settings) -> list[ModelCandidate]:
        names = settings.summarization_model_names
        if not names:
            raise ValueError("summarization_models must name at least one model")
        return [ModelCandidate(name=name, priority=index) for index, name in enumerate(names)]

    @classmethod
    def create_generator(cls, settings: Settings) -> BaseGenerationClient:
        provider = settings.summarization_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        return OpenAIClientAdapter(
            api_key=settings.summarization_api_key,
            base_url=cls._resolve_base_url(provider, settings),
            temperature=settings.summarization_temperature,
            max_output_tokens=settings.summarization_max_output_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.summarization_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "summarization_base_url is required for "
                    "summarization_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown summarization provider '{provider}'. Choose from: {supported}"
        )
