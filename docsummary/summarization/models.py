import re
from dataclasses import dataclass
from typing import Literal

SummaryLength = Literal["short", "medium", "long"]
ProviderUsed = Literal["ai", "fallback"]

INPUT_CHAR_LIMITS: dict[str, int] = {
    "short": 8000,
    "medium": 15000,
    "long": 25000,
}

LENGTH_DESCRIPTIONS: dict[str, str] = {
    "short": "3-4 paragraphs",
    "medium": "5-6 paragraphs",
    "long": "7-9 paragraphs",
}

_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class ModelCandidate:
    """A generation model the client may use; lower priority is tried first."""

    name: str
    priority: int


@dataclass(frozen=True)
class SummarizationOutcome:
    """A finished summary and how it was produced."""

    summary_text: str
    provider_used: ProviderUsed
    processing_time_ms: int
    model_name: str | None = None
    notice: str | None = None
    retry_suggested: bool = False

    @property
    def paragraph_count(self) -> int:
        return len(_PARAGRAPH_BREAK.findall(self.summary_text)) + 1
