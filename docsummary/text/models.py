from dataclasses import dataclass

INSUFFICIENT_TEXT = "insufficient_text"
TOO_FEW_MEANINGFUL_WORDS = "too_few_meaningful_words"


@dataclass(frozen=True)
class QualityVerdict:
    """Outcome of the quality gate applied to extracted text."""

    is_valid: bool
    reason: str | None = None
    meaningful_words: int = 0

    @property
    def message(self) -> str:
        if self.reason == INSUFFICIENT_TEXT:
            return "Insufficient text extracted. This appears to be a scanned PDF."
        if self.reason == TOO_FEW_MEANINGFUL_WORDS:
            return (
                f"Only {self.meaningful_words} meaningful words found. "
                "Document may be image-based."
            )
        return "Text quality is acceptable."
