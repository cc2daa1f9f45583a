"""Deterministic, AI-free summary used when the generation backend is down."""

import re

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")

# length -> (sentences to keep, sentences per paragraph)
FALLBACK_SHAPES: dict[str, tuple[int, int]] = {
    "short": (8, 2),
    "medium": (12, 3),
    "long": (18, 4),
}

HEADER = "Summary (AI Service Temporarily Unavailable - Basic Extraction):"
FOOTER = (
    "Note: This is a basic text extraction. For an AI-generated summary with "
    "better understanding, please try again in a few minutes when the AI "
    "service is available."
)
NO_SENTENCE_PREVIEW_CHARS = 500


def _is_candidate_sentence(sentence: str) -> bool:
    return len(sentence) > 20 and len(sentence.split()) > 4


class ExtractiveFallbackSummarizer:
    """Selects the leading sentences of a text and groups them into paragraphs."""

    def paragraphs(self, text: str, length: str = "medium") -> list[str]:
        """Return the selected sentences grouped into paragraphs ending in '.'."""
        if not text or not text.strip():
            return []
        sentence_count, per_paragraph = FALLBACK_SHAPES.get(length, FALLBACK_SHAPES["medium"])
        sentences = [
            sentence.strip()
            for sentence in SENTENCE_BOUNDARY.split(text)
            if _is_candidate_sentence(sentence.strip())
        ]
        selected = sentences[:sentence_count]
        return [
            ". ".join(selected[start : start + per_paragraph]) + "."
            for start in range(0, len(selected), per_paragraph)
        ]

    def summarize(self, text: str, length: str = "medium") -> str:
        if not text or not text.strip():
            return ""
        paragraphs = self.paragraphs(text, length)
        body = "\n\n".join(paragraphs) or " ".join(text.split())[:NO_SENTENCE_PREVIEW_CHARS]
        return f"{HEADER}\n\n{body}\n\n{FOOTER}"
