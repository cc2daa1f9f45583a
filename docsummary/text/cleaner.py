"""Text normalization and quality scoring shared by every extractor.

All functions are pure and total: ``None`` or empty input never raises.
Character classes are ASCII-only, so accented letters count as junk.
"""

import re

from docsummary.text.models import INSUFFICIENT_TEXT, TOO_FEW_MEANINGFUL_WORDS, QualityVerdict

MIN_TEXT_LENGTH = 50
MIN_MEANINGFUL_WORDS = 10
SPECIAL_CHAR_RATIO = 0.3

_DISALLOWED_CHARS = re.compile(r"""[^\w\s.,!?;:()@#$%^&*+=/\\"'-]""", re.ASCII)
_LEADING_BULLET = re.compile(r"^[ \t\f\v\r]*[*-][*\- \t\f\v\r]*", re.MULTILINE)
_HORIZONTAL_SPACE = re.compile(r"[^\S\n]+", re.ASCII)
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")

_HAS_LETTER = re.compile(r"[a-zA-Z]")
_ONLY_DIGITS_OR_SYMBOLS = re.compile(r"[0-9\W]+", re.ASCII)
_NOT_WORD_OR_SPACE = re.compile(r"[^\w\s]", re.ASCII)
_WHITESPACE = re.compile(r"\s")


def clean(raw: str | None) -> str:
    """Normalize raw extracted text.

    Junk characters become spaces, leading bullet markers are dropped, runs
    of spaces collapse to one and at most one blank line separates paragraphs.
    """
    if not raw:
        return ""
    text = _DISALLOWED_CHARS.sub(" ", raw)
    text = _LEADING_BULLET.sub("", text)
    text = _HORIZONTAL_SPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def is_meaningful_word(token: str) -> bool:
    return (
        len(token) > 2
        and _HAS_LETTER.search(token) is not None
        and _ONLY_DIGITS_OR_SYMBOLS.fullmatch(token) is None
    )


def count_meaningful_words(text: str | None) -> int:
    if not text:
        return 0
    return sum(1 for token in text.split() if is_meaningful_word(token))


def is_mostly_special_chars(text: str | None) -> bool:
    """True when fewer than 30% of the non-space characters are word characters."""
    if not text:
        return True
    total = len(_WHITESPACE.sub("", text))
    if total == 0:
        return True
    meaningful = len(_NOT_WORD_OR_SPACE.sub("", text))
    return meaningful / total < SPECIAL_CHAR_RATIO


def validate(text: str | None) -> QualityVerdict:
    """Quality gate run after every extraction attempt."""
    words = count_meaningful_words(text)
    if len((text or "").strip()) < MIN_TEXT_LENGTH:
        return QualityVerdict(is_valid=False, reason=INSUFFICIENT_TEXT, meaningful_words=words)
    if words < MIN_MEANINGFUL_WORDS:
        return QualityVerdict(
            is_valid=False, reason=TOO_FEW_MEANINGFUL_WORDS, meaningful_words=words
        )
    return QualityVerdict(is_valid=True, meaningful_words=words)


def meaningful_sample(text: str | None, length: int = 200) -> str:
    """Return up to 20 words starting at the first real word, for log output."""
    if not text:
        return ""
    words = text.split()
    start = 0
    for index, word in enumerate(words):
        if len(word) > 3 and _HAS_LETTER.search(word):
            start = index
            break
    sample = " ".join(words[start : start + 20])
    if len(sample) > length:
        return sample[:length] + "..."
    return sample
