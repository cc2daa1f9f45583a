from docsummary.text.cleaner import (
    clean,
    count_meaningful_words,
    is_mostly_special_chars,
    meaningful_sample,
    validate,
)
from docsummary.text.models import QualityVerdict

__all__ = [
    "QualityVerdict",
    "clean",
    "count_meaningful_words",
    "is_mostly_special_chars",
    "meaningful_sample",
    "validate",
]
