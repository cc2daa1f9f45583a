from docsummary.summarization.client import SummarizationClient
from docsummary.summarization.factory import SummarizerFactory
from docsummary.summarization.fallback import ExtractiveFallbackSummarizer
from docsummary.summarization.service import SummaryService

__all__ = [
    "ExtractiveFallbackSummarizer",
    "SummarizationClient",
    "SummarizerFactory",
    "SummaryService",
]
