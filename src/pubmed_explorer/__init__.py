"""PubMed search with record extraction and duplicate resolution."""

from .app import LiteratureSearchApp
from .deduplicator import ArticleDeduplicator, deduplicate
from .eutils import EUtilsClient, EUtilsError
from .extractor import ArticleExtractor, extract
from .models import ArticleRecord, SearchResult
from .similarity import levenshtein, similarity

__all__ = [
    "LiteratureSearchApp",
    "ArticleDeduplicator",
    "deduplicate",
    "EUtilsClient",
    "EUtilsError",
    "ArticleExtractor",
    "extract",
    "ArticleRecord",
    "SearchResult",
    "levenshtein",
    "similarity",
]
