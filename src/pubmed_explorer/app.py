"""High-level orchestrator for literature search workflows."""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .config import Settings, load_settings
from .deduplicator import ArticleDeduplicator
from .eutils import EUtilsClient, EUtilsError
from .extractor import ArticleExtractor
from .models import ArticleRecord, SearchResult

logger = logging.getLogger(__name__)


class LiteratureSearchApp:
    """Coordinates fetching, extraction, and deduplication of PubMed articles."""

    def __init__(
        self,
        client: EUtilsClient | None = None,
        settings: Settings | None = None,
        deduplicator: ArticleDeduplicator | None = None,
    ):
        self.settings = settings or getattr(client, "settings", None) or load_settings()
        self.client = client or EUtilsClient(self.settings)
        self.extractor = ArticleExtractor()
        self.deduplicator = deduplicator or ArticleDeduplicator()

    def search(self, query: str, retmax: Optional[int] = None) -> SearchResult:
        """Search PubMed and return the de-duplicated article list.

        Raises ``ValueError`` for a blank query. Transport problems come back
        as a result with ``error`` set rather than an exception.
        """
        if not query or not query.strip():
            raise ValueError("Please enter a search query")
        query = query.strip()
        logger.info("Searching PubMed for: %s", query)

        try:
            ids = self.client.search_ids(query, retmax=retmax or self.settings.search_limit)
            logger.info("Found PMIDs: %d", len(ids))
            if not ids:
                return SearchResult(query=query)
            markup = self.client.fetch_markup(ids)
        except EUtilsError as exc:
            logger.error("Search for %r failed: %s", query, exc)
            return SearchResult(query=query, error=str(exc))

        return self._build_result(query, markup)

    def related(self, pmid: str, existing: Iterable[ArticleRecord] = ()) -> SearchResult:
        """Return articles related to ``pmid`` merged behind ``existing`` ones.

        The merged list is de-duplicated, so articles already on screen keep
        their place and re-fetched copies of them are dropped.
        """
        pmid = (pmid or "").strip()
        if not pmid:
            raise ValueError("A PMID is required")
        existing = list(existing)
        logger.info("Fetching related articles for PMID: %s", pmid)

        try:
            ids = self.client.related_ids(pmid, limit=self.settings.related_limit)
            logger.info("Found related PMIDs: %d", len(ids))
            if not ids:
                return SearchResult(query=pmid, articles=existing, raw_count=len(existing))
            markup = self.client.fetch_markup(ids)
        except EUtilsError as exc:
            logger.error("Related lookup for PMID %s failed: %s", pmid, exc)
            return SearchResult(query=pmid, error=str(exc))

        return self._build_result(pmid, markup, existing)

    def _build_result(
        self, query: str, markup: str, existing: List[ArticleRecord] | None = None
    ) -> SearchResult:
        records = list(existing or []) + self.extractor.extract(markup)
        logger.info("Parsed articles before deduplication: %d", len(records))
        articles = self.deduplicator.deduplicate(records)
        logger.info("Unique articles after deduplication: %d", len(articles))
        return SearchResult(query=query, articles=articles, raw_count=len(records))

    def close(self) -> None:
        self.client.close()


__all__ = ["LiteratureSearchApp"]
