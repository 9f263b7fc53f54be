"""Logic for collapsing duplicate article records into a canonical list."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .models import ArticleRecord
from .normalization import normalize_doi, normalize_text
from .similarity import similarity

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.85


def composite_key(title: str, first_author: str, year: str) -> str:
    return f"{title}|{first_author}|{year}"


class ArticleDeduplicator:
    """Drop duplicate records using DOIs first, then fuzzy title matching.

    Records carrying a DOI are identified by it alone. Records without one are
    compared on normalized title, first author and year; titles by the same
    first author in the same year that score above ``threshold`` count as the
    same article. The earliest record of a duplicate group is kept.
    """

    def __init__(self, threshold: float = SIMILARITY_THRESHOLD):
        self.threshold = threshold

    def deduplicate(self, records: Iterable[ArticleRecord]) -> List[ArticleRecord]:
        seen_dois: Set[str] = set()
        by_key: Dict[str, ArticleRecord] = {}
        pool: List[Tuple[str, str, str, ArticleRecord]] = []
        accepted: List[ArticleRecord] = []

        for record in records:
            if record.has_doi:
                doi = normalize_doi(record.doi)
                if doi in seen_dois:
                    logger.debug("Dropping PMID %s: duplicate DOI %s", record.pmid, record.doi)
                    continue
                seen_dois.add(doi)
                accepted.append(record)
                continue

            title = normalize_text(record.title)
            author = normalize_text(record.first_author)
            year = record.year or ""
            key = composite_key(title, author, year)

            if key in by_key:
                logger.debug("Dropping PMID %s: same title, author and year as PMID %s", record.pmid, by_key[key].pmid)
                continue

            match = self._similar_title(title, author, year, pool)
            if match is not None:
                logger.debug("Dropping PMID %s: title similar to PMID %s", record.pmid, match.pmid)
                continue

            by_key[key] = record
            pool.append((title, author, year, record))
            accepted.append(record)

        return accepted

    def _similar_title(
        self, title: str, author: str, year: str, pool: List[Tuple[str, str, str, ArticleRecord]]
    ) -> Optional[ArticleRecord]:
        for existing_title, existing_author, existing_year, existing in pool:
            if existing_author != author or existing_year != year:
                continue
            if similarity(title, existing_title) > self.threshold:
                return existing
        return None


def deduplicate(records: Iterable[ArticleRecord]) -> List[ArticleRecord]:
    """Return ``records`` with duplicates removed, keeping first occurrences."""
    return ArticleDeduplicator().deduplicate(records)


__all__ = ["ArticleDeduplicator", "SIMILARITY_THRESHOLD", "composite_key", "deduplicate"]
