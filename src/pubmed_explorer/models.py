"""Data models for literature search workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

NO_TITLE = "No title available"
NO_ABSTRACT = "No abstract available"
UNKNOWN_AUTHORS = "Unknown authors"
UNKNOWN_JOURNAL = "Unknown journal"
UNKNOWN_DATE = "Unknown date"

ABSTRACT_MAX_LENGTH = 500


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class ArticleRecord:
    """Represents one bibliographic record scraped from a PubMed article block.

    Missing fields are filled with display sentinels (``"Unknown journal"``
    and friends). The names of those fields are kept in ``missing`` so callers
    can tell a placeholder apart from a value that merely reads the same.
    """

    pmid: str
    title: str = NO_TITLE
    abstract: str = NO_ABSTRACT
    authors: Tuple[str, ...] = (UNKNOWN_AUTHORS,)
    journal: str = UNKNOWN_JOURNAL
    pub_date: str = UNKNOWN_DATE
    year: Optional[str] = None
    doi: Optional[str] = None
    missing: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def has_doi(self) -> bool:
        return bool(self.doi and self.doi.strip())

    @property
    def first_author(self) -> str:
        return self.authors[0] if self.authors else ""

    def is_missing(self, name: str) -> bool:
        return name in self.missing

    def to_dict(self) -> Dict[str, Any]:
        """Return the record using the JSON keys served to browser clients."""
        return {
            "pmid": self.pmid,
            "title": self.title,
            "authors": list(self.authors),
            "journal": self.journal,
            "pubDate": self.pub_date,
            "abstract": self.abstract,
            "doi": self.doi,
            "year": self.year,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArticleRecord":
        """Rebuild a record sent back by a client.

        Placeholders cannot be told apart once serialized, so values equal to a
        sentinel are marked missing again.
        """
        raw_authors = data.get("authors") or ()
        if isinstance(raw_authors, str):
            raw_authors = [raw_authors]
        authors = tuple(str(name) for name in raw_authors if name) or (UNKNOWN_AUTHORS,)
        values = {
            "title": _text(data.get("title")) or NO_TITLE,
            "abstract": (_text(data.get("abstract")) or NO_ABSTRACT)[:ABSTRACT_MAX_LENGTH],
            "journal": _text(data.get("journal")) or UNKNOWN_JOURNAL,
            "pub_date": _text(data.get("pubDate")) or UNKNOWN_DATE,
        }
        sentinels = {
            "title": NO_TITLE,
            "abstract": NO_ABSTRACT,
            "journal": UNKNOWN_JOURNAL,
            "pub_date": UNKNOWN_DATE,
        }
        missing = {name for name, value in values.items() if value == sentinels[name]}
        if authors == (UNKNOWN_AUTHORS,):
            missing.add("authors")
        return cls(
            pmid=_text(data["pmid"]),
            authors=authors,
            year=_text(data.get("year")) or None,
            doi=_text(data.get("doi")) or None,
            missing=frozenset(missing),
            **values,
        )


@dataclass
class SearchResult:
    """Outcome of a search or related-article lookup.

    An empty ``articles`` list with no ``error`` is a valid "no matches"
    answer; ``error`` is only set when fetching or parsing failed.
    """

    query: str
    articles: List[ArticleRecord] = field(default_factory=list)
    error: Optional[str] = None
    raw_count: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"articles": [a.to_dict() for a in self.articles]}
        if self.error is not None:
            payload["error"] = self.error
        return payload
