"""Utilities for scraping article records out of PubMed efetch XML."""
from __future__ import annotations

import html
import logging
import re
from typing import List, Optional, Set, Tuple

from .models import (
    ABSTRACT_MAX_LENGTH,
    NO_ABSTRACT,
    NO_TITLE,
    UNKNOWN_AUTHORS,
    UNKNOWN_DATE,
    UNKNOWN_JOURNAL,
    ArticleRecord,
)

logger = logging.getLogger(__name__)


class ArticleExtractor:
    """Extract article records using lightweight pattern matching.

    Each ``<PubmedArticle>`` block is parsed on its own, so a block that
    cannot be read only costs that one record.
    """

    BLOCK_PATTERN = re.compile(r"<PubmedArticle>.*?</PubmedArticle>", re.IGNORECASE | re.DOTALL)
    PMID_PATTERN = re.compile(r"<PMID[^>]*>(.*?)</PMID>", re.IGNORECASE | re.DOTALL)
    TITLE_PATTERN = re.compile(r"<ArticleTitle[^>]*>(.*?)</ArticleTitle>", re.IGNORECASE | re.DOTALL)
    ABSTRACT_PATTERN = re.compile(r"<AbstractText[^>]*>(.*?)</AbstractText>", re.IGNORECASE | re.DOTALL)
    AUTHOR_PATTERN = re.compile(r"<Author\b[^>]*>(.*?)</Author>", re.IGNORECASE | re.DOTALL)
    LAST_NAME_PATTERN = re.compile(r"<LastName>(.*?)</LastName>", re.IGNORECASE | re.DOTALL)
    FORE_NAME_PATTERN = re.compile(r"<ForeName>(.*?)</ForeName>", re.IGNORECASE | re.DOTALL)
    JOURNAL_PATTERN = re.compile(r"<Title>(.*?)</Title>", re.IGNORECASE | re.DOTALL)
    PUB_DATE_PATTERN = re.compile(r"<PubDate>(.*?)</PubDate>", re.IGNORECASE | re.DOTALL)
    YEAR_PATTERN = re.compile(r"<Year>(.*?)</Year>", re.IGNORECASE | re.DOTALL)
    MONTH_PATTERN = re.compile(r"<Month>(.*?)</Month>", re.IGNORECASE | re.DOTALL)
    MEDLINE_DATE_PATTERN = re.compile(r"<MedlineDate>.*?(\d{4}).*?</MedlineDate>", re.IGNORECASE | re.DOTALL)
    DOI_PATTERN = re.compile(r"<ArticleId\s+IdType=\"doi\"\s*>(.*?)</ArticleId>", re.IGNORECASE | re.DOTALL)
    REFERENCE_LIST_PATTERN = re.compile(r"<ReferenceList\b", re.IGNORECASE)
    TAG_PATTERN = re.compile(r"<[^>]*>")

    def split_blocks(self, markup: str) -> List[str]:
        if not markup:
            return []
        return self.BLOCK_PATTERN.findall(markup)

    def extract(self, markup: str) -> List[ArticleRecord]:
        blocks = self.split_blocks(markup)
        logger.debug("Found %d article blocks", len(blocks))

        records: List[ArticleRecord] = []
        for position, block in enumerate(blocks):
            try:
                record = self.parse_block(block)
            except Exception:
                logger.warning("Skipping unreadable article block #%d", position, exc_info=True)
                continue
            if record is None:
                logger.debug("Article block #%d has no PMID, skipping", position)
                continue
            records.append(record)
        return records

    def parse_block(self, block: str) -> Optional[ArticleRecord]:
        """Return the record for one article block, or ``None`` without a PMID."""
        pmid = self._first(self.PMID_PATTERN, block)
        if not pmid:
            return None

        missing: Set[str] = set()

        title = self._plain_text(self._first(self.TITLE_PATTERN, block))
        if not title:
            title = NO_TITLE
            missing.add("title")

        abstract = self._plain_text(self._first(self.ABSTRACT_PATTERN, block))
        if abstract:
            abstract = abstract[:ABSTRACT_MAX_LENGTH]
        else:
            abstract = NO_ABSTRACT
            missing.add("abstract")

        authors = self._authors(block)
        if not authors:
            authors = (UNKNOWN_AUTHORS,)
            missing.add("authors")

        journal = self._plain_text(self._first(self.JOURNAL_PATTERN, block))
        if not journal:
            journal = UNKNOWN_JOURNAL
            missing.add("journal")

        year, month = self._pub_date(block)
        if year:
            pub_date = f"{month} {year}" if month else year
        else:
            pub_date = UNKNOWN_DATE
            missing.add("pub_date")

        doi = self._first(self.DOI_PATTERN, self._own_ids(block)) or None

        return ArticleRecord(
            pmid=pmid,
            title=title,
            abstract=abstract,
            authors=authors,
            journal=journal,
            pub_date=pub_date,
            year=year,
            doi=doi,
            missing=frozenset(missing),
        )

    def _authors(self, block: str) -> Tuple[str, ...]:
        names: List[str] = []
        for match in self.AUTHOR_PATTERN.finditer(block):
            inner = match.group(1)
            last_name = self._plain_text(self._first(self.LAST_NAME_PATTERN, inner))
            fore_name = self._plain_text(self._first(self.FORE_NAME_PATTERN, inner))
            if last_name and fore_name:
                names.append(f"{fore_name} {last_name}")
        return tuple(names)

    def _pub_date(self, block: str) -> Tuple[Optional[str], Optional[str]]:
        pub_date = self._first(self.PUB_DATE_PATTERN, block)
        if pub_date is None:
            return None, None
        year = self._first(self.YEAR_PATTERN, pub_date)
        if not year:
            # MedlineDate carries ranges like "1998 Dec-1999 Jan"
            year = self._first(self.MEDLINE_DATE_PATTERN, pub_date)
            return year or None, None
        month = self._first(self.MONTH_PATTERN, pub_date)
        return year, month or None

    def _own_ids(self, block: str) -> str:
        # cited works carry their own ArticleIdList inside ReferenceList
        match = self.REFERENCE_LIST_PATTERN.search(block)
        return block[: match.start()] if match else block

    @staticmethod
    def _first(pattern: re.Pattern, text: str) -> Optional[str]:
        match = pattern.search(text)
        if not match:
            return None
        return match.group(1).strip()

    def _plain_text(self, value: Optional[str]) -> str:
        if not value:
            return ""
        text = self.TAG_PATTERN.sub("", value)
        return html.unescape(text).strip()


def extract(markup: str) -> List[ArticleRecord]:
    """Return the article records found in ``markup``; never raises for bad blocks."""
    return ArticleExtractor().extract(markup)


__all__ = ["ArticleExtractor", "extract"]
