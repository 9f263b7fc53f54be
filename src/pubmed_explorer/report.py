"""Plain-text reporting for search results."""
from __future__ import annotations

from typing import List

from .models import ArticleRecord, SearchResult


def format_authors(article: ArticleRecord, limit: int = 3) -> str:
    names = ", ".join(article.authors[:limit])
    if len(article.authors) > limit:
        names += " et al."
    return names


def render_report(result: SearchResult) -> str:
    """Return a human-readable summary of a search result."""

    lines: List[str] = ["PubMed Search Report", f"Query: {result.query}"]
    if not result.ok:
        lines.append(f"[ERROR] {result.error}")
        return "\n".join(lines)

    lines.append(f"Records parsed: {result.raw_count}")
    lines.append(f"Unique articles: {len(result.articles)}")
    if not result.articles:
        lines.append("No results found.")
        return "\n".join(lines)

    lines.append("Articles:")
    for idx, article in enumerate(result.articles, start=1):
        lines.append(f"{idx}. {article.title}")
        lines.append(f"   {format_authors(article)} | {article.journal} | {article.pub_date}")
        locator = f"PMID: {article.pmid}"
        if article.has_doi:
            locator += f" | DOI: {article.doi}"
        lines.append(f"   {locator}")
    return "\n".join(lines)
