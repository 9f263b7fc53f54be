"""Exporters for canonical article lists."""
from __future__ import annotations

import json
from typing import List

from .models import ArticleRecord


def to_json(articles: List[ArticleRecord]) -> str:
    return json.dumps([article.to_dict() for article in articles], indent=2)


def _known(article: ArticleRecord, name: str) -> bool:
    return not article.is_missing(name)


def to_bibtex(articles: List[ArticleRecord]) -> str:
    """Render articles as BibTeX, leaving out placeholder values."""
    entries = []
    for article in articles:
        lines = [f"@article{{pmid{article.pmid},"]
        if _known(article, "authors"):
            lines.append(f"  author = {{{' and '.join(article.authors)}}},")
        if _known(article, "title"):
            lines.append(f"  title = {{{article.title}}},")
        if _known(article, "journal"):
            lines.append(f"  journal = {{{article.journal}}},")
        if article.year:
            lines.append(f"  year = {{{article.year}}},")
        if article.has_doi:
            lines.append(f"  doi = {{{article.doi}}},")
        lines.append(f"  pmid = {{{article.pmid}}},")
        lines.append("}")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)


def to_ris(articles: List[ArticleRecord]) -> str:
    entries = []
    for article in articles:
        lines = ["TY  - JOUR"]
        if _known(article, "authors"):
            for author in article.authors:
                lines.append(f"AU  - {author}")
        if _known(article, "title"):
            lines.append(f"TI  - {article.title}")
        if _known(article, "journal"):
            lines.append(f"JO  - {article.journal}")
        if article.year:
            lines.append(f"PY  - {article.year}")
        if _known(article, "abstract"):
            lines.append(f"AB  - {article.abstract}")
        if article.has_doi:
            lines.append(f"DO  - {article.doi}")
        lines.append(f"AN  - {article.pmid}")
        lines.append(f"UR  - https://pubmed.ncbi.nlm.nih.gov/{article.pmid}/")
        lines.append("ER  - ")
        entries.append("\n".join(lines))
    return "\n\n".join(entries)
