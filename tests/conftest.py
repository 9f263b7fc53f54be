import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

import pytest

from pubmed_explorer.config import Settings


def build_article_xml(
    pmid="1",
    title="Sample article title",
    abstract="Background text.",
    authors=(("Smith", "Jane"),),
    journal="Journal of Testing",
    year="2020",
    month="Mar",
    doi=None,
):
    """Return one PubmedArticle block; pass None to leave a field out."""

    parts = ["<PubmedArticle>", "<MedlineCitation Status=\"MEDLINE\" Owner=\"NLM\">"]
    if pmid is not None:
        parts.append(f"<PMID Version=\"1\">{pmid}</PMID>")
    parts.append("<Article PubModel=\"Print\">")
    parts.append("<Journal><JournalIssue CitedMedium=\"Internet\"><PubDate>")
    if year is not None:
        parts.append(f"<Year>{year}</Year>")
    if month is not None:
        parts.append(f"<Month>{month}</Month>")
    parts.append("</PubDate></JournalIssue>")
    if journal is not None:
        parts.append(f"<Title>{journal}</Title>")
    parts.append("</Journal>")
    if title is not None:
        parts.append(f"<ArticleTitle>{title}</ArticleTitle>")
    if abstract is not None:
        parts.append(f"<Abstract><AbstractText Label=\"BACKGROUND\">{abstract}</AbstractText></Abstract>")
    if authors:
        parts.append("<AuthorList CompleteYN=\"Y\">")
        for last, fore in authors:
            parts.append(
                f"<Author ValidYN=\"Y\"><LastName>{last}</LastName><ForeName>{fore}</ForeName>"
                f"<Initials>{fore[:1]}</Initials></Author>"
            )
        parts.append("</AuthorList>")
    parts.append("</Article></MedlineCitation>")
    parts.append("<PubmedData><ArticleIdList>")
    if pmid is not None:
        parts.append(f"<ArticleId IdType=\"pubmed\">{pmid}</ArticleId>")
    if doi is not None:
        parts.append(f"<ArticleId IdType=\"doi\">{doi}</ArticleId>")
    parts.append("</ArticleIdList></PubmedData>")
    parts.append("</PubmedArticle>")
    return "\n".join(parts)


def wrap_articles(*blocks):
    return (
        "<?xml version=\"1.0\" ?>\n<!DOCTYPE PubmedArticleSet>\n<PubmedArticleSet>\n"
        + "\n".join(blocks)
        + "\n</PubmedArticleSet>"
    )


class FakeEUtilsClient:
    """Stand-in for EUtilsClient serving canned ids and markup."""

    def __init__(self, settings=None, ids=(), markup="", related=(), error=None):
        self.settings = settings or Settings()
        self.ids = list(ids)
        self.markup = markup
        self.related = list(related)
        self.error = error
        self.fetched = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *_exc):
        self.close()

    def search_ids(self, query, retmax=None):
        if self.error:
            raise self.error
        return list(self.ids)

    def related_ids(self, pmid, limit=None):
        if self.error:
            raise self.error
        return list(self.related)

    def fetch_markup(self, ids):
        self.fetched.append(list(ids))
        return self.markup

    def close(self):
        self.closed = True


@pytest.fixture()
def article_xml():
    return build_article_xml


@pytest.fixture()
def article_set():
    return wrap_articles


@pytest.fixture()
def fake_client_class():
    return FakeEUtilsClient


@pytest.fixture()
def duplicate_markup():
    """Four PubMed blocks that collapse to two articles."""

    return wrap_articles(
        build_article_xml(pmid="101", title="Study A", doi="10.1/X"),
        build_article_xml(pmid="102", title="Study A (dup)", doi="10.1/x"),
        build_article_xml(pmid="103", title="A Large Trial", authors=(("Smith", "John"),)),
        build_article_xml(pmid="104", title="A Large Trial.", authors=(("Smith", "John"),)),
    )
