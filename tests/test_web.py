import pytest

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from pubmed_explorer import web
from pubmed_explorer.app import LiteratureSearchApp
from pubmed_explorer.config import Settings
from pubmed_explorer.eutils import EUtilsError


client = TestClient(web.app)


@pytest.fixture()
def serve(monkeypatch, fake_client_class):
    """Route the web app through a fake PubMed client."""

    def install(**kwargs):
        fake = fake_client_class(**kwargs)
        monkeypatch.setattr(
            web, "_build_search_app", lambda: LiteratureSearchApp(client=fake, settings=Settings())
        )
        return fake

    return install


def test_homepage_renders_form():
    response = client.get("/")

    assert response.status_code == 200
    assert "Search Research Articles" in response.text
    assert "tailwind" in response.text.lower()
    assert "name=\"query\"" in response.text


def test_search_api_returns_unique_articles(serve, duplicate_markup):
    fake = serve(ids=["101", "102", "103", "104"], markup=duplicate_markup)

    response = client.post("/api/search-pubmed", json={"query": "large trial", "filters": {}})

    assert response.status_code == 200
    articles = response.json()["articles"]
    assert [a["pmid"] for a in articles] == ["101", "103"]
    assert set(articles[0]) == {"pmid", "title", "authors", "journal", "pubDate", "abstract", "doi", "year"}
    assert fake.closed


def test_search_api_empty_result(serve):
    serve(ids=[])

    response = client.post("/api/search-pubmed", json={"query": "zzzz"})

    assert response.status_code == 200
    assert response.json() == {"articles": []}


def test_search_api_failure(serve):
    serve(error=EUtilsError("PubMed request failed: timeout"))

    response = client.post("/api/search-pubmed", json={"query": "asthma"})

    assert response.status_code == 500
    assert response.json() == {"error": "PubMed request failed: timeout", "articles": []}


def test_search_api_rejects_blank_query(serve):
    serve()

    response = client.post("/api/search-pubmed", json={"query": "  "})

    assert response.status_code == 400


def test_related_api_merges_existing(serve, article_set, article_xml):
    markup = article_set(article_xml(pmid="7", doi="10.9/a"), article_xml(pmid="8", title="Other paper"))
    serve(related=["7", "8"], markup=markup)
    existing = [{"pmid": "7", "title": "Sample article title", "authors": ["Jane Smith"], "doi": "10.9/A"}]

    response = client.post("/api/related-articles", json={"pmid": "7", "existing": existing})

    assert response.status_code == 200
    assert [a["pmid"] for a in response.json()["articles"]] == ["7", "8"]


def test_search_page_lists_articles(serve, duplicate_markup):
    serve(ids=["101", "102", "103", "104"], markup=duplicate_markup)

    response = client.post("/search", data={"query": "large trial"})

    assert response.status_code == 200
    assert "Found 2 articles" in response.text
    assert "A Large Trial" in response.text
    assert "https://pubmed.ncbi.nlm.nih.gov/103/" in response.text


def test_search_page_without_results(serve):
    serve(ids=[])

    response = client.post("/search", data={"query": "zzzz"})

    assert "No results found" in response.text
