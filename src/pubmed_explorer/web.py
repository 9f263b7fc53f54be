"""FastAPI + Tailwind interface for PubMed search.

Run with:
    uvicorn pubmed_explorer.web:app --reload
"""
from __future__ import annotations

import html
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from .app import LiteratureSearchApp
from .models import ArticleRecord, SearchResult
from .report import format_authors

logger = logging.getLogger(__name__)

app = FastAPI(title="PubMed Explorer", description="Search PubMed and browse de-duplicated results")


class SearchRequest(BaseModel):
    query: str = ""
    filters: Dict[str, Any] = Field(default_factory=dict)


class RelatedRequest(BaseModel):
    pmid: str
    existing: List[Dict[str, Any]] = Field(default_factory=list)


def _build_search_app() -> LiteratureSearchApp:
    return LiteratureSearchApp()


def _layout(content: str) -> str:
    """Wrap provided content in a Tailwind-powered HTML page."""

    return f"""
    <!doctype html>
    <html lang=\"en\" class=\"h-full bg-gray-50\">
    <head>
        <meta charset=\"utf-8\" />
        <title>PubMed Explorer</title>
        <link href=\"https://cdn.jsdelivr.net/npm/tailwindcss@3.4.4/dist/tailwind.min.css\" rel=\"stylesheet\" />
    </head>
    <body class=\"min-h-full py-10\">
        <div class=\"max-w-5xl mx-auto px-4\">
            <div class=\"bg-white shadow rounded-lg p-6\">
                <h1 class=\"text-3xl font-semibold text-gray-900\">Search Research Articles</h1>
                <p class=\"text-gray-600 mt-2\">Search millions of articles from PubMed. Duplicate records are merged before they are listed.</p>
                {content}
            </div>
        </div>
    </body>
    </html>
    """


def _article_card(article: ArticleRecord) -> str:
    title = html.escape(article.title)
    meta = " &bull; ".join(
        html.escape(part)
        for part in (format_authors(article), article.journal, article.pub_date)
    )
    return f"""
    <div class=\"border border-gray-200 rounded-lg p-4 hover:shadow-lg\">
        <div class=\"flex items-start justify-between gap-4\">
            <h3 class=\"text-lg font-semibold text-gray-900\">{title}</h3>
            <a class=\"text-indigo-600 text-sm\" href=\"https://pubmed.ncbi.nlm.nih.gov/{html.escape(article.pmid)}/\" target=\"_blank\" rel=\"noopener noreferrer\">PubMed</a>
        </div>
        <p class=\"text-sm text-gray-600 mt-1\">{meta}</p>
        <span class=\"inline-block mt-2 px-2 py-1 bg-gray-100 rounded font-mono text-xs\">PMID: {html.escape(article.pmid)}</span>
        <p class=\"text-sm text-gray-600 mt-2\">{html.escape(article.abstract)}</p>
    </div>
    """


def _form_page(query: str = "", result: Optional[SearchResult] = None, warning: Optional[str] = None) -> str:
    """Render the search form with optional results below it."""

    form = f"""
    <form action=\"/search\" method=\"post\" class=\"flex gap-2 mt-6\">
        <input type=\"text\" name=\"query\" value=\"{html.escape(query)}\" placeholder=\"Search for research articles, authors, topics...\" class=\"flex-1 border border-gray-300 rounded-md p-3\" />
        <button type=\"submit\" class=\"inline-flex items-center px-4 py-2 bg-indigo-600 text-white rounded-md shadow hover:bg-indigo-700\">Search</button>
    </form>
    """

    body = ""
    if warning:
        body = f"<p class=\"mt-6 text-amber-700\">{html.escape(warning)}</p>"
    elif result is not None and not result.ok:
        body = f"<p class=\"mt-6 text-red-700\">Search failed: {html.escape(result.error or '')}</p>"
    elif result is not None and not result.articles:
        body = """
        <div class=\"mt-8 text-center\">
            <h3 class=\"text-xl font-semibold\">No results found</h3>
            <p class=\"text-gray-600\">Try adjusting your search terms</p>
        </div>
        """
    elif result is not None:
        cards = "".join(_article_card(article) for article in result.articles)
        body = f"""
        <div class=\"mt-8 space-y-4\">
            <p class=\"text-sm text-gray-600\">Found {len(result.articles)} articles</p>
            {cards}
        </div>
        """

    return _layout(form + body)


@app.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Serve the search form."""

    return HTMLResponse(_form_page())


@app.post("/search", response_class=HTMLResponse)
def search_page(query: str = Form("")) -> HTMLResponse:
    """Run a search and render the list view."""

    if not query.strip():
        return HTMLResponse(_form_page(warning="Please enter a search query"), status_code=400)
    searcher = _build_search_app()
    try:
        result = searcher.search(query)
    finally:
        searcher.close()
    status = 200 if result.ok else 502
    return HTMLResponse(_form_page(query, result), status_code=status)


@app.post("/api/search-pubmed")
def search_pubmed(request: SearchRequest) -> JSONResponse:
    """Return de-duplicated articles for a query as JSON."""

    if not request.query.strip():
        raise HTTPException(status_code=400, detail="Please enter a search query")
    searcher = _build_search_app()
    try:
        result = searcher.search(request.query)
    finally:
        searcher.close()
    return _json_result(result)


@app.post("/api/related-articles")
def related_articles(request: RelatedRequest) -> JSONResponse:
    """Return articles related to a PMID merged with those already shown."""

    if not request.pmid.strip():
        raise HTTPException(status_code=400, detail="A PMID is required")
    try:
        existing = [ArticleRecord.from_dict(item) for item in request.existing]
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=f"Existing article missing field {exc}") from exc
    searcher = _build_search_app()
    try:
        result = searcher.related(request.pmid, existing=existing)
    finally:
        searcher.close()
    return _json_result(result)


def _json_result(result: SearchResult) -> JSONResponse:
    if not result.ok:
        return JSONResponse({"error": result.error, "articles": []}, status_code=500)
    return JSONResponse(result.to_dict())


def main() -> None:
    """Run the FastAPI app using uvicorn."""

    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("pubmed_explorer.web:app", host="0.0.0.0", port=8000, reload=False)


__all__ = ["app", "main"]
