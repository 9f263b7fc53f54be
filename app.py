from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pandas as pd
import streamlit as st

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from pubmed_explorer.app import LiteratureSearchApp  # noqa: E402
from pubmed_explorer.exporters import to_json  # noqa: E402
from pubmed_explorer.models import ArticleRecord  # noqa: E402
from pubmed_explorer.report import format_authors  # noqa: E402


def _build_rows(articles: List[ArticleRecord]) -> List[dict]:
    rows = []
    for article in articles:
        rows.append(
            {
                "Title": article.title,
                "Authors": format_authors(article),
                "Journal": article.journal,
                "Published": article.pub_date,
                "PMID": article.pmid,
                "DOI": article.doi or "",
                "PubMed": f"https://pubmed.ncbi.nlm.nih.gov/{article.pmid}/",
                "Abstract": article.abstract,
            }
        )
    return rows


def main() -> None:
    st.set_page_config(page_title="PubMed Explorer", layout="wide")
    st.title("Search Research Articles")
    st.caption("Search PubMed. Duplicate records are merged by DOI, then by title, first author and year.")

    query = st.text_input(
        "Search",
        placeholder="Search for research articles, authors, topics...",
    )

    if st.button("Search"):
        if not query.strip():
            st.warning("Please enter a search query")
            return

        searcher = LiteratureSearchApp()
        try:
            with st.spinner("Searching..."):
                result = searcher.search(query)
        finally:
            searcher.close()

        if not result.ok:
            st.error(f"Search failed: {result.error}")
            return
        if not result.articles:
            st.info("No results found. Try adjusting your search terms.")
            return

        st.write(f"Found {len(result.articles)} articles ({result.raw_count} records before merging duplicates)")
        df = pd.DataFrame(_build_rows(result.articles))
        st.dataframe(
            df,
            use_container_width=True,
            column_config={"PubMed": st.column_config.LinkColumn("PubMed")},
            hide_index=True,
        )
        st.download_button(
            "Download results (JSON)",
            data=to_json(result.articles),
            file_name="pubmed_results.json",
            mime="application/json",
        )


if __name__ == "__main__":
    main()
