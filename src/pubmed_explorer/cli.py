"""Command line interface for searching PubMed."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from .app import LiteratureSearchApp
from .config import load_settings
from .eutils import EUtilsClient
from .exporters import to_bibtex, to_json, to_ris
from .report import render_report


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Search PubMed and list de-duplicated articles")
    parser.add_argument("query", nargs="?", default="", help="PubMed search terms")
    parser.add_argument(
        "--related",
        metavar="PMID",
        help="List articles related to this PMID instead of running a search",
    )
    parser.add_argument(
        "--retmax",
        type=int,
        help="Number of PMIDs to request from the search step",
    )
    parser.add_argument(
        "--json-output",
        type=Path,
        help="Write the articles as a JSON array",
    )
    parser.add_argument(
        "--bibtex-output",
        type=Path,
        help="Write the articles as BibTeX",
    )
    parser.add_argument(
        "--ris-output",
        type=Path,
        help="Write the articles as RIS",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log deduplication decisions and HTTP retries",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.related and not args.query.strip():
        parser.error("Please enter a search query")

    settings = load_settings()
    with EUtilsClient(settings) as client:
        searcher = LiteratureSearchApp(client=client, settings=settings)
        if args.related:
            result = searcher.related(args.related)
        else:
            result = searcher.search(args.query, retmax=args.retmax)

    print(render_report(result))
    if not result.ok:
        return 1

    if args.json_output:
        args.json_output.write_text(to_json(result.articles))

    if args.bibtex_output:
        args.bibtex_output.write_text(to_bibtex(result.articles))

    if args.ris_output:
        args.ris_output.write_text(to_ris(result.articles))

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    raise SystemExit(main())
