"""Normalization helpers for matching titles, authors and DOIs."""
from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: str | None) -> str:
    """Lower-case, drop punctuation, and collapse whitespace for matching."""
    if not value:
        return ""
    text = value.lower()
    text = _NON_ALNUM.sub("", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text


def normalize_doi(doi: str | None) -> str:
    """Normalize a DOI with the same rule used for titles.

    ``10.1/X`` and ``10.1/x`` both become ``101x``.
    """
    return normalize_text(doi)
