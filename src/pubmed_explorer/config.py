"""Environment-driven settings for the PubMed client."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"


@dataclass
class Settings:
    base_url: str = DEFAULT_BASE_URL
    tool: str = "pubmed-explorer"
    email: str = ""
    api_key: str = ""
    timeout: float = 15.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    search_limit: int = 100
    related_limit: int = 10


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning("%s=%r is not a number, using %s", name, value, default)
        return default
    if parsed < 0:
        logger.warning("%s must not be negative, using %s", name, default)
        return default
    return parsed


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        parsed = int(value.strip())
    except ValueError:
        logger.warning("%s=%r is not an integer, using %s", name, value, default)
        return default
    if parsed < minimum:
        logger.warning("%s must be at least %d, using %s", name, minimum, default)
        return default
    return parsed


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings from the environment, reading ``.env`` first when present."""
    load_dotenv(dotenv_path)

    return Settings(
        base_url=os.getenv("NCBI_BASE_URL", DEFAULT_BASE_URL).strip().rstrip("/") or DEFAULT_BASE_URL,
        tool=os.getenv("NCBI_TOOL", "pubmed-explorer").strip(),
        email=os.getenv("NCBI_EMAIL", "").strip(),
        api_key=os.getenv("NCBI_API_KEY", "").strip(),
        timeout=_env_float("PUBMED_TIMEOUT", 15.0),
        max_retries=_env_int("PUBMED_MAX_RETRIES", 3, minimum=0),
        backoff_factor=_env_float("PUBMED_BACKOFF", 0.5),
        search_limit=_env_int("PUBMED_SEARCH_LIMIT", 100),
        related_limit=_env_int("PUBMED_RELATED_LIMIT", 10),
    )


__all__ = ["Settings", "load_settings"]
