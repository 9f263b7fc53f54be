"""Minimal client for the NCBI E-utilities (esearch, efetch, elink)."""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import httpx

from .config import Settings

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, Dict[str, str]], str]

NO_RETRY_STATUSES = {400, 401, 403, 404}


class EUtilsError(RuntimeError):
    """Raised when PubMed cannot be reached or answers with unusable data."""


class EUtilsClient:
    """Query PubMed through E-utilities.

    ``fetcher`` replaces the HTTP layer entirely; it receives the endpoint URL
    and query parameters and returns the response body.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetcher: Optional[Fetcher] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.fetcher = fetcher or self._http_get
        self._client: Optional[httpx.Client] = None
        self._transport = transport

    def __enter__(self) -> "EUtilsClient":
        return self

    def __exit__(self, *_exc: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def search_ids(self, query: str, retmax: Optional[int] = None) -> List[str]:
        params = {
            "db": "pubmed",
            "term": query,
            "retmax": str(retmax or self.settings.search_limit),
            "retmode": "json",
        }
        data = self._get_json("esearch.fcgi", params)
        result = data.get("esearchresult") or {}
        if not isinstance(result, dict):
            raise EUtilsError("PubMed returned unexpected JSON from esearch.fcgi")
        ids = result.get("idlist") or []
        if not isinstance(ids, list):
            raise EUtilsError("PubMed returned unexpected JSON from esearch.fcgi")
        return [str(pmid) for pmid in ids]

    def fetch_markup(self, ids: Sequence[str]) -> str:
        if not ids:
            return ""
        params = {"db": "pubmed", "id": ",".join(ids), "retmode": "xml"}
        return self._get("efetch.fcgi", params)

    def related_ids(self, pmid: str, limit: Optional[int] = None) -> List[str]:
        params = {"dbfrom": "pubmed", "db": "pubmed", "id": pmid, "retmode": "json"}
        data = self._get_json("elink.fcgi", params)
        limit = limit or self.settings.related_limit
        try:
            links = data["linksets"][0]["linksetdbs"][0]["links"]
        except (KeyError, IndexError):
            # no linksetdbs means PubMed knows no related articles
            return []
        except TypeError as exc:
            raise EUtilsError("PubMed returned unexpected JSON from elink.fcgi") from exc
        if not isinstance(links, list):
            raise EUtilsError("PubMed returned unexpected JSON from elink.fcgi")
        return [str(link) for link in links[:limit]]

    def _get_json(self, util: str, params: Dict[str, str]) -> Dict[str, Any]:
        payload = self._get(util, params)
        try:
            data = json.loads(payload)
        except ValueError as exc:
            raise EUtilsError(f"PubMed returned malformed JSON from {util}") from exc
        if not isinstance(data, dict):
            raise EUtilsError(f"PubMed returned unexpected JSON from {util}")
        return data

    def _get(self, util: str, params: Dict[str, str]) -> str:
        url = f"{self.settings.base_url}/{util}"
        try:
            return self.fetcher(url, {**params, **self._common_params()})
        except EUtilsError:
            raise
        except httpx.HTTPError as exc:
            raise EUtilsError(f"PubMed request failed: {exc}") from exc

    def _common_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.settings.tool:
            params["tool"] = self.settings.tool
        if self.settings.email:
            params["email"] = self.settings.email
        if self.settings.api_key:
            params["api_key"] = self.settings.api_key
        return params

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.settings.timeout,
                headers={"User-Agent": f"{self.settings.tool or 'pubmed-explorer'}/0.1"},
                transport=self._transport,
            )
        return self._client

    def _http_get(self, url: str, params: Dict[str, str]) -> str:
        last_error: Optional[Exception] = None
        attempts = max(0, self.settings.max_retries) + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._http().get(url, params=params)
                response.raise_for_status()
                return response.text
            except httpx.RequestError as exc:
                last_error = exc
            except httpx.HTTPStatusError as exc:
                last_error = exc
                if exc.response.status_code in NO_RETRY_STATUSES:
                    break
            if attempt < attempts:
                sleep_time = self.settings.backoff_factor * (2 ** (attempt - 1))
                logger.info("Retrying %s in %.1fs after: %s", url, sleep_time, last_error)
                time.sleep(sleep_time)
        message = "PubMed request failed"
        if last_error:
            message = f"{message}: {last_error}"
        raise EUtilsError(message)


__all__ = ["EUtilsClient", "EUtilsError"]
